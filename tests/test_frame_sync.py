"""
Unit tests for the frame synchronizer.

Tests exhaustive frame-start search over synthesized captures, pruning
equivalence and tie-breaking.
"""

import numpy as np
import pytest


def brute_force(buffer):
    """Unpruned minimum over every candidate, first minimum wins."""
    from wwvb_decoder.timing.frame_sync import frame_error

    errors = [frame_error(buffer, start) for start in range(len(buffer) - buffer.frame_length + 1)]
    best = int(np.argmin(errors))
    return best, errors[best]


class TestFindFrame:
    """Test frame start search."""

    def test_planted_offset_found_with_zero_error(self, clean_buffer):
        from wwvb_decoder.timing.frame_sync import find_frame

        sync = find_frame(clean_buffer)
        assert sync.start_sample == 1234
        assert sync.error == 0

    def test_frame_at_start(self, encoder, minute_time):
        """Two perfect frames in the buffer: the lower offset wins."""
        from wwvb_decoder.timing.frame_sync import find_frame, frame_error

        buffer = encoder.encode_buffer(minute_time, offset=0)
        assert frame_error(buffer, 2400) == 0

        sync = find_frame(buffer)
        assert sync.start_sample == 0
        assert sync.error == 0

    def test_exactly_one_frame_has_one_candidate(self, encoder, minute_time):
        from wwvb_decoder.timing.frame_sync import find_frame

        buffer = encoder.encode_buffer(minute_time, offset=0, length=2400)
        sync = find_frame(buffer)
        assert sync.start_sample == 0
        assert sync.error == 0

    def test_short_buffer_rejected(self):
        from wwvb_decoder.interfaces.errors import InsufficientDataError
        from wwvb_decoder.timing.frame_sync import find_frame
        from wwvb_decoder.timing.sample_buffer import SampleBuffer

        with pytest.raises(InsufficientDataError):
            find_frame(SampleBuffer([1] * 2399, 40))

    def test_noisy_capture_still_synchronizes(self, encoder, clean_buffer):
        from wwvb_decoder.timing.frame_sync import find_frame
        from wwvb_decoder.timing.sample_buffer import SampleBuffer

        noisy = SampleBuffer(encoder.flip_samples(clean_buffer.samples, 150, seed=7), 40)
        sync = find_frame(noisy)
        assert sync.start_sample == 1234
        assert 0 < sync.error <= 150

    def test_pure_noise_returns_a_result(self):
        """Random data still has a best frame start, with a large error."""
        from wwvb_decoder.timing.frame_sync import find_frame
        from wwvb_decoder.timing.sample_buffer import SampleBuffer

        rng = np.random.default_rng(42)
        buffer = SampleBuffer(rng.integers(0, 2, size=4800), 40)
        sync = find_frame(buffer)
        assert 0 <= sync.start_sample <= 2400
        assert sync.error > 50

    def test_deterministic(self):
        from wwvb_decoder.timing.frame_sync import find_frame
        from wwvb_decoder.timing.sample_buffer import SampleBuffer

        rng = np.random.default_rng(3)
        buffer = SampleBuffer(rng.integers(0, 2, size=2700), 40)
        assert find_frame(buffer) == find_frame(buffer)


class TestPruning:
    """Verify early abandonment never changes the chosen frame."""

    def test_matches_brute_force_on_noise(self):
        from wwvb_decoder.timing.frame_sync import find_frame
        from wwvb_decoder.timing.sample_buffer import SampleBuffer

        rng = np.random.default_rng(11)
        buffer = SampleBuffer(rng.integers(0, 2, size=2400 + 160), 40)
        sync = find_frame(buffer)
        assert (sync.start_sample, sync.error) == brute_force(buffer)

    def test_matches_brute_force_on_noisy_frame(self, encoder, minute_time):
        from wwvb_decoder.timing.frame_sync import find_frame
        from wwvb_decoder.timing.sample_buffer import SampleBuffer

        clean = encoder.encode_buffer(minute_time, offset=57, length=2400 + 120)
        noisy = SampleBuffer(encoder.flip_samples(clean.samples, 400, seed=5), 40)
        sync = find_frame(noisy)
        assert (sync.start_sample, sync.error) == brute_force(noisy)

    def test_limit_abandons_early(self):
        """A partial sum past the limit is returned without finishing."""
        from wwvb_decoder.timing.frame_sync import frame_error
        from wwvb_decoder.timing.sample_buffer import SampleBuffer

        buffer = SampleBuffer([0] * 2400, 40)
        full = frame_error(buffer, 0)
        # 7 markers at 8 errors, 11 zeros at 32 errors
        assert full == 7 * 8 + 11 * 32

        partial = frame_error(buffer, 0, limit=10)
        assert 10 < partial < full

    def test_limit_not_reached(self, clean_buffer):
        from wwvb_decoder.timing.frame_sync import frame_error

        assert frame_error(clean_buffer, 1234, limit=0) == 0
