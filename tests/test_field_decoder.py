"""
Unit tests for the field decoder.

Tests weighted-sum decoding, marker failure isolation and the frame-level
aggregate scores.
"""

import numpy as np
import pytest

MARKER_SAMPLES = [0] * 32 + [1] * 8


def with_second(buffer, start_sample, pattern):
    """Copy of buffer with the second at start_sample replaced."""
    from wwvb_decoder.timing.sample_buffer import SampleBuffer

    samples = np.array(buffer.samples, copy=True)
    samples[start_sample:start_sample + len(pattern)] = pattern
    return SampleBuffer(samples, buffer.samples_per_second)


class TestDecodeField:
    """Test single-field decoding."""

    def test_clean_fields(self, clean_buffer):
        from wwvb_decoder.timing.field_decoder import decode_field
        from wwvb_decoder.timing.wwvb_constants import DAY, HOURS, MINUTES, YEAR

        expected = {MINUTES: 30, HOURS: 14, DAY: 323, YEAR: 25}
        for field, value in expected.items():
            res = decode_field(clean_buffer, 1234, field)
            assert res.value == value, field.name
            assert res.score == 0
            assert res.worst_score == 0
            assert not res.failed
            assert res.code_len == len(field)

    def test_weighted_sum(self, encoder):
        """Every position a perfect ONE gives the sum of the weights."""
        from wwvb_decoder.timing.field_decoder import decode_field
        from wwvb_decoder.timing.sample_buffer import SampleBuffer
        from wwvb_decoder.timing.wwvb_constants import FieldCode, Symbol

        pattern = [Symbol.ONE] * 60
        buffer = SampleBuffer(encoder.pattern_to_samples(pattern), 40)
        field = FieldCode("test", ((3, 5), (7, 11), (20, 100)), 3)

        res = decode_field(buffer, 0, field)
        assert res.value == 116
        assert res.score == 0

    def test_marker_fails_field(self, clean_buffer):
        from wwvb_decoder.interfaces.decode_result import DECODE_FAILURE
        from wwvb_decoder.timing.field_decoder import decode_field
        from wwvb_decoder.timing.wwvb_constants import MINUTES

        # minutes units weight 8 is second 5
        damaged = with_second(clean_buffer, 1234 + 5 * 40, MARKER_SAMPLES)
        res = decode_field(damaged, 1234, MINUTES)
        assert res.failed
        assert res.value == 0
        assert res.score == DECODE_FAILURE
        assert res.worst_score == 40

    def test_marker_fails_regardless_of_other_positions(self, clean_buffer):
        """A marker in the last position fails an otherwise perfect field."""
        from wwvb_decoder.timing.field_decoder import decode_field
        from wwvb_decoder.timing.wwvb_constants import DAY

        damaged = with_second(clean_buffer, 1234 + 33 * 40, MARKER_SAMPLES)
        res = decode_field(damaged, 1234, DAY)
        assert res.failed
        assert res.value == 0

    def test_noise_raises_score(self, clean_buffer):
        from wwvb_decoder.timing.field_decoder import decode_field
        from wwvb_decoder.timing.sample_buffer import SampleBuffer
        from wwvb_decoder.timing.wwvb_constants import MINUTES

        samples = np.array(clean_buffer.samples, copy=True)
        # second 1 is a ZERO for minute 30; knock out three restored samples
        base = 1234 + 40
        samples[base + 35:base + 38] = 0
        noisy = SampleBuffer(samples, 40)

        res = decode_field(noisy, 1234, MINUTES)
        assert res.value == 30
        assert res.score == 3
        assert res.worst_score == 3
        assert res.average_score == pytest.approx(3 / 7)

    def test_monotonic_under_added_noise(self, clean_buffer):
        """More flipped samples in a field never lowers its score."""
        from wwvb_decoder.timing.field_decoder import decode_field
        from wwvb_decoder.timing.sample_buffer import SampleBuffer
        from wwvb_decoder.timing.wwvb_constants import HOURS

        # hours units, seconds 15-18
        start = 1234 + 15 * 40
        rng = np.random.default_rng(1)
        idx = start + rng.choice(4 * 40, size=6, replace=False)

        previous = decode_field(clean_buffer, 1234, HOURS).score
        assert previous == 0
        for count in (2, 4, 6):
            samples = np.array(clean_buffer.samples, copy=True)
            samples[idx[:count]] ^= 1
            current = decode_field(SampleBuffer(samples, 40), 1234, HOURS).score
            assert current >= previous
            previous = current
        assert previous == 6


class TestDecodeFrame:
    """Test whole-frame decoding and aggregation."""

    def test_clean_frame(self, clean_buffer):
        from wwvb_decoder.timing.field_decoder import decode_frame

        frame = decode_frame(clean_buffer, 1234)
        assert frame.hours.value == 14
        assert frame.minutes.value == 30
        assert frame.day.value == 323
        assert frame.year.value == 25
        assert frame.lyi.value == 0
        assert frame.lsw.value == 0
        assert frame.dst.value == 0
        assert frame.score == 0
        assert frame.worst_score == 0
        assert frame.failed_fields == ()
        assert frame.total_code_len == 35

    def test_field_failure_isolated(self, clean_buffer):
        from wwvb_decoder.interfaces.decode_result import DECODE_FAILURE
        from wwvb_decoder.timing.field_decoder import decode_frame

        damaged = with_second(clean_buffer, 1234 + 16 * 40, MARKER_SAMPLES)
        frame = decode_frame(damaged, 1234)

        assert frame.failed_fields == ('hours',)
        assert frame.minutes.value == 30
        assert frame.day.value == 323
        assert frame.score == DECODE_FAILURE
        assert frame.worst_score == 40

    def test_aggregates(self, clean_buffer):
        from wwvb_decoder.timing.field_decoder import decode_frame
        from wwvb_decoder.timing.sample_buffer import SampleBuffer

        samples = np.array(clean_buffer.samples, copy=True)
        samples[1234 + 40 + 39] = 0           # minutes, 1 error
        samples[1234 + 46 * 40 + 30] = 0      # year, 1 error
        samples[1234 + 46 * 40 + 31] = 0      # year, 1 more in the same second
        frame = decode_frame(SampleBuffer(samples, 40), 1234)

        assert frame.minutes.score == 1
        assert frame.year.score == 2
        assert frame.score == 3
        assert frame.worst_score == 2

    def test_idempotent(self, encoder, clean_buffer):
        from wwvb_decoder.timing.field_decoder import decode_frame
        from wwvb_decoder.timing.sample_buffer import SampleBuffer

        noisy = SampleBuffer(encoder.flip_samples(clean_buffer.samples, 300, seed=9), 40)
        assert decode_frame(noisy, 1234) == decode_frame(noisy, 1234)

    def test_frame_past_end_rejected(self, clean_buffer):
        from wwvb_decoder.interfaces.errors import InsufficientDataError
        from wwvb_decoder.timing.field_decoder import decode_frame

        with pytest.raises(InsufficientDataError):
            decode_frame(clean_buffer, 2401)

    def test_leap_year_dst_and_warning(self, encoder):
        from datetime import datetime, timezone
        from wwvb_decoder.timing.field_decoder import decode_frame

        when = datetime(2024, 12, 31, 23, 59, tzinfo=timezone.utc)
        buffer = encoder.encode_buffer(when, offset=400, lsw=1, dst=3)
        frame = decode_frame(buffer, 400)

        assert frame.day.value == 366
        assert frame.year.value == 24
        assert frame.lyi.value == 1
        assert frame.lsw.value == 1
        assert frame.dst.value == 3
