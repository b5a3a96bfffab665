"""
Pytest configuration and fixtures for wwvb-decoder tests.
"""

import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))


@pytest.fixture
def samples_per_second():
    """Standard capture rate for tests (25 ms period)."""
    return 40


@pytest.fixture
def minute_time():
    """A common-year minute: 2025-11-19 14:30 UTC (day 323)."""
    return datetime(2025, 11, 19, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def encoder():
    """Frame synthesizer at 40 samples/s."""
    from wwvb_decoder.timing.wwvb_encoder import WWVBEncoder
    return WWVBEncoder(40)


@pytest.fixture
def clean_buffer(encoder, minute_time):
    """Noise-free 120 s capture with the frame for minute_time at sample 1234."""
    return encoder.encode_buffer(minute_time, offset=1234)

