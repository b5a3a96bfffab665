"""
wwvb-decoder: WWVB Time Code Frame Decoder

Decodes one time-code frame from WWVB (60 kHz, Fort Collins) out of a
binary carrier-level capture: one sample every 25 ms from a receiver module
that outputs the carrier level as a logic level.

Pipeline:
    capture (GPIO or file) → frame search → field decode → report / JSON

The decoder always returns a result. Per-field error scores and a coarse
reliability tier (LIKELY OK / NOT RELIABLE / PROBABLY BAD) tell the caller
how far to trust it.

Version: 1.0.0
"""

__version__ = "1.0.0"

from .interfaces.decode_result import (
    DecodeResult,
    DecodedFrame,
    DecodedField,
    FrameSync,
    Reliability,
)
from .interfaces.errors import (
    WWVBDecodeError,
    InsufficientDataError,
    InvalidInputError,
    CaptureError,
)
from .decoder import DecoderConfig, WWVBDecoder
from .timing.sample_buffer import SampleBuffer

__all__ = [
    "DecodeResult",
    "DecodedFrame",
    "DecodedField",
    "FrameSync",
    "Reliability",
    "WWVBDecodeError",
    "InsufficientDataError",
    "InvalidInputError",
    "CaptureError",
    "DecoderConfig",
    "WWVBDecoder",
    "SampleBuffer",
    "__version__",
]
