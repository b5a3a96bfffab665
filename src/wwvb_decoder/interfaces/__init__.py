"""Result contracts and exceptions shared by the decoder and its consumers."""

from .errors import (
    WWVBDecodeError,
    InsufficientDataError,
    InvalidInputError,
    CaptureError,
)
from .decode_result import (
    DecodedField,
    DecodedFrame,
    FrameSync,
    DecodeResult,
    Reliability,
    DECODE_FAILURE,
)

__all__ = [
    'WWVBDecodeError',
    'InsufficientDataError',
    'InvalidInputError',
    'CaptureError',
    'DecodedField',
    'DecodedFrame',
    'FrameSync',
    'DecodeResult',
    'Reliability',
    'DECODE_FAILURE',
]
