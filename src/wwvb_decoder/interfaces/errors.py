"""
Decoder exceptions.

Field decode failures and low-confidence decodes are reported through scores
and the reliability tier, never through these exceptions.
"""


class WWVBDecodeError(Exception):
    """Base class for decoder errors."""


class InsufficientDataError(WWVBDecodeError):
    """Sample buffer too short to hold a complete frame."""


class InvalidInputError(WWVBDecodeError, ValueError):
    """Argument outside the range the decoder accepts."""


class CaptureError(WWVBDecodeError):
    """Live sample acquisition could not be started or completed."""
