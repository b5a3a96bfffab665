#!/usr/bin/env python3
"""
Sample Buffer - read-only store of binary carrier-level samples

A capture is a sequence of 0/1 samples taken at a fixed rate (40 per second
by default) covering at least two frame periods, so a complete frame is
present whatever the alignment.

Capture file format:
    - One byte per sample, values strictly 0 or 1
    - No header; the length is implicit
    - Files written by earlier captures are exactly BUFFER_LENGTH bytes

The underlying numpy array is flagged non-writeable once the buffer is
constructed. The decoder only reads it.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np

from ..interfaces.errors import InsufficientDataError, InvalidInputError
from .wwvb_constants import BUFFER_LENGTH, SAMPLES_PER_SEC, frame_length

logger = logging.getLogger(__name__)


class SampleBuffer:
    """
    Fixed-length sequence of binary samples.

    Usage:
        buffer = SampleBuffer.from_file('capture.bin')
        buffer.samples[0:40]     # first second
        buffer.save('copy.bin')
    """

    def __init__(self, samples, samples_per_second: int = SAMPLES_PER_SEC):
        """
        Args:
            samples: Sequence or array of 0/1 values
            samples_per_second: Sampling rate of the capture

        Raises:
            InvalidInputError: if a sample is not 0 or 1
        """
        if samples_per_second <= 0:
            raise InvalidInputError(f"samples_per_second must be positive, got {samples_per_second}")

        raw = np.asarray(samples).ravel()
        if raw.dtype.kind not in "biuf":
            raise InvalidInputError(f"Samples must be numeric, got dtype {raw.dtype}")
        if raw.dtype.kind == "f" and not np.array_equal(raw, np.floor(raw)):
            bad = int(np.flatnonzero(raw != np.floor(raw))[0])
            raise InvalidInputError(f"Sample {bad} is {raw[bad]}, expected 0 or 1")

        data = raw.astype(np.int64)
        if data.size and (data.min() < 0 or data.max() > 1):
            bad = int(np.flatnonzero((data < 0) | (data > 1))[0])
            raise InvalidInputError(f"Sample {bad} is {int(data[bad])}, expected 0 or 1")

        self._samples = data.astype(np.uint8)
        self._samples.flags.writeable = False
        self.samples_per_second = samples_per_second

    @property
    def samples(self) -> np.ndarray:
        """Read-only view of the samples."""
        return self._samples

    def __len__(self) -> int:
        return len(self._samples)

    def __getitem__(self, index):
        return self._samples[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, SampleBuffer):
            return NotImplemented
        return (self.samples_per_second == other.samples_per_second
                and np.array_equal(self._samples, other._samples))

    def __repr__(self) -> str:
        return (f"SampleBuffer({len(self)} samples, {self.samples_per_second}/s, "
                f"{self.duration_seconds:.1f}s)")

    @property
    def duration_seconds(self) -> float:
        return len(self) / self.samples_per_second

    @property
    def frame_length(self) -> int:
        return frame_length(self.samples_per_second)

    def holds_frame(self) -> bool:
        """True if at least one complete frame fits in the buffer."""
        return len(self) >= self.frame_length

    def require_frame(self):
        """
        Raises:
            InsufficientDataError: if the buffer is shorter than one frame
        """
        if not self.holds_frame():
            raise InsufficientDataError(
                f"Buffer holds {len(self)} samples, a frame needs {self.frame_length}"
            )

    @classmethod
    def from_bytes(cls, data: bytes, samples_per_second: int = SAMPLES_PER_SEC) -> "SampleBuffer":
        return cls(np.frombuffer(data, dtype=np.uint8), samples_per_second)

    def to_bytes(self) -> bytes:
        return self._samples.tobytes()

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        samples_per_second: int = SAMPLES_PER_SEC,
        capacity: int = BUFFER_LENGTH
    ) -> "SampleBuffer":
        """
        Read a raw capture file (one byte per sample, no header).

        At most capacity samples are read. A file shorter than capacity is
        accepted with a warning as long as it holds one frame.

        Args:
            path: Capture file
            samples_per_second: Sampling rate of the capture
            capacity: Maximum samples to read (default: 120 s of samples)

        Raises:
            OSError: if the file cannot be read
            InsufficientDataError: if the file holds less than one frame
            InvalidInputError: if a byte is not 0 or 1
        """
        path = Path(path)
        with open(path, 'rb') as f:
            data = f.read(capacity)

        needed = frame_length(samples_per_second)
        if len(data) < needed:
            raise InsufficientDataError(
                f"{path}: {len(data)} samples, need at least {needed} for one frame"
            )
        if len(data) < capacity:
            logger.warning(f"{path}: input file likely too short ({len(data)} of {capacity} samples)")

        buffer = cls.from_bytes(data, samples_per_second)
        logger.debug(f"Loaded {buffer!r} from {path}")
        return buffer

    def save(self, path: Union[str, Path]):
        """Write the samples as a raw capture file."""
        path = Path(path)
        with open(path, 'wb') as f:
            f.write(self.to_bytes())
        logger.info(f"Saved {len(self)} samples to {path}")
