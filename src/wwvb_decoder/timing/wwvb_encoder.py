#!/usr/bin/env python3
"""
WWVB Time Code Encoder - synthetic captures for testing and simulation

================================================================================
PURPOSE
================================================================================
Generate the binary sample pattern a receiver would produce for a given UTC
minute. Used by the test suite and by the --simulate command line option to
exercise the decoder without a receiver.

    encoder = WWVBEncoder()
    frame = encoder.encode_minute(datetime(2025, 11, 19, 14, 30, tzinfo=timezone.utc))
    buffer = encoder.encode_buffer(minute_dt, offset=1234)
    noisy = encoder.flip_samples(buffer.samples, count=50, seed=1)

================================================================================
PULSE WIDTH ENCODING
================================================================================
At the start of every second the carrier is reduced, then restored:

    ┌─────────────┬──────────┬─────────────────────────────────┐
    │ Symbol      │ Reduced  │ Samples at 40/s (low, high)     │
    ├─────────────┼──────────┼─────────────────────────────────┤
    │ Binary 0    │ 200 ms   │ 8, 32                           │
    │ Binary 1    │ 500 ms   │ 20, 20                          │
    │ Marker (P)  │ 800 ms   │ 32, 8                           │
    └─────────────┴──────────┴─────────────────────────────────┘

================================================================================
BCD ENCODING: BIG-ENDIAN
================================================================================
WWVB uses BIG-ENDIAN BCD (MSB transmitted first), unlike WWV/WWVH.

Example: Minute 37
    - Tens (3):  seconds 1,2,3 (40,20,10) = 0,1,1
    - Units (7): seconds 5,6,7,8 (8,4,2,1) = 0,1,1,1

DUT1 sign (seconds 36-38) is sent as 1,0,1 (positive). DUT1 magnitude
(seconds 40-43) is left at zero.

================================================================================
RECEIVER MODEL
================================================================================
receiver_model() turns a clean pattern into a realistic capture: the
envelope (restored = 1.0, reduced = -17 dB) gets Gaussian noise, a
Butterworth low-pass standing in for the receiver's AGC/detector bandwidth,
and a slicer at the midpoint level.
"""

import calendar
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Union

import numpy as np
from scipy.signal import butter, filtfilt

from ..interfaces.errors import InvalidInputError
from .sample_buffer import SampleBuffer
from .symbol_matcher import symbol_spans
from .wwvb_constants import (
    BUFFER_LENGTH,
    DAY,
    DST,
    FIXED_FRAME_MAP,
    FRAME_SECONDS,
    HOURS,
    LSW,
    LYI,
    MINUTES,
    SAMPLES_PER_SEC,
    YEAR,
    FieldCode,
    Symbol,
)

logger = logging.getLogger(__name__)

DUT1_SIGN_SECONDS = (36, 37, 38)
DUT1_POSITIVE = (Symbol.ONE, Symbol.ZERO, Symbol.ONE)

# Carrier reduction at the start of each second
REDUCED_LEVEL_DB = -17.0


class WWVBEncoder:
    """Encoder for WWVB binary captures"""

    def __init__(self, samples_per_second: int = SAMPLES_PER_SEC):
        """
        Initialize encoder

        Args:
            samples_per_second: Capture sample rate (40 for a 25 ms period)
        """
        self.samples_per_second = samples_per_second
        self.frame_length = FRAME_SECONDS * samples_per_second

    def symbol_pattern(
        self,
        minute: int,
        hour: int,
        day_of_year: int,
        year: int,
        lyi: int = 0,
        lsw: int = 0,
        dst: int = 0
    ) -> List[Symbol]:
        """
        Generate the 60-element symbol sequence for one frame.

        Args:
            minute: 0-59
            hour: 0-23
            day_of_year: 1-366
            year: Last two digits, 0-99
            lyi: Leap year indicator, 0/1
            lsw: Leap second warning, 0/1
            dst: DST code 0-3 (bit 57 is the 2s bit, bit 58 the 1s bit)

        Returns:
            List of 60 Symbols
        """
        code = [Symbol.ZERO] * FRAME_SECONDS

        for second, symbol in FIXED_FRAME_MAP:
            code[second] = symbol

        for second, symbol in zip(DUT1_SIGN_SECONDS, DUT1_POSITIVE):
            code[second] = symbol

        self._encode_field(code, MINUTES, minute, 59)
        self._encode_field(code, HOURS, hour, 23)
        self._encode_field(code, DAY, day_of_year, 366)
        self._encode_field(code, YEAR, year, 99)
        self._encode_field(code, LYI, lyi, 1)
        self._encode_field(code, LSW, lsw, 1)
        self._encode_field(code, DST, dst, 3)

        return code

    @staticmethod
    def _encode_field(code: List[Symbol], field: FieldCode, value: int, limit: int):
        """Set the field's seconds from value, largest weight first."""
        if not 0 <= value <= limit:
            raise InvalidInputError(f"{field.name} value {value} outside 0-{limit}")

        remaining = value
        for second, weight in sorted(field.code, key=lambda c: -c[1]):
            if remaining >= weight:
                code[second] = Symbol.ONE
                remaining -= weight
        if remaining:
            raise InvalidInputError(f"{field.name} value {value} not representable")

    def pattern_to_samples(self, pattern: List[Symbol]) -> np.ndarray:
        """
        Convert a symbol sequence to binary samples.

        Each symbol is its low span of 0s followed by its high span of 1s.
        """
        sps = self.samples_per_second
        samples = np.ones(len(pattern) * sps, dtype=np.uint8)
        for second, symbol in enumerate(pattern):
            low, _ = symbol_spans(symbol, sps)
            start = second * sps
            samples[start:start + low] = 0
        return samples

    def encode_minute(
        self,
        when: Union[datetime, float],
        lsw: int = 0,
        dst: int = 0
    ) -> np.ndarray:
        """
        Generate the 60-second sample pattern for the minute containing when.

        Args:
            when: UTC datetime or timestamp
            lsw: Leap second warning bit
            dst: DST code 0-3

        Returns:
            uint8 array of 60 * samples_per_second samples
        """
        dt = self._as_utc(when)
        pattern = self.symbol_pattern(
            minute=dt.minute,
            hour=dt.hour,
            day_of_year=dt.timetuple().tm_yday,
            year=dt.year % 100,
            lyi=1 if calendar.isleap(dt.year) else 0,
            lsw=lsw,
            dst=dst,
        )
        return self.pattern_to_samples(pattern)

    def encode_buffer(
        self,
        when: Union[datetime, float],
        offset: int = 0,
        length: int = BUFFER_LENGTH,
        lsw: int = 0,
        dst: int = 0
    ) -> SampleBuffer:
        """
        Generate a capture in which the frame for when starts at sample offset.

        The samples before and after are the neighbouring minutes' frames, as
        a receiver would record them.

        Raises:
            InvalidInputError: if the frame does not fit at offset
        """
        if offset < 0 or offset + self.frame_length > length:
            raise InvalidInputError(
                f"Frame at offset {offset} does not fit in {length} samples"
            )

        dt = self._as_utc(when).replace(second=0, microsecond=0)
        minutes_before = -(-offset // self.frame_length)
        minutes_after = -(-(length - offset) // self.frame_length)

        frames = [
            self.encode_minute(dt + timedelta(minutes=m), lsw=lsw, dst=dst)
            for m in range(-minutes_before, minutes_after)
        ]
        stream = np.concatenate(frames)
        start = minutes_before * self.frame_length - offset
        return SampleBuffer(stream[start:start + length], self.samples_per_second)

    @staticmethod
    def flip_samples(
        samples: np.ndarray,
        count: int,
        seed: Optional[int] = None,
        start: int = 0,
        stop: Optional[int] = None
    ) -> np.ndarray:
        """
        Invert count distinct samples chosen at random in [start, stop).

        Returns:
            New uint8 array; the input is not modified
        """
        stop = len(samples) if stop is None else stop
        if count > stop - start:
            raise InvalidInputError(f"Cannot flip {count} of {stop - start} samples")

        rng = np.random.default_rng(seed)
        noisy = np.array(samples, dtype=np.uint8, copy=True)
        idx = start + rng.choice(stop - start, size=count, replace=False)
        noisy[idx] ^= 1
        return noisy

    def receiver_model(
        self,
        samples: np.ndarray,
        snr_db: float = 10.0,
        bandwidth_hz: float = 8.0,
        seed: Optional[int] = None
    ) -> np.ndarray:
        """
        Pass clean samples through an analog receiver and slicer.

        Args:
            samples: Clean 0/1 samples
            snr_db: Ratio of envelope step power to noise power
            bandwidth_hz: Low-pass corner of the detector
            seed: Random seed for reproducibility

        Returns:
            uint8 array of 0/1 samples
        """
        rng = np.random.default_rng(seed)
        low_level = 10.0 ** (REDUCED_LEVEL_DB / 20.0)

        envelope = np.where(np.asarray(samples) > 0, 1.0, low_level)
        step = 1.0 - low_level
        noise_std = step / (10.0 ** (snr_db / 20.0))
        received = envelope + rng.normal(0.0, noise_std, size=envelope.shape)

        nyq = self.samples_per_second / 2
        wn = min(bandwidth_hz / nyq, 0.99)
        b, a = butter(2, wn, btype='low')
        detected = filtfilt(b, a, received)

        threshold = (1.0 + low_level) / 2
        sliced = (detected > threshold).astype(np.uint8)

        logger.debug(
            f"Receiver model: snr={snr_db:.1f}dB, bw={bandwidth_hz:.1f}Hz, "
            f"{int(np.count_nonzero(sliced != samples))} samples changed"
        )
        return sliced

    @staticmethod
    def _as_utc(when: Union[datetime, float]) -> datetime:
        if isinstance(when, datetime):
            if when.tzinfo is None:
                return when.replace(tzinfo=timezone.utc)
            return when.astimezone(timezone.utc)
        return datetime.fromtimestamp(when, tz=timezone.utc)
