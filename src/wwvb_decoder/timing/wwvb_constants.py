#!/usr/bin/env python3
"""
WWVB Shared Constants - Central Reference for the Frame Decoder

================================================================================
PURPOSE
================================================================================
Single source of truth for the sampling geometry, symbol templates, field
code tables and fixed frame positions used by the WWVB decoder.

All tables in this module are tuples and frozen dataclasses. They describe
the broadcast format and are never modified at runtime.

================================================================================
STATION PARAMETERS
================================================================================
WWVB - NIST Radio Station, Fort Collins, Colorado, USA
    Carrier: 60 kHz, 70 kW ERP
    Time code: one bit per second, 60-second frame, UTC minute boundary
    Modulation: carrier reduced by 17 dB at the start of each second,
                restored after 200 / 500 / 800 ms

A receiver such as the Canaduino 60 kHz module outputs the current carrier
level as a logic level. Sampled every 25 ms that gives 40 samples per second.

================================================================================
SYMBOL TEMPLATES (one second each)
================================================================================
    ┌─────────────┬────────────────┬─────────────────┐
    │ Symbol      │ Reduced (low)  │ Restored (high) │
    ├─────────────┼────────────────┼─────────────────┤
    │ ZERO        │ 200 ms         │ 800 ms          │
    │ ONE         │ 500 ms         │ 500 ms          │
    │ MARKER      │ 800 ms         │ 200 ms          │
    └─────────────┴────────────────┴─────────────────┘

Some receivers invert the output. The templates assume low = reduced carrier.

================================================================================
TIME CODE FIELD LAYOUT (60 seconds)
================================================================================
    Second  │ Content
    ────────┼──────────────────────────────────────────────
    0       │ P (frame reference marker)
    1-3     │ Minute tens (40, 20, 10)
    4       │ Unused (0)
    5-8     │ Minute units (8, 4, 2, 1)
    9       │ P1
    10-11   │ Unused (0)
    12-13   │ Hour tens (20, 10)
    14      │ Unused (0)
    15-18   │ Hour units (8, 4, 2, 1)
    19      │ P2
    20-21   │ Unused (0)
    22-23   │ Day hundreds (200, 100)
    24      │ Unused (0)
    25-28   │ Day tens (80, 40, 20, 10)
    29      │ P3
    30-33   │ Day units (8, 4, 2, 1)
    34-35   │ Unused (0)
    36-38   │ DUT1 sign
    39      │ P4
    40-43   │ DUT1 magnitude
    44      │ Unused (0)
    45-48   │ Year tens (80, 40, 20, 10)
    49      │ P5
    50-53   │ Year units (8, 4, 2, 1)
    54      │ Unused (0)
    55      │ Leap year indicator
    56      │ Leap second warning
    57-58   │ DST status
    59      │ P0

WWVB BCD is BIG-ENDIAN (most significant weight transmitted first).

================================================================================
REFERENCES
================================================================================
- NIST Special Publication 432, "NIST Time and Frequency Services"
- NIST Special Publication 250-67, "NIST Time and Frequency Radio Stations"
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple

from ..interfaces.decode_result import DECODE_FAILURE
from ..interfaces.errors import InvalidInputError

# =============================================================================
# SAMPLING CONSTANTS
# =============================================================================

# Sample period must evenly divide 200, 500 and 800 ms
SAMPLE_PERIOD_MS = 25
SAMPLES_PER_SEC = 1000 // SAMPLE_PERIOD_MS  # 40

# Two frames guarantee one complete frame regardless of alignment
BUFFER_SECONDS = 120
BUFFER_LENGTH = SAMPLES_PER_SEC * BUFFER_SECONDS  # 4800

FRAME_SECONDS = 60

# Default GPIO (BCM numbering). GPIO4 is pin 7 on a Raspberry Pi Zero.
DEFAULT_GPIO = 4


def frame_length(samples_per_second: int = SAMPLES_PER_SEC) -> int:
    """Number of samples in one 60-second frame."""
    return FRAME_SECONDS * samples_per_second


# =============================================================================
# SYMBOLS
# =============================================================================

class Symbol(IntEnum):
    """Per-second carrier patterns. Values match the decoded bit for data symbols."""
    ZERO = 0
    ONE = 1
    MARKER = 2

    @property
    def bit_value(self) -> int:
        return 1 if self is Symbol.ONE else 0


@dataclass(frozen=True)
class SymbolTemplate:
    """Ideal one-second waveform: low_ms of reduced carrier, then high_ms restored."""
    low_ms: int
    high_ms: int

    def spans(self, samples_per_second: int) -> Tuple[int, int]:
        """
        Convert the template to sample counts.

        Raises:
            InvalidInputError: if the sample period does not divide the
                template durations evenly
        """
        low = self.low_ms * samples_per_second
        high = self.high_ms * samples_per_second
        if low % 1000 or high % 1000:
            raise InvalidInputError(
                f"{samples_per_second} samples/s does not evenly divide a "
                f"{self.low_ms}/{self.high_ms} ms symbol"
            )
        return low // 1000, high // 1000


SYMBOL_TEMPLATES: Dict[Symbol, SymbolTemplate] = {
    Symbol.ZERO: SymbolTemplate(low_ms=200, high_ms=800),
    Symbol.ONE: SymbolTemplate(low_ms=500, high_ms=500),
    Symbol.MARKER: SymbolTemplate(low_ms=800, high_ms=200),
}

# Evaluation order for classification. On equal scores the earlier symbol wins.
CLASSIFY_ORDER: Tuple[Symbol, ...] = (Symbol.ONE, Symbol.ZERO, Symbol.MARKER)


# =============================================================================
# FIELD CODE TABLES
# =============================================================================

@dataclass(frozen=True)
class FieldCode:
    """A named group of (second, weight) pairs within the frame."""
    name: str
    code: Tuple[Tuple[int, int], ...]
    width: int  # display digits

    def __len__(self) -> int:
        return len(self.code)


MINUTES = FieldCode(
    "minutes", ((1, 40), (2, 20), (3, 10), (5, 8), (6, 4), (7, 2), (8, 1)), 2
)
HOURS = FieldCode(
    "hours", ((12, 20), (13, 10), (15, 8), (16, 4), (17, 2), (18, 1)), 2
)
DAY = FieldCode(
    "day",
    ((22, 200), (23, 100), (25, 80), (26, 40), (27, 20), (28, 10),
     (30, 8), (31, 4), (32, 2), (33, 1)),
    3,
)
YEAR = FieldCode(
    "year",
    ((45, 80), (46, 40), (47, 20), (48, 10), (50, 8), (51, 4), (52, 2), (53, 1)),
    2,
)
LYI = FieldCode("lyi", ((55, 1),), 1)
LSW = FieldCode("lsw", ((56, 1),), 1)
DST = FieldCode("dst", ((57, 2), (58, 1)), 2)

# Decode/report order
FRAME_FIELDS: Tuple[FieldCode, ...] = (HOURS, MINUTES, DAY, YEAR, LYI, LSW, DST)


# =============================================================================
# FIXED FRAME POSITIONS
# =============================================================================

MARKER_SECONDS: Tuple[int, ...] = (0, 9, 19, 29, 39, 49, 59)
UNUSED_SECONDS: Tuple[int, ...] = (4, 10, 11, 14, 20, 21, 24, 34, 35, 44, 54)

# (second, expected symbol), in frame order. Used only for synchronization.
FIXED_FRAME_MAP: Tuple[Tuple[int, Symbol], ...] = tuple(sorted(
    [(sec, Symbol.MARKER) for sec in MARKER_SECONDS]
    + [(sec, Symbol.ZERO) for sec in UNUSED_SECONDS]
))


# =============================================================================
# CALENDAR
# =============================================================================

# Cumulative day count at the end of each month, common year
CUMULATIVE_MONTH_DAYS: Tuple[int, ...] = (
    31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365
)


# =============================================================================
# RELIABILITY THRESHOLDS
# =============================================================================

# Empirical, approximate. Compared against the worst single-second error count.
LIKELY_OK_BELOW = 7
NOT_RELIABLE_BELOW = 10
