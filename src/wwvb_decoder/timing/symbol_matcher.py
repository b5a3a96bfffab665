#!/usr/bin/env python3
"""
Symbol Matcher - error count of one second of samples against ideal symbols

Each second of the capture is compared against the ideal ZERO, ONE and
MARKER waveforms. The error is the number of samples that disagree with the
template (a sum of XOR with the ideal pattern). Classification picks the
template with the fewest errors. This is the key to how the decoder works:
every later stage is built on these counts.

    Template (40 samples/s)    Low samples   High samples
    ZERO                       8             32
    ONE                        20            20
    MARKER                     32            8

Bounds are the caller's responsibility: start_sample + samples_per_second
must not exceed the buffer.
"""

from functools import lru_cache
from typing import Dict, Tuple

import numpy as np

from .sample_buffer import SampleBuffer
from .wwvb_constants import CLASSIFY_ORDER, SYMBOL_TEMPLATES, Symbol


@lru_cache(maxsize=None)
def symbol_spans(symbol: Symbol, samples_per_second: int) -> Tuple[int, int]:
    """(low, high) sample counts of a symbol template at a given rate."""
    return SYMBOL_TEMPLATES[symbol].spans(samples_per_second)


def _score_span(samples: np.ndarray, start_sample: int, low: int, high: int) -> int:
    reduced = samples[start_sample:start_sample + low]
    restored = samples[start_sample + low:start_sample + low + high]
    # 1s in the low phase and 0s in the high phase are errors
    return int(np.count_nonzero(reduced)) + high - int(np.count_nonzero(restored))


def score(buffer: SampleBuffer, start_sample: int, symbol: Symbol) -> int:
    """
    Count samples in the second at start_sample that disagree with symbol.

    Args:
        buffer: Capture
        start_sample: First sample of the second
        symbol: Template to compare against

    Returns:
        Error count, 0 for a perfect match, at most samples_per_second
    """
    low, high = symbol_spans(symbol, buffer.samples_per_second)
    return _score_span(buffer.samples, start_sample, low, high)


def score_all(buffer: SampleBuffer, start_sample: int) -> Dict[Symbol, int]:
    """Error counts of one second against every template."""
    return {symbol: score(buffer, start_sample, symbol) for symbol in CLASSIFY_ORDER}


def classify(buffer: SampleBuffer, start_sample: int) -> Tuple[Symbol, int]:
    """
    Decide which symbol the second at start_sample carries.

    Templates are evaluated ONE, ZERO, MARKER and the first minimum wins, so
    ONE beats an equal ZERO and ZERO beats an equal MARKER.

    Returns:
        (symbol, error count of that symbol)
    """
    best_symbol = None
    best_score = 0
    for symbol in CLASSIFY_ORDER:
        res = score(buffer, start_sample, symbol)
        if best_symbol is None or res < best_score:
            best_symbol = symbol
            best_score = res
    return best_symbol, best_score
