#!/usr/bin/env python3
"""
Frame Synchronizer - locate the start of a frame in the capture

Every candidate start sample is scored against the 18 frame positions whose
symbol is known in advance (7 markers and 11 unused zero bits). The
candidate with the lowest total error is taken as second 0 of the frame.

This always finds something. Even random data has a sample that works best
as a frame start, even if it works poorly; the returned error tells the
caller how poorly.

Search:
    - candidates 0 .. len(buffer) - frame_length, inclusive
    - a candidate is abandoned as soon as its partial sum exceeds the best
      total so far (cannot change the result)
    - ties keep the lowest start sample
"""

import logging
from typing import Optional

from ..interfaces.decode_result import FrameSync
from .sample_buffer import SampleBuffer
from .symbol_matcher import score
from .wwvb_constants import FIXED_FRAME_MAP

logger = logging.getLogger(__name__)


def frame_error(buffer: SampleBuffer, start_sample: int, limit: Optional[int] = None) -> int:
    """
    Error of the fixed frame positions for a frame starting at start_sample.

    Args:
        buffer: Capture holding the whole frame from start_sample
        start_sample: Candidate sample for second 0
        limit: Stop summing once the total exceeds this value

    Returns:
        Total error, or a partial total greater than limit if abandoned
    """
    sps = buffer.samples_per_second
    total = 0
    for second, symbol in FIXED_FRAME_MAP:
        total += score(buffer, start_sample + second * sps, symbol)
        if limit is not None and total > limit:
            # a better frame start has already been found
            break
    return total


def find_frame(buffer: SampleBuffer) -> FrameSync:
    """
    Search the capture for the sample that best works as the start of a frame.

    Raises:
        InsufficientDataError: if the buffer is shorter than one frame

    Returns:
        FrameSync with the chosen start sample and its total error
    """
    buffer.require_frame()

    last_start = len(buffer) - buffer.frame_length
    best_start = 0
    best_error: Optional[int] = None

    for start in range(last_start + 1):
        res = frame_error(buffer, start, best_error)
        if best_error is None or res < best_error:
            best_error = res
            best_start = start

    logger.debug(f"Found frame at sample {best_start}, error {best_error} "
                 f"({last_start + 1} candidates)")
    return FrameSync(start_sample=best_start, error=best_error)
