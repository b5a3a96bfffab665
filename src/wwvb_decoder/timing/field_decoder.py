#!/usr/bin/env python3
"""
Field Decoder - decode the timed fields of a synchronized frame

Each field (minutes, hours, day, year, LYI, LSW, DST) is a list of
(second, weight) pairs. Every second is classified against the symbol
templates and the field value is the weighted sum of the decoded bits.

If any second of a field best decodes as a MARKER the field decode fails:
value 0, score DECODE_FAILURE, worst score = samples per second. The
remaining seconds of that field are not examined. Other fields are
unaffected.
"""

import logging
from typing import Dict, Iterable

from ..interfaces.decode_result import DecodedField, DecodedFrame
from ..interfaces.errors import InsufficientDataError
from .sample_buffer import SampleBuffer
from .symbol_matcher import classify
from .wwvb_constants import DECODE_FAILURE, FRAME_FIELDS, FieldCode, Symbol

logger = logging.getLogger(__name__)


def decode_field(buffer: SampleBuffer, frame_start: int, field: FieldCode) -> DecodedField:
    """
    Decode one field of the frame starting at frame_start.

    Args:
        buffer: Capture
        frame_start: Sample index of second 0
        field: Code table of the field

    Returns:
        DecodedField with value, summed error score and worst single-second score
    """
    sps = buffer.samples_per_second
    value = 0
    total = 0
    worst = 0

    for second, weight in field.code:
        symbol, res_score = classify(buffer, frame_start + second * sps)
        if symbol is Symbol.MARKER:
            logger.debug(f"{field.name}: marker at second {second}, field failed")
            return DecodedField(
                name=field.name,
                value=0,
                score=DECODE_FAILURE,
                worst_score=sps,
                code_len=len(field),
                width=field.width,
            )
        value += weight * symbol.bit_value
        total += res_score
        worst = max(worst, res_score)

    return DecodedField(
        name=field.name,
        value=value,
        score=total,
        worst_score=worst,
        code_len=len(field),
        width=field.width,
    )


def decode_frame(
    buffer: SampleBuffer,
    frame_start: int,
    fields: Iterable[FieldCode] = FRAME_FIELDS
) -> DecodedFrame:
    """
    Decode every field of the frame starting at frame_start.

    Raises:
        InsufficientDataError: if the frame runs past the end of the buffer

    Returns:
        DecodedFrame with per-field results, total score and worst score
    """
    if frame_start < 0 or frame_start + buffer.frame_length > len(buffer):
        raise InsufficientDataError(
            f"Frame at sample {frame_start} runs past the end of a "
            f"{len(buffer)}-sample buffer"
        )

    decoded: Dict[str, DecodedField] = {}
    score = 0
    worst = 0
    for field in fields:
        res = decode_field(buffer, frame_start, field)
        decoded[field.name] = res
        score += res.score
        worst = max(worst, res.worst_score)

    logger.debug(
        f"Decoded frame at {frame_start}: score={score}, worst={worst}, "
        + ", ".join(f"{f.name}={f.value}" for f in decoded.values())
    )
    return DecodedFrame(fields=decoded, score=score, worst_score=worst)
