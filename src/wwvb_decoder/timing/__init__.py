"""
WWVB frame synchronization and decoding.

Core algorithms: symbol template matching, frame search, field decode,
day-of-year conversion and reliability grading.
"""

from .sample_buffer import SampleBuffer
from .symbol_matcher import classify, score
from .frame_sync import find_frame, frame_error
from .field_decoder import decode_field, decode_frame
from .day_of_year import day_of_year_to_month_day
from .reliability import ReliabilityThresholds, classify_reliability
from .wwvb_encoder import WWVBEncoder
from .wwvb_constants import Symbol, FieldCode, DECODE_FAILURE

__all__ = [
    'SampleBuffer',
    'classify',
    'score',
    'find_frame',
    'frame_error',
    'decode_field',
    'decode_frame',
    'day_of_year_to_month_day',
    'ReliabilityThresholds',
    'classify_reliability',
    'WWVBEncoder',
    'Symbol',
    'FieldCode',
    'DECODE_FAILURE',
]
