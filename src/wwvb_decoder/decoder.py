"""
WWVB decode pipeline.

Runs the core stages over one capture:

    SampleBuffer ─▶ find_frame ─▶ decode_frame ─▶ day_of_year_to_month_day
                                              └─▶ classify_reliability

and packages the outcome as a DecodeResult. Always returns a result, even
for pure noise; the scores and the reliability tier say how far to trust it.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .interfaces.decode_result import DecodeResult
from .interfaces.errors import InvalidInputError
from .timing.day_of_year import day_of_year_to_month_day
from .timing.field_decoder import decode_frame
from .timing.frame_sync import find_frame
from .timing.reliability import ReliabilityThresholds, classify_reliability
from .timing.sample_buffer import SampleBuffer
from .timing.wwvb_constants import (
    BUFFER_SECONDS,
    DEFAULT_GPIO,
    FRAME_SECONDS,
    SAMPLE_PERIOD_MS,
    SYMBOL_TEMPLATES,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecoderConfig:
    """Validated decoder settings, normally built from the TOML configuration."""
    sample_period_ms: int = SAMPLE_PERIOD_MS
    buffer_seconds: int = BUFFER_SECONDS
    gpio: int = DEFAULT_GPIO
    thresholds: ReliabilityThresholds = field(default_factory=ReliabilityThresholds)
    json_path: Optional[str] = None

    def __post_init__(self):
        if self.sample_period_ms <= 0 or 1000 % self.sample_period_ms:
            raise InvalidInputError(
                f"sample_period_ms must divide 1000, got {self.sample_period_ms}"
            )
        for template in SYMBOL_TEMPLATES.values():
            template.spans(self.samples_per_second)
        # two frame periods guarantee one whole frame at any alignment
        if self.buffer_seconds < 2 * FRAME_SECONDS:
            raise InvalidInputError(
                f"buffer_seconds must be at least {2 * FRAME_SECONDS}, got {self.buffer_seconds}"
            )

    @property
    def samples_per_second(self) -> int:
        return 1000 // self.sample_period_ms

    @property
    def buffer_length(self) -> int:
        return self.samples_per_second * self.buffer_seconds

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "DecoderConfig":
        """Build from a loaded configuration dictionary."""
        sampling = config.get('sampling', {})
        output = config.get('output', {})
        return cls(
            sample_period_ms=int(sampling.get('sample_period_ms', SAMPLE_PERIOD_MS)),
            buffer_seconds=int(sampling.get('buffer_seconds', BUFFER_SECONDS)),
            gpio=int(sampling.get('gpio', DEFAULT_GPIO)),
            thresholds=ReliabilityThresholds.from_dict(config.get('reliability')),
            json_path=output.get('json_path') or None,
        )


class WWVBDecoder:
    """
    Decode one WWVB frame from a capture.

    Usage:
        decoder = WWVBDecoder()
        result = decoder.decode(SampleBuffer.from_file('capture.bin'))
        print(result.summary_time, result.reliability.value)
    """

    def __init__(self, config: Optional[DecoderConfig] = None):
        self.config = config or DecoderConfig()

    def decode(
        self,
        buffer: SampleBuffer,
        source: str = "",
        fill_time_usec: Optional[int] = None
    ) -> DecodeResult:
        """
        Synchronize, decode every field and grade the result.

        Raises:
            InsufficientDataError: if the buffer is shorter than one frame
        """
        sync = find_frame(buffer)
        frame = decode_frame(buffer, sync.start_sample)

        month = day = None
        if not frame.day.failed and not frame.lyi.failed:
            try:
                month, day = day_of_year_to_month_day(frame.day.value, frame.lyi.value)
            except InvalidInputError as e:
                logger.debug(f"Decoded day unusable: {e}")

        reliability = classify_reliability(frame.worst_score, self.config.thresholds)

        if frame.failed_fields:
            logger.debug(f"Failed fields: {', '.join(frame.failed_fields)}")

        return DecodeResult(
            sync=sync,
            frame=frame,
            month=month,
            day=day,
            reliability=reliability,
            source=source,
            fill_time_usec=fill_time_usec,
            samples_per_second=buffer.samples_per_second,
        )
