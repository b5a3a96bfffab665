"""
Decode Result Data Models

These dataclasses define the contract between the decoder core and its
consumers (report formatter, JSON result writer, callers of the library).
A DecodeResult is serialized to JSON by the result writer.

Contract Version: 1.0.0
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, Dict, Tuple
import json
import time

# Score reported for a field whose decode hit a marker
DECODE_FAILURE = 9999


class Reliability(str, Enum):
    """Coarse confidence tier derived from the worst single-second error count."""
    LIKELY_OK = "LIKELY OK"
    NOT_RELIABLE = "NOT RELIABLE"
    PROBABLY_BAD = "PROBABLY BAD"


@dataclass(frozen=True)
class FrameSync:
    """Chosen frame start and the error of the fixed positions at that start."""
    start_sample: int
    error: int


@dataclass(frozen=True)
class DecodedField:
    """
    Decode of one field (minutes, hours, ...).

    value is only meaningful when the field did not fail. worst_score is the
    error count of the worst single second in the field, or samples-per-second
    when a marker was found.
    """
    name: str
    value: int
    score: int
    worst_score: int
    code_len: int
    width: int = 2

    @property
    def failed(self) -> bool:
        return self.score == DECODE_FAILURE

    @property
    def average_score(self) -> float:
        """Mean errors per second over the field's positions."""
        return self.score / self.code_len if self.code_len else 0.0

    def to_dict(self) -> dict:
        result = asdict(self)
        result['failed'] = self.failed
        return result


@dataclass(frozen=True)
class DecodedFrame:
    """
    All fields decoded from one frame start.

    score is the sum of the field scores (a failed field contributes
    DECODE_FAILURE). worst_score is the maximum worst_score across fields.
    """
    fields: Dict[str, DecodedField]
    score: int
    worst_score: int

    @property
    def hours(self) -> DecodedField:
        return self.fields['hours']

    @property
    def minutes(self) -> DecodedField:
        return self.fields['minutes']

    @property
    def day(self) -> DecodedField:
        return self.fields['day']

    @property
    def year(self) -> DecodedField:
        return self.fields['year']

    @property
    def lyi(self) -> DecodedField:
        return self.fields['lyi']

    @property
    def lsw(self) -> DecodedField:
        return self.fields['lsw']

    @property
    def dst(self) -> DecodedField:
        return self.fields['dst']

    @property
    def total_code_len(self) -> int:
        return sum(f.code_len for f in self.fields.values())

    @property
    def average_score(self) -> float:
        total = self.total_code_len
        return self.score / total if total else 0.0

    @property
    def failed_fields(self) -> Tuple[str, ...]:
        return tuple(name for name, f in self.fields.items() if f.failed)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "worst_score": self.worst_score,
            "fields": {name: f.to_dict() for name, f in self.fields.items()},
        }


@dataclass
class DecodeResult:
    """
    Complete result of one decode attempt.

    month/day are None when the decoded day-of-year is not a valid calendar
    day (failed field or noise).
    """
    # Version for contract compatibility
    version: str = "1.0.0"

    sync: Optional[FrameSync] = None
    frame: Optional[DecodedFrame] = None

    month: Optional[int] = None
    day: Optional[int] = None

    reliability: Reliability = Reliability.PROBABLY_BAD

    # Capture metadata
    source: str = ""                       # capture file path, "gpio" or "simulated"
    fill_time_usec: Optional[int] = None   # live capture only
    samples_per_second: int = 40
    generated_at: float = field(default_factory=time.time)

    @property
    def summary_time(self) -> str:
        """HH:MM as decoded, without validation."""
        if self.frame is None:
            return "--:--"
        return f"{self.frame.hours.value:02d}:{self.frame.minutes.value:02d}"

    def to_json(self) -> str:
        """Serialize to JSON for the result file."""
        data = {
            "version": self.version,
            "source": self.source,
            "samples_per_second": self.samples_per_second,
            "generated_at": self.generated_at,
            "reliability": self.reliability.value,
            "month": self.month,
            "day": self.day,
        }

        if self.fill_time_usec is not None:
            data["fill_time_usec"] = self.fill_time_usec

        if self.sync:
            data["sync"] = asdict(self.sync)

        if self.frame:
            data["frame"] = self.frame.to_dict()

        return json.dumps(data, indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "DecodeResult":
        """Deserialize from JSON."""
        data = json.loads(json_str)

        result = cls(
            version=data.get("version", "1.0.0"),
            month=data.get("month"),
            day=data.get("day"),
            reliability=Reliability(data.get("reliability", Reliability.PROBABLY_BAD.value)),
            source=data.get("source", ""),
            fill_time_usec=data.get("fill_time_usec"),
            samples_per_second=data.get("samples_per_second", 40),
            generated_at=data.get("generated_at", time.time()),
        )

        if "sync" in data:
            s = data["sync"]
            result.sync = FrameSync(start_sample=s["start_sample"], error=s["error"])

        if "frame" in data:
            f = data["frame"]
            fields = {}
            for name, fd in f.get("fields", {}).items():
                fd = dict(fd)
                fd.pop("failed", None)
                fields[name] = DecodedField(**fd)
            result.frame = DecodedFrame(
                fields=fields,
                score=f.get("score", 0),
                worst_score=f.get("worst_score", 0),
            )

        return result
