"""
Reliability Classifier - coarse confidence tier for a decoded frame

The tier is chosen from the worst single-second error count across the
frame (at 40 samples/s):

    worst < 7    LIKELY OK
    worst < 10   NOT RELIABLE
    otherwise    PROBABLY BAD

The thresholds were found empirically and are approximate. They can be
tuned in the [reliability] table of the configuration file.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..interfaces.decode_result import Reliability
from ..interfaces.errors import InvalidInputError
from .wwvb_constants import LIKELY_OK_BELOW, NOT_RELIABLE_BELOW


@dataclass(frozen=True)
class ReliabilityThresholds:
    likely_ok_below: int = LIKELY_OK_BELOW
    not_reliable_below: int = NOT_RELIABLE_BELOW

    def __post_init__(self):
        if self.likely_ok_below > self.not_reliable_below:
            raise InvalidInputError(
                f"likely_ok_below ({self.likely_ok_below}) must not exceed "
                f"not_reliable_below ({self.not_reliable_below})"
            )

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]]) -> "ReliabilityThresholds":
        config = config or {}
        return cls(
            likely_ok_below=int(config.get('likely_ok_below', LIKELY_OK_BELOW)),
            not_reliable_below=int(config.get('not_reliable_below', NOT_RELIABLE_BELOW)),
        )


DEFAULT_THRESHOLDS = ReliabilityThresholds()


def classify_reliability(
    worst_score: int,
    thresholds: ReliabilityThresholds = DEFAULT_THRESHOLDS
) -> Reliability:
    """Map the frame's worst single-second error count to a tier."""
    if worst_score < thresholds.likely_ok_below:
        return Reliability.LIKELY_OK
    if worst_score < thresholds.not_reliable_below:
        return Reliability.NOT_RELIABLE
    return Reliability.PROBABLY_BAD
