"""
Unit tests for the reliability classifier.
"""

import pytest


class TestClassifyReliability:
    """Test tier boundaries."""

    @pytest.mark.parametrize("worst,tier", [
        (0, "LIKELY_OK"),
        (6, "LIKELY_OK"),
        (7, "NOT_RELIABLE"),
        (9, "NOT_RELIABLE"),
        (10, "PROBABLY_BAD"),
        (40, "PROBABLY_BAD"),
    ])
    def test_default_boundaries(self, worst, tier):
        from wwvb_decoder.interfaces.decode_result import Reliability
        from wwvb_decoder.timing.reliability import classify_reliability

        assert classify_reliability(worst) is Reliability[tier]

    def test_custom_thresholds(self):
        from wwvb_decoder.interfaces.decode_result import Reliability
        from wwvb_decoder.timing.reliability import (
            ReliabilityThresholds, classify_reliability
        )

        thresholds = ReliabilityThresholds(likely_ok_below=3, not_reliable_below=5)
        assert classify_reliability(2, thresholds) is Reliability.LIKELY_OK
        assert classify_reliability(3, thresholds) is Reliability.NOT_RELIABLE
        assert classify_reliability(5, thresholds) is Reliability.PROBABLY_BAD

    def test_thresholds_from_config(self):
        from wwvb_decoder.timing.reliability import ReliabilityThresholds

        thresholds = ReliabilityThresholds.from_dict({'likely_ok_below': 5})
        assert thresholds.likely_ok_below == 5
        assert thresholds.not_reliable_below == 10

        assert ReliabilityThresholds.from_dict(None) == ReliabilityThresholds()

    def test_inverted_thresholds_rejected(self):
        from wwvb_decoder.interfaces.errors import InvalidInputError
        from wwvb_decoder.timing.reliability import ReliabilityThresholds

        with pytest.raises(InvalidInputError):
            ReliabilityThresholds(likely_ok_below=12, not_reliable_below=10)

    def test_tier_labels(self):
        from wwvb_decoder.interfaces.decode_result import Reliability

        assert Reliability.LIKELY_OK.value == "LIKELY OK"
        assert Reliability.NOT_RELIABLE.value == "NOT RELIABLE"
        assert Reliability.PROBABLY_BAD.value == "PROBABLY BAD"
