"""
Unit tests for day-of-year to month/day conversion.
"""

import pytest


class TestDayOfYear:
    """Test conversion in common and leap years."""

    @pytest.mark.parametrize("day_number,leap,expected", [
        (1, False, (1, 1)),
        (31, False, (1, 31)),
        (32, False, (2, 1)),
        (59, False, (2, 28)),
        (60, False, (3, 1)),
        (60, True, (2, 29)),
        (61, True, (3, 1)),
        (323, False, (11, 19)),
        (365, False, (12, 31)),
        (366, True, (12, 31)),
    ])
    def test_conversion(self, day_number, leap, expected):
        from wwvb_decoder.timing.day_of_year import day_of_year_to_month_day

        assert day_of_year_to_month_day(day_number, leap) == expected

    def test_lyi_value_accepted(self):
        """The decoded LYI field value (0/1) works as the leap flag."""
        from wwvb_decoder.timing.day_of_year import day_of_year_to_month_day

        assert day_of_year_to_month_day(60, 1) == (2, 29)
        assert day_of_year_to_month_day(60, 0) == (3, 1)

    @pytest.mark.parametrize("day_number,leap", [
        (0, False),
        (0, True),
        (-5, False),
        (366, False),
        (367, True),
        (399, False),
    ])
    def test_out_of_range_rejected(self, day_number, leap):
        from wwvb_decoder.interfaces.errors import InvalidInputError
        from wwvb_decoder.timing.day_of_year import day_of_year_to_month_day

        with pytest.raises(InvalidInputError):
            day_of_year_to_month_day(day_number, leap)

    def test_leap_table(self):
        from wwvb_decoder.timing.day_of_year import month_day_table

        assert month_day_table(False)[:3] == (31, 59, 90)
        assert month_day_table(True)[:3] == (31, 60, 91)
        assert month_day_table(True)[-1] == 366
