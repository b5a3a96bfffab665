"""
Day-of-year to month/day conversion for the decoded day field.

WWVB transmits the day of year (1-366) and a leap year indicator rather
than a month and day.
"""

from typing import Tuple

from ..interfaces.errors import InvalidInputError
from .wwvb_constants import CUMULATIVE_MONTH_DAYS


def month_day_table(is_leap_year: bool) -> Tuple[int, ...]:
    """Cumulative days at the end of each month."""
    if not is_leap_year:
        return CUMULATIVE_MONTH_DAYS
    # February onward gains the leap day
    return (CUMULATIVE_MONTH_DAYS[0],) + tuple(d + 1 for d in CUMULATIVE_MONTH_DAYS[1:])


def day_of_year_to_month_day(day_number: int, is_leap_year) -> Tuple[int, int]:
    """
    Convert a day of year to (month, day of month).

    Args:
        day_number: 1-based day of year
        is_leap_year: Truthy for a leap year (the decoded LYI value)

    Raises:
        InvalidInputError: if day_number is outside the year

    Examples:
        day_of_year_to_month_day(59, False) -> (2, 28)
        day_of_year_to_month_day(60, True)  -> (2, 29)
    """
    daysums = month_day_table(bool(is_leap_year))
    if not 1 <= day_number <= daysums[-1]:
        raise InvalidInputError(
            f"Day {day_number} outside 1-{daysums[-1]}"
        )

    month = 0
    while daysums[month] < day_number:
        month += 1

    day = day_number - daysums[month - 1] if month > 0 else day_number
    return month + 1, day
