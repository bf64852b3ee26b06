"""Day-of-year arithmetic for space-weather lookups.

The flux record for a date is keyed by the *previous* day, so Jan 1 reaches
back into the last day of the preceding year.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass

from dragdensity.errors import LookupTableError
from dragdensity.utils.constants import (
    CUMULATIVE_DAYS,
    CUMULATIVE_DAYS_LEAP,
    DAYS_IN_LEAP_YEAR,
    DAYS_IN_YEAR,
    LEAP_YEARS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayOfYearInfo:
    """Day-of-year for an epoch plus the key of the preceding flux record.

    Attributes:
        day_of_year: 1-based ordinal day within the year.
        previous_day_of_year: Ordinal of the day before, wrapping at Jan 1.
        f107_lookup_year: Year of the previous day.
    """

    day_of_year: int
    previous_day_of_year: int
    f107_lookup_year: int


def is_leap_year(year: int, leap_years: Collection[int] = LEAP_YEARS) -> bool:
    """Leap-year test by membership in the fixed table, not the Gregorian rule."""
    return year in leap_years


def day_of_year_info(
    year: int,
    month: int,
    day: int,
    *,
    leap_years: Collection[int] = LEAP_YEARS,
) -> DayOfYearInfo:
    """Compute the day-of-year and previous-day flux key for a date.

    Args:
        year: Calendar year.
        month: Month number. Only January through November are tabulated.
        day: Day of month.
        leap_years: Years to treat as leap years.

    Returns:
        The day-of-year record.

    Raises:
        LookupTableError: If ``month`` is not a key of the cumulative table.
    """
    leap = is_leap_year(year, leap_years)
    table = CUMULATIVE_DAYS_LEAP if leap else CUMULATIVE_DAYS

    if month not in table:
        table_name = "leap_days" if leap else "cal_days"
        logger.error("Month %d not found in %s", month, table_name)
        raise LookupTableError(f"Month not found in {table_name}: {month}")

    doy = table[month] + day
    if doy > 1:
        info = DayOfYearInfo(
            day_of_year=doy,
            previous_day_of_year=doy - 1,
            f107_lookup_year=year,
        )
    else:
        info = DayOfYearInfo(
            day_of_year=doy,
            previous_day_of_year=DAYS_IN_LEAP_YEAR if leap else DAYS_IN_YEAR,
            f107_lookup_year=year - 1,
        )

    logger.debug("%04d-%02d-%02d -> %s (leap=%s)", year, month, day, info, leap)
    return info
