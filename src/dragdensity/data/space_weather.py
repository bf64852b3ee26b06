"""Solar flux and geomagnetic index lookup from historical records.

Two record layouts are read:

* Flux records (SOLFSMY.TXT style), one line per day, whitespace separated::

      2020  74 2458923.0   71.2   70.5 ...
      YEAR DOY  JulianDay   F10   F81c

* Ap records (MSIS ``apindex`` style), fixed columns: ``yymmdd`` in
  columns 0-5 and eight 3-character 3-hourly Ap values in columns 31-54.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from dragdensity.core.calendar import DayOfYearInfo
from dragdensity.core.epoch import Epoch
from dragdensity.data.records import RecordSource
from dragdensity.errors import IndexNotFoundError, ParseError
from dragdensity.utils.constants import (
    AP_BLOCK_END,
    AP_BLOCK_START,
    AP_FIELD_COUNT,
    AP_FIELD_WIDTH,
    AP_KEY_WIDTH,
    F107_FIELD_COUNT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpaceWeatherIndices:
    """Inputs the density model takes from space weather.

    Attributes:
        f107: Previous-day F10.7 solar flux (sfu).
        f107a: 81-day average F10.7 (sfu).
        ap: Daily mean of the eight 3-hourly Ap values.
    """

    f107: float
    f107a: float
    ap: int


def f107_search_key(year: int, previous_day_of_year: int) -> str:
    """Build the column-aligned ``"<year> <doy>"`` key used in flux records.

    The day is right-aligned to three characters after one space, so
    ``(2020, 74)`` gives ``"2020  74"``.
    """
    return f"{year} {previous_day_of_year:>3d}"


def ap_search_key(year: int, month: int, day: int) -> str:
    """Build the ``yymmdd`` key that starts an Ap record."""
    return f"{year % 100:02d}{month:02d}{day:02d}"


def average_ap(block: str) -> int:
    """Average the eight 3-hourly Ap values of a record.

    The mean is rounded half away from zero, so 22.5 gives 23.

    Args:
        block: The 24 characters from columns 31-54 of an Ap record.

    Returns:
        The daily Ap index.

    Raises:
        ParseError: If the block is not 24 characters or a value is not an integer.
    """
    expected = AP_FIELD_WIDTH * AP_FIELD_COUNT
    if len(block) != expected:
        logger.error("Ap block must be %d characters, got %d: %r", expected, len(block), block)
        raise ParseError(f"Ap block must be {expected} characters, got {len(block)}: {block!r}")

    values = []
    for i in range(AP_FIELD_COUNT):
        sub_field = block[i * AP_FIELD_WIDTH:(i + 1) * AP_FIELD_WIDTH]
        try:
            values.append(int(sub_field))
        except ValueError:
            logger.error("Invalid Ap value %r in block %r", sub_field, block)
            raise ParseError(f"Invalid Ap value {sub_field!r} in block {block!r}") from None

    mean = sum(values) / float(AP_FIELD_COUNT)
    return _round_half_away(mean)


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


class SpaceWeatherIndexStore:
    """Looks up F10.7, F10.7A and Ap for a date from two record sources.

    Both scans read the whole source; when several lines match, the last one
    in file order wins.

    Args:
        f107_source: Daily flux records.
        ap_source: 3-hourly Ap records.
    """

    def __init__(self, f107_source: RecordSource, ap_source: RecordSource) -> None:
        self.f107_source = f107_source
        self.ap_source = ap_source

    def __repr__(self) -> str:
        return (
            f"SpaceWeatherIndexStore(f107_source={self.f107_source.name!r}, "
            f"ap_source={self.ap_source.name!r})"
        )

    def lookup_f107(self, f107_year: int, previous_day_of_year: int) -> tuple[float, float]:
        """Find F10.7 and F10.7A for the day before the epoch.

        Args:
            f107_year: Year of the previous day.
            previous_day_of_year: Ordinal of the previous day.

        Returns:
            Tuple of (F10.7, F10.7A).

        Raises:
            IndexNotFoundError: If no record contains the key.
            ParseError: If the matching record lacks numeric flux fields.
        """
        key = f107_search_key(f107_year, previous_day_of_year)

        matched: str | None = None
        for line in self.f107_source.lines():
            if key in line:
                matched = line

        if matched is None:
            logger.error("No F10.7 record for %r in %s", key, self.f107_source.name)
            raise IndexNotFoundError(f"No F10.7 record for {key!r} in {self.f107_source.name}")

        fields = matched.split()
        if len(fields) < F107_FIELD_COUNT:
            logger.error("F10.7 record has %d fields, expected %d: %r",
                         len(fields), F107_FIELD_COUNT, matched)
            raise ParseError(f"F10.7 record has too few fields: {matched!r}")

        try:
            f107, f107a = float(fields[3]), float(fields[4])
        except ValueError:
            logger.error("Invalid F10.7 values in record %r", matched)
            raise ParseError(f"Invalid F10.7 values in record {matched!r}") from None

        logger.debug("F10.7 lookup %r -> %.1f / %.1f", key, f107, f107a)
        return f107, f107a

    def lookup_ap_block(self, year: int, month: int, day: int) -> str:
        """Find the 3-hourly Ap block for a date.

        Args:
            year: Calendar year.
            month: Month number.
            day: Day of month.

        Returns:
            The 24 characters from columns 31-54 of the matching record.

        Raises:
            IndexNotFoundError: If no record starts with the ``yymmdd`` key.
        """
        key = ap_search_key(year, month, day)

        block: str | None = None
        for line in self.ap_source.lines():
            if line[:AP_KEY_WIDTH] == key:
                block = line[AP_BLOCK_START:AP_BLOCK_END]

        if block is None:
            logger.error("No Ap record for %r in %s", key, self.ap_source.name)
            raise IndexNotFoundError(f"No Ap record for {key!r} in {self.ap_source.name}")

        logger.debug("Ap lookup %r -> %r", key, block)
        return block

    def lookup_ap(self, year: int, month: int, day: int) -> int:
        """Daily Ap for a date. See :func:`average_ap`."""
        return average_ap(self.lookup_ap_block(year, month, day))

    def indices(self, epoch: Epoch, day_info: DayOfYearInfo) -> SpaceWeatherIndices:
        """Collect every space-weather input for an epoch.

        Args:
            epoch: Decomposed epoch (Ap is keyed on its calendar date).
            day_info: Day-of-year record (F10.7 is keyed on the previous day).

        Returns:
            The combined indices.
        """
        f107, f107a = self.lookup_f107(day_info.f107_lookup_year, day_info.previous_day_of_year)
        ap = self.lookup_ap(epoch.year, epoch.month, epoch.day)
        return SpaceWeatherIndices(f107=f107, f107a=f107a, ap=ap)
