"""Mission epoch decomposition.

Epochs arrive as the simulation's UTC datestamp text. Two layouts are
accepted::

    15/03/2020 12:30:45.000000 UTC      (3 tokens, date joined by '/')
    5/ 3/2020, 12:30:45.000000 UTC      (4 tokens, day then month/year)

The month/year token may also be written without a separator (``032020``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone

from dragdensity.errors import EpochFormatError
from dragdensity.utils.constants import SECONDS_PER_DAY

logger = logging.getLogger(__name__)

_DAY_RE = re.compile(r"^([0-9]{1,2})[/,]?$")
_MONTH_YEAR_RE = re.compile(r"^([0-9]{1,2})/?([0-9]{4})[,/]?$")
_SECONDS_WIDTH = 6


@dataclass(frozen=True)
class Epoch:
    """A UTC calendar date with the time folded into seconds of day.

    Attributes:
        year: Four-digit calendar year.
        month: Month number, 1-12.
        day: Day of month, 1-31.
        second_of_day: Whole seconds since midnight, 0-86399.
    """

    year: int
    month: int
    day: int
    second_of_day: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            logger.error("Month out of range: %d", self.month)
            raise EpochFormatError(f"Month out of range: {self.month}")
        if not 1 <= self.day <= 31:
            logger.error("Day out of range: %d", self.day)
            raise EpochFormatError(f"Day out of range: {self.day}")
        if not 0 <= self.second_of_day < SECONDS_PER_DAY:
            logger.error("Second of day out of range: %d", self.second_of_day)
            raise EpochFormatError(f"Second of day out of range: {self.second_of_day}")

    @property
    def hour(self) -> int:
        return self.second_of_day // 3600

    @property
    def minute(self) -> int:
        return (self.second_of_day % 3600) // 60

    @property
    def second(self) -> int:
        return self.second_of_day % 60

    @classmethod
    def from_string(cls, text: str) -> Epoch:
        """Parse an epoch datestamp.

        Args:
            text: Datestamp with 3 or 4 whitespace-separated tokens.

        Returns:
            The decomposed epoch.

        Raises:
            EpochFormatError: If the token count or any field shape is wrong.
        """
        tokens = text.split()

        if len(tokens) == 3:
            date_token, time_token, _zone = tokens
            day_token, sep, month_year_token = date_token.partition("/")
            if not sep:
                logger.error("Epoch date token has no '/' separator: %r", text)
                raise EpochFormatError(f"Epoch date token has no '/' separator: {text!r}")
        elif len(tokens) == 4:
            day_token, month_year_token, time_token, _zone = tokens
        else:
            logger.error("Epoch must have 3 or 4 tokens, got %d: %r", len(tokens), text)
            raise EpochFormatError(
                f"Epoch must have 3 or 4 tokens, got {len(tokens)}: {text!r}"
            )

        day = _parse_day(day_token, text)
        month, year = _parse_month_year(month_year_token, text)
        second_of_day = _parse_seconds_of_day(time_token, text)

        epoch = cls(year=year, month=month, day=day, second_of_day=second_of_day)
        logger.debug("Parsed epoch %r -> %s", text, epoch)
        return epoch

    @classmethod
    def from_datetime(cls, value: datetime) -> Epoch:
        """Build an epoch from a datetime, converting aware values to UTC first."""
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return cls(
            year=value.year,
            month=value.month,
            day=value.day,
            second_of_day=value.hour * 3600 + value.minute * 60 + value.second,
        )

    def to_datetime(self) -> datetime:
        """Return the epoch as a UTC-aware datetime."""
        return datetime(
            self.year, self.month, self.day,
            self.hour, self.minute, self.second,
            tzinfo=timezone.utc,
        )

    def format(self) -> str:
        """Render the epoch in the 3-token datestamp layout."""
        return (
            f"{self.day:02d}/{self.month:02d}/{self.year:04d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}.000000 UTC"
        )

    def __str__(self) -> str:
        return self.format()


def parse_epoch(text: str) -> Epoch:
    """Parse an epoch datestamp. See :meth:`Epoch.from_string`."""
    return Epoch.from_string(text)


def _parse_day(token: str, text: str) -> int:
    match = _DAY_RE.match(token)
    if match is None:
        logger.error("Invalid day field %r in epoch %r", token, text)
        raise EpochFormatError(f"Invalid day field {token!r} in epoch {text!r}")
    return int(match.group(1))


def _parse_month_year(token: str, text: str) -> tuple[int, int]:
    match = _MONTH_YEAR_RE.match(token)
    if match is None:
        logger.error("Invalid month/year field %r in epoch %r", token, text)
        raise EpochFormatError(f"Invalid month/year field {token!r} in epoch {text!r}")
    return int(match.group(1)), int(match.group(2))


def _parse_seconds_of_day(token: str, text: str) -> int:
    first = token.find(":")
    last = token.rfind(":")
    if first < 0 or first == last:
        logger.error("Invalid time field %r in epoch %r", token, text)
        raise EpochFormatError(f"Invalid time field {token!r} in epoch {text!r}")

    hour_text = token[:first]
    minute_text = token[first + 1:last]
    # Only the whole seconds count; the fraction is dropped.
    second_text = token[last + 1:last + 1 + _SECONDS_WIDTH].split(".")[0]

    for field in (hour_text, minute_text, second_text):
        if not (field.isascii() and field.isdigit()):
            logger.error("Invalid time field %r in epoch %r", token, text)
            raise EpochFormatError(f"Invalid time field {token!r} in epoch {text!r}")

    hour, minute, second = int(hour_text), int(minute_text), int(second_text)
    if hour >= 24 or minute >= 60 or second >= 60:
        logger.error("Time out of range in epoch %r", text)
        raise EpochFormatError(f"Time out of range in epoch {text!r}")

    return second + minute * 60 + hour * 3600
