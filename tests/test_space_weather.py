"""Tests for space-weather lookup and Ap averaging."""
from __future__ import annotations

from pathlib import Path

import pytest

from conftest import SOLFSMY_TEXT, ap_line
from dragdensity.core.calendar import day_of_year_info
from dragdensity.core.epoch import parse_epoch
from dragdensity.data.records import FileRecordSource, TextRecordSource
from dragdensity.data.space_weather import (
    SpaceWeatherIndexStore,
    SpaceWeatherIndices,
    ap_search_key,
    average_ap,
    f107_search_key,
)
from dragdensity.errors import IndexNotFoundError, ParseError


@pytest.fixture
def store(f107_path: Path, ap_path: Path) -> SpaceWeatherIndexStore:
    return SpaceWeatherIndexStore(FileRecordSource(f107_path), FileRecordSource(ap_path))


class TestSearchKeys:
    @pytest.mark.parametrize("doy, key", [
        (123, "2020 123"),
        (74, "2020  74"),
        (5, "2020   5"),
    ])
    def test_f107_key_alignment(self, doy: int, key: str) -> None:
        assert f107_search_key(2020, doy) == key

    def test_ap_key_zero_padded(self) -> None:
        assert ap_search_key(2020, 3, 5) == "200305"
        assert ap_search_key(2009, 11, 28) == "091128"


class TestAverageAp:
    def test_half_rounds_away_from_zero(self) -> None:
        # 5+10+...+40 = 180, 180 / 8 = 22.5
        assert average_ap("005010015020025030035040") == 23

    def test_below_half_rounds_down(self) -> None:
        # 179 / 8 = 22.375
        assert average_ap("005010015020025030035039") == 22

    def test_above_half_rounds_up(self) -> None:
        # 181 / 8 = 22.625
        assert average_ap("005010015020025030035041") == 23

    def test_blank_padded_fields(self) -> None:
        assert average_ap("  3  3  4  4  5  5  6  6") == 5  # 36 / 8 = 4.5

    def test_non_integer_field_raises(self) -> None:
        with pytest.raises(ParseError, match="Invalid Ap value"):
            average_ap("005010015020025030035 ab")

    def test_empty_field_raises(self) -> None:
        with pytest.raises(ParseError):
            average_ap("005010015020025030035   ")

    def test_short_block_raises(self) -> None:
        with pytest.raises(ParseError, match="24 characters"):
            average_ap("")


class TestF107Lookup:
    def test_basic(self, store: SpaceWeatherIndexStore) -> None:
        assert store.lookup_f107(2020, 74) == (71.2, 70.5)

    def test_single_digit_day(self, store: SpaceWeatherIndexStore) -> None:
        assert store.lookup_f107(2021, 4) == (77.5, 78.9)

    def test_key_does_not_match_longer_day(self, store: SpaceWeatherIndexStore) -> None:
        # "2020  74" must not pick up the "2020 174" record.
        f107, _ = store.lookup_f107(2020, 74)
        assert f107 != 69.8

    def test_last_match_wins(self) -> None:
        text = SOLFSMY_TEXT + "  2020  74 2458923.5   99.9   88.8   0 0 0 0 0 0 4B05\n"
        store = SpaceWeatherIndexStore(TextRecordSource(text), TextRecordSource(""))
        assert store.lookup_f107(2020, 74) == (99.9, 88.8)

    def test_missing_record(self, store: SpaceWeatherIndexStore) -> None:
        with pytest.raises(IndexNotFoundError, match="2018 200"):
            store.lookup_f107(2018, 200)

    def test_short_record(self) -> None:
        store = SpaceWeatherIndexStore(TextRecordSource("2020  74 2458923.5 71.2\n"), TextRecordSource(""))
        with pytest.raises(ParseError, match="too few fields"):
            store.lookup_f107(2020, 74)

    def test_non_numeric_flux(self) -> None:
        store = SpaceWeatherIndexStore(
            TextRecordSource("2020  74 2458923.5 n/a 70.5\n"), TextRecordSource("")
        )
        with pytest.raises(ParseError, match="Invalid F10.7"):
            store.lookup_f107(2020, 74)


class TestApLookup:
    def test_block(self, store: SpaceWeatherIndexStore) -> None:
        assert store.lookup_ap_block(2020, 3, 15) == "  5 10 15 20 25 30 35 40"

    def test_daily_ap(self, store: SpaceWeatherIndexStore) -> None:
        assert store.lookup_ap(2020, 3, 15) == 23
        assert store.lookup_ap(2021, 1, 5) == 2

    def test_key_must_start_line(self) -> None:
        text = "xx" + ap_line("200315", [9] * 8) + "\n"
        store = SpaceWeatherIndexStore(TextRecordSource(""), TextRecordSource(text))
        with pytest.raises(IndexNotFoundError, match="200315"):
            store.lookup_ap(2020, 3, 15)

    def test_last_match_wins(self) -> None:
        text = ap_line("200315", [1] * 8) + "\n" + ap_line("200315", [7] * 8) + "\n"
        store = SpaceWeatherIndexStore(TextRecordSource(""), TextRecordSource(text))
        assert store.lookup_ap(2020, 3, 15) == 7

    def test_missing_record(self, store: SpaceWeatherIndexStore) -> None:
        with pytest.raises(IndexNotFoundError):
            store.lookup_ap(2020, 3, 16)

    def test_truncated_record(self) -> None:
        store = SpaceWeatherIndexStore(TextRecordSource(""), TextRecordSource("200315 short\n"))
        with pytest.raises(ParseError):
            store.lookup_ap(2020, 3, 15)


class TestIndices:
    def test_scenario(self, store: SpaceWeatherIndexStore) -> None:
        epoch = parse_epoch("15/03/2020 12:30:45.000000 Z")
        info = day_of_year_info(epoch.year, epoch.month, epoch.day)
        indices = store.indices(epoch, info)
        assert indices == SpaceWeatherIndices(f107=71.2, f107a=70.5, ap=23)

    def test_january_first_uses_previous_year(self, store: SpaceWeatherIndexStore) -> None:
        epoch = parse_epoch("01/01/2021 00:00:00.000000 UTC")
        info = day_of_year_info(epoch.year, epoch.month, epoch.day)
        assert store.lookup_f107(info.f107_lookup_year, info.previous_day_of_year) == (83.0, 79.6)

    def test_january_first_of_leap_year_reaches_day_366(self, store: SpaceWeatherIndexStore) -> None:
        epoch = parse_epoch("01/01/2020 00:00:00.000000 UTC")
        info = day_of_year_info(epoch.year, epoch.month, epoch.day)
        with pytest.raises(IndexNotFoundError, match="2019 366"):
            store.indices(epoch, info)
