"""Tests for historical record sources."""
from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from dragdensity.data.records import FileRecordSource, HttpRecordSource, TextRecordSource
from dragdensity.data.space_weather import SpaceWeatherIndexStore

AP_URL = "https://example.org/msis/apindex"


def _make_response(status_code: int = 200, text: str = "") -> MagicMock:
    """Helper to create a mock response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.raise_for_status = MagicMock()
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(response=resp)
    return resp


def test_file_source_strips_newlines(tmp_path: Path):
    p = tmp_path / "records.txt"
    p.write_bytes(b"first\r\nsecond\nthird")
    assert list(FileRecordSource(p).lines()) == ["first", "second", "third"]


def test_file_source_accepts_str_path(tmp_path: Path):
    p = tmp_path / "records.txt"
    p.write_text("only\n", encoding="utf-8")
    source = FileRecordSource(str(p))
    assert source.path == p
    assert source.name == str(p)


def test_file_source_rescans_each_time(tmp_path: Path):
    p = tmp_path / "records.txt"
    p.write_text("a\n", encoding="utf-8")
    source = FileRecordSource(p)
    assert list(source.lines()) == ["a"]
    p.write_text("a\nb\n", encoding="utf-8")
    assert list(source.lines()) == ["a", "b"]


def test_file_source_keeps_columns_of_undecodable_bytes(tmp_path: Path):
    p = tmp_path / "apindex"
    p.write_bytes(b"200315\xff" + b" " * 24 + b" 10" * 8 + b"\n")
    line, = FileRecordSource(p).lines()
    assert line[:7] == "200315\ufffd"
    assert line[31:55] == " 10 10 10 10 10 10 10 10"

    store = SpaceWeatherIndexStore(TextRecordSource(""), FileRecordSource(p))
    assert store.lookup_ap_block(2020, 3, 15) == " 10 10 10 10 10 10 10 10"
    assert store.lookup_ap(2020, 3, 15) == 10


def test_file_source_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        list(FileRecordSource(tmp_path / "nope.txt").lines())


def test_text_source():
    source = TextRecordSource("x\ny\n", name="inline")
    assert list(source.lines()) == ["x", "y"]
    assert source.name == "inline"


def test_http_source_downloads_once():
    source = HttpRecordSource(AP_URL)
    with patch.object(source._session, "get", return_value=_make_response(200, "l1\nl2\n")) as get:
        assert list(source.lines()) == ["l1", "l2"]
        assert list(source.lines()) == ["l1", "l2"]
        assert get.call_count == 1
        get.assert_called_with(AP_URL, timeout=30.0)


def test_http_source_refresh():
    source = HttpRecordSource(AP_URL, timeout_s=5.0)
    responses = [_make_response(200, "old\n"), _make_response(200, "new\n")]
    with patch.object(source._session, "get", side_effect=responses):
        assert list(source.lines()) == ["old"]
        source.refresh()
        assert list(source.lines()) == ["new"]


def test_http_source_error_status():
    source = HttpRecordSource(AP_URL)
    with patch.object(source._session, "get", return_value=_make_response(404, "missing")):
        with pytest.raises(requests.HTTPError):
            list(source.lines())
