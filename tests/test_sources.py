from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import pytest
from dateutil import tz

from tally_tool.csv_export import export_to_csv, write_csv
from tally_tool.model import Event
from tally_tool.periods import CalendarConfig
from tally_tool.sources.csv_events import CsvEventsPaths, CsvEventsSource
from tally_tool.sources.json_events import (
    JsonEventsPaths,
    JsonEventsSource,
    _extract_json_list,
    _parse_timestamp,
)

NY = tz.gettz("America/New_York")
CONFIG = CalendarConfig(zone=NY)


def _json_source(path: Path) -> JsonEventsSource:
    return JsonEventsSource(JsonEventsPaths(path=path), CONFIG)


def test_json_source_parses_list(tmp_path: Path) -> None:
    data = [
        {"id": "x1", "timestamp": "2024-01-15T14:30:00Z"},
        {"epoch": 1704067200},
        "basura",
        {"id": "x3", "timestamp": "2024-01-10T08:00:00"},
    ]
    p = tmp_path / "events.json"
    p.write_text(json.dumps(data), encoding="utf-8")

    events = _json_source(p).load_events()

    assert len(events) == 3
    assert [e.occurred_at.date() for e in events] == [
        date(2023, 12, 31),
        date(2024, 1, 10),
        date(2024, 1, 15),
    ]
    assert events[1].id == "x3"
    assert events[1].occurred_at.hour == 8
    assert events[2].occurred_at.hour == 9
    assert events[0].id


def test_json_source_rejects_non_list(tmp_path: Path) -> None:
    p = tmp_path / "events.json"
    p.write_text(json.dumps({"events": []}), encoding="utf-8")
    with pytest.raises(ValueError, match="must be a list"):
        _json_source(p).load_events()


def test_validate_raises_when_file_missing(tmp_path: Path) -> None:
    missing = tmp_path / "noexiste.json"
    with pytest.raises(FileNotFoundError, match="noexiste"):
        _json_source(missing).validate()


def test_validate_succeeds_when_file_exists(tmp_path: Path) -> None:
    p = tmp_path / "events.json"
    p.write_text("[]", encoding="utf-8")
    _json_source(p).validate()
    assert _json_source(p).load_events() == []


def test_extract_json_list_tolerates_leading_text() -> None:
    assert _extract_json_list('log line\n[{"epoch": 1}]') == [{"epoch": 1}]


def test_parse_timestamp_requires_timestamp_or_epoch() -> None:
    with pytest.raises(ValueError, match="Missing timestamp"):
        _parse_timestamp(None, None, CONFIG)
    assert _parse_timestamp("  ", 0, CONFIG) == datetime(1969, 12, 31, 19, 0, tzinfo=NY)


def test_csv_source_reads_export(tmp_path: Path) -> None:
    events = [
        Event(occurred_at=datetime(2024, 1, 16, 8, 0, tzinfo=NY)),
        Event(occurred_at=datetime(2024, 1, 15, 14, 30, tzinfo=NY)),
    ]
    now = datetime(2024, 1, 20, 9, 0, tzinfo=NY)
    p = tmp_path / "export.csv"
    write_csv(export_to_csv(events, 10, CONFIG, now=now), p)

    src = CsvEventsSource(CsvEventsPaths(path=p), CONFIG)
    src.validate()
    loaded = src.load_events()

    assert [e.occurred_at for e in loaded] == [
        datetime(2024, 1, 15, 14, 30, tzinfo=NY),
        datetime(2024, 1, 16, 8, 0, tzinfo=NY),
    ]


def test_csv_source_missing_column(tmp_path: Path) -> None:
    p = tmp_path / "other.csv"
    p.write_text("a,b\n1,2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="timestamp_iso"):
        CsvEventsSource(CsvEventsPaths(path=p), CONFIG).load_events()


def test_json_source_rejects_scalar(tmp_path: Path) -> None:
    p = tmp_path / "events.json"
    p.write_text("42", encoding="utf-8")
    with pytest.raises(ValueError, match="must be a list"):
        _json_source(p).load_events()


def test_extract_json_list_keeps_decode_error_without_list() -> None:
    with pytest.raises(json.JSONDecodeError):
        _extract_json_list("no es json")


def test_csv_source_comment_only_file_has_no_events(tmp_path: Path) -> None:
    p = tmp_path / "solo_metadatos.csv"
    p.write_text("# Tally Export\n# Total Events: 0\n\n", encoding="utf-8")
    assert CsvEventsSource(CsvEventsPaths(path=p), CONFIG).load_events() == []


def test_csv_source_reads_empty_export(tmp_path: Path) -> None:
    now = datetime(2024, 1, 20, 9, 0, tzinfo=NY)
    p = tmp_path / "vacio.csv"
    write_csv(export_to_csv([], 10, CONFIG, now=now), p)
    assert CsvEventsSource(CsvEventsPaths(path=p), CONFIG).load_events() == []


def test_csv_source_header_only_without_timestamp_column(tmp_path: Path) -> None:
    p = tmp_path / "other.csv"
    p.write_text("a,b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="timestamp_iso"):
        CsvEventsSource(CsvEventsPaths(path=p), CONFIG).load_events()
