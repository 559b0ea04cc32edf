"""Lectura de eventos desde archivos JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from dateutil import parser as date_parser

from tally_tool.model import Event
from tally_tool.periods import CalendarConfig, to_local
from tally_tool.sources.base import EventSource, SourcePaths


@dataclass(frozen=True)
class JsonEventsPaths(SourcePaths):
    """Path of a JSON list of events."""

    # path: file with [{"id": ..., "timestamp": ...}, ...]


class JsonEventsSource(EventSource):
    """JSON event list reader."""

    def load_events(self) -> list[Event]:
        """Parse the JSON file into typed events.

        Returns:
            Events sorted by timestamp.

        Raises:
            ValueError: If the JSON shape is invalid or an item has no time.
        """
        text = self._paths.path.read_text(encoding="utf-8")
        raw = _extract_json_list(text)
        if not isinstance(raw, list):
            raise ValueError("Events JSON must be a list")

        out: list[Event] = []
        for item in raw:
            event = _item_to_event(item, self._config)
            if event is not None:
                out.append(event)
        out.sort(key=lambda e: e.occurred_at)
        return out


def _item_to_event(item: Any, config: CalendarConfig) -> Event | None:
    """Convierte un ítem dict en Event; None si no es un objeto."""
    if not isinstance(item, dict):
        return None
    ts = _parse_timestamp(item.get("timestamp"), item.get("epoch"), config)
    event_id = item.get("id")
    if event_id is None or not str(event_id).strip():
        return Event(occurred_at=ts)
    return Event(occurred_at=ts, id=str(event_id).strip())


def _extract_json_list(text: str) -> Any:
    """Extract JSON array from text, tolerating leading non-JSON (e.g. log lines)."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        start = text.find("[")
        if start <= 0:
            raise
        return json.loads(text[start:])


def _parse_timestamp(ts_str: Any, epoch: Any, config: CalendarConfig) -> datetime:
    """Parses ISO-8601 text or epoch seconds into an aware datetime."""
    if isinstance(ts_str, str) and ts_str.strip():
        return to_local(date_parser.isoparse(ts_str.strip()), config)

    if epoch is not None:
        return datetime.fromtimestamp(int(epoch), tz=config.zone)

    raise ValueError("Missing timestamp and epoch")
