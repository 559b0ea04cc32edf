"""Exportación CSV de eventos con cabecera de metadatos."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import pandas as pd
from dateutil import tz

from tally_tool.model import Event
from tally_tool.periods import CalendarConfig, now_in, to_local

CSV_COLUMNS = ["timestamp_iso", "date", "time", "day_of_week"]


def _long_date(dt: datetime) -> str:
    return f"{dt:%B} {dt.day}, {dt.year}"


def _short_time(dt: datetime) -> str:
    return f"{dt.hour % 12 or 12}:{dt:%M %p}"


def events_to_frame(events: Sequence[Event], config: CalendarConfig) -> pd.DataFrame:
    """One row per event, newest first, local date/time columns."""
    stamps = [to_local(e.occurred_at, config) for e in events]
    stamps.sort(key=lambda dt: dt.astimezone(tz.UTC), reverse=True)
    rows = []
    for local in stamps:
        rows.append(
            {
                "timestamp_iso": local.astimezone(tz.UTC).strftime(
                    "%Y-%m-%dT%H:%M:%SZ"
                ),
                "date": _long_date(local),
                "time": _short_time(local),
                "day_of_week": f"{local:%A}",
            }
        )
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def _date_range(events: Sequence[Event], config: CalendarConfig) -> str:
    if not events:
        return "No data"
    stamps = sorted(
        (to_local(e.occurred_at, config) for e in events),
        key=lambda dt: dt.astimezone(tz.UTC),
    )
    return f"{_long_date(stamps[0])} - {_long_date(stamps[-1])}"


def export_to_csv(
    events: Sequence[Event],
    daily_goal: int,
    config: CalendarConfig,
    now: datetime | None = None,
) -> str:
    """Build the CSV export text (metadata comments + table).

    Args:
        events: Event snapshot.
        daily_goal: Goal written in the header.
        config: Calendar for local dates and times.
        now: Generation time (defaults to the current time).

    Returns:
        CSV text, ``\\n`` line endings.
    """
    generated = to_local(now if now is not None else now_in(config), config)
    header = [
        "# Tally Export",
        f"# Generated: {_long_date(generated)} {generated:%H:%M}",
        f"# Total Events: {len(events):,}",
        f"# Daily Goal: {daily_goal}",
        f"# Date Range: {_date_range(events, config)}",
        "",
    ]
    table = events_to_frame(events, config).to_csv(index=False, lineterminator="\n")
    return "\n".join(header) + "\n" + table


def export_filename(now: datetime) -> str:
    return f"tally_export_{now:%Y-%m-%d}.csv"


def write_csv(text: str, out_path: Path) -> None:
    """Write export text, creating parent folders."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
