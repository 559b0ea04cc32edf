"""Lectura de eventos desde una exportación CSV previa."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd
from dateutil import parser as date_parser

from tally_tool.model import Event
from tally_tool.periods import to_local
from tally_tool.sources.base import EventSource, SourcePaths


@dataclass(frozen=True)
class CsvEventsPaths(SourcePaths):
    """Path of a CSV written by ``csv_export``."""


class CsvEventsSource(EventSource):
    """Reader for exported CSV files (``timestamp_iso`` column)."""

    def load_events(self) -> list[Event]:
        """Load events from the CSV, skipping ``#`` metadata lines.

        A file with only metadata lines (or nothing at all) has no events.

        Raises:
            ValueError: If the table has no ``timestamp_iso`` column.
        """
        try:
            df = pd.read_csv(self._paths.path, comment="#", dtype=str)
        except pd.errors.EmptyDataError:
            return []
        if "timestamp_iso" not in df.columns:
            raise ValueError(f"Missing timestamp_iso column in {self._paths.path}")

        out = [
            Event(occurred_at=to_local(date_parser.isoparse(value), self._config))
            for value in df["timestamp_iso"].dropna()
        ]
        out.sort(key=lambda e: e.occurred_at)
        return out
