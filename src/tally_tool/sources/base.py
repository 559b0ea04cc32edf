"""Clases base para fuentes de eventos."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from tally_tool.model import Event
from tally_tool.periods import CalendarConfig


@dataclass(frozen=True)
class SourcePaths:
    """Container for the input file."""

    path: Path


class EventSource(ABC):
    """Abstract event source."""

    def __init__(self, paths: SourcePaths, config: CalendarConfig) -> None:
        """Create an event source.

        Args:
            paths: Source paths configuration.
            config: Calendar used for timestamps without offset.
        """
        self._paths = paths
        self._config = config

    def validate(self) -> None:
        """Validate that the input file exists.

        Raises:
            FileNotFoundError: If the file is missing.
        """
        if not self._paths.path.is_file():
            raise FileNotFoundError(str(self._paths.path))

    @abstractmethod
    def load_events(self) -> list[Event]:
        """Parse the input into events sorted by timestamp."""
