"""Modelos tipados para eventos, grupos por período y resúmenes derivados."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from tally_tool.periods import CalendarConfig

TRASH_TTL = timedelta(hours=24)


class Period(Enum):
    """Calendar granularity used to bucket events."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class Event:
    """One occurrence (timestamped). Identity is ``id``."""

    occurred_at: datetime
    id: str = field(default_factory=lambda: str(uuid4()))


@dataclass(frozen=True)
class Group:
    """Events whose normalized timestamp falls in the same period."""

    period_start: datetime
    period: Period
    events: tuple[Event, ...]

    @property
    def count(self) -> int:
        return len(self.events)

    def is_current(self, config: CalendarConfig, now: datetime | None = None) -> bool:
        """Return True when the group is the period containing ``now``.

        Args:
            config: ``CalendarConfig`` used to build the group.
            now: Reference instant (defaults to the current time).
        """
        from tally_tool.periods import normalize, now_in

        ref = now if now is not None else now_in(config)
        return normalize(ref, self.period, config) == self.period_start


@dataclass(frozen=True)
class StatisticsSummary:
    """Trailing-window averages over days that have data."""

    seven_day_average: float
    thirty_day_average: float

    @property
    def has_data(self) -> bool:
        return self.seven_day_average > 0 or self.thirty_day_average > 0


@dataclass(frozen=True)
class StreakSummary:
    """Current and best streak of days within the daily goal."""

    current_streak: int
    best_streak: int
    today_goal_met: bool
    today_count: int

    @property
    def has_active_streak(self) -> bool:
        return self.current_streak > 0


@dataclass(frozen=True)
class DeletedEvent:
    """An event in the trash, recoverable until its TTL expires."""

    event: Event
    deleted_at: datetime

    @property
    def id(self) -> str:
        return self.event.id

    @property
    def expires_at(self) -> datetime:
        return self.deleted_at + TRASH_TTL

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def time_until_expiry(self, now: datetime) -> timedelta:
        """Remaining time before purge; never negative."""
        return max(timedelta(0), self.expires_at - now)

    def formatted_time_remaining(self, now: datetime) -> str:
        """Human readable remaining time ("5h remaining", "12m remaining")."""
        remaining = self.time_until_expiry(now).total_seconds()
        if remaining <= 0:
            return "Expired"
        hours = int(remaining // 3600)
        if hours < 1:
            minutes = int(remaining // 60)
            if minutes < 1:
                return "Expires soon"
            return f"{minutes}m remaining"
        return f"{hours}h remaining"
