"""Recalculo completo: grupos, estadísticas y racha desde un snapshot."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from tally_tool.grouping import group_by
from tally_tool.model import Event, Group, Period, StatisticsSummary, StreakSummary
from tally_tool.periods import CalendarConfig, now_in
from tally_tool.statistics import compute_statistics
from tally_tool.streak import compute_streak


@dataclass(frozen=True)
class Summary:
    """Derived read-only view of one event snapshot."""

    groups: tuple[Group, ...]
    statistics: StatisticsSummary
    streak: StreakSummary


def summarize(
    events: Iterable[Event],
    config: CalendarConfig,
    *,
    daily_goal: int,
    stored_best_streak: int = 0,
    period: Period = Period.DAY,
    now: datetime | None = None,
) -> Summary:
    """Recompute every summary from scratch.

    Call again after each add/edit/delete; nothing is cached between calls.
    ``now`` is fixed once so all parts agree on "today".
    """
    snapshot = tuple(events)
    ref = now if now is not None else now_in(config)
    return Summary(
        groups=tuple(group_by(snapshot, period, config)),
        statistics=compute_statistics(snapshot, config, now=ref),
        streak=compute_streak(
            snapshot, daily_goal, stored_best_streak, config, now=ref
        ),
    )
