"""Detección de rachas: días consecutivos dentro del objetivo diario."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from tally_tool.grouping import group_by_day
from tally_tool.model import Event, StreakSummary
from tally_tool.periods import CalendarConfig, now_in, to_local

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


def compute_streak(
    events: Iterable[Event],
    daily_goal: int,
    stored_best_streak: int,
    config: CalendarConfig,
    now: datetime | None = None,
) -> StreakSummary:
    """Walk backward from today counting consecutive days within the goal.

    A day succeeds when its count is <= ``daily_goal``. Today only starts
    the walk when it already meets the goal; otherwise the walk starts
    yesterday. The walk stops at the first day over the goal or the first
    day without events.

    Args:
        events: Event snapshot.
        daily_goal: Inclusive daily maximum; <= 0 means no goal configured.
        stored_best_streak: Historical best, reconciled with ``max``.
        config: Calendar configuration.
        now: Reference instant (defaults to the current time).

    Returns:
        Streak summary for today.
    """
    if daily_goal <= 0:
        return _empty_summary(stored_best_streak)

    groups = group_by_day(events, config)
    if not groups:
        return _empty_summary(stored_best_streak)

    counts: dict[date, int] = {g.period_start.date(): g.count for g in groups}
    earliest = min(counts)

    today = to_local(now if now is not None else now_in(config), config).date()
    today_count = counts.get(today, 0)
    today_goal_met = today_count <= daily_goal

    cursor = today if today_goal_met else today - _ONE_DAY
    current = 0
    while True:
        count = counts.get(cursor)
        if count is None:
            if cursor < earliest:
                logger.debug("Streak walk reached first tracked day %s", earliest)
            else:
                logger.debug("Streak broken by missed day %s", cursor)
            break
        if count > daily_goal:
            logger.debug("Streak broken on %s: %d > %d", cursor, count, daily_goal)
            break
        current += 1
        cursor -= _ONE_DAY

    return StreakSummary(
        current_streak=current,
        best_streak=max(current, stored_best_streak),
        today_goal_met=today_goal_met,
        today_count=today_count,
    )


def _empty_summary(stored_best_streak: int) -> StreakSummary:
    return StreakSummary(
        current_streak=0,
        best_streak=stored_best_streak,
        today_goal_met=False,
        today_count=0,
    )
