"""Promedios móviles de 7 y 30 días (sólo días con datos)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

import pandas as pd

from tally_tool.grouping import group_by_day, groups_to_frame
from tally_tool.model import Event, StatisticsSummary
from tally_tool.periods import CalendarConfig, now_in, to_local


def window_average(daily: pd.DataFrame, today: date, window_days: int) -> float:
    """Average daily count over the trailing window ending today.

    Days without events are excluded, not counted as zero.

    Args:
        daily: Day groups as returned by ``groups_to_frame`` (date, count).
        today: Local date of "today".
        window_days: Window length, today included.

    Returns:
        Mean count of the days with data inside the window, 0.0 if none.
    """
    if daily.empty:
        return 0.0
    lower = today - timedelta(days=window_days - 1)
    window = daily[daily["date"] >= lower]
    if window.empty:
        return 0.0
    return float(window["count"].sum()) / len(window)


def compute_statistics(
    events: Iterable[Event],
    config: CalendarConfig,
    now: datetime | None = None,
) -> StatisticsSummary:
    """Compute the 7-day and 30-day averages of daily event counts."""
    daily = groups_to_frame(group_by_day(events, config))
    if daily.empty:
        return StatisticsSummary(seven_day_average=0.0, thirty_day_average=0.0)

    today = to_local(now if now is not None else now_in(config), config).date()
    return StatisticsSummary(
        seven_day_average=window_average(daily, today, 7),
        thirty_day_average=window_average(daily, today, 30),
    )
