"""Agrupación de eventos por día, semana o mes (más reciente primero)."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

import pandas as pd

from tally_tool.model import Event, Group, Period
from tally_tool.periods import CalendarConfig, normalize, period_label

logger = logging.getLogger(__name__)


def group_by(
    events: Iterable[Event], period: Period, config: CalendarConfig
) -> list[Group]:
    """Partition events into period buckets.

    Every event lands in exactly one group. Events inside a group keep
    input order.

    Args:
        events: Event snapshot (not mutated).
        period: Day, week or month.
        config: Calendar configuration (timezone, week start).

    Returns:
        Groups sorted by ``period_start`` descending.
    """
    buckets: dict[datetime, list[Event]] = {}
    for event in events:
        key = normalize(event.occurred_at, period, config)
        buckets.setdefault(key, []).append(event)

    groups = [
        Group(period_start=start, period=period, events=tuple(items))
        for start, items in buckets.items()
    ]
    groups.sort(key=lambda g: g.period_start, reverse=True)
    logger.debug("Grouped events into %d %s groups", len(groups), period.value)
    return groups


def group_by_day(events: Iterable[Event], config: CalendarConfig) -> list[Group]:
    return group_by(events, Period.DAY, config)


def group_by_week(events: Iterable[Event], config: CalendarConfig) -> list[Group]:
    return group_by(events, Period.WEEK, config)


def group_by_month(events: Iterable[Event], config: CalendarConfig) -> list[Group]:
    return group_by(events, Period.MONTH, config)


def groups_to_frame(groups: Sequence[Group]) -> pd.DataFrame:
    """Convert groups to DataFrame (date, label, count), same order as input.

    ``date`` is the local calendar date on which each period starts.
    """
    rows = [
        {
            "date": g.period_start.date(),
            "label": period_label(g.period_start, g.period),
            "count": g.count,
        }
        for g in groups
    ]
    if not rows:
        return pd.DataFrame(columns=["date", "label", "count"])
    return pd.DataFrame(rows)
