from __future__ import annotations

from datetime import date, datetime, timedelta

from dateutil import tz

from tally_tool.model import Event, Period
from tally_tool.periods import CalendarConfig
from tally_tool.store import EventStore
from tally_tool.summary import summarize

NY = tz.gettz("America/New_York")
CONFIG = CalendarConfig(zone=NY)
NOW = datetime(2024, 6, 15, 20, 0, tzinfo=NY)


def test_summarize_combines_groups_statistics_and_streak() -> None:
    events = [
        Event(occurred_at=NOW - timedelta(days=d, hours=h))
        for d in range(3)
        for h in range(d + 1)
    ]
    summary = summarize(events, CONFIG, daily_goal=2, stored_best_streak=1, now=NOW)

    assert isinstance(summary.groups, tuple)
    assert [g.count for g in summary.groups] == [1, 2, 3]
    assert summary.statistics.seven_day_average == 2.0
    assert summary.streak.current_streak == 2
    assert summary.streak.best_streak == 2


def test_summarize_recomputes_after_store_mutation() -> None:
    store = EventStore([Event(occurred_at=NOW, id="a")])
    first = summarize(store.snapshot(), CONFIG, daily_goal=1, now=NOW)
    assert first.streak.today_goal_met

    store.add(Event(occurred_at=NOW - timedelta(minutes=5), id="b"))
    second = summarize(store.snapshot(), CONFIG, daily_goal=1, now=NOW)
    assert second.streak.today_count == 2
    assert not second.streak.today_goal_met
    assert first.streak.today_count == 1


def test_summarize_month_period() -> None:
    events = [Event(occurred_at=datetime(2024, 5, 31, 9, 0, tzinfo=NY))]
    summary = summarize(events, CONFIG, daily_goal=5, period=Period.MONTH, now=NOW)
    assert summary.groups[0].period_start.date() == date(2024, 5, 1)
    assert summary.statistics.seven_day_average == 0.0
    assert summary.statistics.thirty_day_average == 1.0
