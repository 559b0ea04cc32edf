from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tally_tool.model import DeletedEvent, Event, StatisticsSummary

DELETED_AT = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _deleted() -> DeletedEvent:
    return DeletedEvent(
        event=Event(occurred_at=DELETED_AT - timedelta(hours=3), id="e1"),
        deleted_at=DELETED_AT,
    )


def test_event_ids_are_unique_by_default() -> None:
    a = Event(occurred_at=DELETED_AT)
    b = Event(occurred_at=DELETED_AT)
    assert a.id != b.id
    assert a != b


def test_deleted_event_uses_event_id() -> None:
    assert _deleted().id == "e1"


def test_deleted_event_expiry() -> None:
    deleted = _deleted()
    assert not deleted.is_expired(DELETED_AT + timedelta(hours=23, minutes=59))
    assert deleted.is_expired(DELETED_AT + timedelta(hours=24))
    assert deleted.time_until_expiry(DELETED_AT + timedelta(days=3)) == timedelta(0)


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [
        (timedelta(hours=1), "23h remaining"),
        (timedelta(hours=22, minutes=59), "1h remaining"),
        (timedelta(hours=23, minutes=15), "45m remaining"),
        (timedelta(hours=23, minutes=59, seconds=30), "Expires soon"),
        (timedelta(hours=24), "Expired"),
        (timedelta(days=2), "Expired"),
    ],
)
def test_formatted_time_remaining(elapsed: timedelta, expected: str) -> None:
    assert _deleted().formatted_time_remaining(DELETED_AT + elapsed) == expected


def test_statistics_has_data() -> None:
    assert StatisticsSummary(0.0, 1.5).has_data
    assert not StatisticsSummary(0.0, 0.0).has_data
