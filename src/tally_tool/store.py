"""Colección de eventos en memoria con papelera (recuperable 24 horas)."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from tally_tool.model import DeletedEvent, Event

logger = logging.getLogger(__name__)


class EventStore:
    """Keyed event collection. Readers only get immutable snapshots."""

    def __init__(self, events: Iterable[Event] = ()) -> None:
        """Create a store.

        Args:
            events: Initial events; duplicate ids raise ``ValueError``.
        """
        self._events: dict[str, Event] = {}
        self._trash: dict[str, DeletedEvent] = {}
        for event in events:
            self.add(event)

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._events

    def snapshot(self) -> tuple[Event, ...]:
        """Current events, in insertion order."""
        return tuple(self._events.values())

    def trash(self) -> tuple[DeletedEvent, ...]:
        """Deleted events, most recently deleted first."""
        return tuple(
            sorted(self._trash.values(), key=lambda d: d.deleted_at, reverse=True)
        )

    def add(self, event: Event) -> None:
        if event.id in self._events:
            raise ValueError(f"Duplicate event id: {event.id}")
        self._events[event.id] = event
        logger.debug("Added event %s at %s", event.id, event.occurred_at)

    def replace(self, event: Event) -> None:
        """Replace the event with the same id (edit).

        Raises:
            KeyError: If no event has that id.
        """
        if event.id not in self._events:
            raise KeyError(event.id)
        self._events[event.id] = event
        logger.debug("Replaced event %s, now at %s", event.id, event.occurred_at)

    def remove(self, event_id: str, now: datetime | None = None) -> DeletedEvent:
        """Move an event to the trash.

        Raises:
            KeyError: If no event has that id.
        """
        event = self._events.pop(event_id)
        deleted = DeletedEvent(event=event, deleted_at=now or _utcnow())
        self._trash[event_id] = deleted
        logger.debug("Moved event %s to trash", event_id)
        return deleted

    def restore(self, event_id: str) -> Event:
        """Bring an event back from the trash.

        Raises:
            KeyError: If the id is not in the trash.
            ValueError: If an event with the same id was added meanwhile.
        """
        deleted = self._trash[event_id]
        self.add(deleted.event)
        del self._trash[event_id]
        return deleted.event

    def delete_forever(self, event_id: str) -> DeletedEvent:
        """Drop one entry from the trash for good.

        Raises:
            KeyError: If the id is not in the trash.
        """
        deleted = self._trash.pop(event_id)
        logger.debug("Deleted event %s permanently", event_id)
        return deleted

    def purge_expired(self, now: datetime | None = None) -> int:
        """Drop trash entries older than the TTL. Returns how many were dropped."""
        ref = now or _utcnow()
        expired = [d.id for d in self._trash.values() if d.is_expired(ref)]
        for event_id in expired:
            del self._trash[event_id]
        if expired:
            logger.info("Purged %d expired events from trash", len(expired))
        return len(expired)

    def empty_trash(self) -> int:
        count = len(self._trash)
        self._trash.clear()
        return count


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)
