"""In-process change feed for table-level insert/update/delete notifications.

Consumers subscribe with ``on_change(table, callback)`` and invalidate their
own caches when notified. Delivery is synchronous, best-effort and in the
publishing thread; a failing receiver is logged and never breaks the write
that triggered it.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from django.dispatch import Signal

logger = logging.getLogger(__name__)

INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"
EVENT_TYPES = (INSERT, UPDATE, DELETE)


@dataclass(frozen=True)
class ChangeEvent:
    """A single row change delivered to subscribers."""

    table: str
    event: str
    row: dict[str, Any] = field(default_factory=dict)


RowFilter = Callable[[dict[str, Any]], bool]
Callback = Callable[[ChangeEvent], None]


class Subscription:
    """Handle returned by ``ChangeFeed.on_change``; call ``unsubscribe`` to stop."""

    def __init__(self, feed: "ChangeFeed", uid: str):
        self._feed = feed
        self._uid = uid
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._feed._signal.disconnect(dispatch_uid=self._uid)
            self.active = False


class ChangeFeed:
    """Publish/subscribe channel keyed by table name."""

    def __init__(self):
        self._signal = Signal()

    def on_change(
        self,
        table: str,
        callback: Callback,
        events: Optional[tuple[str, ...]] = None,
        row_filter: Optional[RowFilter] = None,
    ) -> Subscription:
        """Register ``callback`` for changes on ``table``.

        ``events`` restricts delivery to some of INSERT/UPDATE/DELETE and
        ``row_filter`` to rows for which it returns True.
        """
        wanted = tuple(events) if events else EVENT_TYPES

        def receiver(sender, change: ChangeEvent, **kwargs):
            if change.table != table or change.event not in wanted:
                return
            if row_filter is not None and not row_filter(change.row):
                return
            callback(change)

        uid = f"change-feed:{table}:{uuid.uuid4()}"
        self._signal.connect(receiver, weak=False, dispatch_uid=uid)
        return Subscription(self, uid)

    def publish(self, table: str, event: str, row: Optional[dict[str, Any]] = None) -> None:
        """Deliver a change to every matching subscriber."""
        if event not in EVENT_TYPES:
            raise ValueError(f"Unknown change event type: {event}")
        change = ChangeEvent(table=table, event=event, row=dict(row or {}))
        responses = self._signal.send_robust(sender=self.__class__, change=change)
        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.error(
                    "Change feed receiver failed for %s %s: %s",
                    event,
                    table,
                    response,
                    exc_info=response,
                )


_feed: ChangeFeed | None = None


def get_change_feed() -> ChangeFeed:
    """Return the process-wide change feed."""

    global _feed
    if _feed is None:
        _feed = ChangeFeed()
    return _feed


__all__ = [
    "ChangeEvent",
    "ChangeFeed",
    "Subscription",
    "get_change_feed",
    "INSERT",
    "UPDATE",
    "DELETE",
]
