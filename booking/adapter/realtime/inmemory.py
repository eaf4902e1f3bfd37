"""In-process change feed."""

import logfire

from booking.adapter.realtime.registry import SubscriptionRegistry
from booking.domain.service.change_feed import (
    ChangeFeed,
    ChangeHandler,
    ChangeNotification,
    Subscription,
)
from booking.domain.value import MembershipSet, MentorId


class InMemoryChangeFeed(ChangeFeed):
    """Delivers notifications synchronously to subscribers in this process.

    Used by tests and single-process deployments. ``published`` keeps every
    notification for inspection.
    """

    def __init__(self) -> None:
        self._registry = SubscriptionRegistry()
        self.published: list[ChangeNotification] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._registry)

    async def publish(self, notification: ChangeNotification) -> None:
        """Deliver to matching subscribers before returning."""
        self.published.append(notification)
        delivered = await self._registry.dispatch(notification)
        logfire.debug(
            "Change notification delivered",
            event_id=str(notification.event_id),
            subscribers=delivered,
        )

    async def subscribe(
        self, column: MembershipSet, mentor_id: MentorId, handler: ChangeHandler
    ) -> Subscription:
        """Register a handler for changes touching the mentor in a column."""
        return self._registry.add(column, mentor_id, handler)

    async def close(self) -> None:
        """Drop all subscriptions."""
        self._registry.clear()
