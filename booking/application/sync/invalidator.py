"""Push-driven cache invalidation."""

import logfire

from booking.application.sync.event_store import EventStore
from booking.domain.service import ChangeFeed, ChangeNotification, Subscription
from booking.domain.value import MembershipSet, MentorId


class RealtimeInvalidator:
    """Refetches the event store when a change touches the session's mentor.

    One subscription per membership column. Overlapping notifications all
    end in ``EventStore.refetch``, which coalesces them.
    """

    def __init__(self, feed: ChangeFeed, store: EventStore) -> None:
        self.feed = feed
        self.store = store
        self._subscriptions: list[Subscription] = []
        self.notifications_received = 0

    @property
    def is_running(self) -> bool:
        return bool(self._subscriptions)

    async def start(self, mentor_id: MentorId) -> None:
        """Subscribe to all three membership columns for the mentor."""
        if self._subscriptions:
            await self.stop()

        for column in MembershipSet:
            subscription = await self.feed.subscribe(column, mentor_id, self._on_change)
            self._subscriptions.append(subscription)

        logfire.info(
            "Realtime invalidation started",
            mentor_id=str(mentor_id),
            subscriptions=len(self._subscriptions),
        )

    async def stop(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []

    async def _on_change(self, notification: ChangeNotification) -> None:
        # The notification is only a signal; the refetch is the source of truth
        self.notifications_received += 1
        logfire.debug(
            "Event change received",
            event_id=str(notification.event_id),
            kind=notification.kind.value,
        )
        await self.store.refetch()
