"""Change notification port and the per-unit-of-work outbox."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Awaitable, Callable, Optional

import logfire

from booking.domain.value import EventId, Membership, MembershipSet, MentorId
from booking.domain.value.common import ValueObject


class ChangeKind(str, Enum):
    """Row operation that produced a notification."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class ChangeNotification(ValueObject):
    """Something changed on an event.

    Receivers treat this only as a signal and reload; the membership
    snapshots exist so the feed can route it to interested mentors.
    """

    event_id: EventId
    kind: ChangeKind = ChangeKind.UPDATE
    membership: Membership = Membership()
    previous: Optional[Membership] = None

    def matches(self, column: MembershipSet, mentor_id: MentorId) -> bool:
        """Whether the mentor is in ``column`` before or after the change."""
        for snapshot in (self.membership, self.previous):
            if snapshot is not None and snapshot.set_of(mentor_id) is column:
                return True
        return False


ChangeHandler = Callable[[ChangeNotification], Awaitable[None]]


class Subscription:
    """Handle returned by ChangeFeed.subscribe."""

    def __init__(
        self,
        column: MembershipSet,
        mentor_id: MentorId,
        handler: ChangeHandler,
        on_cancel: Callable[["Subscription"], None],
    ) -> None:
        self.column = column
        self.mentor_id = mentor_id
        self.handler = handler
        self._on_cancel = on_cancel
        self.active = True

    def matches(self, notification: ChangeNotification) -> bool:
        return self.active and notification.matches(self.column, self.mentor_id)

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._on_cancel(self)


class ChangeFeed(ABC):
    """Push-notification collaborator.

    Subscriptions are filtered on one membership column containing one
    mentor id.
    """

    @abstractmethod
    async def publish(self, notification: ChangeNotification) -> None:
        """Fan out a notification to matching subscribers.

        Args:
            notification: Change that was committed
        """
        pass

    @abstractmethod
    async def subscribe(
        self, column: MembershipSet, mentor_id: MentorId, handler: ChangeHandler
    ) -> Subscription:
        """Register a handler for changes touching the mentor in a column.

        Args:
            column: Membership column to filter on
            mentor_id: Mentor whose presence in the column is required
            handler: Coroutine called for each matching notification

        Returns:
            Subscription that can be cancelled
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections and drop all subscriptions."""
        pass


class ChangeOutbox:
    """Collects notifications for one unit of work.

    Notifications are published only when the unit of work ends without
    error; a rollback discards them.
    """

    def __init__(self, feed: ChangeFeed) -> None:
        self.feed = feed
        self._pending: list[ChangeNotification] = []

    def add(self, notification: ChangeNotification) -> None:
        self._pending.append(notification)

    @property
    def pending(self) -> list[ChangeNotification]:
        return list(self._pending)

    async def flush(self) -> None:
        """Publish pending notifications in order."""
        pending, self._pending = self._pending, []
        for notification in pending:
            await self.feed.publish(notification)
        if pending:
            logfire.info("Change notifications published", count=len(pending))

    def discard(self) -> None:
        if self._pending:
            logfire.info("Change notifications discarded", count=len(self._pending))
        self._pending = []
