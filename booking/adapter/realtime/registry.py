"""Subscription bookkeeping shared by change feed implementations."""

import logfire

from booking.domain.service.change_feed import (
    ChangeHandler,
    ChangeNotification,
    Subscription,
)
from booking.domain.value import MembershipSet, MentorId


class SubscriptionRegistry:
    """Holds active subscriptions and dispatches notifications to them."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def add(
        self, column: MembershipSet, mentor_id: MentorId, handler: ChangeHandler
    ) -> Subscription:
        subscription = Subscription(
            column=column,
            mentor_id=mentor_id,
            handler=handler,
            on_cancel=self._remove,
        )
        self._subscriptions.append(subscription)
        return subscription

    def clear(self) -> None:
        for subscription in list(self._subscriptions):
            subscription.unsubscribe()

    async def dispatch(self, notification: ChangeNotification) -> int:
        """Call every matching handler in subscription order.

        A failing handler is logged and does not stop the others.

        Returns:
            Number of handlers called
        """
        called = 0
        for subscription in list(self._subscriptions):
            if not subscription.matches(notification):
                continue
            called += 1
            try:
                await subscription.handler(notification)
            except Exception as e:
                logfire.warn(
                    "Change handler failed",
                    event_id=str(notification.event_id),
                    column=subscription.column.value,
                    mentor_id=str(subscription.mentor_id),
                    error=str(e),
                )
        return called

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
