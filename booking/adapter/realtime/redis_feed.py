"""Redis pub/sub change feed.

Every notification goes over one channel as JSON. Each process filters it
against its own subscriptions, so a mentor only reacts to events where they
appear in the subscribed membership column.
"""

import asyncio
from typing import Optional

import logfire
import redis.asyncio as aioredis
from pydantic import ValidationError as PydanticValidationError

from booking.adapter.error import ChangeFeedError
from booking.adapter.realtime.registry import SubscriptionRegistry
from booking.domain.service.change_feed import (
    ChangeFeed,
    ChangeHandler,
    ChangeNotification,
    Subscription,
)
from booking.domain.value import MembershipSet, MentorId


class RedisChangeFeed(ChangeFeed):
    """Change feed backed by a Redis pub/sub channel."""

    def __init__(
        self,
        client: aioredis.Redis,
        channel: str,
        reconnect_delay: float = 0.5,
        max_reconnect_delay: float = 30.0,
    ) -> None:
        """Initialize the feed.

        Args:
            client: Redis client (owned by the caller)
            channel: Pub/sub channel carrying event changes
            reconnect_delay: First wait before resubscribing after a lost connection
            max_reconnect_delay: Upper bound for the doubling reconnect wait
        """
        self.client = client
        self.channel = channel
        self.reconnect_delay = reconnect_delay
        self.max_reconnect_delay = max_reconnect_delay
        self.healthy = True
        self._registry = SubscriptionRegistry()
        self._pubsub: Optional[aioredis.client.PubSub] = None
        self._listener: Optional[asyncio.Task] = None

    async def publish(self, notification: ChangeNotification) -> None:
        """Publish a notification.

        Delivery is fire-and-forget: the write it describes is already
        committed, so a Redis failure is logged rather than raised.
        """
        with logfire.span(
            "redis_change_feed.publish",
            event_id=str(notification.event_id),
            kind=notification.kind.value,
        ):
            try:
                receivers = await self.client.publish(
                    self.channel, notification.model_dump_json()
                )
            except aioredis.RedisError as e:
                logfire.error(
                    "Change notification not published",
                    event_id=str(notification.event_id),
                    error=str(e),
                )
                return
            logfire.debug(
                "Change notification published",
                event_id=str(notification.event_id),
                receivers=receivers,
            )

    async def subscribe(
        self, column: MembershipSet, mentor_id: MentorId, handler: ChangeHandler
    ) -> Subscription:
        """Register a handler, starting the channel listener on first use.

        Raises:
            ChangeFeedError: If the channel subscription fails
        """
        if self._listener is None:
            await self._start_listener()
        subscription = self._registry.add(column, mentor_id, handler)
        logfire.info(
            "Change feed subscription added",
            column=column.value,
            mentor_id=str(mentor_id),
        )
        return subscription

    async def close(self) -> None:
        """Stop listening and drop all subscriptions."""
        self._registry.clear()

        if self._listener is not None:
            self._listener.cancel()
            try:
                await self._listener
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logfire.warn("Change feed listener had failed", error=str(e))
            self._listener = None

        if self._pubsub is not None:
            try:
                await self._pubsub.unsubscribe(self.channel)
            except aioredis.RedisError as e:
                logfire.warn("Change feed unsubscribe failed", error=str(e))
            await self._pubsub.aclose()
            self._pubsub = None

    async def _start_listener(self) -> None:
        pubsub = self.client.pubsub()
        try:
            await pubsub.subscribe(self.channel)
        except aioredis.RedisError as e:
            await pubsub.aclose()
            raise ChangeFeedError(f"Cannot subscribe to {self.channel}: {e}") from e

        self._pubsub = pubsub
        self._listener = asyncio.create_task(self._listen(pubsub))
        logfire.info("Change feed listener started", channel=self.channel)

    async def _listen(self, pubsub: aioredis.client.PubSub) -> None:
        """Dispatch channel messages, resubscribing when the connection drops.

        Notifications published while disconnected are lost; subscribers
        catch up on their next refetch.
        """
        delay = self.reconnect_delay
        while True:
            try:
                async for message in pubsub.listen():
                    delay = self.reconnect_delay
                    await self._handle(message)
                return
            except aioredis.RedisError as e:
                self.healthy = False
                logfire.error(
                    "Change feed connection lost",
                    channel=self.channel,
                    error=str(e),
                    retry_in=delay,
                )

            delay = await self._resubscribe(pubsub, delay)

    async def _resubscribe(self, pubsub: aioredis.client.PubSub, delay: float) -> float:
        """Retry the channel subscription with doubling waits.

        Returns:
            The wait to use after the next failure
        """
        while True:
            await asyncio.sleep(delay)
            delay = min(delay * 2, self.max_reconnect_delay)
            try:
                await pubsub.subscribe(self.channel)
            except aioredis.RedisError as e:
                logfire.warn(
                    "Change feed resubscribe failed", error=str(e), retry_in=delay
                )
                continue

            self.healthy = True
            logfire.info("Change feed listener resubscribed", channel=self.channel)
            return delay

    async def _handle(self, message: dict) -> None:
        if message.get("type") != "message":
            return

        try:
            notification = ChangeNotification.model_validate_json(message["data"])
        except PydanticValidationError as e:
            logfire.warn("Malformed change notification", error=str(e))
            return

        await self._registry.dispatch(notification)
