"""Unit tests for the Redis change feed that need no Redis server."""

import asyncio
from uuid import uuid4

import pytest
import redis.asyncio as aioredis

from booking.adapter.error import ChangeFeedError
from booking.adapter.realtime import RedisChangeFeed
from booking.domain.service import ChangeNotification
from booking.domain.value import EventId, Membership, MembershipSet, MentorId


class FakePubSub:
    """Scripted stand-in for a redis.asyncio PubSub."""

    def __init__(self, fail: bool, listen_errors: list[Exception]) -> None:
        self.fail = fail
        self.listen_errors = listen_errors
        self.subscribe_calls = 0
        self.messages: asyncio.Queue = asyncio.Queue()
        self.closed = False

    async def subscribe(self, channel: str) -> None:
        self.subscribe_calls += 1
        if self.fail:
            raise aioredis.ConnectionError("connection refused")

    async def unsubscribe(self, channel: str) -> None:
        pass

    async def listen(self):
        if self.listen_errors:
            raise self.listen_errors.pop(0)
        while True:
            yield await self.messages.get()

    async def aclose(self) -> None:
        self.closed = True


class FakeRedis:
    """Stands in for redis.asyncio.Redis, recording or failing calls."""

    def __init__(
        self, fail: bool = False, listen_errors: list[Exception] | None = None
    ) -> None:
        self.fail = fail
        self.listen_errors = listen_errors or []
        self.published: list[tuple[str, str]] = []
        self.pubsubs: list[FakePubSub] = []

    async def publish(self, channel: str, message: str) -> int:
        if self.fail:
            raise aioredis.ConnectionError("connection refused")
        self.published.append((channel, message))
        return 1

    def pubsub(self) -> FakePubSub:
        pubsub = FakePubSub(self.fail, self.listen_errors)
        self.pubsubs.append(pubsub)
        return pubsub


def notification_for(mentor: MentorId) -> ChangeNotification:
    return ChangeNotification(
        event_id=EventId(uuid4()), membership=Membership(requesting=(mentor,))
    )


class TestRedisChangeFeedPublish:
    @pytest.mark.asyncio
    async def test_publishes_json_on_channel(self):
        client = FakeRedis()
        feed = RedisChangeFeed(client, "booking:test")
        notification = notification_for(MentorId(uuid4()))

        await feed.publish(notification)

        [(channel, payload)] = client.published
        assert channel == "booking:test"
        assert ChangeNotification.model_validate_json(payload) == notification

    @pytest.mark.asyncio
    async def test_publish_failure_is_not_raised(self):
        feed = RedisChangeFeed(FakeRedis(fail=True), "booking:test")

        await feed.publish(notification_for(MentorId(uuid4())))


class TestRedisChangeFeedSubscribe:
    @pytest.mark.asyncio
    async def test_subscribe_failure_raises_feed_error(self):
        client = FakeRedis(fail=True)
        feed = RedisChangeFeed(client, "booking:test")

        with pytest.raises(ChangeFeedError):
            await feed.subscribe(
                MembershipSet.ACCEPTED, MentorId(uuid4()), self._handler
            )

        assert client.pubsubs[0].closed

    @staticmethod
    async def _handler(notification: ChangeNotification) -> None:
        pass


class TestRedisChangeFeedListener:
    @pytest.mark.asyncio
    async def test_listener_resubscribes_after_connection_loss(self):
        client = FakeRedis(listen_errors=[aioredis.ConnectionError("connection lost")])
        feed = RedisChangeFeed(client, "booking:test", reconnect_delay=0)
        mentor = MentorId(uuid4())
        received: asyncio.Queue = asyncio.Queue()

        async def handler(notification):
            await received.put(notification)

        await feed.subscribe(MembershipSet.REQUESTING, mentor, handler)
        notification = notification_for(mentor)
        await client.pubsubs[0].messages.put(
            {"type": "message", "data": notification.model_dump_json()}
        )

        assert await asyncio.wait_for(received.get(), timeout=1) == notification
        assert feed.healthy
        assert client.pubsubs[0].subscribe_calls == 2

        await feed.close()

    @pytest.mark.asyncio
    async def test_close_after_listener_failure(self):
        client = FakeRedis(listen_errors=[RuntimeError("listener crashed")])
        feed = RedisChangeFeed(client, "booking:test")

        await feed.subscribe(MembershipSet.ACCEPTED, MentorId(uuid4()), _ignore)
        await asyncio.sleep(0)

        await feed.close()

        assert client.pubsubs[0].closed


async def _ignore(notification: ChangeNotification) -> None:
    pass
