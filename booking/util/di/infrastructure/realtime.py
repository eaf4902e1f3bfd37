"""Realtime (change notification) infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import redis.asyncio as aioredis

from booking.adapter.realtime import RedisChangeFeed
from booking.config import Settings
from booking.domain.service import ChangeFeed, ChangeOutbox
from booking.util.di.base import ProviderBase


class RealtimeProvider(ProviderBase):
    """Realtime component base."""

    __mock_component__ = "realtime"


class ProdRealtimeProvider(RealtimeProvider):
    """Production realtime provider using Redis pub/sub."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_redis(self, settings: Settings) -> AsyncIterator[aioredis.Redis]:
        """Provide Redis client."""
        client = aioredis.from_url(settings.redis.url, decode_responses=True)
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    async def get_change_feed(
        self, client: aioredis.Redis, settings: Settings
    ) -> AsyncIterator[ChangeFeed]:
        """Provide change feed."""
        feed = RedisChangeFeed(client, settings.redis.change_channel)
        yield feed
        await feed.close()


class ChangeOutboxProvider(ProviderBase):
    """Per-request outbox - concrete, works with any change feed."""

    @provide(scope=Scope.REQUEST)
    async def get_outbox(self, feed: ChangeFeed) -> AsyncIterator[ChangeOutbox]:
        """Provide the outbox and publish it when the request ends cleanly.

        Created before the database session, so it is finalized after the
        commit.
        """
        outbox = ChangeOutbox(feed)
        try:
            yield outbox
        except Exception:
            outbox.discard()
            raise
        await outbox.flush()
