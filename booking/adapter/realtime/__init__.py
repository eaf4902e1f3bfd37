"""Push-notification collaborators."""

from .inmemory import InMemoryChangeFeed
from .redis_feed import RedisChangeFeed

__all__ = [
    "InMemoryChangeFeed",
    "RedisChangeFeed",
]
