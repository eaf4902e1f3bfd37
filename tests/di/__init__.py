"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .realtime import MockRealtimeProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockRealtimeProvider",
    "build_test_container",
]
