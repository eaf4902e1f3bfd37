"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider
from .realtime import ChangeOutboxProvider, RealtimeProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .realtime import ProdRealtimeProvider  # noqa: F401

__all__ = [
    "ChangeOutboxProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdRealtimeProvider",
    "RealtimeProvider",
]
