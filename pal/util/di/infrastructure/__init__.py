"""Infrastructure providers."""

# Import bases
from .clock import ClockProvider
from .persistence import PersistenceProvider
from .realtime import RealtimeProvider
from .session import SessionProvider

# Import implementations (needed for __subclasses__())
from .clock import ProdClockProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .realtime import ProdRealtimeProvider  # noqa: F401
from .session import ProdSessionProvider  # noqa: F401

__all__ = [
    "ClockProvider",
    "PersistenceProvider",
    "ProdClockProvider",
    "ProdPersistenceProvider",
    "ProdRealtimeProvider",
    "ProdSessionProvider",
    "RealtimeProvider",
    "SessionProvider",
]
