"""Mock providers. Importing this package registers them with the DI bases."""

from .clock import MockClockProvider
from .persistence import MockPersistenceProvider
from .realtime import MockRealtimeProvider
from .session import MockSessionProvider
from .container import build_test_container

__all__ = [
    "MockClockProvider",
    "MockPersistenceProvider",
    "MockRealtimeProvider",
    "MockSessionProvider",
    "build_test_container",
]
