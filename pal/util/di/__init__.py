"""Dependency injection wiring.

Infrastructure components (persistence, realtime, session, clock) each have a
base provider with one production and one mock subclass. Mock subclasses live
in ``tests/di`` and only exist once that package is imported.
"""

from typing import Type

from pal.util.di.application import ProdApplicationProvider
from pal.util.di.base import Component, ProviderBase
from pal.util.di.core import ProdConfigProvider
from pal.util.di.domain import ProdDomainProvider
from pal.util.di.infrastructure import (
    ClockProvider,
    PersistenceProvider,
    ProdClockProvider,
    ProdPersistenceProvider,
    ProdRealtimeProvider,
    ProdSessionProvider,
    RealtimeProvider,
    SessionProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable
    ClockProvider,
    PersistenceProvider,
    RealtimeProvider,
    SessionProvider,
]


def mockable_components() -> set[Component]:
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ is not None
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of ``base``.

    A base without subclasses is concrete and returned as is.

    Raises:
        ValueError: If the requested implementation is not defined
    """
    subclasses = base.__subclasses__()
    if not subclasses:
        return base

    for candidate in subclasses:
        if getattr(candidate, "__is_mock__", False) == use_mock:
            return candidate

    kind = "mock" if use_mock else "production"
    component = base.__mock_component__ or base.__name__
    raise ValueError(f"No {kind} implementation for {component}")


def resolve_providers(mocked: set[Component] | None = None) -> list[ProviderBase]:
    """Instantiate one provider per entry of PROVIDERS.

    Args:
        mocked: Components to serve from their mock providers

    Raises:
        ValueError: If ``mocked`` names an unknown component
    """
    mocked = mocked or set()
    unknown = mocked - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "resolve_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "ClockProvider",
    "PersistenceProvider",
    "RealtimeProvider",
    "SessionProvider",
    "ProdClockProvider",
    "ProdPersistenceProvider",
    "ProdRealtimeProvider",
    "ProdSessionProvider",
]
