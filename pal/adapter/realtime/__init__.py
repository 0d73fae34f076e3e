"""Realtime change feed adapters."""

from .memory import InMemoryChangeFeed
from .postgres import PostgresChangeFeed
from .translate import translate_payload

__all__ = ["InMemoryChangeFeed", "PostgresChangeFeed", "translate_payload"]
