"""
Persistence module for the link tracker.
Implements Strategy Pattern for flexible key/value backends.
"""

from .strategies import (
    PersistenceAdapter,
    InMemoryPersistence,
    JsonFilePersistence,
    NullPersistence,
    RedisPersistence,
    SQLPersistence,
)
from .factory import PersistenceFactory, PersistenceBackend

__all__ = [
    "PersistenceAdapter",
    "InMemoryPersistence",
    "JsonFilePersistence",
    "NullPersistence",
    "RedisPersistence",
    "SQLPersistence",
    "PersistenceFactory",
    "PersistenceBackend",
]
