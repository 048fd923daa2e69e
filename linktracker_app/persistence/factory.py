"""
Factory for creating persistence instances.
Simple, clean factory with singleton caching.
"""

from enum import Enum
from .strategies import (
    PersistenceAdapter,
    InMemoryPersistence,
    JsonFilePersistence,
    NullPersistence,
    RedisPersistence,
    SQLPersistence,
)
from linktracker_app.config import settings
from linktracker_app.logging_config import get_logger

logger = get_logger("persistence")


class PersistenceBackend(Enum):
    """Available persistence backends"""
    SQL = "sql"
    JSON_FILE = "json_file"
    MEMORY = "memory"
    REDIS = "redis"
    NULL = "null"


class PersistenceFactory:
    """
    Simple factory for creating persistence instances.

    Uses Singleton Pattern - creates instance once, reuses it.
    Gets configuration from settings (not passed as parameters).
    """

    _instance: PersistenceAdapter = None  # Single cached instance

    @classmethod
    def create(cls, backend: PersistenceBackend) -> PersistenceAdapter:
        """
        Create or return cached persistence instance.

        Args:
            backend: Type of persistence backend (from enum)

        Returns:
            Singleton persistence instance
        """
        if cls._instance is not None:
            return cls._instance

        if backend == PersistenceBackend.SQL:
            from linktracker_app.database.connection import SessionLocal, engine

            cls._instance = SQLPersistence(SessionLocal, bind=engine)
            logger.info("SQL persistence initialized (%s)", settings.database_url)

        elif backend == PersistenceBackend.JSON_FILE:
            cls._instance = JsonFilePersistence(settings.storage_dir)
            logger.info("JSON file persistence initialized (%s)", settings.storage_dir)

        elif backend == PersistenceBackend.REDIS:
            import redis

            try:
                redis_client = redis.from_url(
                    settings.redis_url,
                    decode_responses=False,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )

                # Test connection immediately
                redis_client.ping()

                cls._instance = RedisPersistence(redis_client, prefix=settings.redis_key_prefix)
                logger.info("Redis persistence initialized")

            except redis.RedisError as e:
                logger.warning("Redis connection failed: %s", e)
                logger.warning("Falling back to in-memory persistence")
                cls._instance = InMemoryPersistence()

        elif backend == PersistenceBackend.MEMORY:
            cls._instance = InMemoryPersistence()
            logger.info("In-memory persistence initialized")

        elif backend == PersistenceBackend.NULL:
            cls._instance = NullPersistence()
            logger.info("Null persistence initialized")

        else:
            raise ValueError(f"Unknown persistence backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
