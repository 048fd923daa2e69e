"""
Persistence strategies using Strategy Pattern.
Allows switching between durable key/value backends (SQL, JSON files, Redis,
In-Memory, Null) without touching the record store or the click ledger.
"""

import json
import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

import redis
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from linktracker_app.database.connection import Base
from linktracker_app.exceptions import PersistenceError
from linktracker_app.logging_config import get_logger
from linktracker_app.models.kv_entry import KeyValueEntry

_KEY_RE = re.compile(r"[A-Za-z0-9_.\-]+")


class PersistenceAdapter(ABC):
    """
    Abstract base class for persistence strategies.

    Values are JSON documents. ``get`` and ``set`` never raise: a failed read
    returns None and a failed write returns False, and both are reported
    through the logger. Callers keep working from memory when that happens.

    Backends only implement ``_read``/``_write`` on serialized text and signal
    failure with PersistenceError.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger("persistence")

    def get(self, key: str) -> Optional[Any]:
        """
        Get a JSON value.

        Args:
            key: Storage key

        Returns:
            Decoded value, or None if missing or unreadable
        """
        try:
            raw = self._read(key)
        except PersistenceError as e:
            self.logger.error("Error reading data for key: %s (%s)", key, e)
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except ValueError as e:
            self.logger.error("Error parsing data for key: %s (%s)", key, e)
            return None

    def set(self, key: str, value: Any) -> bool:
        """
        Store a JSON value, replacing any previous value.

        Args:
            key: Storage key
            value: JSON-serializable value

        Returns:
            True if successful, False otherwise
        """
        try:
            raw = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            self.logger.error("Error serializing data for key: %s (%s)", key, e)
            return False

        try:
            self._write(key, raw)
        except PersistenceError as e:
            self.logger.error("Error saving data for key: %s (%s)", key, e)
            return False
        return True

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """Serialized value for ``key`` or None; raise PersistenceError on failure"""
        pass

    @abstractmethod
    def _write(self, key: str, raw: str) -> None:
        """Store serialized value; raise PersistenceError on failure"""
        pass


class InMemoryPersistence(PersistenceAdapter):
    """
    In-memory persistence using a Python dict of serialized documents.

    Values still go through JSON so that behaviour matches the durable
    backends. ``max_bytes`` emulates a storage quota: a write that would push
    the total size past it fails.

    Used in development/testing environments.
    """

    def __init__(self, max_bytes: Optional[int] = None, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.entries: Dict[str, str] = {}
        self.max_bytes = max_bytes

    def _read(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def _write(self, key: str, raw: str) -> None:
        if self.max_bytes is not None:
            others = sum(len(v.encode("utf-8")) for k, v in self.entries.items() if k != key)
            if others + len(raw.encode("utf-8")) > self.max_bytes:
                raise PersistenceError(f"quota of {self.max_bytes} bytes exceeded")
        self.entries[key] = raw


class JsonFilePersistence(PersistenceAdapter):
    """
    One ``<key>.json`` file per key inside a directory.

    Writes go to a temporary file that replaces the target, so a crash never
    leaves a half-written document behind.
    """

    def __init__(self, directory: Union[str, Path], logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.fullmatch(key):
            raise PersistenceError(f"invalid key {key!r}")
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(str(e)) from e

    def _write(self, key: str, raw: str) -> None:
        path = self._path(key)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(raw, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise PersistenceError(str(e)) from e


class SQLPersistence(PersistenceAdapter):
    """
    Documents stored in the ``kv_entries`` table through SQLAlchemy.

    Pros:
    - Zero configuration with SQLite
    - Any SQLAlchemy-supported database works (PostgreSQL, MySQL)

    Each ``set`` rewrites one row in its own transaction.
    """

    def __init__(
        self,
        session_factory,
        bind: Optional[Engine] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            session_factory: Callable returning a new Session (e.g. SessionLocal)
            bind: If given, the ``kv_entries`` table is created on this engine
        """
        super().__init__(logger)
        self.session_factory = session_factory
        if bind is not None:
            Base.metadata.create_all(bind=bind, tables=[KeyValueEntry.__table__])

    def _read(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            entry = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
            return entry.value if entry else None
        except SQLAlchemyError as e:
            raise PersistenceError(str(e)) from e
        finally:
            db.close()

    def _write(self, key: str, raw: str) -> None:
        db = self.session_factory()
        try:
            db.merge(KeyValueEntry(key=key, value=raw))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(str(e)) from e
        finally:
            db.close()


class RedisPersistence(PersistenceAdapter):
    """
    Redis implementation, one string value per key.

    Keys are namespaced with ``prefix`` so the store can share a Redis
    database with other applications.
    """

    def __init__(
        self,
        redis_client,
        prefix: str = "linktracker:",
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            redis_client: Redis client instance (redis.Redis)
            prefix: Namespace prepended to every key
        """
        super().__init__(logger)
        self.redis = redis_client
        self.prefix = prefix

    def _read(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(self.prefix + key)
        except redis.RedisError as e:
            raise PersistenceError(str(e)) from e
        if value is None:
            return None
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as e:
                raise PersistenceError(str(e)) from e
        return value

    def _write(self, key: str, raw: str) -> None:
        try:
            self.redis.set(self.prefix + key, raw)
        except redis.RedisError as e:
            raise PersistenceError(str(e)) from e


class NullPersistence(PersistenceAdapter):
    """
    Null Object Pattern - persistence that keeps nothing.

    Every read is a miss and every write "succeeds". The application then
    lives purely in memory for the session.
    """

    def _read(self, key: str) -> Optional[str]:
        return None

    def _write(self, key: str, raw: str) -> None:
        return None
