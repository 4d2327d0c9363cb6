"""Persistence of balance, settings and statistics with an expiration window.

Each value is stored under its own key as a signed, timestamped blob
(``itsdangerous.URLSafeTimedSerializer``). Blobs older than the expiration
window, tampered with, or unreadable are discarded and the caller keeps its
in-memory defaults. Nothing in this module raises into game logic.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import Any

import redis
from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer
from pydantic import ValidationError

from bjpractice.settings import TableSettings
from bjpractice.statistics import GameStats
from config import PersistenceConfig, config

logger = logging.getLogger(__name__)

BALANCE_KEY = "balance"
SETTINGS_KEY = "settings"
STATS_KEY = "stats"
ALL_KEYS = (BALANCE_KEY, SETTINGS_KEY, STATS_KEY)


class StoreError(Exception):
    """The backing store could not be reached or answered with an error."""


class StateStore(ABC):
    """Abstract string key-value store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class InMemoryStore(StateStore):
    """Process-local store; the default and the fallback."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class RedisStore(StateStore):
    """Redis-backed store."""

    def __init__(self, redis_client: redis.Redis) -> None:
        self._redis = redis_client

    def get(self, key: str) -> str | None:
        try:
            value = self._redis.get(key)
        except redis.RedisError as exc:
            raise StoreError(f"Redis GET {key} failed") from exc
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._redis.set(key, value)
        except redis.RedisError as exc:
            raise StoreError(f"Redis SET {key} failed") from exc

    def delete(self, key: str) -> None:
        try:
            self._redis.delete(key)
        except redis.RedisError as exc:
            raise StoreError(f"Redis DEL {key} failed") from exc


def create_store(settings: PersistenceConfig | None = None) -> StateStore:
    """
    Build the configured store.

    A Redis backend that cannot be reached falls back to memory.
    """
    settings = settings or config.persistence
    if settings.backend == "redis":
        try:
            client = redis.Redis.from_url(config.redis.url)
            client.ping()
            logger.info("Persisting to Redis at %s:%s", config.redis.host, config.redis.port)
            return RedisStore(client)
        except redis.RedisError:
            logger.warning("Redis unavailable, falling back to in-memory persistence", exc_info=True)
    return InMemoryStore()


class GamePersistence:
    """Save and load the engine's persisted state through a ``StateStore``."""

    def __init__(
        self,
        store: StateStore | None = None,
        secret_key: str | None = None,
        expiration_seconds: int | None = None,
        key_prefix: str | None = None,
    ) -> None:
        self._store = store if store is not None else create_store()
        self._serializer = URLSafeTimedSerializer(
            secret_key or config.persistence.secret_key,
            salt="bjpractice.persistence",
        )
        self._max_age = expiration_seconds or config.persistence.expiration_seconds
        self._prefix = config.persistence.key_prefix if key_prefix is None else key_prefix

    @property
    def store(self) -> StateStore:
        return self._store

    def _key(self, name: str) -> str:
        return f"{self._prefix}{name}"

    def save(self, name: str, data: Any) -> bool:
        """Store ``data`` with the current timestamp. Returns False on failure."""
        try:
            self._store.set(self._key(name), self._serializer.dumps(data))
        except StoreError:
            logger.warning("Could not save %s", name, exc_info=True)
            return False
        return True

    def load(self, name: str) -> Any | None:
        """Return the stored data, or None when missing, expired or unreadable."""
        key = self._key(name)
        try:
            blob = self._store.get(key)
            if blob is None:
                return None
            return self._serializer.loads(blob, max_age=self._max_age)
        except SignatureExpired:
            logger.info("Saved %s expired, discarding", name)
            self._discard(key)
        except BadData:
            logger.warning("Saved %s is corrupt or was signed with another key, discarding", name)
            self._discard(key)
        except StoreError:
            logger.warning("Could not load %s", name, exc_info=True)
        return None

    def refresh(self, name: str) -> None:
        """Re-stamp a stored value so its expiration window starts now."""
        data = self.load(name)
        if data is not None:
            self.save(name, data)

    def _discard(self, key: str) -> None:
        try:
            self._store.delete(key)
        except StoreError:
            logger.warning("Could not delete %s", key, exc_info=True)

    # Typed accessors

    def save_balance(self, balance: Decimal) -> bool:
        return self.save(BALANCE_KEY, str(balance))

    def load_balance(self) -> Decimal | None:
        data = self.load(BALANCE_KEY)
        if data is None:
            return None
        try:
            return Decimal(str(data))
        except InvalidOperation:
            logger.warning("Saved balance %r is not a number, ignoring", data)
            return None

    def save_settings(self, settings: TableSettings) -> bool:
        return self.save(SETTINGS_KEY, settings.model_dump(mode="json"))

    def load_settings(self) -> TableSettings | None:
        data = self.load(SETTINGS_KEY)
        if data is None:
            return None
        try:
            return TableSettings.model_validate(data)
        except ValidationError:
            logger.warning("Saved settings failed validation, using defaults", exc_info=True)
            return None

    def save_stats(self, stats: GameStats) -> bool:
        return self.save(STATS_KEY, stats.to_dict())

    def load_stats(self) -> GameStats | None:
        data = self.load(STATS_KEY)
        if not isinstance(data, dict):
            return None
        try:
            return GameStats.from_dict(data)
        except ValueError:
            logger.warning("Saved statistics are corrupt, using defaults", exc_info=True)
            return None

    def refresh_all(self) -> None:
        for name in ALL_KEYS:
            self.refresh(name)
