"""Durable key-value storage for named collections.

Each collection is stored as one JSON document under ``<prefix><name>``.
Reads fall back to a default dataset when the key is missing or the stored
document cannot be decoded; writes that fail are logged and dropped, leaving
the in-memory collection as the source of truth until the next save.
A read that cannot reach Redis raises ``StorageUnavailableError`` so callers
never mistake an outage for an empty key.
"""

import json
from typing import Any, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from redis.exceptions import RedisError

from services.content.app.exceptions import StorageUnavailableError
from services.content.app.metrics import STORAGE_FAILURES
from shared.app_logging.logger import get_logger
from shared.utils.redis_client import RedisClient

logger = get_logger(__name__)

SYSTEM = "system_config"
LOGS = "access_logs"
PAGES = "pages"
ARTICLES = "articles"
REPORTS = "reports"
MESSAGES = "messages"
NOTIFICATIONS = "notifications"
COMMENTS = "comments"
POLL = "active_poll"
EVENTS = "events"
SUBSCRIBERS = "subscribers"
REACTION_LEDGER = "reaction_ledger"


class KeyValueStore:
    def __init__(self, redis_client: RedisClient, prefix: str = "tl_"):
        self.redis = redis_client
        self.prefix = prefix

    def key(self, name: str) -> str:
        return f"{self.prefix}{name}"

    async def load(self, name: str, fallback: Any, adapter: Optional[TypeAdapter] = None) -> Any:
        """Return the stored value for ``name``, or ``fallback`` if absent or corrupted."""
        key = self.key(name)
        try:
            raw = await self.redis.get(key)
        except (RedisError, OSError) as e:
            STORAGE_FAILURES.labels(collection=name).inc()
            raise StorageUnavailableError(f"Could not read {key}") from e
        if raw is None or raw == "":
            return fallback

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Failed to load {key}, using defaults: {e}")
            return fallback

        if adapter is None:
            return data
        try:
            return adapter.validate_python(data)
        except PydanticValidationError as e:
            logger.warning(f"Stored {key} does not match its schema, using defaults: {e.error_count()} errors")
            return fallback

    async def save(self, name: str, value: Any) -> bool:
        """Persist ``value`` under ``name``. Failures are logged, never raised."""
        key = self.key(name)
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize {key}: {e}")
            STORAGE_FAILURES.labels(collection=name).inc()
            return False

        saved = await self.redis.set(key, payload)
        if not saved:
            logger.error(f"Failed to save {key}; keeping in-memory state")
            STORAGE_FAILURES.labels(collection=name).inc()
        return saved
