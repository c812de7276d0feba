"""
Standardized Redis client utilities for The Light content services.
Provides connection pooling and consistent error handling over redis.asyncio.
"""

from typing import Dict, Optional

import redis.asyncio as aioredis

from shared.app_logging.logger import get_logger
from shared.config.settings import get_settings

logger = get_logger(__name__)


class RedisClient:
    """Async Redis client. Writes log and swallow failures; reads log and re-raise."""

    def __init__(self, service_name: str, client: Optional[aioredis.Redis] = None):
        self.service_name = service_name
        self.settings = get_settings()
        self._client: Optional[aioredis.Redis] = client
        self._logger = get_logger(f"{service_name}.redis")

    def _get_client(self) -> aioredis.Redis:
        """Get or create the Redis client with connection pooling."""
        if self._client is None:
            self._client = aioredis.from_url(
                self.settings.redis.redis_url,
                decode_responses=True,
                socket_timeout=self.settings.content.redis_timeout,
                retry_on_timeout=True,
                max_connections=20,
                health_check_interval=30,
            )
            self._logger.info("Redis client created for %s", self.settings.redis.redis_host)
        return self._client

    async def ping(self) -> bool:
        """Test Redis connection."""
        try:
            client = self._get_client()
            return bool(await client.ping())
        except Exception as e:
            self._logger.error(f"Redis ping failed: {e}")
            return False

    async def get(self, key: str) -> Optional[str]:
        """Get value by key. Connection failures are logged and re-raised."""
        try:
            client = self._get_client()
            value = await client.get(key)
        except Exception as e:
            self._logger.error(f"Failed to get key {key}: {e}")
            raise
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ex: Optional[int] = None) -> bool:
        """Set key-value pair with optional expiration."""
        try:
            client = self._get_client()
            return bool(await client.set(key, value, ex=ex))
        except Exception as e:
            self._logger.error(f"Failed to set key {key}: {e}")
            return False

    async def close(self):
        """Close Redis connection."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            self._logger.info("Redis connection closed")


# Redis client instances per service
_redis_clients: Dict[str, RedisClient] = {}


def get_redis_client(service_name: str) -> RedisClient:
    """Get or create Redis client for a service."""
    if service_name not in _redis_clients:
        _redis_clients[service_name] = RedisClient(service_name)
    return _redis_clients[service_name]


async def close_all_redis_clients():
    """Close all Redis client connections."""
    for client in _redis_clients.values():
        await client.close()
    _redis_clients.clear()
