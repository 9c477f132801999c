"""
Redis table implementation: one hash per partition key, one field per sort key
"""
import json
import time
from typing import Any, Optional, Dict, List
import redis.asyncio as redis
from slack_integrations.store.base import TableInterface, require_key
from slack_integrations.core.config import settings
from slack_integrations.core.logging_config import get_logger


class RedisTable(TableInterface):
    """Redis-based table with connection pooling"""

    def __init__(self, url: Optional[str] = None, key_prefix: Optional[str] = None):
        self.logger = get_logger("slack_integrations.store.redis")
        self._url = url or settings.REDIS_URL
        self._key_prefix = settings.REDIS_KEY_PREFIX if key_prefix is None else key_prefix
        self._redis: Optional[redis.Redis] = None
        self._pool: Optional[redis.ConnectionPool] = None

    async def _get_redis(self) -> redis.Redis:
        """Get Redis connection with lazy initialization"""
        if self._redis is None:
            try:
                self._pool = redis.ConnectionPool.from_url(
                    self._url,
                    max_connections=20,
                    retry_on_timeout=True,
                    socket_keepalive=True,
                    socket_keepalive_options={},
                )
                self._redis = redis.Redis(connection_pool=self._pool)

                await self._redis.ping()
                self.logger.info("Redis connection established successfully")

            except Exception as e:
                self.logger.error(f"Failed to connect to Redis: {e}")
                raise

        return self._redis

    def _hash_key(self, pk: str) -> str:
        return f"{self._key_prefix}{pk}"

    @staticmethod
    def _serialize(item: Dict[str, Any]) -> bytes:
        return json.dumps(item, ensure_ascii=False).encode("utf-8")

    @staticmethod
    def _deserialize(data: bytes) -> Dict[str, Any]:
        return json.loads(data.decode("utf-8"))

    async def get_item(self, pk: str, sk: str) -> Optional[Dict[str, Any]]:
        try:
            conn = await self._get_redis()
            data = await conn.hget(self._hash_key(pk), sk)
            return self._deserialize(data) if data is not None else None
        except Exception as e:
            self.logger.error(f"Error getting item '{pk}/{sk}': {e}")
            raise

    async def put_item(self, item: Dict[str, Any]) -> None:
        pk, sk = require_key(item)
        try:
            conn = await self._get_redis()
            await conn.hset(self._hash_key(pk), sk, self._serialize(item))
        except Exception as e:
            self.logger.error(f"Error putting item '{pk}/{sk}': {e}")
            raise

    async def delete_item(self, pk: str, sk: str) -> None:
        try:
            conn = await self._get_redis()
            await conn.hdel(self._hash_key(pk), sk)
        except Exception as e:
            self.logger.error(f"Error deleting item '{pk}/{sk}': {e}")
            raise

    async def query(self, pk: str, sk_prefix: Optional[str] = None) -> List[Dict[str, Any]]:
        try:
            conn = await self._get_redis()
            fields = await conn.hgetall(self._hash_key(pk))
        except Exception as e:
            self.logger.error(f"Error querying partition '{pk}': {e}")
            raise

        items = []
        for sk, data in sorted(fields.items()):
            sk = sk.decode("utf-8") if isinstance(sk, bytes) else sk
            if sk_prefix is None or sk.startswith(sk_prefix):
                items.append(self._deserialize(data))
        return items

    async def health_check(self) -> Dict[str, Any]:
        """Check Redis health and return status"""
        try:
            start_time = time.time()

            conn = await self._get_redis()
            await conn.ping()
            info = await conn.info()

            response_time = (time.time() - start_time) * 1000  # ms

            return {
                "status": "healthy",
                "backend": "redis",
                "response_time_ms": round(response_time, 2),
                "connected_clients": info.get("connected_clients", 0),
                "redis_version": info.get("redis_version", "unknown"),
                "timestamp": time.time()
            }

        except Exception as e:
            self.logger.error(f"Redis health check failed: {e}")
            return {
                "status": "unhealthy",
                "backend": "redis",
                "error": str(e),
                "timestamp": time.time()
            }

    async def get_info(self) -> Dict[str, Any]:
        try:
            conn = await self._get_redis()
            info = await conn.info()
            return {
                "backend": "redis",
                "version": info.get("redis_version", "unknown"),
                "key_prefix": self._key_prefix,
                "used_memory": info.get("used_memory_human", "unknown"),
            }
        except Exception as e:
            self.logger.error(f"Error getting Redis info: {e}")
            return {
                "backend": "redis",
                "error": str(e)
            }

    async def close(self):
        """Close Redis connection"""
        if self._redis:
            await self._redis.aclose()
        if self._pool:
            await self._pool.aclose()
        self._redis = None
        self._pool = None
        self.logger.info("Redis connection closed")
