"""
In-memory table implementation for development/testing
"""
import copy
import time
import asyncio
from typing import Any, Optional, Dict, List
from slack_integrations.store.base import TableInterface, require_key
from slack_integrations.core.logging_config import get_logger


class MemoryTable(TableInterface):
    """In-memory table: partition key -> sort key -> item"""

    def __init__(self):
        self.logger = get_logger("slack_integrations.store.memory")
        self._partitions: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = asyncio.Lock()
        self.logger.info("Memory table initialized")

    async def get_item(self, pk: str, sk: str) -> Optional[Dict[str, Any]]:
        async with self._lock:
            item = self._partitions.get(pk, {}).get(sk)
            # Copies keep callers from mutating stored state
            return copy.deepcopy(item) if item is not None else None

    async def put_item(self, item: Dict[str, Any]) -> None:
        pk, sk = require_key(item)
        async with self._lock:
            self._partitions.setdefault(pk, {})[sk] = copy.deepcopy(item)

    async def delete_item(self, pk: str, sk: str) -> None:
        async with self._lock:
            partition = self._partitions.get(pk)
            if partition is None:
                return
            partition.pop(sk, None)
            if not partition:
                del self._partitions[pk]

    async def query(self, pk: str, sk_prefix: Optional[str] = None) -> List[Dict[str, Any]]:
        async with self._lock:
            partition = self._partitions.get(pk, {})
            return [
                copy.deepcopy(item)
                for sk, item in sorted(partition.items())
                if sk_prefix is None or sk.startswith(sk_prefix)
            ]

    async def health_check(self) -> Dict[str, Any]:
        """Check memory table health and return status"""
        try:
            start_time = time.time()

            test_item = {"PK": "HEALTHCHECK#", "SK": "probe", "value": "test_value"}
            await self.put_item(test_item)
            result = await self.get_item("HEALTHCHECK#", "probe")
            if not result or result.get("value") != "test_value":
                raise Exception("GET operation failed")
            await self.delete_item("HEALTHCHECK#", "probe")

            response_time = (time.time() - start_time) * 1000  # ms

            async with self._lock:
                total_items = sum(len(p) for p in self._partitions.values())

            return {
                "status": "healthy",
                "backend": "memory",
                "response_time_ms": round(response_time, 2),
                "total_items": total_items,
                "timestamp": time.time()
            }

        except Exception as e:
            self.logger.error(f"Memory table health check failed: {e}")
            return {
                "status": "unhealthy",
                "backend": "memory",
                "error": str(e),
                "timestamp": time.time()
            }

    async def get_info(self) -> Dict[str, Any]:
        async with self._lock:
            return {
                "backend": "memory",
                "partitions": len(self._partitions),
                "total_items": sum(len(p) for p in self._partitions.values()),
                "implementation": "dict",
            }
