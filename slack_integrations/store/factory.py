"""
Table factory for creating table backends based on configuration
"""
from typing import Optional
from slack_integrations.store.base import TableInterface
from slack_integrations.store.memory_table import MemoryTable
from slack_integrations.core.config import settings
from slack_integrations.core.logging_config import get_logger


class TableFactory:
    """Factory for creating table instances"""

    @staticmethod
    def create_table(backend: Optional[str] = None) -> TableInterface:
        """Create table instance based on backend type"""
        logger = get_logger("slack_integrations.store.factory")

        if backend is None:
            backend = settings.STORE_BACKEND.lower()

        logger.info(f"Creating store backend: {backend}")

        if backend == "dynamodb":
            from slack_integrations.store.dynamodb_table import DynamoDBTable
            return DynamoDBTable()
        elif backend == "redis":
            from slack_integrations.store.redis_table import RedisTable
            return RedisTable()
        elif backend == "memory":
            return MemoryTable()
        else:
            logger.warning(f"Unknown store backend '{backend}', falling back to memory table")
            return MemoryTable()


# Global table instance
_table_instance: Optional[TableInterface] = None


def get_table() -> TableInterface:
    """Get global table instance"""
    global _table_instance
    if _table_instance is None:
        _table_instance = TableFactory.create_table()
    return _table_instance


def set_table(table: Optional[TableInterface]):
    """Replace the global table instance"""
    global _table_instance
    _table_instance = table


async def close_table():
    """Close global table instance"""
    global _table_instance
    if _table_instance is not None:
        await _table_instance.close()
        _table_instance = None


async def check_table_health() -> dict:
    """Check table health"""
    try:
        table = get_table()
        return await table.health_check()
    except Exception as e:
        logger = get_logger("slack_integrations.store.factory")
        logger.error(f"Store health check failed: {e}")
        return {
            "status": "unhealthy",
            "backend": settings.STORE_BACKEND,
            "error": str(e)
        }
