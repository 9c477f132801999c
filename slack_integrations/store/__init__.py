from .base import TableInterface
from .memory_table import MemoryTable
from .factory import get_table, set_table, close_table, check_table_health, TableFactory
from .token_store import TokenStore

__all__ = ["TableInterface", "MemoryTable", "get_table", "set_table", "close_table", "check_table_health", "TableFactory", "TokenStore"]
