"""
Base table interface for the composite-key (PK, SK) document store
"""
from abc import ABC, abstractmethod
from typing import Any, Optional, Dict, List

PARTITION_KEY = "PK"
SORT_KEY = "SK"


class TableInterface(ABC):
    """Abstract base class for table implementations.

    Every item is a JSON-serializable dict carrying its own ``PK`` and ``SK``.
    Writes are full overwrites; there are no conditional writes or
    transactions, so concurrent writers resolve as last write wins.
    """

    @abstractmethod
    async def get_item(self, pk: str, sk: str) -> Optional[Dict[str, Any]]:
        """Get a single item by its full key"""
        pass

    @abstractmethod
    async def put_item(self, item: Dict[str, Any]) -> None:
        """Insert or replace an item"""
        pass

    @abstractmethod
    async def delete_item(self, pk: str, sk: str) -> None:
        """Delete an item, doing nothing if it is absent"""
        pass

    @abstractmethod
    async def query(self, pk: str, sk_prefix: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get every item of a partition, optionally filtered by sort-key prefix"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Check backend health and return status"""
        pass

    @abstractmethod
    async def get_info(self) -> Dict[str, Any]:
        """Get backend information"""
        pass

    async def close(self):
        """Release connections held by the backend"""
        pass


def require_key(item: Dict[str, Any]) -> tuple:
    """Return ``(PK, SK)`` of an item, raising if either is missing"""
    pk = item.get(PARTITION_KEY)
    sk = item.get(SORT_KEY)
    if not pk or not sk:
        raise ValueError("Item must carry both PK and SK")
    return pk, sk
