from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

# Collections read by the dashboard
PRODUCTS = "products"
ORDERS = "orders"
USERS = "users"


class DocumentStoreError(Exception):
    """The store could not be reached or rejected the request."""


class IDocumentStore(ABC):
    """
    Remote document database addressed by collection name.
    Every document is returned as a plain dict that carries its own "id".
    """

    @abstractmethod
    def fetch_all(self, collection: str) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def fetch_where(self, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def fetch_latest(self, collection: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Ordered by createdAt, newest first."""
        pass

    @abstractmethod
    def fetch_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def add(self, collection: str, data: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        pass

    @abstractmethod
    def update(self, collection: str, doc_id: str, changes: Dict[str, Any]) -> bool:
        pass

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> bool:
        pass
