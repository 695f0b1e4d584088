"""
Abstract base class for record store adapters.
All store implementations must inherit from this class.
"""
from abc import ABC, abstractmethod
from typing import List, Dict, Optional


class RecordStoreInterface(ABC):
    """
    Append-only store for uploaded documents and expense records.

    Both collections keep insertion order. Records are created once and
    never updated or deleted, so the interface has no update/delete methods.
    """

    @abstractmethod
    async def initialize(self):
        """Initialize the store (load files, create directories, etc.)."""
        pass

    @abstractmethod
    async def close(self):
        """Flush and release the store."""
        pass

    @abstractmethod
    async def append_upload(self, document: Dict, expense: Dict) -> None:
        """
        Append a document and the expense derived from it as one unit.

        Readers never observe one without the other.

        Raises:
            ValueError: If either id is missing or already stored
        """
        pass

    @abstractmethod
    async def append_expense(self, expense: Dict) -> None:
        """Append an expense that has no source document (manual entry)."""
        pass

    @abstractmethod
    async def get_all_documents(self) -> List[Dict]:
        """All uploaded documents in insertion order."""
        pass

    @abstractmethod
    async def get_all_expenses(self) -> List[Dict]:
        """All expense records in insertion order."""
        pass

    @abstractmethod
    async def get_document(self, doc_id: str) -> Optional[Dict]:
        pass

    @abstractmethod
    async def get_expense(self, expense_id: str) -> Optional[Dict]:
        pass

    async def get_stats(self) -> Dict:
        """Collection sizes, used by the readiness probe."""
        return {
            "documents": len(await self.get_all_documents()),
            "expenses": len(await self.get_all_expenses()),
        }
