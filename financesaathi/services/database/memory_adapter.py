"""
In-memory adapter implementing RecordStoreInterface.
Perfect for demos and testing - data is lost on restart.
"""
import copy
from typing import List, Dict, Optional, Tuple

from .base import RecordStoreInterface
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class MemoryAdapter(RecordStoreInterface):
    """
    In-memory record store using Python dicts.
    Dicts preserve insertion order, which is the order callers see.
    """

    def __init__(self):
        self._documents: Dict[str, Dict] = {}
        self._expenses: Dict[str, Dict] = {}

    async def initialize(self):
        """Initialize store (clears any existing data, useful for testing)."""
        self._documents.clear()
        self._expenses.clear()

    async def close(self):
        """Close store (no-op for in-memory)."""
        pass

    def _check_new(self, collection: Dict[str, Dict], record: Dict, kind: str) -> str:
        record_id = record.get("id")
        if not record_id:
            raise ValueError(f"{kind} must have an 'id' field")
        if record_id in collection:
            raise ValueError(f"{kind} '{record_id}' already exists")
        return record_id

    def _check_upload(self, document: Dict, expense: Dict) -> Tuple[str, str]:
        return (
            self._check_new(self._documents, document, "Document"),
            self._check_new(self._expenses, expense, "Expense"),
        )

    def _insert_upload(self, document: Dict, expense: Dict) -> None:
        # Both checks pass before either collection changes
        doc_id, expense_id = self._check_upload(document, expense)
        self._documents[doc_id] = copy.deepcopy(document)
        self._expenses[expense_id] = copy.deepcopy(expense)

    def _insert_expense(self, expense: Dict) -> None:
        expense_id = self._check_new(self._expenses, expense, "Expense")
        self._expenses[expense_id] = copy.deepcopy(expense)

    async def append_upload(self, document: Dict, expense: Dict) -> None:
        self._insert_upload(document, expense)
        logger.debug(f"Stored document {document['id']} with expense {expense['id']}")

    async def append_expense(self, expense: Dict) -> None:
        self._insert_expense(expense)
        logger.debug(f"Stored expense {expense['id']}")

    async def get_all_documents(self) -> List[Dict]:
        return [copy.deepcopy(doc) for doc in self._documents.values()]

    async def get_all_expenses(self) -> List[Dict]:
        return [copy.deepcopy(expense) for expense in self._expenses.values()]

    async def get_document(self, doc_id: str) -> Optional[Dict]:
        doc = self._documents.get(doc_id)
        return copy.deepcopy(doc) if doc else None

    async def get_expense(self, expense_id: str) -> Optional[Dict]:
        expense = self._expenses.get(expense_id)
        return copy.deepcopy(expense) if expense else None
