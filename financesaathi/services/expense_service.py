"""
Expense Service - record lookups and manual expense entry.
"""
import datetime as dt
import random
import uuid
from typing import Callable, List, Optional

from ..api.exceptions import DocumentNotFoundError, ExpenseNotFoundError
from ..core.logging_config import get_logger
from ..models import ExpenseRecord, ManualExpenseCreate, UploadedDocument
from .database import RecordStoreInterface
from .synthetic import generate_invoice_number

logger = get_logger(__name__)


class ExpenseService:
    """
    Reads documents and expenses from the store and records manual entries.

    Manual entries have no source document and no confidence.
    """

    def __init__(
        self,
        store: RecordStoreInterface,
        rng: Optional[random.Random] = None,
        today: Optional[Callable[[], dt.date]] = None
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.today = today or dt.date.today

    async def list_documents(self) -> List[UploadedDocument]:
        return [UploadedDocument(**doc) for doc in await self.store.get_all_documents()]

    async def get_document(self, doc_id: str) -> UploadedDocument:
        doc = await self.store.get_document(doc_id)
        if doc is None:
            raise DocumentNotFoundError(f"Document {doc_id} not found")
        return UploadedDocument(**doc)

    async def get_expense(self, expense_id: str) -> ExpenseRecord:
        expense = await self.store.get_expense(expense_id)
        if expense is None:
            raise ExpenseNotFoundError(f"Expense {expense_id} not found")
        return ExpenseRecord(**expense)

    async def create_manual_expense(self, data: ManualExpenseCreate) -> ExpenseRecord:
        expense_date = data.date or self.today()
        invoice_number = (data.invoice_number or "").strip() or generate_invoice_number(self.rng, expense_date.year)

        expense = ExpenseRecord(
            id=str(uuid.uuid4()),
            vendor=data.vendor,
            amount=data.amount,
            category=data.category,
            date=expense_date,
            invoice_number=invoice_number,
            payment_method=data.payment_method,
        )
        await self.store.append_expense(expense.model_dump(mode="json"))
        logger.info(f"Recorded manual expense {expense.id}: {expense.vendor} {expense.amount:.2f}")
        return expense
