import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional

EXPENSE_CATEGORIES = (
    "Food & Entertainment",
    "Office Supplies",
    "Travel",
    "Utilities",
    "Marketing",
    "Software",
    "General",
)
DEFAULT_CATEGORY = "General"

PAYMENT_METHODS = ("UPI", "Credit Card", "Debit Card", "Net Banking", "Cash")

UNKNOWN_VENDOR = "Unknown Vendor"
PROCESSED_STATUS = "processed"


class AcquisitionResult(BaseModel):
    text: str
    confidence: float = Field(ge=0, le=100)  # engine's self-reported reliability


class UploadedDocument(BaseModel):
    id: str
    filename: str
    content_type: str
    size_bytes: int
    upload_timestamp: str
    raw_content: Optional[str] = None  # data URI, only when STORE_RAW_CONTENT is on
    extracted_text: Optional[str] = None
    confidence: Optional[float] = None  # 0 means fallback data, nothing was extracted


class ExpenseCandidate(BaseModel):
    """Expense fields derived from a document, before the pipeline assigns identity."""
    vendor: str
    amount: float = Field(ge=0)
    category: str = DEFAULT_CATEGORY
    date: dt.date
    invoice_number: str
    payment_method: str
    extracted_text_snippet: Optional[str] = None
    confidence: Optional[float] = None

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in EXPENSE_CATEGORIES:
            raise ValueError(f"Unknown category '{value}'")
        return value


class ExpenseRecord(ExpenseCandidate):
    id: str
    status: str = PROCESSED_STATUS
    source_upload_id: Optional[str] = None  # None for manually entered expenses


class ManualExpenseCreate(BaseModel):
    vendor: str = Field(min_length=1)
    amount: float = Field(ge=0)
    category: str = DEFAULT_CATEGORY
    date: Optional[dt.date] = None  # defaults to today
    invoice_number: Optional[str] = None
    payment_method: str = "Cash"

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in EXPENSE_CATEGORIES:
            raise ValueError(f"Unknown category '{value}'")
        return value

    @field_validator("payment_method")
    @classmethod
    def _known_payment_method(cls, value: str) -> str:
        if value not in PAYMENT_METHODS:
            raise ValueError(f"Unknown payment method '{value}'")
        return value

    @field_validator("vendor")
    @classmethod
    def _strip_vendor(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Vendor cannot be empty")
        return value


class ExpenseSummary(BaseModel):
    total: float = 0
    this_month: float = 0
    transaction_count: int = 0
    average_transaction: float = 0
    top_category: str = DEFAULT_CATEGORY


class CategoryBreakdown(BaseModel):
    category: str
    amount: float
    percentage: int


class MonthlyTotal(BaseModel):
    month: str  # YYYY-MM
    amount: float
