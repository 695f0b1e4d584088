from .expense import (
    EXPENSE_CATEGORIES,
    DEFAULT_CATEGORY,
    PAYMENT_METHODS,
    UNKNOWN_VENDOR,
    PROCESSED_STATUS,
    AcquisitionResult,
    UploadedDocument,
    ExpenseCandidate,
    ExpenseRecord,
    ManualExpenseCreate,
    ExpenseSummary,
    CategoryBreakdown,
    MonthlyTotal,
)

__all__ = [
    "EXPENSE_CATEGORIES",
    "DEFAULT_CATEGORY",
    "PAYMENT_METHODS",
    "UNKNOWN_VENDOR",
    "PROCESSED_STATUS",
    "AcquisitionResult",
    "UploadedDocument",
    "ExpenseCandidate",
    "ExpenseRecord",
    "ManualExpenseCreate",
    "ExpenseSummary",
    "CategoryBreakdown",
    "MonthlyTotal",
]
