"""
Expense Aggregator - dashboard views over the record store.

The module-level functions are pure and work on the stored record dicts.
ExpenseAggregator re-reads the store on every call; nothing is cached, so
views always reflect records appended since the last call.
"""
import datetime as dt
import math
from typing import Any, Callable, Dict, List, Optional

from ..models import (
    CategoryBreakdown,
    DEFAULT_CATEGORY,
    ExpenseRecord,
    ExpenseSummary,
    MonthlyTotal,
)
from ..utils.search_utils import matches_category, matches_query
from .database import RecordStoreInterface

RECENT_ACTIVITY_LIMIT = 10

Record = Dict[str, Any]


def _month_key(record: Record) -> str:
    return str(record.get("date", ""))[:7]


def _money(value: float) -> float:
    return round(value, 2)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def category_totals(records: List[Record]) -> Dict[str, float]:
    """Summed amount per category, keyed in first-encountered order."""
    totals: Dict[str, float] = {}
    for record in records:
        category = record.get("category") or DEFAULT_CATEGORY
        totals[category] = totals.get(category, 0.0) + float(record.get("amount", 0))
    return totals


def get_expense_summary(records: List[Record], today: dt.date) -> ExpenseSummary:
    if not records:
        return ExpenseSummary()

    total = sum(float(r.get("amount", 0)) for r in records)
    current_month = today.isoformat()[:7]
    this_month = sum(float(r.get("amount", 0)) for r in records if _month_key(r) == current_month)

    top_category = DEFAULT_CATEGORY
    top_amount = None
    for category, amount in category_totals(records).items():
        # Strictly greater keeps the earliest category on ties
        if top_amount is None or amount > top_amount:
            top_category, top_amount = category, amount

    return ExpenseSummary(
        total=_money(total),
        this_month=_money(this_month),
        transaction_count=len(records),
        average_transaction=_money(total / len(records)),
        top_category=top_category,
    )


def get_category_breakdown(records: List[Record]) -> List[CategoryBreakdown]:
    totals = category_totals(records)
    grand_total = sum(totals.values())
    return [
        CategoryBreakdown(
            category=category,
            amount=_money(amount),
            percentage=round_half_up(amount / grand_total * 100) if grand_total else 0,
        )
        for category, amount in totals.items()
    ]


def filter_expenses(
    records: List[Record],
    query: Optional[str] = None,
    category: Optional[str] = None
) -> List[Record]:
    return [r for r in records if matches_query(r, query) and matches_category(r, category)]


def get_recent_activity(records: List[Record], limit: int = RECENT_ACTIVITY_LIMIT) -> List[Record]:
    """Newest first by date; records sharing a date keep insertion order."""
    ordered = sorted(records, key=lambda r: str(r.get("date", "")), reverse=True)
    return ordered[:max(limit, 0)]


def get_monthly_totals(records: List[Record]) -> List[MonthlyTotal]:
    totals: Dict[str, float] = {}
    for record in records:
        month = _month_key(record)
        totals[month] = totals.get(month, 0.0) + float(record.get("amount", 0))
    return [MonthlyTotal(month=month, amount=_money(totals[month])) for month in sorted(totals)]


class ExpenseAggregator:
    """Computes dashboard views from a fresh store snapshot on every call."""

    def __init__(self, store: RecordStoreInterface, today: Optional[Callable[[], dt.date]] = None):
        self.store = store
        self.today = today or dt.date.today

    async def summary(self) -> ExpenseSummary:
        return get_expense_summary(await self.store.get_all_expenses(), self.today())

    async def category_breakdown(self) -> List[CategoryBreakdown]:
        return get_category_breakdown(await self.store.get_all_expenses())

    async def monthly_totals(self) -> List[MonthlyTotal]:
        return get_monthly_totals(await self.store.get_all_expenses())

    async def search(self, query: Optional[str] = None, category: Optional[str] = None) -> List[ExpenseRecord]:
        records = filter_expenses(await self.store.get_all_expenses(), query, category)
        return [ExpenseRecord(**r) for r in records]

    async def recent_activity(self, limit: int = RECENT_ACTIVITY_LIMIT) -> List[ExpenseRecord]:
        records = get_recent_activity(await self.store.get_all_expenses(), limit)
        return [ExpenseRecord(**r) for r in records]
