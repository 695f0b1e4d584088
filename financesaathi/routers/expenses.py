"""
Expenses Router - expense records and dashboard views.

Example Usage:
    GET /expenses?q=swiggy&category=Travel - Filtered expense list
    POST /expenses - Record an expense manually
    GET /expenses/summary - Summary cards
    GET /expenses/categories - Category breakdown
    GET /expenses/monthly - Month-by-month totals
    GET /expenses/recent?limit=10 - Recent activity
    GET /expenses/{expense_id} - One expense
"""
from typing import List, Optional
from fastapi import APIRouter, Query, status

from .dependencies import get_expense_aggregator, get_expense_service
from ..api.exceptions import ExpenseNotFoundError, handle_business_exception
from ..models import (
    CategoryBreakdown,
    ExpenseRecord,
    ExpenseSummary,
    ManualExpenseCreate,
    MonthlyTotal,
)
from ..services.expense_aggregator import RECENT_ACTIVITY_LIMIT

router = APIRouter()


@router.get("/expenses", response_model=List[ExpenseRecord])
async def list_expenses(
    q: Optional[str] = Query(None, description="Matches vendor, category or invoice number"),
    category: Optional[str] = Query(None, description="Exact category; 'All' disables the filter")
):
    """List expenses in insertion order, optionally filtered."""
    return await get_expense_aggregator().search(q, category)


@router.post("/expenses", response_model=ExpenseRecord, status_code=status.HTTP_201_CREATED)
async def create_expense(data: ManualExpenseCreate):
    """Record an expense that did not come from an upload."""
    return await get_expense_service().create_manual_expense(data)


@router.get("/expenses/summary", response_model=ExpenseSummary)
async def get_summary():
    return await get_expense_aggregator().summary()


@router.get("/expenses/categories", response_model=List[CategoryBreakdown])
async def get_category_breakdown():
    return await get_expense_aggregator().category_breakdown()


@router.get("/expenses/monthly", response_model=List[MonthlyTotal])
async def get_monthly_totals():
    return await get_expense_aggregator().monthly_totals()


@router.get("/expenses/recent", response_model=List[ExpenseRecord])
async def get_recent_activity(limit: int = Query(RECENT_ACTIVITY_LIMIT, ge=1, le=100)):
    return await get_expense_aggregator().recent_activity(limit)


@router.get("/expenses/{expense_id}", response_model=ExpenseRecord)
async def get_expense(expense_id: str):
    """
    Get a single expense by its ID.

    Raises:
        HTTPException: 404 if expense not found
    """
    try:
        return await get_expense_service().get_expense(expense_id)
    except ExpenseNotFoundError as e:
        raise handle_business_exception(e)
