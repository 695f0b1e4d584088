"""
Search utility functions for filtering expense records.
"""
from typing import Dict, Any, Optional

ALL_CATEGORIES = "All"


def matches_query(record: Dict[str, Any], query: Optional[str]) -> bool:
    """
    Case-insensitive substring match against vendor, category or invoice number.

    The query is used as typed (no trimming). An empty query matches everything.
    """
    if not query:
        return True

    needle = query.lower()
    fields = (record.get("vendor"), record.get("category"), record.get("invoice_number"))
    return any(needle in str(value).lower() for value in fields if value)


def matches_category(record: Dict[str, Any], category: Optional[str]) -> bool:
    """Exact category match; empty or 'All' disables the filter."""
    if not category or category == ALL_CATEGORIES:
        return True
    return record.get("category") == category
