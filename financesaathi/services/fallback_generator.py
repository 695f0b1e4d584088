"""
Fallback Generator - synthetic expense records.

Used when text acquisition fails outright. Vendor, category and payment
method are drawn independently, so a fallback record may pair e.g. "Uber"
with "Office Supplies". Confidence 0 marks the record as synthetic.
"""
import datetime as dt
import random
from typing import Callable, Optional

from ..models import ExpenseCandidate
from .synthetic import (
    draw_amount,
    draw_category,
    draw_payment_method,
    draw_vendor,
    generate_invoice_number,
)

FALLBACK_CONFIDENCE = 0.0


class FallbackGenerator:
    """Produces complete synthetic expense candidates."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        today: Optional[Callable[[], dt.date]] = None
    ):
        self.rng = rng or random.Random()
        self.today = today or dt.date.today

    def generate(self) -> ExpenseCandidate:
        today = self.today()
        return ExpenseCandidate(
            vendor=draw_vendor(self.rng),
            amount=draw_amount(self.rng),
            category=draw_category(self.rng),
            date=today,
            invoice_number=generate_invoice_number(self.rng, today.year),
            payment_method=draw_payment_method(self.rng),
            confidence=FALLBACK_CONFIDENCE,
        )
