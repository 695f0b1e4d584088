"""
Random draws shared by the field extractor and the fallback generator.

Every helper takes the caller's random source so synthetic records are
reproducible under a seeded ``random.Random``.
"""
import random
from typing import Optional

from ..models import EXPENSE_CATEGORIES, PAYMENT_METHODS
from .vendor_catalog import FALLBACK_VENDORS

SYNTHETIC_AMOUNT_MIN = 1250
SYNTHETIC_AMOUNT_MAX = 25000


def draw_amount(rng: random.Random, exclude: Optional[float] = None) -> float:
    """Uniform integer amount in [1250, 25000], never equal to ``exclude``."""
    amount = rng.randint(SYNTHETIC_AMOUNT_MIN, SYNTHETIC_AMOUNT_MAX)
    while exclude is not None and amount == exclude:
        amount = rng.randint(SYNTHETIC_AMOUNT_MIN, SYNTHETIC_AMOUNT_MAX)
    return float(amount)


def draw_vendor(rng: random.Random) -> str:
    return rng.choice(FALLBACK_VENDORS)


def draw_category(rng: random.Random) -> str:
    return rng.choice(EXPENSE_CATEGORIES)


def draw_payment_method(rng: random.Random) -> str:
    return rng.choice(PAYMENT_METHODS)


def generate_invoice_number(rng: random.Random, year: int) -> str:
    return f"INV-{year}-{rng.randint(100, 999)}"
