import random
import re

from financesaathi.models import EXPENSE_CATEGORIES, PAYMENT_METHODS
from financesaathi.services.fallback_generator import FallbackGenerator
from financesaathi.services.synthetic import (
    SYNTHETIC_AMOUNT_MAX,
    SYNTHETIC_AMOUNT_MIN,
    draw_amount,
    generate_invoice_number,
)
from financesaathi.services.vendor_catalog import FALLBACK_VENDORS

from .conftest import TODAY


def test_generate_produces_complete_synthetic_record(rng, today):
    candidate = FallbackGenerator(rng=rng, today=today).generate()

    assert candidate.vendor in FALLBACK_VENDORS
    assert candidate.category in EXPENSE_CATEGORIES
    assert candidate.payment_method in PAYMENT_METHODS
    assert SYNTHETIC_AMOUNT_MIN <= candidate.amount <= SYNTHETIC_AMOUNT_MAX
    assert candidate.date == TODAY
    assert candidate.confidence == 0
    assert candidate.extracted_text_snippet is None
    assert re.fullmatch(r"INV-2025-\d{3}", candidate.invoice_number)


def test_generate_is_deterministic_for_seeded_rng(today):
    first = FallbackGenerator(rng=random.Random(7), today=today)
    second = FallbackGenerator(rng=random.Random(7), today=today)
    assert [first.generate() for _ in range(3)] == [second.generate() for _ in range(3)]


def test_generate_draws_fields_independently(today):
    generator = FallbackGenerator(rng=random.Random(3), today=today)
    pairs = {(c.vendor, c.category) for c in (generator.generate() for _ in range(200))}
    # Vendor and category are not tied together, so many combinations appear
    assert len(pairs) > len(FALLBACK_VENDORS)


def test_draw_amount_never_returns_excluded_value():
    class ScriptedRandom(random.Random):
        def __init__(self, values):
            super().__init__(0)
            self.values = list(values)

        def randint(self, a, b):
            return self.values.pop(0)

    assert draw_amount(ScriptedRandom([5000, 5000, 7000]), exclude=5000) == 7000.0


def test_invoice_number_format():
    numbers = {generate_invoice_number(random.Random(seed), 2024) for seed in range(50)}
    assert all(re.fullmatch(r"INV-2024-[1-9]\d{2}", n) for n in numbers)
