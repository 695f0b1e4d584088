"""
Vendor catalog - declarative vendor-group table.

Each row maps a set of keywords to one canonical vendor display name and,
optionally, an expense category. Order matters: the first row whose keyword
appears in the text or filename wins. Rows without a category fall back to
the default category.
"""
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..models import DEFAULT_CATEGORY, UNKNOWN_VENDOR


@dataclass(frozen=True)
class VendorGroup:
    kind: str
    display_name: str
    keywords: Tuple[str, ...]
    category: Optional[str] = None

    def pattern(self) -> "re.Pattern[str]":
        # Letter boundaries only, so "swiggy_invoice.pdf" matches but "chocolate" is not "ola"
        alternatives = "|".join(re.escape(k) for k in self.keywords)
        return re.compile(rf"(?<![a-z])(?:{alternatives})(?![a-z])", re.IGNORECASE)


VENDOR_GROUPS: Tuple[VendorGroup, ...] = (
    VendorGroup("food_delivery", "Swiggy", ("swiggy", "instamart"), "Food & Entertainment"),
    VendorGroup("food_delivery", "Zomato", ("zomato",), "Food & Entertainment"),
    VendorGroup("ecommerce", "Amazon", ("amazon", "amzn"), "Office Supplies"),
    VendorGroup("ecommerce", "Flipkart", ("flipkart",), "Office Supplies"),
    VendorGroup("telecom", "Airtel", ("airtel",), "Utilities"),
    VendorGroup("telecom", "Jio", ("jio", "jiofiber"), "Utilities"),
    VendorGroup("ride_hailing", "Uber", ("uber",), "Travel"),
    VendorGroup("ride_hailing", "Ola", ("ola", "olacabs"), "Travel"),
    VendorGroup("retail_electronics", "Croma", ("croma",)),
    VendorGroup("retail_electronics", "Reliance Digital", ("reliance digital",)),
)

_COMPILED = tuple((group, group.pattern()) for group in VENDOR_GROUPS)

CATEGORY_BY_VENDOR: Dict[str, str] = {
    group.display_name: group.category for group in VENDOR_GROUPS if group.category
}

# Vendors drawn when a record has to be synthesised
FALLBACK_VENDORS: Tuple[str, ...] = tuple(group.display_name for group in VENDOR_GROUPS)


def match_vendor(*haystacks: str) -> Optional[VendorGroup]:
    """Return the first catalog group whose keywords occur in any haystack."""
    for group, pattern in _COMPILED:
        for haystack in haystacks:
            if haystack and pattern.search(haystack):
                return group
    return None


def vendor_display_name(*haystacks: str) -> str:
    group = match_vendor(*haystacks)
    return group.display_name if group else UNKNOWN_VENDOR


def category_for_vendor(vendor: str) -> str:
    return CATEGORY_BY_VENDOR.get(vendor, DEFAULT_CATEGORY)
