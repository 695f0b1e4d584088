"""
Mock Acquisition Provider.

Provides canned acquisition results for testing and offline development.
Does not make actual API calls.
"""
from typing import Optional
from ...core.logging_config import get_logger
from ...models import AcquisitionResult
from .base import TextAcquisitionProvider

logger = get_logger(__name__)

DEFAULT_MOCK_TEXT = (
    "Swiggy\n"
    "Tax Invoice\n"
    "Order Date: 12/03/2025\n"
    "Subtotal ₹420.00\n"
    "Delivery fee ₹30.00\n"
    "Grand Total: ₹450.00\n"
)


class MockProvider(TextAcquisitionProvider):
    """
    Mock provider for testing and offline scenarios.

    Returns the configured text and confidence for every document, or raises
    the configured error to simulate an unreachable service.
    """

    name = "mock"

    def __init__(
        self,
        text: str = DEFAULT_MOCK_TEXT,
        confidence: float = 92.0,
        error: Optional[Exception] = None
    ):
        self.text = text
        self.confidence = confidence
        self.error = error
        self.calls = 0

    def supports(self, media_type: str) -> bool:
        return True

    def acquire(self, file_bytes: bytes, media_type: str) -> AcquisitionResult:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return AcquisitionResult(text=self.text, confidence=self.confidence)
