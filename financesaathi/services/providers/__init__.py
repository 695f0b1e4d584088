"""
Text acquisition providers.

Every provider turns document bytes into raw text plus a 0-100 confidence
using the Strategy pattern.

To add a new provider:
1. Create a class inheriting from TextAcquisitionProvider
2. Implement acquire()
3. Register it in AcquisitionProviderFactory
"""
from .base import TextAcquisitionProvider, parse_structured_response
from .factory import AcquisitionProviderFactory
from .openai_provider import OpenAIVisionProvider
from .openrouter_provider import OpenRouterVisionProvider
from .anthropic_provider import AnthropicVisionProvider
from .ocr_provider import TesseractOCRProvider
from .pdf_provider import PDFTextProvider
from .mock_provider import MockProvider

__all__ = [
    "TextAcquisitionProvider",
    "parse_structured_response",
    "AcquisitionProviderFactory",
    "OpenAIVisionProvider",
    "OpenRouterVisionProvider",
    "AnthropicVisionProvider",
    "TesseractOCRProvider",
    "PDFTextProvider",
    "MockProvider",
]
