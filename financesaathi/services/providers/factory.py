"""
Acquisition Provider Factory.

Manages image provider selection and initialization based on configuration.
"""
from ...core.config import (
    ACQUISITION_PROVIDER,
    OPENAI_API_KEY,
    OPENROUTER_API_KEY,
    ANTHROPIC_API_KEY
)
from ...core.logging_config import get_logger
from .base import TextAcquisitionProvider
from .openai_provider import OpenAIVisionProvider
from .openrouter_provider import OpenRouterVisionProvider
from .anthropic_provider import AnthropicVisionProvider
from .ocr_provider import TesseractOCRProvider
from .pdf_provider import PDFTextProvider
from .mock_provider import MockProvider

logger = get_logger(__name__)

# Remote providers in the order they are tried when the configured one is unusable
_REMOTE_PROVIDERS = (
    ("openai", lambda: OPENAI_API_KEY, OpenAIVisionProvider),
    ("openrouter", lambda: OPENROUTER_API_KEY, OpenRouterVisionProvider),
    ("anthropic", lambda: ANTHROPIC_API_KEY, AnthropicVisionProvider),
)


class AcquisitionProviderFactory:
    """
    Factory for creating text acquisition providers.

    Automatically selects the image provider based on:
    1. ACQUISITION_PROVIDER configuration
    2. Available API keys
    3. Fallback to the local Tesseract engine if no keys are available
    """

    @staticmethod
    def get_provider(provider_type: str = None) -> TextAcquisitionProvider:
        """
        Get the image acquisition provider.

        Args:
            provider_type: Overrides ACQUISITION_PROVIDER when given

        Returns:
            TextAcquisitionProvider instance
        """
        provider_type = (provider_type or ACQUISITION_PROVIDER).lower()

        if provider_type == "mock":
            logger.info("Using MockProvider (configured)")
            return MockProvider()

        if provider_type == "ocr":
            logger.info("Using local Tesseract OCR provider")
            return TesseractOCRProvider()

        remote = {name: (key, cls) for name, key, cls in _REMOTE_PROVIDERS}
        if provider_type in remote:
            key, cls = remote[provider_type]
            if key():
                logger.info(f"Using {provider_type} vision provider")
                return cls()
            logger.warning(f"{provider_type} API key not configured, checking other providers...")
        else:
            logger.warning(f"Unknown provider '{provider_type}', checking available API keys...")

        for name, key, cls in _REMOTE_PROVIDERS:
            if name != provider_type and key():
                logger.info(f"Using {name} vision provider as fallback")
                return cls()

        logger.warning("No API keys configured, using local Tesseract OCR provider")
        return TesseractOCRProvider()

    @staticmethod
    def get_pdf_provider() -> TextAcquisitionProvider:
        return PDFTextProvider()
