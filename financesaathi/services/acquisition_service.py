"""
Text acquisition service.

Routes a validated upload to the right provider and turns every failure into
an AcquisitionError so the pipeline has a single fallback path.
"""
import asyncio
from typing import Optional
from ..api.exceptions import AcquisitionError, AcquisitionTimeoutError
from ..core.config import ACQUISITION_TIMEOUT_SECONDS
from ..core.logging_config import get_logger
from ..models import AcquisitionResult
from .providers import AcquisitionProviderFactory, TextAcquisitionProvider
from .providers.pdf_provider import PDF_MEDIA_TYPE

logger = get_logger(__name__)


class AcquisitionService:
    """
    Acquisition service implementation.
    Makes exactly one attempt per document; retrying is the caller's concern.
    """

    def __init__(
        self,
        provider: Optional[TextAcquisitionProvider] = None,
        pdf_provider: Optional[TextAcquisitionProvider] = None,
        timeout: float = ACQUISITION_TIMEOUT_SECONDS
    ):
        self.provider = provider or AcquisitionProviderFactory.get_provider()
        self.pdf_provider = pdf_provider or AcquisitionProviderFactory.get_pdf_provider()
        self.timeout = timeout
        logger.info(
            f"Initialized AcquisitionService with provider: {type(self.provider).__name__} "
            f"(pdf: {type(self.pdf_provider).__name__}, timeout: {self.timeout}s)"
        )

    def provider_for(self, media_type: str) -> TextAcquisitionProvider:
        if media_type == PDF_MEDIA_TYPE:
            return self.pdf_provider
        return self.provider

    async def acquire(self, file_bytes: bytes, media_type: str) -> AcquisitionResult:
        """
        Obtain raw text and confidence for a document.

        Raises:
            AcquisitionTimeoutError: If the provider does not answer within the timeout
            AcquisitionError: For any other provider failure
        """
        provider = self.provider_for(media_type)
        if not provider.supports(media_type):
            raise AcquisitionError(f"Provider '{provider.name}' cannot read {media_type}")

        logger.debug(f"Acquiring text with '{provider.name}' ({len(file_bytes)} bytes, {media_type})")
        loop = asyncio.get_running_loop()
        try:
            result = await asyncio.wait_for(
                loop.run_in_executor(None, provider.acquire, file_bytes, media_type),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Text acquisition with '{provider.name}' timed out after {self.timeout}s")
            raise AcquisitionTimeoutError(f"No response from '{provider.name}' within {self.timeout}s") from e
        except AcquisitionError:
            raise
        except Exception as e:
            logger.error(f"Text acquisition with '{provider.name}' failed: {e}")
            raise AcquisitionError(f"Text acquisition failed: {e}") from e

        logger.debug(f"Acquired {len(result.text)} chars (confidence {result.confidence})")
        return result
