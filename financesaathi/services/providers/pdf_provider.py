"""
PDF Text Provider.

Reads the native text layer of PDF invoices using the pypdf library.
"""
import io
from typing import Optional
from pypdf import PdfReader
from ...api.exceptions import AcquisitionError
from ...core.config import PDF_TEXT_CONFIDENCE
from ...core.logging_config import get_logger
from ...models import AcquisitionResult
from .base import TextAcquisitionProvider

logger = get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


class PDFTextProvider(TextAcquisitionProvider):
    """Provider for PDFs with an embedded text layer."""

    name = "pdf"

    def __init__(self, confidence: Optional[float] = None):
        self.confidence = PDF_TEXT_CONFIDENCE if confidence is None else confidence

    def supports(self, media_type: str) -> bool:
        return media_type == PDF_MEDIA_TYPE

    def acquire(self, file_bytes: bytes, media_type: str) -> AcquisitionResult:
        """
        Extract text from PDF file.

        Raises:
            AcquisitionError: If the PDF has no extractable text (e.g. a scan)
        """
        reader = PdfReader(io.BytesIO(file_bytes))
        text_content = ""

        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_content += page_text + "\n"

        if not text_content.strip():
            raise AcquisitionError("PDF file appears to be empty or contains no extractable text")

        logger.debug(f"Extracted {len(text_content)} chars from {len(reader.pages)} PDF page(s)")
        return AcquisitionResult(text=text_content, confidence=self.confidence)
