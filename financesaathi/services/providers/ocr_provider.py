"""
Tesseract OCR Provider.

Local OCR engine for invoice images using pytesseract and Pillow. The
confidence is the mean word-level confidence Tesseract reports.
"""
import io
from typing import Optional
import pytesseract
from PIL import Image, ImageOps
from ...core.config import TESSERACT_CMD
from ...core.logging_config import get_logger
from ...models import AcquisitionResult
from .base import TextAcquisitionProvider, clamp_confidence

logger = get_logger(__name__)

TESSERACT_CONFIG = "--oem 1 --psm 6"


class TesseractOCRProvider(TextAcquisitionProvider):
    """Text acquisition with a locally installed Tesseract engine."""

    name = "ocr"

    def __init__(self, tesseract_cmd: Optional[str] = None, lang: str = "eng"):
        self.lang = lang
        cmd = tesseract_cmd or TESSERACT_CMD
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd

    def _prepare(self, file_bytes: bytes) -> Image.Image:
        image = Image.open(io.BytesIO(file_bytes))
        image = ImageOps.exif_transpose(image)
        return ImageOps.grayscale(image)

    def acquire(self, file_bytes: bytes, media_type: str) -> AcquisitionResult:
        image = self._prepare(file_bytes)

        data = pytesseract.image_to_data(
            image,
            lang=self.lang,
            config=TESSERACT_CONFIG,
            output_type=pytesseract.Output.DICT
        )
        text = pytesseract.image_to_string(image, lang=self.lang, config=TESSERACT_CONFIG)

        # Tesseract reports -1 for non-word boxes
        word_confidences = [
            float(conf)
            for conf, word in zip(data.get("conf", []), data.get("text", []))
            if word and word.strip() and float(conf) >= 0
        ]
        confidence = sum(word_confidences) / len(word_confidences) if word_confidences else 0.0

        logger.debug(f"Tesseract read {len(word_confidences)} words (mean confidence {confidence:.1f})")
        return AcquisitionResult(text=text, confidence=clamp_confidence(confidence))
