"""
Base Text Acquisition Provider Interface.

All acquisition providers must inherit from this base class and implement
the acquire() method.
"""
import json
from abc import ABC, abstractmethod
from typing import Optional
from ...api.exceptions import MalformedResponseError
from ...models import AcquisitionResult
from ...core.logging_config import get_logger

logger = get_logger(__name__)

IMAGE_MEDIA_TYPES = ("image/jpeg", "image/png")

# Instruction sent to multimodal LLM providers
EXTRACTION_PROMPT = (
    "Please extract all text from this invoice or receipt image, maintaining the "
    "original formatting and structure as much as possible. Return ONLY a valid JSON "
    "object of the form {\"text\": \"<extracted text>\", \"confidence\": <0-100>} where "
    "confidence is how reliable you believe the transcription is. If there's no text "
    "in the image, use \"No text found\" as the text and 0 as the confidence. "
    "Do not include any explanation or preamble, just the JSON object."
)

NO_TEXT_FOUND = "No text found"


class TextAcquisitionProvider(ABC):
    """
    Abstract base class for text acquisition providers.

    A provider turns document bytes into raw text plus a 0-100 confidence.
    Any failure must surface as an exception; the caller treats all
    failures the same way.
    """

    name = "base"

    @abstractmethod
    def acquire(self, file_bytes: bytes, media_type: str) -> AcquisitionResult:
        """
        Extract text from a document.

        Args:
            file_bytes: Raw document content
            media_type: Declared media type (e.g. 'image/png')

        Returns:
            AcquisitionResult with text and confidence
        """
        pass

    def supports(self, media_type: str) -> bool:
        return media_type in IMAGE_MEDIA_TYPES


def clamp_confidence(value: float) -> float:
    return max(0.0, min(100.0, float(value)))


def parse_structured_response(response_text: Optional[str], default_confidence: float) -> AcquisitionResult:
    """
    Parse an LLM reply of the form {"text": ..., "confidence": ...}.

    A bare "No text found" reply is accepted as an empty result.

    Raises:
        MalformedResponseError: If the reply holds no usable JSON object
    """
    if response_text is None:
        raise MalformedResponseError("Empty response from acquisition service")

    response_text = response_text.strip()
    if response_text == NO_TEXT_FOUND:
        return AcquisitionResult(text="", confidence=0)

    # Find the JSON object in the response (models sometimes wrap it in prose or fences)
    start_idx = response_text.find('{')
    end_idx = response_text.rfind('}') + 1
    if start_idx < 0 or end_idx <= start_idx:
        raise MalformedResponseError(f"No JSON object in response: {response_text[:200]}")

    try:
        payload = json.loads(response_text[start_idx:end_idx])
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Invalid JSON in response: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("text"), str):
        raise MalformedResponseError("Response JSON is missing a 'text' string")

    text = payload["text"]
    if text.strip() == NO_TEXT_FOUND:
        text = ""

    confidence = payload.get("confidence")
    if confidence is None:
        confidence = default_confidence
    try:
        confidence = clamp_confidence(confidence)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"Invalid confidence value: {confidence!r}") from e

    return AcquisitionResult(text=text, confidence=confidence)
