"""
OpenAI Vision Provider.

Extracts invoice text with an OpenAI multimodal chat model. The image is
embedded inline as a base64 data URI.
"""
import base64
from typing import Optional
from openai import OpenAI
from ...core.config import OPENAI_API_KEY, OPENAI_VISION_MODEL, DEFAULT_VISION_CONFIDENCE
from ...core.logging_config import get_logger
from ...models import AcquisitionResult
from .base import TextAcquisitionProvider, EXTRACTION_PROMPT, parse_structured_response

logger = get_logger(__name__)


def to_data_uri(file_bytes: bytes, media_type: str) -> str:
    encoded = base64.b64encode(file_bytes).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


class OpenAIVisionProvider(TextAcquisitionProvider):
    """Text acquisition through the OpenAI chat completions API."""

    name = "openai"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client: Optional[OpenAI] = None):
        """
        Initialize the provider.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY)
            model: Vision-capable model name
            client: Pre-built client (mainly for tests)
        """
        self.api_key = api_key or OPENAI_API_KEY
        self.model = model or OPENAI_VISION_MODEL
        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = OpenAI(api_key=self.api_key)
        else:
            self.client = None

    def acquire(self, file_bytes: bytes, media_type: str) -> AcquisitionResult:
        if not self.client:
            raise ValueError(f"{self.name} API key not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": EXTRACTION_PROMPT},
                            {
                                "type": "image_url",
                                "image_url": {
                                    "url": to_data_uri(file_bytes, media_type),
                                    "detail": "high"
                                }
                            }
                        ]
                    }
                ],
                max_tokens=1000,
                temperature=0.1
            )
        except Exception as e:
            logger.error(f"{self.name} API Error (Text Acquisition): {e}")
            raise

        content = response.choices[0].message.content if response.choices else None
        return parse_structured_response(content, DEFAULT_VISION_CONFIDENCE)
