"""
Anthropic Vision Provider.

Extracts invoice text with Claude's messages API, sending the image as a
base64 content block.
"""
import base64
from typing import Optional
import anthropic
from ...core.config import ANTHROPIC_API_KEY, ANTHROPIC_VISION_MODEL, DEFAULT_VISION_CONFIDENCE
from ...core.logging_config import get_logger
from ...models import AcquisitionResult
from .base import TextAcquisitionProvider, EXTRACTION_PROMPT, parse_structured_response

logger = get_logger(__name__)


class AnthropicVisionProvider(TextAcquisitionProvider):
    """Text acquisition through Anthropic Claude."""

    name = "anthropic"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client=None):
        """Initialize Anthropic provider with API key."""
        self.api_key = api_key or ANTHROPIC_API_KEY
        self.model = model or ANTHROPIC_VISION_MODEL
        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = anthropic.Anthropic(api_key=self.api_key)
        else:
            self.client = None

    def acquire(self, file_bytes: bytes, media_type: str) -> AcquisitionResult:
        if not self.client:
            raise ValueError("Anthropic API key not configured")

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=1000,
                temperature=0.1,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": media_type,
                                    "data": base64.b64encode(file_bytes).decode("ascii")
                                }
                            },
                            {"type": "text", "text": EXTRACTION_PROMPT}
                        ]
                    }
                ]
            )
        except Exception as e:
            logger.error(f"Anthropic API Error (Text Acquisition): {e}")
            raise

        text_blocks = [block.text for block in message.content if getattr(block, "type", None) == "text"]
        return parse_structured_response(
            "".join(text_blocks) if text_blocks else None,
            DEFAULT_VISION_CONFIDENCE
        )
