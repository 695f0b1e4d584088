"""
OpenRouter Vision Provider.

Same contract as the OpenAI provider, routed through OpenRouter's
OpenAI-compatible endpoint so any vision model it hosts can be used.
"""
from typing import Optional
from openai import OpenAI
from ...core.config import OPENROUTER_API_KEY, OPENROUTER_BASE_URL, OPENROUTER_VISION_MODEL
from .openai_provider import OpenAIVisionProvider


class OpenRouterVisionProvider(OpenAIVisionProvider):
    """Text acquisition through OpenRouter."""

    name = "openrouter"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client: Optional[OpenAI] = None):
        """Initialize OpenRouter provider with API key."""
        self.api_key = api_key or OPENROUTER_API_KEY
        self.model = model or OPENROUTER_VISION_MODEL
        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = OpenAI(
                base_url=OPENROUTER_BASE_URL,
                api_key=self.api_key
            )
        else:
            self.client = None
