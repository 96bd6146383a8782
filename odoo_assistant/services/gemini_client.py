# odoo_assistant/services/gemini_client.py
import logging
from typing import Any, Dict, List, Protocol

import google.generativeai as genai

from odoo_assistant.errors import ProviderError

logger = logging.getLogger(__name__)


class ProviderClient(Protocol):
    async def generate(self, messages: List[Dict[str, Any]], system_instruction: str) -> str:
        ...


class GeminiClient:
    """
    Thin wrapper over the google-generativeai SDK.

    One instance is built at startup and shared by all requests; it holds
    no per-request state.
    """

    def __init__(self, api_key: str, model_name: str):
        # The SDK keeps the key in module-level configuration
        genai.configure(api_key=api_key)
        self.model_name = model_name

    async def generate(self, messages: List[Dict[str, Any]], system_instruction: str) -> str:
        model = genai.GenerativeModel(self.model_name, system_instruction=system_instruction)
        try:
            response = await model.generate_content_async(messages)
        except Exception as e:
            raise ProviderError(f"{self.model_name} call failed: {e!r}") from e

        # .text raises ValueError when the candidate was blocked or has no parts
        try:
            text = response.text
        except ValueError as e:
            raise ProviderError(f"{self.model_name} returned no text: {e}") from e

        logger.debug("Provider %s returned %s chars", self.model_name, len(text))
        return text
