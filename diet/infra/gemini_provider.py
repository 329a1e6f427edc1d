"""Gemini text-generation client (REST generateContent endpoint)."""
import logging
from typing import Any, Optional

import httpx

from diet.utilities.config import ProviderConfig
from diet.utilities.errors import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


def build_request_body(prompt: str) -> dict:
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_text(envelope: Any) -> str:
    """Pull candidates[0].content.parts[0].text out of a success envelope."""
    try:
        candidates = envelope.get("candidates") if isinstance(envelope, dict) else None
        if not candidates or not isinstance(candidates[0], dict) or not candidates[0].get("content"):
            raise ProviderError("Invalid response from Gemini API")
        text = candidates[0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderError("Invalid response from Gemini API") from e
    if not isinstance(text, str):
        raise ProviderError("Invalid response from Gemini API")
    return text


class GeminiProvider:
    def __init__(self, config: ProviderConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._client = client

    async def generate_text(self, prompt: str) -> str:
        """Send prompt as the sole content and return the generated text."""
        if not self.config.is_configured:
            raise ConfigurationError("GEMINI_API_KEY not found in environment variables")

        headers = {
            "Content-Type": "application/json",
            "X-goog-api-key": self.config.api_key,
        }
        body = build_request_body(prompt)

        try:
            if self._client is not None:
                response = await self._client.post(self.config.url, json=body, headers=headers,
                                                   timeout=self.config.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                    response = await client.post(self.config.url, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", e)
            raise ProviderError(f"Gemini API request failed: {e}") from e

        if not response.is_success:
            logger.error("Gemini API error: %s %s", response.status_code, response.reason_phrase)
            raise ProviderError(
                f"Gemini API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError("Invalid response from Gemini API") from e

        logger.debug("Gemini API response: %s", data)
        return extract_text(data)
