import os
from typing import Optional

import httpx

from config.settings import Settings, get_settings
from core.errors import ConfigError, UpstreamError
from models.gemini import GenerateContentResponse


def get_api_key() -> Optional[str]:
    """Read the provider credential from GEMINI_API_KEY, falling back to API_KEYS."""
    key = (os.getenv("GEMINI_API_KEY") or "").strip()
    if key:
        return key
    # API_KEYS may hold a comma-separated list; use the first usable one
    for candidate in (os.getenv("API_KEYS") or "").split(","):
        if candidate.strip():
            return candidate.strip()
    return None


class GeminiService:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = settings or get_settings()
        # Credential is read per service instance, i.e. once per request
        self.api_key = get_api_key()
        self.model = settings.GEMINI_MODEL
        self.base_url = settings.GEMINI_API_BASE.rstrip("/")
        self.timeout = settings.GEMINI_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, image_data: str, mime_type: str, instruction: str) -> dict:
        return {
            "contents": [{
                "parts": [
                    {"inlineData": {"mimeType": mime_type, "data": image_data}},
                    {"text": instruction},
                ]
            }],
            "generationConfig": {"responseModalities": ["IMAGE", "TEXT"]},
        }

    async def generate_content(self, image_data: str, mime_type: str, instruction: str) -> GenerateContentResponse:
        """Send one image + instruction to Gemini and decode the reply."""
        if not self.api_key:
            raise ConfigError("GEMINI_API_KEY or API_KEYS environment variable is not set.")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        payload = self.build_payload(image_data, mime_type, instruction)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException:
            raise UpstreamError("Request timeout - Gemini API may be slow")
        except httpx.HTTPError as e:
            raise UpstreamError(f"Error calling Gemini API: {e}")

        if response.status_code != 200:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {}
            error = error_data.get("error") if isinstance(error_data, dict) else None
            message = error.get("message") if isinstance(error, dict) else None
            raise UpstreamError(message or f"Gemini API request failed: {response.status_code}")

        try:
            return GenerateContentResponse.model_validate(response.json())
        except ValueError as e:
            raise UpstreamError(f"Unexpected Gemini API response: {e}")
