"""Async client for the edit proxy.

One HTTP call per submission: no retry, no caching, no de-duplication.
"""
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from config.settings import get_settings
from core.errors import AppError, MissingResultError, ProxyError, TransportError, ValidationError
from models.image_edit import EditMode, EditRequest, EditResult, Hotspot
from services.image_encoder import ImageSource, encode_image


class EditClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.EDIT_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.EDIT_CLIENT_TIMEOUT_SECONDS
        self._transport = transport

    async def submit_or_raise(self, request: EditRequest) -> str:
        """Send one edit request and return the result data URL, raising on failure."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(f"{self.base_url}/api/edit", json=request.to_wire())
        except httpx.HTTPError as e:
            raise TransportError(f"Could not reach edit API: {e}")

        try:
            result = response.json()
        except ValueError:
            result = {}
        if not isinstance(result, dict):
            result = {}

        if not response.is_success:
            message = result.get("error") or f"Request failed with status code {response.status_code}"
            raise ProxyError(message, response.status_code)

        data_url = result.get("dataUrl")
        if not data_url:
            raise MissingResultError("API response did not contain an image data URL.")
        return data_url

    async def submit(self, request: EditRequest) -> EditResult:
        """Send one edit request; failures come back as an unsuccessful EditResult."""
        try:
            data_url = await self.submit_or_raise(request)
        except AppError as e:
            print(f"❌ Edit request failed: {e.message}")
            return EditResult(success=False, error=e.message, error_type=type(e).__name__)
        return EditResult(success=True, data_url=data_url)


async def _submit_image(
    client: Optional[EditClient],
    image: ImageSource,
    prompt: str,
    mode: EditMode,
    hotspot: Optional[Hotspot] = None,
    mime_type: Optional[str] = None,
) -> EditResult:
    """Encode and submit; unreadable images and invalid fields also come back as a failed EditResult."""
    try:
        encoded = encode_image(image, mime_type)
        try:
            request = EditRequest(
                image=encoded.data,
                mime_type=encoded.mime_type,
                prompt=prompt,
                mode=mode,
                hotspot=hotspot,
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid edit request: {e.errors()[0]['msg']}")
    except AppError as e:
        print(f"❌ Edit request not sent: {e.message}")
        return EditResult(success=False, error=e.message, error_type=type(e).__name__)
    return await (client or EditClient()).submit(request)


async def generate_edited_image(
    image: ImageSource,
    prompt: str,
    hotspot: Hotspot,
    client: Optional[EditClient] = None,
    mime_type: Optional[str] = None,
) -> EditResult:
    """Apply a localized edit around ``hotspot``."""
    print(f"📤 Sending edit request at hotspot {hotspot}")
    return await _submit_image(client, image, prompt, EditMode.EDIT, hotspot, mime_type)


async def generate_filtered_image(
    image: ImageSource,
    prompt: str,
    client: Optional[EditClient] = None,
    mime_type: Optional[str] = None,
) -> EditResult:
    print(f"📤 Sending filter request: {prompt}")
    return await _submit_image(client, image, prompt, EditMode.FILTER, mime_type=mime_type)


async def generate_adjusted_image(
    image: ImageSource,
    prompt: str,
    client: Optional[EditClient] = None,
    mime_type: Optional[str] = None,
) -> EditResult:
    print(f"📤 Sending adjustment request: {prompt}")
    return await _submit_image(client, image, prompt, EditMode.ADJUST, mime_type=mime_type)
