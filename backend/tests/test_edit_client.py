"""
Edit client tests against an in-process HTTP transport
"""
import json

import httpx
import pytest

from client.edit_client import (
    EditClient,
    generate_adjusted_image,
    generate_edited_image,
    generate_filtered_image,
)
from core.errors import MissingResultError, ProxyError, TransportError
from models.image_edit import EditMode, EditRequest, EditResult, Hotspot


class RecordingProxy:
    """Fake /api/edit endpoint recording every request it receives"""

    def __init__(self, status_code=200, body=None, content=None):
        self.status_code = status_code
        self.body = body if body is not None else {"dataUrl": "data:image/png;base64,QUJD"}
        self.content = content
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)

    def client(self) -> EditClient:
        return EditClient(base_url="http://proxy.test", transport=httpx.MockTransport(self))


@pytest.fixture
def edit_request(png_base64):
    return EditRequest(
        image=png_base64,
        mime_type="image/png",
        prompt="add a hat",
        mode=EditMode.EDIT,
        hotspot=Hotspot(x=5, y=5),
    )


@pytest.mark.unit
class TestEditRequest:

    def test_wire_envelope(self, edit_request, png_base64):
        assert edit_request.to_wire() == {
            "image": png_base64,
            "mimeType": "image/png",
            "prompt": "add a hat",
            "mode": "edit",
            "hotspot": {"x": 5, "y": 5},
        }

    def test_hotspot_omitted_for_filter(self):
        request = EditRequest(image="QUJD", mimeType="image/png", prompt="sepia", mode="filter")

        assert "hotspot" not in request.to_wire()

    def test_edit_requires_hotspot(self):
        with pytest.raises(ValueError):
            EditRequest(image="QUJD", mimeType="image/png", prompt="add a hat", mode="edit")

    def test_hotspot_only_for_edit(self):
        with pytest.raises(ValueError):
            EditRequest(image="QUJD", mimeType="image/png", prompt="x", mode="adjust", hotspot={"x": 1, "y": 1})


@pytest.mark.unit
class TestEditResult:

    def test_exactly_one_side_populated(self):
        with pytest.raises(ValueError):
            EditResult(success=True)
        with pytest.raises(ValueError):
            EditResult(success=False, data_url="data:x", error="boom")


@pytest.mark.unit
@pytest.mark.asyncio
class TestSubmit:

    async def test_success(self, edit_request):
        proxy = RecordingProxy()

        result = await proxy.client().submit(edit_request)

        assert result.success is True
        assert result.data_url == "data:image/png;base64,QUJD"
        assert result.error is None
        sent = proxy.requests[0]
        assert str(sent.url) == "http://proxy.test/api/edit"
        assert json.loads(sent.content)["mode"] == "edit"

    async def test_identical_requests_make_two_calls(self, edit_request):
        proxy = RecordingProxy()
        client = proxy.client()

        await client.submit(edit_request)
        await client.submit(edit_request)

        assert len(proxy.requests) == 2

    async def test_proxy_error_message_is_surfaced(self, edit_request):
        proxy = RecordingProxy(status_code=500, body={"error": "Server error: Request was blocked. Reason: SAFETY."})

        result = await proxy.client().submit(edit_request)

        assert result.success is False
        assert result.error == "Server error: Request was blocked. Reason: SAFETY."
        assert result.error_type == "ProxyError"

    async def test_generic_status_message(self, edit_request):
        proxy = RecordingProxy(status_code=502, content=b"<html>Bad gateway</html>")

        with pytest.raises(ProxyError) as exc:
            await proxy.client().submit_or_raise(edit_request)

        assert exc.value.message == "Request failed with status code 502"
        assert exc.value.status_code == 502

    async def test_missing_data_url(self, edit_request):
        proxy = RecordingProxy(body={"something": "else"})

        with pytest.raises(MissingResultError):
            await proxy.client().submit_or_raise(edit_request)

        result = await proxy.client().submit(edit_request)
        assert result.error_type == "MissingResultError"

    async def test_transport_error(self, edit_request):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = EditClient(base_url="http://proxy.test", transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError):
            await client.submit_or_raise(edit_request)


@pytest.mark.unit
@pytest.mark.asyncio
class TestGenerateHelpers:

    async def test_generate_edited_image(self, png_file, png_base64):
        proxy = RecordingProxy()

        result = await generate_edited_image(png_file, "add a hat", Hotspot(x=5, y=5), client=proxy.client())

        assert result.success
        body = json.loads(proxy.requests[0].content)
        assert body == {
            "image": png_base64,
            "mimeType": "image/png",
            "prompt": "add a hat",
            "mode": "edit",
            "hotspot": {"x": 5, "y": 5},
        }

    async def test_generate_filtered_and_adjusted(self, png_file):
        proxy = RecordingProxy()

        await generate_filtered_image(png_file, "sepia", client=proxy.client())
        await generate_adjusted_image(png_file, "warmer", client=proxy.client())

        modes = [json.loads(r.content)["mode"] for r in proxy.requests]
        assert modes == ["filter", "adjust"]
        assert all("hotspot" not in json.loads(r.content) for r in proxy.requests)

    async def test_edit_without_hotspot_never_hits_network(self, png_file):
        proxy = RecordingProxy()

        result = await generate_edited_image(png_file, "add a hat", None, client=proxy.client())

        assert result.success is False
        assert result.error_type == "ValidationError"
        assert "hotspot" in result.error
        assert proxy.requests == []

    async def test_unreadable_image(self, tmp_path):
        proxy = RecordingProxy()

        result = await generate_filtered_image(tmp_path / "missing.png", "sepia", client=proxy.client())

        assert result.success is False
        assert result.error_type == "ReadError"
        assert proxy.requests == []
