"""
Shared pytest fixtures and configuration for all tests
"""
import base64
import io

import pytest
import sys
from pathlib import Path

# Add backend to Python path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

TEST_TOKEN_SECRET = "test-history-secret"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from provider credentials and settings in the shell"""
    for name in ("GEMINI_API_KEY", "API_KEYS", "HISTORY_BACKEND", "GEMINI_MODEL", "GEMINI_API_BASE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HISTORY_TOKEN_SECRET", TEST_TOKEN_SECRET)


@pytest.fixture
def png_bytes():
    """A 1x1 pixel PNG"""
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (1, 1), (255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_base64(png_bytes):
    return base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def png_file(tmp_path, png_bytes):
    path = tmp_path / "photo.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def gemini_image_reply(png_base64):
    """A generateContent reply carrying one inline PNG"""
    return {
        "candidates": [{
            "content": {
                "role": "model",
                "parts": [{"inlineData": {"mimeType": "image/png", "data": png_base64}}]
            },
            "finishReason": "STOP"
        }]
    }


@pytest.fixture
def history_store():
    from services.history_service import InMemoryHistoryStore
    return InMemoryHistoryStore()


@pytest.fixture
def app(history_store):
    """FastAPI app with a fresh in-memory history store"""
    from main import app
    from services.history_service import get_history_store

    app.dependency_overrides[get_history_store] = lambda: history_store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Provide FastAPI test client"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def auth_headers():
    from core.auth import issue_history_token
    return {"Authorization": f"Bearer {issue_history_token('tester')}"}
