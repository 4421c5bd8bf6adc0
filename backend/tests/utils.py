"""Helpers shared by test modules"""

import io
import json

import httpx
from PIL import Image


def make_png(size=(16, 16), color=(200, 30, 30)) -> bytes:
    """Encode a small solid-color PNG"""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def mock_http_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``"""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content.decode())
