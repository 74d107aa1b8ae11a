"""Shared pytest fixtures and test doubles for Lumina tests."""

import asyncio
import io
from types import SimpleNamespace
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image

from lumina.models import AnalysisResult, Artwork


SAMPLE_ANALYSIS = AnalysisResult(
    title="Silver Hour",
    critique="A hushed study of reflected light. The horizon anchors a restless sky.",
    mood="Serene",
    style="Photorealism",
)


class FakeGateway:
    """Stands in for GeminiGateway; records calls and can hold analyze() open."""

    def __init__(self, analysis=SAMPLE_ANALYSIS, preview="data:image/png;base64,UE5H", error=None):
        self.analysis = analysis
        self.preview = preview
        self.error = error
        self.analyze_calls: List[str] = []
        self.generate_calls: List[str] = []
        self.gate: Optional[asyncio.Event] = None
        self.started: Optional[asyncio.Event] = None

    def hold(self):
        """Block analyze() until ``gate`` is set. Call from inside the event loop."""
        self.gate = asyncio.Event()
        self.started = asyncio.Event()

    async def analyze(self, image_base64):
        self.analyze_calls.append(image_base64)
        if self.gate is not None:
            self.started.set()
            await self.gate.wait()
        return self.analysis

    async def generate(self, prompt):
        self.generate_calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.preview


class FakeFetcher:
    """Async stand-in for url_to_base64."""

    def __init__(self, payload="cmVtb3RlLWltYWdl", error=None):
        self.payload = payload
        self.error = error
        self.calls: List[str] = []

    async def __call__(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.payload


def make_text_response(text):
    """Build a Gemini-like response carrying only ``text``."""
    return SimpleNamespace(text=text)


def make_parts_response(*parts):
    """Build a Gemini-like response with one candidate holding ``parts``."""
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def text_part(text):
    return SimpleNamespace(text=text, inline_data=None)


def image_part(data, mime_type="image/png"):
    return SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))


def make_genai_client(response=None, error=None):
    """Mock genai.Client whose aio.models.generate_content returns ``response``."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
    return client


@pytest.fixture(autouse=True)
def clear_model_overrides(monkeypatch):
    """Keep model overrides from the developer's shell out of the tests."""
    monkeypatch.delenv("GEMINI_VISION_MODEL", raising=False)
    monkeypatch.delenv("GEMINI_IMAGE_MODEL", raising=False)


@pytest.fixture
def jpeg_bytes():
    """A small, real JPEG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (32, 24), color="red").save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    """A small, real PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16), color="blue").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def remote_artwork():
    return Artwork(
        id="101",
        url="https://images.example.com/river.jpg",
        title="River of Silence",
        artist="Elena Voss",
        year="2019",
    )


@pytest.fixture
def generated_artwork():
    return Artwork(
        id="1700000000000",
        url="data:image/png;base64,aGVsbG8=",
        title="A lighthouse in fog...",
        artist="Gemini AI",
        year="2023",
        is_generated=True,
    )


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()
