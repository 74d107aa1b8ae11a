"""
LUMINA Gateway - Curator and Atelier engine.
Uses Gemini Vision to critique artworks and Gemini Image to create new ones.

The two capabilities fail differently, and callers rely on it:
- analyze() never raises. Any failure returns FALLBACK_ANALYSIS so the
  overlay always has something to render.
- generate() always raises on failure. The atelier must tell the user and
  offer a retry; there is no placeholder image.
"""

import base64
import json
import os
import sys
from typing import Any, Iterable, Optional, Union

from google import genai
from google.genai import types

from .encoding import to_data_uri
from .models import AnalysisResult

CRITIC_PROMPT = """You are a world-renowned art critic and curator. Analyze this image.
Provide a JSON response with the following fields:
- title: A creative title for the piece.
- critique: A sophisticated, 2-sentence artistic critique of the composition, lighting, and meaning.
- mood: One or two words describing the mood (e.g., Melancholic, Ethereal).
- style: The likely art style (e.g., Baroque, Abstract Expressionism, Photorealism)."""

ANALYSIS_FIELDS = ('title', 'critique', 'mood', 'style')

ANALYSIS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={field: types.Schema(type=types.Type.STRING) for field in ANALYSIS_FIELDS},
    required=list(ANALYSIS_FIELDS),
)

FALLBACK_ANALYSIS = AnalysisResult(
    title="Untitled Mystery",
    critique="The curator is currently on a coffee break and cannot analyze this piece right now.",
    mood="Unknown",
    style="Undefined",
)


class GeminiGateway:
    """Wraps one long-lived Gemini client for critique and synthesis."""

    _VISION_MODEL = 'gemini-2.5-flash'
    _IMAGE_MODEL = 'gemini-2.5-flash-image'

    def __init__(self, api_key: Optional[str] = None, client: Optional[Any] = None):
        """Initialize the gateway with Gemini API credentials or a ready client."""
        self.client = client if client is not None else genai.Client(api_key=api_key)
        self.vision_model = os.getenv('GEMINI_VISION_MODEL', self._VISION_MODEL)
        self.image_model = os.getenv('GEMINI_IMAGE_MODEL', self._IMAGE_MODEL)

    async def analyze(self, image_base64: str) -> AnalysisResult:
        """
        Critique an artwork.

        Args:
            image_base64: JPEG payload as base64 text, without a data: prefix

        Returns:
            The curator's AnalysisResult, or FALLBACK_ANALYSIS on any failure
        """
        try:
            image_part = types.Part.from_bytes(
                data=base64.b64decode(image_base64, validate=True),
                mime_type='image/jpeg',
            )
            response = await self.client.aio.models.generate_content(
                model=self.vision_model,
                contents=[
                    types.Content(
                        role='user',
                        parts=[image_part, types.Part.from_text(text=CRITIC_PROMPT)],
                    )
                ],
                config=types.GenerateContentConfig(
                    response_mime_type='application/json',
                    response_schema=ANALYSIS_SCHEMA,
                ),
            )

            if not response.text:
                raise ValueError("No analysis returned")

            return AnalysisResult.model_validate(json.loads(response.text))

        except Exception as e:
            print(f"Analysis failed: {e}", file=sys.stderr)
            return FALLBACK_ANALYSIS

    async def generate(self, prompt: str) -> str:
        """
        Create a new artwork from a text prompt.

        Args:
            prompt: Free-form description of the image

        Returns:
            PNG data URI built from the first inline image in the response

        Raises:
            ValueError: if the prompt is blank or no image came back
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty")

        try:
            response = await self.client.aio.models.generate_content(
                model=self.image_model,
                contents=prompt,
            )

            image_data = self._extract_image_bytes(response)
            if image_data is None:
                raise ValueError("No image data found in response")

            if isinstance(image_data, bytes):
                image_data = base64.b64encode(image_data).decode('utf-8')
            return to_data_uri(image_data, 'image/png')

        except Exception as e:
            print(f"Generation failed: {e}", file=sys.stderr)
            raise

    def _iter_response_parts(self, response) -> Iterable[Any]:
        """Yield the parts of the first candidate, tolerating missing fields."""
        candidates = getattr(response, 'candidates', None)
        if not candidates:
            return []
        content = getattr(candidates[0], 'content', None)
        return getattr(content, 'parts', None) or []

    def _extract_image_bytes(self, response) -> Optional[Union[bytes, str]]:
        """Return the data of the first part that carries inline image bytes."""
        for part in self._iter_response_parts(response):
            inline_data = getattr(part, 'inline_data', None)
            if not inline_data:
                continue
            data = getattr(inline_data, 'data', None)
            if data:
                return data
        return None
