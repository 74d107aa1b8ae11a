"""
LUMINA Models - Artwork, critique and view types shared across the gallery.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Artwork(BaseModel):
    """A single browsable image with its descriptive metadata."""

    model_config = ConfigDict(frozen=True)

    id: str
    url: str = Field(..., description="Remote http(s) URL or a data URI.")
    title: str
    artist: str
    year: str
    description: Optional[str] = None
    is_generated: bool = False


class AnalysisResult(BaseModel):
    """Structured commentary returned by the curator for one artwork."""

    model_config = ConfigDict(frozen=True)

    title: str
    critique: str
    mood: str
    style: str


class ViewState(str, Enum):
    """Top-level screens reachable from the navigation bar."""

    GALLERY = 'GALLERY'
    ATELIER = 'ATELIER'
    ABOUT = 'ABOUT'


class PromptRequest(BaseModel):
    """Request body for ``POST /api/atelier/generate``."""

    prompt: str = Field(..., description="Free-form description of the artwork to create.")
