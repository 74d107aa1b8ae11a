"""
LUMINA Atelier - Creation workspace.
Turns a prompt into a preview, then into a gallery artwork or a downloaded file.
"""

import sys
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from .encoding import decode_data_uri
from .models import Artwork
from .store import ArtworkStore

FAILURE_NOTICE = "Failed to generate art. Please try again."


class WorkspaceState(str, Enum):
    IDLE = 'idle'
    GENERATING = 'generating'
    PREVIEW = 'preview'


class CreationWorkspace:
    """Generates artworks from prompts and hands finished ones to the store."""

    ARTIST = "Gemini AI"
    TITLE_LIMIT = 20

    def __init__(self, gateway, store: ArtworkStore, clock: Callable[[], datetime] = datetime.now):
        self.gateway = gateway
        self.store = store
        self.clock = clock
        self.state = WorkspaceState.IDLE
        self.prompt = ''
        self.preview: Optional[str] = None
        self.notice: Optional[str] = None

    async def generate(self, prompt: str) -> Optional[str]:
        """
        Ask the gateway for a new image.

        Args:
            prompt: Non-empty description of the artwork

        Returns:
            The preview data URI, or None when generation failed
            (the prompt is kept and ``notice`` explains the failure)
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty")
        if self.state is WorkspaceState.GENERATING:
            raise RuntimeError("A generation is already in progress")

        self.prompt = prompt
        self.preview = None
        self.notice = None
        self.state = WorkspaceState.GENERATING

        try:
            preview = await self.gateway.generate(prompt)
        except Exception as e:
            print(f"Atelier generation failed: {e}", file=sys.stderr)
            self.notice = FAILURE_NOTICE
            self.state = WorkspaceState.IDLE
            return None

        self.preview = preview
        self.state = WorkspaceState.PREVIEW
        return preview

    def save(self) -> Artwork:
        """Add the current preview to the gallery and reset the workspace."""
        if self.preview is None:
            raise RuntimeError("Nothing to save: generate an artwork first")

        now = self.clock()
        title = self.prompt
        if len(title) > self.TITLE_LIMIT:
            title = title[:self.TITLE_LIMIT] + "..."

        artwork = Artwork(
            id=str(int(now.timestamp() * 1000)),
            url=self.preview,
            title=title,
            artist=self.ARTIST,
            year=str(now.year),
            is_generated=True,
        )
        self.store.add(artwork)

        self.prompt = ''
        self.preview = None
        self.notice = None
        self.state = WorkspaceState.IDLE
        return artwork

    def download(self) -> Tuple[str, bytes]:
        """Return a filename and the PNG bytes of the current preview."""
        if self.preview is None:
            raise RuntimeError("Nothing to download: generate an artwork first")
        filename = f"lumina-art-{int(self.clock().timestamp() * 1000)}.png"
        return filename, decode_data_uri(self.preview)

    def snapshot(self) -> Dict[str, Any]:
        return {
            'state': self.state.value,
            'prompt': self.prompt,
            'preview': self.preview,
            'notice': self.notice,
        }
