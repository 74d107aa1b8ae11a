"""
LUMINA Overlay - Critique request lifecycle behind the artwork detail view.

Each time the overlay opens for an artwork a fresh CritiqueLifecycle is
mounted with its own CancellationToken. Closing the overlay or picking
another artwork cancels the token. Results that arrive afterwards are
dropped without touching the retired lifecycle's state. The network call
itself is not aborted.
"""

import sys
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

from .encoding import is_data_uri, payload_from_data_uri, url_to_base64
from .models import AnalysisResult, Artwork

Fetcher = Callable[[str], Awaitable[str]]


class CritiqueState(str, Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    SUCCESS = 'success'
    UNAVAILABLE = 'unavailable'


class CancellationToken:
    """Liveness flag handed to one unit of asynchronous work."""

    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class CritiqueLifecycle:
    """One overlay mount: fetch the image payload, request a critique, keep the result."""

    def __init__(
        self,
        artwork: Artwork,
        gateway,
        fetch: Fetcher = url_to_base64,
        token: Optional[CancellationToken] = None
    ):
        self.artwork = artwork
        self.gateway = gateway
        self.fetch = fetch
        self.token = token or CancellationToken()
        self.state = CritiqueState.IDLE
        self.analysis: Optional[AnalysisResult] = None

    @property
    def active(self) -> bool:
        return not self.token.cancelled

    def retire(self):
        """Unmount: any late resolution is discarded."""
        self.token.cancel()

    async def run(self):
        """Drive Idle -> Loading -> Success | Unavailable once."""
        if self.state is not CritiqueState.IDLE or self.token.cancelled:
            return

        self.state = CritiqueState.LOADING

        try:
            payload = await self._load_payload()
        except Exception as e:
            print(f"Could not load image for artwork {self.artwork.id}: {e}", file=sys.stderr)
            if not self.token.cancelled:
                self.state = CritiqueState.UNAVAILABLE
            return

        if self.token.cancelled:
            return

        # analyze() never raises; it degrades to the fallback critique
        result = await self.gateway.analyze(payload)

        if self.token.cancelled:
            return

        self.analysis = result
        self.state = CritiqueState.SUCCESS

    async def _load_payload(self) -> str:
        """Use embedded bytes directly; fetch remote images."""
        if is_data_uri(self.artwork.url):
            return payload_from_data_uri(self.artwork.url)
        return await self.fetch(self.artwork.url)

    def snapshot(self) -> Dict[str, Any]:
        return {
            'artwork_id': self.artwork.id,
            'state': self.state.value,
            'analysis': self.analysis.model_dump() if self.analysis else None,
            'active': self.active,
        }


class DetailOverlay:
    """Holds the lifecycle currently mounted in the detail overlay."""

    def __init__(self, gateway, fetch: Fetcher = url_to_base64):
        self.gateway = gateway
        self.fetch = fetch
        self.current: Optional[CritiqueLifecycle] = None

    def open(self, artwork: Artwork) -> CritiqueLifecycle:
        """Retire whatever is mounted and mount a fresh lifecycle for the artwork."""
        self.close()
        self.current = CritiqueLifecycle(artwork, self.gateway, fetch=self.fetch)
        return self.current

    def close(self):
        if self.current is not None:
            self.current.retire()
            self.current = None

    def snapshot(self) -> Dict[str, Any]:
        if self.current is None:
            return {'artwork_id': None, 'state': CritiqueState.IDLE.value, 'analysis': None, 'active': False}
        return self.current.snapshot()
