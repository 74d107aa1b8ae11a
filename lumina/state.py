"""
LUMINA State - Everything the gallery remembers for the lifetime of the process.
"""

from typing import Optional

from .atelier import CreationWorkspace
from .encoding import url_to_base64
from .models import ViewState
from .overlay import DetailOverlay, Fetcher
from .store import ArtworkStore


class AppState:
    """Owns the artwork store, the detail overlay, the atelier and the active view."""

    def __init__(self, gateway, store: Optional[ArtworkStore] = None, fetch: Fetcher = url_to_base64):
        self.gateway = gateway
        self.store = store if store is not None else ArtworkStore()
        self.overlay = DetailOverlay(gateway, fetch=fetch)
        self.workspace = CreationWorkspace(gateway, self.store)
        self.view = ViewState.GALLERY

    def navigate(self, view: ViewState) -> ViewState:
        self.view = ViewState(view)
        return self.view
