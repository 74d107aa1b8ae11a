"""
LUMINA Store - In-memory artwork collection for one gallery session.
"""

from typing import Any, Dict, Iterable, List, Optional

from .models import Artwork

SEED_ARTWORKS: List[Dict[str, Any]] = [
    {
        'id': '1',
        'url': 'https://picsum.photos/id/1015/800/1000',
        'title': 'River of Silence',
        'artist': 'Elena Voss',
        'year': '2019',
        'description': 'A glacial river carving through a quiet valley.',
    },
    {
        'id': '2',
        'url': 'https://picsum.photos/id/1025/800/1000',
        'title': 'The Patient Guest',
        'artist': 'Marcus Hale',
        'year': '2021',
        'description': 'A study of stillness and expectation.',
    },
    {
        'id': '3',
        'url': 'https://picsum.photos/id/1039/800/1000',
        'title': 'Falling Light',
        'artist': 'Aiko Tanaka',
        'year': '2018',
    },
    {
        'id': '4',
        'url': 'https://picsum.photos/id/1043/800/1000',
        'title': 'Harbor at Dusk',
        'artist': 'Jonas Berg',
        'year': '2020',
        'description': 'Evening settling over a northern harbor.',
    },
    {
        'id': '5',
        'url': 'https://picsum.photos/id/1059/800/1000',
        'title': 'Quiet Geometry',
        'artist': 'Lucía Moreno',
        'year': '2022',
    },
    {
        'id': '6',
        'url': 'https://picsum.photos/id/1069/800/1000',
        'title': 'Deep Blue Reverie',
        'artist': 'Samuel Okafor',
        'year': '2017',
        'description': 'Drifting forms beneath the surface.',
    },
]


class ArtworkStore:
    """Ordered, append-only collection of the artworks known to the gallery."""

    def __init__(self, seed: Optional[Iterable[Dict[str, Any]]] = None):
        """Seed the store from SEED_ARTWORKS unless another seed is given."""
        self._artworks: List[Artwork] = []
        for entry in (SEED_ARTWORKS if seed is None else seed):
            self.add(entry if isinstance(entry, Artwork) else Artwork(**entry))

    def all(self) -> List[Artwork]:
        """Return every artwork in insertion order."""
        return list(self._artworks)

    def get(self, artwork_id: str) -> Optional[Artwork]:
        """Look up an artwork by id."""
        for artwork in self._artworks:
            if artwork.id == artwork_id:
                return artwork
        return None

    def add(self, artwork: Artwork) -> Artwork:
        """Append an artwork; ids must be unique."""
        if self.get(artwork.id) is not None:
            raise ValueError(f"Artwork id already exists: {artwork.id}")
        self._artworks.append(artwork)
        return artwork

    def __len__(self) -> int:
        return len(self._artworks)
