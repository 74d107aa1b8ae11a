"""
LUMINA - AI Curated Art Gallery

Components:
- encoding.py: Turns remote images and data URIs into base64 payloads
- gateway.py: Critiques and creates artworks using Gemini
- store.py: Holds the session's artworks (seed set plus creations)
- overlay.py: Runs the critique request behind the detail overlay
- atelier.py: Runs the creation workspace (generate, save, download)
- state.py: Top-level application state and navigation
- server.py: Serves the gallery pages and JSON API
"""

__version__ = '1.0.0'
