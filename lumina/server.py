#!/usr/bin/env python3
"""
LUMINA Server - Gallery pages and JSON API.

Pages
-----
GET     /                          Gallery
GET     /atelier                   Creation workspace
GET     /about                     About
GET     /style.css                 Stylesheet

API
---
GET     /api/artworks              All artworks in the session
POST    /api/overlay/{artwork_id}  Open the detail overlay and critique the artwork
GET     /api/overlay               Current overlay state
DELETE  /api/overlay               Close the overlay
GET     /api/atelier               Current workspace state
POST    /api/atelier/generate      Generate a preview from a prompt
POST    /api/atelier/save          Add the preview to the gallery
GET     /api/atelier/download      Download the preview as PNG
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse, HTMLResponse, Response
from jinja2 import Environment, FileSystemLoader, select_autoescape

from . import __version__
from .gateway import GeminiGateway
from .models import Artwork, PromptRequest, ViewState
from .state import AppState

TEMPLATES_DIR = Path(__file__).parent / 'templates'

NAV_ITEMS = [
    (ViewState.GALLERY, 'Gallery', '/'),
    (ViewState.ATELIER, 'Atelier (Create)', '/atelier'),
    (ViewState.ABOUT, 'About', '/about'),
]


def create_app(state: Optional[AppState] = None) -> FastAPI:
    """
    Build the gallery application around one AppState.

    Args:
        state: Application state to serve; built from GEMINI_API_KEY when omitted

    Returns:
        Configured FastAPI app
    """
    if state is None:
        state = AppState(GeminiGateway(os.getenv('GEMINI_API_KEY')))

    app = FastAPI(title="Lumina Gallery", version=__version__)
    app.state.lumina = state

    jinja_env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(['html']),
    )

    def render(template_name: str, view: ViewState, **context) -> HTMLResponse:
        state.navigate(view)
        template = jinja_env.get_template(template_name)
        return HTMLResponse(template.render(nav_items=NAV_ITEMS, view=state.view, **context))

    # Pages

    @app.get('/', response_class=HTMLResponse)
    async def gallery_page():
        return render('gallery.html', ViewState.GALLERY, artworks=state.store.all())

    @app.get('/atelier', response_class=HTMLResponse)
    async def atelier_page():
        return render('atelier.html', ViewState.ATELIER, workspace=state.workspace.snapshot())

    @app.get('/about', response_class=HTMLResponse)
    async def about_page():
        return render('about.html', ViewState.ABOUT)

    @app.get('/style.css')
    async def stylesheet():
        return FileResponse(TEMPLATES_DIR / 'style.css', media_type='text/css')

    # Artworks and detail overlay

    @app.get('/api/artworks', response_model=List[Artwork])
    async def list_artworks():
        return state.store.all()

    @app.post('/api/overlay/{artwork_id}')
    async def open_overlay(artwork_id: str):
        artwork = state.store.get(artwork_id)
        if artwork is None:
            raise HTTPException(status_code=404, detail=f"Artwork not found: {artwork_id}")

        lifecycle = state.overlay.open(artwork)
        await lifecycle.run()
        return lifecycle.snapshot()

    @app.get('/api/overlay')
    async def get_overlay():
        return state.overlay.snapshot()

    @app.delete('/api/overlay')
    async def close_overlay():
        state.overlay.close()
        return state.overlay.snapshot()

    # Atelier

    @app.get('/api/atelier')
    async def get_workspace():
        return state.workspace.snapshot()

    @app.post('/api/atelier/generate')
    async def generate_artwork(request: PromptRequest):
        workspace = state.workspace
        try:
            preview = await workspace.generate(request.prompt)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except RuntimeError as e:
            raise HTTPException(status_code=409, detail=str(e))

        if preview is None:
            raise HTTPException(status_code=502, detail=workspace.notice)
        return workspace.snapshot()

    @app.post('/api/atelier/save', response_model=Artwork, status_code=201)
    async def save_artwork():
        try:
            return state.workspace.save()
        except RuntimeError as e:
            raise HTTPException(status_code=409, detail=str(e))

    @app.get('/api/atelier/download')
    async def download_artwork():
        try:
            filename, data = state.workspace.download()
        except RuntimeError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return Response(
            content=data,
            media_type='image/png',
            headers={'Content-Disposition': f'attachment; filename="{filename}"'},
        )

    return app


def main() -> int:
    parser = argparse.ArgumentParser(
        description='Serve the LUMINA gallery'
    )
    parser.add_argument(
        '--host',
        default='127.0.0.1',
        help='Interface to bind (default: 127.0.0.1)'
    )
    parser.add_argument(
        '-p', '--port',
        type=int,
        default=8000,
        help='Port to serve on (default: 8000)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show all HTTP requests in log'
    )
    args = parser.parse_args()

    load_dotenv(Path.cwd() / '.env')

    api_key = os.getenv('GEMINI_API_KEY')
    if not api_key:
        print("Error: GEMINI_API_KEY environment variable not set", file=sys.stderr)
        return 1

    app = create_app(AppState(GeminiGateway(api_key)))

    print("LUMINA Gallery")
    print(f"URL: http://{args.host}:{args.port}")
    print("Press Ctrl+C to stop\n")

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level='info' if args.verbose else 'warning',
        access_log=args.verbose,
    )
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
