"""
Static file host for the pre-built front end.
Logs every request and exposes the top stories API route.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import asdict, replace
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.staticfiles import StaticFiles

from .config import Settings, load_settings, redact_api_key, setup_logging
from .datamodels import FetchFailure
from .exceptions import ConfigurationError
from .sources.base import Source
from .sources.nyt import NYTSource

logger = logging.getLogger("top_stories")


def create_app(settings: Settings, source: Optional[Source] = None) -> FastAPI:
    """Build the server application for the given settings."""
    if source is None:
        source = NYTSource(settings)

    if not os.path.isdir(settings.dist_dir):
        logger.warning("Static directory %s does not exist", settings.dist_dir)

    app = FastAPI(title="Top Stories")
    app.state.source = source

    @app.middleware("http")
    async def log_routes(request: Request, call_next):
        time = datetime.now().strftime("%x, %X")
        path = request.url.path
        if request.url.query:
            path = f"{path}?{redact_api_key(request.url.query, settings.api_key)}"
        logger.info("%s: %s - %s", request.method, path, time)
        return await call_next(request)

    @app.get("/api/top-arts-stories")
    def top_arts_stories():
        """Fetch the current top stories and return them as JSON."""
        result = app.state.source.get_top_stories()
        if isinstance(result, FetchFailure):
            raise HTTPException(status_code=502, detail=str(result.error))
        return [asdict(story) for story in result.stories]

    # Mounted last so the API route takes precedence over the catch-all.
    app.mount(
        "/",
        StaticFiles(directory=settings.dist_dir, html=True, check_dir=False),
        name="static",
    )
    return app


# --- Entrypoint ---
def main() -> None:
    parser = argparse.ArgumentParser(description="Top Stories static file server")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--dist", type=str, help="Directory of built front-end assets")
    args = parser.parse_args()

    setup_logging(args.debug, console=True)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        sys.exit(1)

    if args.port:
        settings = replace(settings, port=args.port)
    if args.dist:
        settings = replace(settings, dist_dir=args.dist)

    app = create_app(settings)
    logger.info("Serving static files from %s", settings.dist_dir)
    logger.info("Server is now running on http://localhost:%d", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level="warning")


if __name__ == "__main__":
    main()
