"""
Leaderboard HTTP Server

FastAPI application serving the aggregated leaderboard as JSON:
- GET /api/leaderboard -> {scores, details, ...} (200) or {error} (500)
- GET /health          -> {status: ok}

Usage:
    python -m api.server
    OR
    uvicorn api.server:app --port 8000
"""

import sys
from pathlib import Path

# Enable both `python api/server.py` and `python -m api.server` execution modes.
# This ensures bragging_rights imports work regardless of how the script is invoked.
_project_root = str(Path(__file__).parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import os
import time
from typing import Generator

from fastapi import APIRouter, Depends, FastAPI
from fastapi.responses import JSONResponse

from api import __version__
from bragging_rights.config import Settings, get_settings
from bragging_rights.ingestion.github_client import GitHubClient, LeaderboardError
from bragging_rights.scoring.aggregator import build_leaderboard
from bragging_rights.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

ERROR_MESSAGE = "Failed to fetch leaderboard data"

router = APIRouter()


def get_app_settings() -> Settings:
    """Dependency: settings read from the environment on every request."""
    return get_settings()


def get_github_client(settings: Settings = Depends(get_app_settings)) -> Generator[GitHubClient, None, None]:
    """Dependency: GitHub client closed after the request."""
    client = GitHubClient(token=settings.github_token)
    try:
        yield client
    finally:
        client.close()


def get_sleep():
    """Dependency: delay function used between file-mode lookups."""
    return time.sleep


@router.get("/leaderboard")
def get_leaderboard(
    settings: Settings = Depends(get_app_settings),
    client: GitHubClient = Depends(get_github_client),
    sleep=Depends(get_sleep),
):
    """Compute the leaderboard from the configured repository."""
    try:
        result = build_leaderboard(client, settings, sleep=sleep)
    except (LeaderboardError, ValueError):
        logger.exception("Error fetching leaderboard data")
        return JSONResponse(status_code=500, content={"error": ERROR_MESSAGE})

    return JSONResponse(content=result.to_payload(), headers={"Cache-Control": "no-store"})


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title="Bragging Rights API",
        description="Difficulty-tag leaderboard over a GitHub practice repository",
        version=__version__,
    )
    app.include_router(router, prefix="/api")

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()


def main():
    import uvicorn

    uvicorn.run(
        "api.server:app",
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
