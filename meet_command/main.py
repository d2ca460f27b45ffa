"""
FastAPI application entrypoint for the Google Meet slash command.
"""

from __future__ import annotations

from fastapi import FastAPI

from meet_command.api.routes import router as api_router
from meet_command.core.config import get_settings
from meet_command.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Google Meet Slash Command",
        version="0.1.0",
        description="Slack slash command that authorizes Google Calendar and creates Meet links.",
    )
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
