"""
FastAPI routes for the ``/meet`` slash command.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from meet_command.clients.google_auth import OAuthTokenExchangeError
from meet_command.core.config import AppSettings
from meet_command.dependencies import get_app_settings, get_meet_command_orchestrator
from meet_command.schemas import HandlerResponse
from meet_command.services import MeetCommandOrchestrator

router = APIRouter()
logger = logging.getLogger(__name__)

EXCHANGE_FAILED_MESSAGE = "Failed to exchange authorization code."


def _to_response(result: HandlerResponse) -> Response:
    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
        media_type=result.media_type,
    )


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(settings: Annotated[AppSettings, Depends(get_app_settings)]) -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok", "environment": settings.environment}


@router.post("/slack/command")
async def handle_slash_command(
    request: Request,
    orchestrator: Annotated[MeetCommandOrchestrator, Depends(get_meet_command_orchestrator)],
) -> Response:
    """Reply with a meeting link, or with an authorization prompt for new users."""
    body = await request.body()
    return _to_response(await orchestrator.on_command(body))


@router.get("/auth")
async def handle_auth_redirect(
    request: Request,
    orchestrator: Annotated[MeetCommandOrchestrator, Depends(get_meet_command_orchestrator)],
) -> Response:
    """Verify the authorization prompt link and send the user to Google."""
    return _to_response(await orchestrator.on_auth_redirect(dict(request.query_params)))


@router.get("/callback")
async def handle_google_oauth_callback(
    request: Request,
    orchestrator: Annotated[MeetCommandOrchestrator, Depends(get_meet_command_orchestrator)],
) -> Response:
    """Complete the OAuth exchange and store the user's tokens."""
    try:
        result = await orchestrator.on_callback(dict(request.query_params))
    except OAuthTokenExchangeError:
        logger.exception("Google rejected the authorization code exchange")
        return Response(
            content=EXCHANGE_FAILED_MESSAGE,
            status_code=HTTPStatus.BAD_GATEWAY,
            media_type="text/plain",
        )
    return _to_response(result)


__all__ = ["router"]
