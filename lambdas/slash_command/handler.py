"""
AWS Lambda entrypoints for the slash command legs behind API Gateway.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from functools import lru_cache
from http import HTTPStatus
from typing import Any, Dict, Optional, Union

from meet_command.clients.google_auth import OAuthTokenExchangeError
from meet_command.core.config import get_settings
from meet_command.core.logging import configure_logging
from meet_command.dependencies import build_orchestrator
from meet_command.schemas import HandlerResponse
from meet_command.services import MeetCommandOrchestrator
from meet_command.services.meet_command import MALFORMED_COMMAND_MESSAGE

logger = logging.getLogger(__name__)


@lru_cache()
def _bootstrap() -> MeetCommandOrchestrator:
    """Initialize shared singletons for the Lambda runtime."""
    settings = get_settings()
    configure_logging(settings.log_level)
    return build_orchestrator(settings)


def _to_proxy_result(result: HandlerResponse) -> Dict[str, Any]:
    headers = {"Content-Type": result.media_type, **result.headers}
    return {"statusCode": int(result.status_code), "headers": headers, "body": result.body}


def _event_body(event: Dict[str, Any]) -> Optional[Union[str, bytes]]:
    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        return base64.b64decode(body, validate=True)
    return body


def create(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Slash command invocation: reply with a meeting link or an authorization prompt."""
    try:
        body = _event_body(event)
    except binascii.Error:
        logger.warning("Rejected slash command body that is not valid base64")
        return _to_proxy_result(
            HandlerResponse(status_code=HTTPStatus.BAD_REQUEST, body=MALFORMED_COMMAND_MESSAGE)
        )
    result = asyncio.run(_bootstrap().on_command(body))
    return _to_proxy_result(result)


def auth(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Authorization prompt link: redirect verified users to Google."""
    result = asyncio.run(_bootstrap().on_auth_redirect(event.get("queryStringParameters")))
    return _to_proxy_result(result)


def callback(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """OAuth callback from Google: exchange the code and store tokens."""
    try:
        result = asyncio.run(_bootstrap().on_callback(event.get("queryStringParameters")))
    except OAuthTokenExchangeError:
        logger.exception("Google rejected the authorization code exchange")
        return {
            "statusCode": int(HTTPStatus.BAD_GATEWAY),
            "headers": {"Content-Type": "text/plain"},
            "body": "Failed to exchange authorization code.",
        }
    return _to_proxy_result(result)


__all__ = ["auth", "callback", "create"]
