"""
Request legs of the ``/meet`` slash command.

Each entry point turns one inbound request into a ``HandlerResponse`` and
keeps no state between invocations. The FastAPI routes and the Lambda
handlers are thin adapters over this class.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode

from meet_command.clients.google_auth import OAuthClientFactory
from meet_command.clients.google_calendar import GoogleCalendarClient
from meet_command.schemas import HandlerResponse, SlackMessage
from meet_command.services.auth_flow import AuthStateMachine
from meet_command.services.identity import (
    InvalidState,
    MalformedRequest,
    extract_setup,
    parse_from_command_body,
    parse_from_opaque_state,
    parse_from_query,
)
from meet_command.services.slack_messages import create_message

logger = logging.getLogger(__name__)

AUTH_FAILED_MESSAGE = "Authentication failed. Please check your credentials and try again."
CALLBACK_FAILED_MESSAGE = "Callback verification failed. Invalid setup or user information."
CALLBACK_OK_MESSAGE = "Callback verification successful. User is ready to use the service."
MALFORMED_COMMAND_MESSAGE = "Could not read the slash command request."


def _slack_response(message: SlackMessage) -> HandlerResponse:
    return HandlerResponse(
        status_code=HTTPStatus.OK,
        body=message.model_dump_json(),
        media_type="application/json",
    )


class MeetCommandOrchestrator:
    """Map the command, auth redirect and callback legs onto the auth state machine."""

    def __init__(
        self,
        *,
        state_machine: AuthStateMachine,
        oauth_factory: OAuthClientFactory,
        calendar_client: GoogleCalendarClient,
        command_base_url: str,
    ) -> None:
        self._flow = state_machine
        self._oauth_factory = oauth_factory
        self._calendar = calendar_client
        self._base_url = command_base_url.rstrip("/")

    def authorization_prompt_url(self, team: str, user_id: str, setup: str) -> str:
        query = urlencode({"id": user_id, "team": team, "setup": setup})
        return f"{self._base_url}/auth?{query}"

    async def on_command(self, body: Union[str, bytes, None]) -> HandlerResponse:
        try:
            identity = parse_from_command_body(body)
        except MalformedRequest:
            logger.warning("Rejected malformed slash command payload")
            return HandlerResponse(status_code=HTTPStatus.BAD_REQUEST, body=MALFORMED_COMMAND_MESSAGE)

        logger.info("Slash command from %s/%s", identity.team, identity.id)

        if self._flow.is_ready(identity):
            url = await self._calendar.create_meeting(self._flow.get_credentials(identity))
            if not url:
                return _slack_response(
                    create_message(
                        "Sorry, the meeting could not be created in Google Calendar. Please try again."
                    )
                )
            return _slack_response(
                create_message([f"<{url}|Open Google Meet>", f"Meeting URL: {url}"], "everyone")
            )

        setup = self._flow.start(identity)
        url = self.authorization_prompt_url(identity.team, identity.id, setup)
        return _slack_response(
            create_message(
                [
                    "Thank you for using *Google Meet slash command* :tada:",
                    "*Usage:* Just run command `/meet` to get a meeting URL.",
                    "Before you start using this command, please give permission. Click the link below.",
                    f"<{url}|Allow to access Google Calendar>",
                ]
            )
        )

    async def on_auth_redirect(self, query: Optional[Mapping[str, Any]]) -> HandlerResponse:
        unauthorized = HandlerResponse(status_code=HTTPStatus.UNAUTHORIZED, body=AUTH_FAILED_MESSAGE)
        try:
            identity = parse_from_query(query)
        except MalformedRequest:
            return unauthorized

        setup = (query or {}).get("setup") or ""
        if not self._flow.verify_auth_edge(identity, setup):
            return unauthorized

        try:
            self._flow.advance_to_callback(identity, setup)
        except InvalidState:
            return unauthorized
        location = self._oauth_factory.generate_authorization_url(identity, setup)
        return HandlerResponse(status_code=HTTPStatus.FOUND, headers={"Location": location})

    async def on_callback(self, query: Optional[Mapping[str, Any]]) -> HandlerResponse:
        """Complete the flow. Code exchange errors propagate to the caller."""
        bad_request = HandlerResponse(status_code=HTTPStatus.BAD_REQUEST, body=CALLBACK_FAILED_MESSAGE)
        params = query or {}
        code = params.get("code")
        state = params.get("state")
        try:
            identity = parse_from_opaque_state(state)
            setup = extract_setup(state)
        except InvalidState:
            return bad_request
        if not code or not self._flow.verify_callback_edge(identity, setup):
            return bad_request

        try:
            await self._flow.finalize(identity, code, setup)
        except InvalidState:
            return bad_request
        return HandlerResponse(status_code=HTTPStatus.OK, body=CALLBACK_OK_MESSAGE)


__all__ = [
    "AUTH_FAILED_MESSAGE",
    "CALLBACK_FAILED_MESSAGE",
    "CALLBACK_OK_MESSAGE",
    "MALFORMED_COMMAND_MESSAGE",
    "MeetCommandOrchestrator",
]
