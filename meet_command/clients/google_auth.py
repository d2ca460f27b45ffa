"""
Google OAuth utilities.

These helpers build consent URLs and exchange authorization codes for the
Google Calendar integration.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx
from fastapi import status
from google.oauth2.credentials import Credentials

from meet_command.core.config import GoogleSettings
from meet_command.models import CredentialBundle, Identity

CALENDAR_EVENTS_SCOPE = "https://www.googleapis.com/auth/calendar.events"
SCOPES: tuple[str, ...] = (CALENDAR_EVENTS_SCOPE,)


class OAuthTokenExchangeError(Exception):
    """Raised when the token endpoint returns an error."""


class NotAuthorized(Exception):
    """Raised when provider credentials are requested before authorization completed."""


def encode_state(identity: Identity, setup: str) -> str:
    """Serialize the round-trip ``state`` value echoed back on callback."""
    return json.dumps({"team": identity.team, "id": identity.id, "setup": setup})


class GoogleOAuthClient:
    """Build Google authorization URLs and exchange authorization codes."""

    AUTH_BASE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        google_settings: GoogleSettings,
        credentials: Optional[CredentialBundle] = None,
        *,
        timeout: float = 10.0,
    ) -> None:
        self._google = google_settings
        self._credentials = credentials or None
        self._timeout = timeout

    @property
    def is_authorized(self) -> bool:
        return self._credentials is not None

    def build_authorization_url(self, state: str, access_type: str = "offline") -> str:
        """Construct the Google OAuth consent URL."""
        params = {
            "client_id": self._google.client_id,
            "redirect_uri": str(self._google.redirect_uri),
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "access_type": access_type,
            "prompt": "consent",
            "state": state,
        }
        return f"{self.AUTH_BASE_URL}?{urlencode(params)}"

    async def exchange_authorization_code(self, code: str) -> CredentialBundle:
        """
        Exchange an authorization code for tokens.

        Returns the token endpoint payload unchanged.
        """
        payload = {
            "code": code,
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "redirect_uri": str(self._google.redirect_uri),
            "grant_type": "authorization_code",
        }

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(self.TOKEN_URL, data=payload)

        if response.status_code != status.HTTP_200_OK:
            raise OAuthTokenExchangeError(response.text)

        token_payload: Dict[str, Any] = response.json()
        if not token_payload.get("access_token"):
            raise OAuthTokenExchangeError("Token payload returned from Google has no access token.")
        return token_payload

    def authorized_credentials(self) -> Credentials:
        """Return ``google-auth`` credentials usable with Google API clients."""
        if self._credentials is None:
            raise NotAuthorized("OAuth client was built without user credentials.")
        granted = self._credentials.get("scope")
        scopes = granted.split() if isinstance(granted, str) and granted else list(SCOPES)
        return Credentials(
            token=self._credentials.get("access_token"),
            refresh_token=self._credentials.get("refresh_token"),
            token_uri=self.TOKEN_URL,
            client_id=self._google.client_id,
            client_secret=self._google.client_secret,
            scopes=scopes,
        )


class OAuthClientFactory:
    """Build OAuth clients from the app registration, optionally pre-authorized."""

    def __init__(self, google_settings: GoogleSettings) -> None:
        self._google = google_settings

    def build(self, credentials: Optional[CredentialBundle] = None) -> GoogleOAuthClient:
        return GoogleOAuthClient(self._google, credentials)

    def generate_authorization_url(self, identity: Identity, setup: str) -> str:
        """Consent URL requesting offline calendar access for ``identity``."""
        return self.build().build_authorization_url(state=encode_state(identity, setup))


__all__ = [
    "CALENDAR_EVENTS_SCOPE",
    "GoogleOAuthClient",
    "NotAuthorized",
    "OAuthClientFactory",
    "OAuthTokenExchangeError",
    "SCOPES",
    "encode_state",
]
