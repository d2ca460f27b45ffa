"""Google Calendar client wrapper for creating ad-hoc Meet events."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from googleapiclient.discovery import build

from meet_command.utils.ids import new_uuid7

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from meet_command.clients.google_auth import OAuthClientFactory
    from meet_command.models import CredentialBundle

logger = logging.getLogger(__name__)

MEETING_DURATION = timedelta(hours=1)


class GoogleCalendarClient:
    """Insert events with a Google Meet conference into the user's calendar."""

    def __init__(self, oauth_factory: "OAuthClientFactory", calendar_id: str = "primary") -> None:
        self._oauth_factory = oauth_factory
        self._calendar_id = calendar_id

    async def create_meeting(self, credentials: "CredentialBundle") -> str:
        """Create a one-hour event starting now and return its Meet link.

        Failures are logged and yield an empty string.
        """
        google_credentials = self._oauth_factory.build(credentials).authorized_credentials()
        start = datetime.now(timezone.utc)
        meeting_id = new_uuid7()

        def _execute_insert() -> dict:
            service = build("calendar", "v3", credentials=google_credentials, cache_discovery=False)
            # API reference: https://developers.google.com/calendar/api/v3/reference/events/insert
            return (
                service.events()
                .insert(
                    calendarId=self._calendar_id,
                    conferenceDataVersion=1,
                    body={
                        "summary": f"Meeting {meeting_id}",
                        "start": {"dateTime": start.isoformat()},
                        "end": {"dateTime": (start + MEETING_DURATION).isoformat()},
                        "conferenceData": {"createRequest": {"requestId": meeting_id}},
                    },
                )
                .execute()
            )

        try:
            event = await asyncio.to_thread(_execute_insert)
        except Exception:
            logger.exception("Failed to insert an event to Google Calendar.")
            return ""
        return event.get("hangoutLink") or ""


__all__ = ["GoogleCalendarClient", "MEETING_DURATION"]
