"""Expose constructed client wrappers."""

from .google_auth import GoogleOAuthClient, OAuthClientFactory
from .google_calendar import GoogleCalendarClient
from .s3_store import S3ObjectStore
from .sqlite_store import SQLiteObjectStore

__all__ = [
    "GoogleCalendarClient",
    "GoogleOAuthClient",
    "OAuthClientFactory",
    "S3ObjectStore",
    "SQLiteObjectStore",
]
