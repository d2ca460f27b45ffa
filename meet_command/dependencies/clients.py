"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from meet_command.clients import (
    GoogleCalendarClient,
    OAuthClientFactory,
    S3ObjectStore,
    SQLiteObjectStore,
)
from meet_command.core.config import AppSettings, get_settings
from meet_command.services import (
    AuthStateMachine,
    AuthStateStore,
    MeetCommandOrchestrator,
    TokenCipherService,
)
from meet_command.services.auth_state import ObjectStore


@lru_cache()
def _settings() -> AppSettings:
    """Internal helper to cache settings for client factories."""
    return get_settings()


def build_object_store(settings: AppSettings) -> ObjectStore:
    """Select the configured key-value backend."""
    if settings.storage.backend == "sqlite":
        return SQLiteObjectStore(settings.storage.sqlite_path)
    return S3ObjectStore(settings.storage)


def build_orchestrator(settings: AppSettings) -> MeetCommandOrchestrator:
    """Wire the slash command services from an explicit settings object."""
    secret = settings.security.token_encryption_secret
    cipher = TokenCipherService(secret=secret) if secret else None
    oauth_factory = OAuthClientFactory(settings.google)
    store = AuthStateStore(build_object_store(settings), cipher=cipher)
    return MeetCommandOrchestrator(
        state_machine=AuthStateMachine(store, oauth_factory),
        oauth_factory=oauth_factory,
        calendar_client=GoogleCalendarClient(oauth_factory),
        command_base_url=str(settings.command_base_url),
    )


@lru_cache()
def get_meet_command_orchestrator() -> MeetCommandOrchestrator:
    """Provide the process-wide orchestrator."""
    return build_orchestrator(_settings())


__all__ = [
    "build_object_store",
    "build_orchestrator",
    "get_meet_command_orchestrator",
]
