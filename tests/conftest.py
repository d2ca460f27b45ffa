"""Pytest configuration and fakes shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from typing import Optional

import pytest

from meet_command.clients.google_auth import GoogleOAuthClient, OAuthClientFactory
from meet_command.core.config import GoogleSettings
from meet_command.services import (
    AuthStateMachine,
    AuthStateStore,
    MeetCommandOrchestrator,
)

TOKENS = {
    "access_token": "access-token",
    "refresh_token": "refresh-token",
    "expires_in": 3599,
    "scope": "https://www.googleapis.com/auth/calendar.events",
    "token_type": "Bearer",
}


class InMemoryObjectStore:
    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.puts: list[str] = []

    def get(self, key: str) -> Optional[bytes]:
        return self.objects.get(key)

    def put(self, key: str, data: bytes) -> bool:
        self.puts.append(key)
        self.objects[key] = data
        return True


class RecordingOAuthClient(GoogleOAuthClient):
    def __init__(self, settings, credentials=None, *, factory: "FakeOAuthFactory") -> None:
        super().__init__(settings, credentials)
        self._factory = factory

    async def exchange_authorization_code(self, code: str) -> dict:
        self._factory.codes.append(code)
        if self._factory.exchange_error is not None:
            raise self._factory.exchange_error
        return dict(self._factory.tokens)


class FakeOAuthFactory(OAuthClientFactory):
    """Real URL generation, canned code exchange."""

    def __init__(self, settings: GoogleSettings) -> None:
        super().__init__(settings)
        self.codes: list[str] = []
        self.tokens = dict(TOKENS)
        self.exchange_error: Optional[Exception] = None

    def build(self, credentials=None) -> GoogleOAuthClient:
        return RecordingOAuthClient(self._google, credentials, factory=self)


class FakeCalendarClient:
    def __init__(self, link: str = "https://meet.google.com/abc-defg-hij") -> None:
        self.link = link
        self.calls: list[dict] = []

    async def create_meeting(self, credentials: dict) -> str:
        self.calls.append(credentials)
        return self.link


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def google_settings() -> GoogleSettings:
    return GoogleSettings(
        GOOGLE_CLIENT_ID="client",
        GOOGLE_CLIENT_SECRET="secret",
        GOOGLE_REDIRECT_URI="https://example.com/api/callback",
    )


@pytest.fixture
def object_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def state_store(object_store: InMemoryObjectStore) -> AuthStateStore:
    return AuthStateStore(object_store)


@pytest.fixture
def oauth_factory(google_settings: GoogleSettings) -> FakeOAuthFactory:
    return FakeOAuthFactory(google_settings)


@pytest.fixture
def state_machine(state_store: AuthStateStore, oauth_factory: FakeOAuthFactory) -> AuthStateMachine:
    return AuthStateMachine(state_store, oauth_factory)


@pytest.fixture
def calendar_client() -> FakeCalendarClient:
    return FakeCalendarClient()


@pytest.fixture
def orchestrator(
    state_machine: AuthStateMachine,
    oauth_factory: FakeOAuthFactory,
    calendar_client: FakeCalendarClient,
) -> MeetCommandOrchestrator:
    return MeetCommandOrchestrator(
        state_machine=state_machine,
        oauth_factory=oauth_factory,
        calendar_client=calendar_client,
        command_base_url="https://example.com/api/",
    )
