"""
Authorization state machine for the Google Calendar OAuth flow.

Each user moves ``auth`` -> ``callback`` -> ``done``. The three legs (slash
command, auth redirect, OAuth callback) are served by independent requests
and are bound together only by the stored record and its setup token.
Identities are visible to everyone in a workspace, so a transition is
allowed only when both the identity and the setup token match.
"""

from __future__ import annotations

import logging
from typing import Optional

from meet_command.clients.google_auth import NotAuthorized, OAuthClientFactory
from meet_command.models import (
    AuthPending,
    Authorized,
    CallbackPending,
    CredentialBundle,
    Identity,
    PersistedAuthState,
)
from meet_command.services.auth_state import AuthStateStore
from meet_command.services.identity import InvalidState
from meet_command.services.setup_tokens import SetupTokenIssuer

logger = logging.getLogger(__name__)


class AuthStateMachine:
    """Enforces the per-user authorization protocol."""

    def __init__(
        self,
        store: AuthStateStore,
        oauth_factory: OAuthClientFactory,
        token_issuer: Optional[SetupTokenIssuer] = None,
    ) -> None:
        self._store = store
        self._oauth_factory = oauth_factory
        self._issuer = token_issuer or SetupTokenIssuer()

    def start(self, identity: Identity) -> str:
        """Begin a fresh attempt from any state and return its setup token."""
        setup = self._issuer.issue()
        self._store.save(identity, AuthPending(team=identity.team, id=identity.id, setup=setup))
        logger.info("Started authorization for %s/%s", identity.team, identity.id)
        return setup

    def _verify(
        self,
        identity: Identity,
        setup: str,
        expected: type[AuthPending] | type[CallbackPending],
    ) -> bool:
        state: Optional[PersistedAuthState] = self._store.load(identity)
        verified = (
            isinstance(state, expected)
            and state.matches(identity)
            and bool(setup)
            and state.setup == setup
        )
        if not verified:
            logger.info(
                "Rejected %s check for %s/%s (stored phase: %s)",
                expected.__name__,
                identity.team,
                identity.id,
                state.status if state is not None else "none",
            )
        return verified

    def verify_auth_edge(self, identity: Identity, setup: str) -> bool:
        return self._verify(identity, setup, AuthPending)

    def advance_to_callback(self, identity: Identity, setup: str) -> None:
        """Move a verified ``auth`` record to ``callback`` keeping the same token."""
        if not self.verify_auth_edge(identity, setup):
            raise InvalidState("Authorization record is not awaiting the auth redirect.")
        self._store.save(identity, CallbackPending(team=identity.team, id=identity.id, setup=setup))

    def verify_callback_edge(self, identity: Identity, setup: str) -> bool:
        return self._verify(identity, setup, CallbackPending)

    async def finalize(self, identity: Identity, code: str, setup: str) -> CredentialBundle:
        """Exchange ``code`` for tokens and mark the user authorized.

        The record stays at ``callback`` when the exchange fails.
        """
        if not self.verify_callback_edge(identity, setup):
            raise InvalidState("Authorization record is not awaiting the OAuth callback.")
        tokens = await self._oauth_factory.build().exchange_authorization_code(code)
        self._store.save(identity, Authorized(team=identity.team, id=identity.id, tokens=tokens))
        logger.info("Authorization completed for %s/%s", identity.team, identity.id)
        return tokens

    def _authorized_record(self, identity: Identity) -> Optional[Authorized]:
        state = self._store.load(identity)
        if isinstance(state, Authorized) and state.matches(identity) and state.tokens:
            return state
        return None

    def is_ready(self, identity: Identity) -> bool:
        return self._authorized_record(identity) is not None

    def get_credentials(self, identity: Identity) -> CredentialBundle:
        record = self._authorized_record(identity)
        if record is None:
            raise NotAuthorized(f"No usable credentials stored for {identity.team}/{identity.id}.")
        return record.tokens


__all__ = ["AuthStateMachine", "NotAuthorized"]
