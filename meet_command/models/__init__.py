"""Domain model exports."""

from .auth_state import (
    AuthPending,
    Authorized,
    CallbackPending,
    CredentialBundle,
    Identity,
    PersistedAuthState,
    persisted_auth_state_adapter,
)

__all__ = [
    "AuthPending",
    "Authorized",
    "CallbackPending",
    "CredentialBundle",
    "Identity",
    "PersistedAuthState",
    "persisted_auth_state_adapter",
]
