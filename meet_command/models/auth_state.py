"""
Domain models for the per-user authorization record.

A record moves through three phases, ``auth`` -> ``callback`` -> ``done``,
and is always stored whole. The phase is the ``status`` discriminator.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

CredentialBundle = Dict[str, Any]


class Identity(BaseModel):
    """A chat user, addressed by workspace (team) and user id."""

    model_config = ConfigDict(frozen=True)

    team: str
    id: str

    @property
    def storage_key(self) -> str:
        return f"{self.team}/{self.id}/auth"

    def matches(self, other: "Identity") -> bool:
        return self.team == other.team and self.id == other.id


class AuthPending(Identity):
    """Authorization prompt link issued; waiting for the user to open it."""

    status: Literal["auth"] = "auth"
    setup: str


class CallbackPending(Identity):
    """User was sent to the provider; waiting for the OAuth callback."""

    status: Literal["callback"] = "callback"
    setup: str


class Authorized(Identity):
    """Provider tokens were obtained and are ready for use."""

    status: Literal["done"] = "done"
    tokens: CredentialBundle = Field(default_factory=dict)


PersistedAuthState = Annotated[
    Union[AuthPending, CallbackPending, Authorized],
    Field(discriminator="status"),
]

persisted_auth_state_adapter: TypeAdapter[PersistedAuthState] = TypeAdapter(PersistedAuthState)


__all__ = [
    "AuthPending",
    "Authorized",
    "CallbackPending",
    "CredentialBundle",
    "Identity",
    "PersistedAuthState",
    "persisted_auth_state_adapter",
]
