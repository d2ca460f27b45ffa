"""Service layer exports."""

from .auth_flow import AuthStateMachine, NotAuthorized
from .auth_state import AuthStateStore
from .identity import InvalidState, MalformedRequest
from .meet_command import MeetCommandOrchestrator
from .setup_tokens import SetupTokenIssuer
from .token_cipher import TokenCipherService

__all__ = [
    "AuthStateMachine",
    "AuthStateStore",
    "InvalidState",
    "MalformedRequest",
    "MeetCommandOrchestrator",
    "NotAuthorized",
    "SetupTokenIssuer",
    "TokenCipherService",
]
