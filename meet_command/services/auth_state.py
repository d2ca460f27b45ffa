"""
Persistence for per-user authorization records.

One record per identity lives at ``<team>/<id>/auth`` in the object store.
Writes are unconditional full overwrites, so concurrent flows for the same
user race and the last write wins.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from pydantic import ValidationError

from meet_command.models import Identity, PersistedAuthState, persisted_auth_state_adapter
from meet_command.services.token_cipher import TokenCipherService

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    def get(self, key: str) -> Optional[bytes]: ...

    def put(self, key: str, data: bytes) -> bool: ...


class AuthStateStore:
    """Load and save ``PersistedAuthState`` records through an object store."""

    def __init__(self, object_store: ObjectStore, cipher: Optional[TokenCipherService] = None) -> None:
        self._objects = object_store
        self._cipher = cipher

    @staticmethod
    def key(identity: Identity) -> str:
        return identity.storage_key

    def load(self, identity: Identity) -> Optional[PersistedAuthState]:
        """Return the stored record, or ``None`` when absent or undecodable."""
        key = self.key(identity)
        raw = self._objects.get(key)
        if not raw:
            return None
        try:
            if self._cipher is not None:
                raw = self._cipher.decrypt(raw)
            return persisted_auth_state_adapter.validate_json(raw)
        except (ValueError, ValidationError):
            logger.warning("Discarding unreadable auth record at %s", key)
            return None

    def save(self, identity: Identity, state: PersistedAuthState) -> bool:
        """Overwrite the record for ``identity``."""
        data = persisted_auth_state_adapter.dump_json(state)
        if self._cipher is not None:
            data = self._cipher.encrypt(data)
        saved = self._objects.put(self.key(identity), data)
        if not saved:
            logger.error("Failed to persist %s auth record for %s", state.status, self.key(identity))
        return saved


__all__ = ["AuthStateStore", "ObjectStore"]
