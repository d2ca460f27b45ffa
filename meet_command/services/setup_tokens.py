"""Correlation tokens binding the legs of one authorization attempt."""

from __future__ import annotations

from meet_command.utils.ids import new_uuid7


class SetupTokenIssuer:
    """Issue time-ordered, unguessable setup tokens."""

    def issue(self) -> str:
        return new_uuid7()


__all__ = ["SetupTokenIssuer"]
