"""API Gateway handlers for the ``/meet`` slash command.

Each leg of the OAuth flow is deployed as its own Lambda function.
"""

from __future__ import annotations

from typing import Any

_HANDLERS = ("auth", "callback", "create")


def __getattr__(name: str) -> Any:
    if name in _HANDLERS:
        from . import handler

        return getattr(handler, name)
    raise AttributeError(name)


__all__ = ["auth", "callback", "create"]
