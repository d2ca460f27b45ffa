"""
Recover the (team, user) identity from each inbound request leg.

The command leg carries a form-encoded Slack payload, the auth leg a query
string we generated, and the callback leg our own JSON ``state`` echoed back
by Google.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Union
from urllib.parse import parse_qs

from meet_command.models import Identity


class MalformedRequest(ValueError):
    """Inbound payload is missing required fields or cannot be decoded."""


class InvalidState(ValueError):
    """The round-tripped OAuth ``state`` value is unparseable or incomplete."""


def _decode_form(body: Union[str, bytes, None]) -> dict[str, str]:
    if body is None:
        raise MalformedRequest("Empty command body.")
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedRequest("Command body is not valid UTF-8.") from exc
    return {key: values[0] for key, values in parse_qs(body).items() if values}


def _require(fields: Mapping[str, Any], name: str, error: type[ValueError]) -> str:
    value = fields.get(name)
    if not isinstance(value, str) or not value:
        raise error(f"Missing '{name}'.")
    return value


def parse_from_command_body(body: Union[str, bytes, None]) -> Identity:
    fields = _decode_form(body)
    return Identity(
        team=_require(fields, "team_id", MalformedRequest),
        id=_require(fields, "user_id", MalformedRequest),
    )


def parse_from_query(query: Optional[Mapping[str, Any]]) -> Identity:
    fields = query or {}
    return Identity(
        team=_require(fields, "team", MalformedRequest),
        id=_require(fields, "id", MalformedRequest),
    )


def _decode_state(blob: Optional[str]) -> dict[str, Any]:
    if not blob:
        raise InvalidState("Missing state.")
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as exc:
        raise InvalidState("State is not valid JSON.") from exc
    if not isinstance(data, dict):
        raise InvalidState("State is not a JSON object.")
    for name in ("team", "id", "setup"):
        _require(data, name, InvalidState)
    return data


def parse_from_opaque_state(blob: Optional[str]) -> Identity:
    data = _decode_state(blob)
    return Identity(team=data["team"], id=data["id"])


def extract_setup(blob: Optional[str]) -> str:
    return _decode_state(blob)["setup"]


__all__ = [
    "InvalidState",
    "MalformedRequest",
    "extract_setup",
    "parse_from_command_body",
    "parse_from_opaque_state",
    "parse_from_query",
]
