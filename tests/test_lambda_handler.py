try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import base64
import json

import pytest

from meet_command.clients.google_auth import OAuthTokenExchangeError
from meet_command.models import CallbackPending, Identity
from meet_command.services.meet_command import MALFORMED_COMMAND_MESSAGE
from lambdas.slash_command import handler

IDENTITY = Identity(team="T1", id="U1")


@pytest.fixture()
def bootstrapped(monkeypatch, orchestrator):
    monkeypatch.setattr(handler, "_bootstrap", lambda: orchestrator)
    return orchestrator


def test_create_handles_base64_encoded_body(bootstrapped, state_store) -> None:
    body = base64.b64encode(b"team_id=T1&user_id=U1").decode("ascii")

    result = handler.create({"body": body, "isBase64Encoded": True}, None)

    assert result["statusCode"] == 200
    assert result["headers"]["Content-Type"] == "application/json"
    setup = state_store.load(IDENTITY).setup
    assert f"setup={setup}" in result["body"]


def test_auth_redirect_returns_location(bootstrapped, state_machine) -> None:
    setup = state_machine.start(IDENTITY)

    result = handler.auth({"queryStringParameters": {"id": "U1", "team": "T1", "setup": setup}}, None)

    assert result["statusCode"] == 302
    assert result["headers"]["Location"].startswith("https://accounts.google.com/")
    assert result["body"] == ""


def test_auth_without_query_is_unauthorized(bootstrapped) -> None:
    result = handler.auth({"queryStringParameters": None}, None)

    assert result["statusCode"] == 401


def test_callback_marks_user_ready(bootstrapped, state_store, state_machine) -> None:
    state_store.save(IDENTITY, CallbackPending(team="T1", id="U1", setup="S"))
    state = json.dumps({"team": "T1", "id": "U1", "setup": "S"})

    result = handler.callback({"queryStringParameters": {"code": "abc", "state": state}}, None)

    assert result["statusCode"] == 200
    assert state_machine.is_ready(IDENTITY) is True


def test_callback_exchange_failure_is_bad_gateway(bootstrapped, state_store, oauth_factory) -> None:
    state_store.save(IDENTITY, CallbackPending(team="T1", id="U1", setup="S"))
    oauth_factory.exchange_error = OAuthTokenExchangeError("invalid_grant")
    state = json.dumps({"team": "T1", "id": "U1", "setup": "S"})

    result = handler.callback({"queryStringParameters": {"code": "abc", "state": state}}, None)

    assert result["statusCode"] == 502


def test_create_rejects_non_utf8_body(bootstrapped, object_store) -> None:
    body = base64.b64encode(b"team_id=T1&user_id=\xff").decode("ascii")

    result = handler.create({"body": body, "isBase64Encoded": True}, None)

    assert result["statusCode"] == 400
    assert result["body"] == MALFORMED_COMMAND_MESSAGE
    assert object_store.puts == []


def test_create_rejects_invalid_base64_body(bootstrapped, object_store) -> None:
    result = handler.create({"body": "not base64!!", "isBase64Encoded": True}, None)

    assert result["statusCode"] == 400
    assert result["body"] == MALFORMED_COMMAND_MESSAGE
    assert object_store.puts == []
