from __future__ import annotations

import pytest

from meet_command.clients.google_auth import OAuthTokenExchangeError
from meet_command.models import AuthPending, Authorized, CallbackPending, Identity
from meet_command.services import InvalidState, NotAuthorized

IDENTITY = Identity(team="T1", id="U1")
OTHER_USER = Identity(team="T1", id="U2")
OTHER_TEAM = Identity(team="T2", id="U1")


def test_start_persists_auth_pending_with_fresh_token(state_machine, state_store) -> None:
    first = state_machine.start(IDENTITY)
    second = state_machine.start(IDENTITY)

    assert first != second
    assert state_store.load(IDENTITY) == AuthPending(team="T1", id="U1", setup=second)


def test_verify_auth_edge_requires_matching_identity_and_token(state_machine) -> None:
    setup = state_machine.start(IDENTITY)

    assert state_machine.verify_auth_edge(IDENTITY, setup) is True
    assert state_machine.verify_auth_edge(IDENTITY, setup + "x") is False
    assert state_machine.verify_auth_edge(IDENTITY, "") is False
    assert state_machine.verify_auth_edge(OTHER_USER, setup) is False
    assert state_machine.verify_auth_edge(OTHER_TEAM, setup) is False


def test_restart_invalidates_previous_token(state_machine) -> None:
    stale = state_machine.start(IDENTITY)
    state_machine.start(IDENTITY)

    assert state_machine.verify_auth_edge(IDENTITY, stale) is False


def test_verify_rejects_record_stored_under_foreign_identity(state_machine, state_store) -> None:
    state_store.save(IDENTITY, AuthPending(team="T1", id="U2", setup="S"))

    assert state_machine.verify_auth_edge(IDENTITY, "S") is False


def test_advance_to_callback_keeps_token_and_blocks_auth_edge(state_machine, state_store) -> None:
    setup = state_machine.start(IDENTITY)

    state_machine.advance_to_callback(IDENTITY, setup)

    assert state_store.load(IDENTITY) == CallbackPending(team="T1", id="U1", setup=setup)
    assert state_machine.verify_auth_edge(IDENTITY, setup) is False
    assert state_machine.verify_callback_edge(IDENTITY, setup) is True
    assert state_machine.verify_callback_edge(IDENTITY, "other") is False


def test_advance_to_callback_requires_verified_auth_edge(state_machine, state_store) -> None:
    setup = state_machine.start(IDENTITY)

    with pytest.raises(InvalidState):
        state_machine.advance_to_callback(IDENTITY, "wrong")
    assert state_store.load(IDENTITY) == AuthPending(team="T1", id="U1", setup=setup)


def test_callback_edge_is_false_while_auth_pending(state_machine) -> None:
    setup = state_machine.start(IDENTITY)

    assert state_machine.verify_callback_edge(IDENTITY, setup) is False


@pytest.mark.asyncio
async def test_finalize_exchanges_code_and_marks_ready(state_machine, state_store, oauth_factory) -> None:
    setup = state_machine.start(IDENTITY)
    state_machine.advance_to_callback(IDENTITY, setup)
    assert state_machine.is_ready(IDENTITY) is False

    tokens = await state_machine.finalize(IDENTITY, "abc", setup)

    assert oauth_factory.codes == ["abc"]
    assert tokens == oauth_factory.tokens
    assert state_store.load(IDENTITY) == Authorized(team="T1", id="U1", tokens=oauth_factory.tokens)
    assert state_machine.is_ready(IDENTITY) is True
    assert state_machine.get_credentials(IDENTITY) == oauth_factory.tokens
    assert state_machine.verify_callback_edge(IDENTITY, setup) is False


@pytest.mark.asyncio
async def test_finalize_requires_callback_phase(state_machine, oauth_factory) -> None:
    setup = state_machine.start(IDENTITY)

    with pytest.raises(InvalidState):
        await state_machine.finalize(IDENTITY, "abc", setup)
    assert oauth_factory.codes == []


@pytest.mark.asyncio
async def test_finalize_rejects_flow_superseded_by_newer_attempt(state_machine, state_store, oauth_factory) -> None:
    stale = state_machine.start(IDENTITY)
    state_machine.advance_to_callback(IDENTITY, stale)
    fresh = state_machine.start(IDENTITY)
    state_machine.advance_to_callback(IDENTITY, fresh)

    with pytest.raises(InvalidState):
        await state_machine.finalize(IDENTITY, "abc", stale)

    assert oauth_factory.codes == []
    assert state_store.load(IDENTITY) == CallbackPending(team="T1", id="U1", setup=fresh)


@pytest.mark.asyncio
async def test_failed_exchange_leaves_callback_pending(state_machine, state_store, oauth_factory) -> None:
    setup = state_machine.start(IDENTITY)
    state_machine.advance_to_callback(IDENTITY, setup)
    oauth_factory.exchange_error = OAuthTokenExchangeError("invalid_grant")

    with pytest.raises(OAuthTokenExchangeError):
        await state_machine.finalize(IDENTITY, "abc", setup)

    assert state_store.load(IDENTITY) == CallbackPending(team="T1", id="U1", setup=setup)
    assert state_machine.is_ready(IDENTITY) is False


def test_is_ready_false_for_absent_and_pending_records(state_machine, state_store) -> None:
    assert state_machine.is_ready(IDENTITY) is False

    setup = state_machine.start(IDENTITY)
    assert state_machine.is_ready(IDENTITY) is False

    state_machine.advance_to_callback(IDENTITY, setup)
    assert state_machine.is_ready(IDENTITY) is False


def test_is_ready_false_for_empty_credentials(state_machine, state_store) -> None:
    state_store.save(IDENTITY, Authorized(team="T1", id="U1", tokens={}))

    assert state_machine.is_ready(IDENTITY) is False
    with pytest.raises(NotAuthorized):
        state_machine.get_credentials(IDENTITY)


def test_get_credentials_requires_authorized_record(state_machine) -> None:
    state_machine.start(IDENTITY)

    with pytest.raises(NotAuthorized):
        state_machine.get_credentials(IDENTITY)
