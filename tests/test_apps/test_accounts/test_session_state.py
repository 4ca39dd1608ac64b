"""Tests for the session state machine."""

import pytest

from server.apps.accounts.exceptions import InvalidTransitionError
from server.apps.accounts.logic.session_state import (
    SessionEvent,
    SessionState,
    SessionStateMachine,
)


@pytest.fixture
def machine() -> SessionStateMachine:
    """Fresh state machine.

    Returns:
        SessionStateMachine in the anonymous state.
    """
    return SessionStateMachine()


def test_starts_anonymous(machine):
    """New sessions cannot run content operations."""
    assert machine.state == SessionState.ANONYMOUS
    assert machine.owner is None
    assert not machine.is_authenticated


def test_session_restored(machine):
    """Restored session authenticates the owner."""
    state = machine.dispatch(SessionEvent.SESSION_RESTORED, owner='abc')

    assert state == SessionState.AUTHENTICATED
    assert machine.owner == 'abc'
    assert machine.is_authenticated


def test_session_restored_requires_owner(machine):
    """An authenticated session always has an owner."""
    with pytest.raises(ValueError, match='owner'):
        machine.dispatch(SessionEvent.SESSION_RESTORED)

    assert machine.state == SessionState.ANONYMOUS


def test_recovery_flow(machine):
    """Recovery link blocks content until the password is updated."""
    machine.dispatch(SessionEvent.SESSION_RESTORED, owner='abc')

    machine.dispatch(SessionEvent.RECOVERY_LINK_OPENED)
    assert machine.state == SessionState.RECOVERY_PENDING
    assert not machine.is_authenticated
    assert machine.owner == 'abc'

    machine.dispatch(SessionEvent.PASSWORD_UPDATED)
    assert machine.state == SessionState.AUTHENTICATED
    assert machine.owner == 'abc'


def test_recovery_from_anonymous(machine):
    """Recovery links can be opened without a prior session."""
    machine.dispatch(SessionEvent.RECOVERY_LINK_OPENED, owner='abc')
    machine.dispatch(SessionEvent.PASSWORD_UPDATED)

    assert machine.is_authenticated
    assert machine.owner == 'abc'


@pytest.mark.parametrize('start_events', [
    [],
    [(SessionEvent.SESSION_RESTORED, 'abc')],
    [(SessionEvent.RECOVERY_LINK_OPENED, 'abc')],
])
def test_signed_out_from_any_state(machine, start_events):
    """Signing out always returns to anonymous."""
    for event, owner in start_events:
        machine.dispatch(event, owner=owner)

    assert machine.dispatch(SessionEvent.SIGNED_OUT) == SessionState.ANONYMOUS
    assert machine.owner is None


@pytest.mark.parametrize(('start_events', 'event'), [
    ([], SessionEvent.PASSWORD_UPDATED),
    ([(SessionEvent.SESSION_RESTORED, 'abc')], SessionEvent.SESSION_RESTORED),
    ([(SessionEvent.SESSION_RESTORED, 'abc')], SessionEvent.PASSWORD_UPDATED),
    (
        [(SessionEvent.RECOVERY_LINK_OPENED, 'abc')],
        SessionEvent.SESSION_RESTORED,
    ),
])
def test_invalid_transitions(machine, start_events, event):
    """Events outside the table are rejected without changing state."""
    for start_event, owner in start_events:
        machine.dispatch(start_event, owner=owner)
    state_before = machine.state

    with pytest.raises(InvalidTransitionError) as exc_info:
        machine.dispatch(event, owner='abc')

    assert machine.state == state_before
    assert exc_info.value.event == event
    assert str(exc_info.value) == (
        f'Event "{event}" is not allowed in state "{state_before}"'
    )
