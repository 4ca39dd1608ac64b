"""Session mode tracking driven by explicit auth events.

The external auth service reports what happened (a session was
restored, a recovery link was opened, ...). This module turns those
events into one of three modes the rest of the application can rely
on, instead of each caller inspecting URLs or global auth state.
"""

import enum
import logging
from typing import Final, final

from server.apps.accounts.exceptions import InvalidTransitionError

logger = logging.getLogger(__name__)


class SessionState(enum.StrEnum):
    """Mode the current session is in."""

    ANONYMOUS = 'anonymous'
    AUTHENTICATED = 'authenticated'
    RECOVERY_PENDING = 'recovery_pending'


class SessionEvent(enum.StrEnum):
    """Auth events reported by the external auth service."""

    SESSION_RESTORED = 'session_restored'
    RECOVERY_LINK_OPENED = 'recovery_link_opened'
    PASSWORD_UPDATED = 'password_updated'
    SIGNED_OUT = 'signed_out'


_TRANSITIONS: Final[dict[tuple[SessionState, SessionEvent], SessionState]] = {
    (SessionState.ANONYMOUS, SessionEvent.SESSION_RESTORED): (
        SessionState.AUTHENTICATED
    ),
    (SessionState.ANONYMOUS, SessionEvent.RECOVERY_LINK_OPENED): (
        SessionState.RECOVERY_PENDING
    ),
    (SessionState.AUTHENTICATED, SessionEvent.RECOVERY_LINK_OPENED): (
        SessionState.RECOVERY_PENDING
    ),
    (SessionState.RECOVERY_PENDING, SessionEvent.PASSWORD_UPDATED): (
        SessionState.AUTHENTICATED
    ),
}


@final
class SessionStateMachine:
    """Tracks the session mode of one client.

    ``signed_out`` is accepted in every state and always returns to
    ``anonymous``. Any other event not listed in the transition table
    raises ``InvalidTransitionError`` and leaves the state unchanged.
    """

    def __init__(self) -> None:
        """Start in the anonymous state with no owner."""
        self._state = SessionState.ANONYMOUS
        self._owner: str | None = None

    @property
    def state(self) -> SessionState:
        """Get the current session state."""
        return self._state

    @property
    def owner(self) -> str | None:
        """Get the owner id of the session, None when anonymous."""
        return self._owner

    @property
    def is_authenticated(self) -> bool:
        """Check whether content operations may run for the owner."""
        return self._state == SessionState.AUTHENTICATED

    def dispatch(
        self,
        event: SessionEvent,
        owner: str | None = None,
    ) -> SessionState:
        """Apply an auth event.

        Args:
            event: Event reported by the auth service.
            owner: Owner id carried by ``session_restored`` and
                ``recovery_link_opened`` events.

        Returns:
            New session state.

        Raises:
            InvalidTransitionError: If the event is not allowed in the
                current state.
            ValueError: If ``session_restored`` arrives without an owner.
        """
        if event == SessionEvent.SIGNED_OUT:
            return self._move(SessionState.ANONYMOUS, event, owner=None)

        target = _TRANSITIONS.get((self._state, event))
        if target is None:
            logger.warning(
                'Rejected session event %s in state %s',
                event,
                self._state,
            )
            raise InvalidTransitionError(self._state, event)

        if event == SessionEvent.SESSION_RESTORED and not owner:
            raise ValueError('session_restored requires an owner id')

        return self._move(target, event, owner=owner or self._owner)

    def _move(
        self,
        target: SessionState,
        event: SessionEvent,
        owner: str | None,
    ) -> SessionState:
        logger.debug('Session %s -> %s on %s', self._state, target, event)
        self._state = target
        self._owner = owner
        return target
