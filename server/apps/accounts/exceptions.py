"""Exceptions for accounts app."""


class InvalidTransitionError(Exception):
    """Raised when an event is not allowed in the current session state."""

    def __init__(self, state: str, event: str) -> None:
        """Initialize InvalidTransitionError.

        Args:
            state: Current session state.
            event: Rejected event.
        """
        self.state = state
        self.event = event
        super().__init__(f'Event "{event}" is not allowed in state "{state}"')
