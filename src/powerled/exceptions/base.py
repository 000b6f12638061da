"""Root of the power LED controller's exception hierarchy."""

from typing import Optional


class PowerLedError(Exception):
    """
    Base class for every error raised by the power LED controller.

    Each error carries two renderings: `user_message` is what the operator
    sees on the console, `technical_message` is what goes to the journal.
    `recoverable` tells the daemon whether it may keep running, and
    `recovery_hint` optionally says what to change.
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, if there is one."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
