"""Root of the playercore exception hierarchy.

Every core failure is a PlayerCoreError. Besides the message pair
(`user_message` for people, `technical_message` for logs) each error records
the core `operation` it interrupted, e.g. "load" or "show the media control",
so a host embedding several players can tell what was being attempted.
"""

from typing import Optional


class PlayerCoreError(Exception):
    """
    Base exception for all playercore errors.

    Attributes:
        user_message: Human-friendly message for display
        technical_message: Detailed message for logging
        operation: Core operation that failed, if known
        recoverable: True if the player is still usable and the operation may be retried
        recovery_hint: Optional hint for how to fix the issue
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        operation: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.operation = operation
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message, prefixed with the failed operation and followed by the hint."""
        msg = self.user_message
        if self.operation and self.operation not in msg:
            msg = f"{self.operation}: {msg}"
        if self.recovery_hint:
            msg += f"\n\nSuggestion: {self.recovery_hint}"
        return msg
