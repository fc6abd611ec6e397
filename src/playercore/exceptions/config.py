"""Configuration-related exceptions."""

from typing import Any, Optional

from .base import PlayerCoreError


class ConfigurationError(PlayerCoreError):
    """Configuration is invalid."""
    pass


class ConfigValidationError(ConfigurationError):
    """Option values fail validation."""

    def __init__(self, field: str, value: Any, error_msg: str, source: Optional[str] = None):
        """
        Initialize config validation error.

        Args:
            field: The option that failed validation
            value: The invalid value
            error_msg: Why the value is invalid
            source: Where the options came from (optional)
        """
        user_msg = f"Invalid option '{field}': {error_msg}"

        recovery = f"Update the '{field}' value passed to the player"
        if source:
            recovery += f"\nOptions source: {source}"
        if field in ("width", "height"):
            recovery += "\nUse a number of pixels or a CSS size string such as '50%'"
        elif "interval" in field:
            recovery += "\nUse a positive number of seconds"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Option validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.field = field
        self.value = value
        self.error_msg = error_msg
