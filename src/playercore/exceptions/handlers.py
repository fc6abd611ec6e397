"""
Error handling helpers.

- `wrap_pydantic_error`: turn a pydantic ValidationError into ConfigValidationError
- `ErrorContext`: log start, completion and failure of a named operation
"""

import logging
from types import TracebackType
from typing import Optional

from pydantic import ValidationError

from .base import PlayerCoreError
from .config import ConfigValidationError

logger = logging.getLogger(__name__)


def wrap_pydantic_error(error: ValidationError, source: Optional[str] = None) -> ConfigValidationError:
    """
    Convert the first pydantic validation error into a ConfigValidationError.

    Args:
        error: The pydantic ValidationError
        source: Where the options came from (optional)

    Returns:
        ConfigValidationError describing the first failing field
    """
    errors = error.errors()
    if not errors:
        return ConfigValidationError("<unknown>", None, str(error), source)

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return ConfigValidationError(
        field=field,
        value=first.get("input"),
        error_msg=first.get("msg", "invalid value"),
        source=source,
    )


class ErrorContext:
    """
    Context manager that logs a named operation.

    Exceptions are logged and always re-raised. A PlayerCoreError that does
    not name its operation yet is tagged with this one.

    Example:
        ```python
        with ErrorContext("start demo session", logger_instance=logger):
            asyncio.run(session())
        ```
    """

    def __init__(self, operation: str, logger_instance: Optional[logging.Logger] = None):
        self.operation = operation
        self.logger = logger_instance or logger

    def __enter__(self) -> "ErrorContext":
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        if exc is None:
            self.logger.debug(f"Completed: {self.operation}")
        elif isinstance(exc, PlayerCoreError):
            if exc.operation is None:
                exc.operation = self.operation
            self.logger.error(f"Failed to {self.operation}: {exc.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc}", exc_info=(exc_type, exc, tb))
        return False
