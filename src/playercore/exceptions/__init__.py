"""
Exception hierarchy for playercore.

```
PlayerCoreError (base)
├── ContainerCreationError
├── MissingPluginError
├── CoreDestroyedError
└── ConfigurationError
    └── ConfigValidationError
```

All exceptions carry `user_message`, `technical_message`, the failed
`operation`, `recoverable` and `recovery_hint`. Degraded fullscreen support
is not an error and has no exception type.
"""

from .base import PlayerCoreError
from .config import ConfigurationError, ConfigValidationError
from .core import ContainerCreationError, CoreDestroyedError, MissingPluginError
from .handlers import ErrorContext, wrap_pydantic_error

__all__ = [
    "ConfigValidationError",
    "ConfigurationError",
    "ContainerCreationError",
    "CoreDestroyedError",
    "ErrorContext",
    "MissingPluginError",
    "PlayerCoreError",
    "wrap_pydantic_error",
]
