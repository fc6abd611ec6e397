"""Player core configuration model."""

import uuid
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from playercore.exceptions import wrap_pydantic_error

from .size import Dimension


class CoreOptions(BaseModel):
    """
    Mutable configuration record shared by Core and its containers.

    Unknown keys are kept (``extra="allow"``) so options meant for playback
    backends or plugins, such as ``volume``, survive a merge and reach every
    container on ``configure()``.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    player_id: str = Field(
        default_factory=lambda: uuid.uuid4().hex,
        description="Instance id used to scope mediator topics",
    )
    sources: list[Any] = Field(default_factory=list, description="Media sources to build containers from")
    mime_type: str | None = Field(default=None, description="MIME type hint for the sources")
    width: Dimension = Field(default=None, description="Configured width (number = pixels, or CSS string)")
    height: Dimension = Field(default=None, description="Configured height (number = pixels, or CSS string)")
    parent_element: Any = Field(default=None, description="Element the widget is appended to")
    hide_media_control_delay: float | None = Field(
        default=None, description="Delay passed to the media control when hiding it"
    )
    base_url: str | None = Field(default=None, description="Base URL for widget assets")
    resize_poll_interval: float = Field(
        default=0.5, gt=0, description="Seconds between resize observer polls"
    )

    @classmethod
    def from_value(cls, value: "CoreOptions | Mapping[str, Any] | None") -> "CoreOptions":
        """
        Build options from a mapping, or return an existing instance as-is.

        Raises:
            ConfigValidationError: If a known option has an invalid value
        """
        if isinstance(value, CoreOptions):
            return value
        try:
            return cls.model_validate(dict(value or {}))
        except ValidationError as e:
            raise wrap_pydantic_error(e) from e

    def merge(self, options: Mapping[str, Any]) -> "CoreOptions":
        """
        Shallow-merge ``options`` into this instance, in place.

        Later keys overwrite earlier ones. The instance identity is kept, so
        containers holding a reference see the merged values.
        """
        for key, value in options.items():
            setattr(self, key, value)
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a declared or extra option by name."""
        return getattr(self, key, default)
