"""Size descriptors and per-instance size bookkeeping."""

import math

from pydantic import BaseModel, Field

Dimension = int | float | str | None


def is_number(value: object) -> bool:
    """
    Check whether a dimension is a unit-less number.

    Numbers and numeric strings ("200", "12.5") count; strings with a CSS unit
    ("50%", "200px"), booleans and None do not.
    """
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value))
        except ValueError:
            return False
    return False


class Size(BaseModel):
    """A ``width``/``height`` pair; strings may carry CSS units such as percentages."""

    width: Dimension = None
    height: Dimension = None

    @property
    def is_numeric(self) -> bool:
        """True if both dimensions are unit-less numbers."""
        return is_number(self.width) and is_number(self.height)

    def to_css(self) -> tuple[str, str]:
        """
        Render both dimensions as CSS values.

        The pixel unit is appended only when both dimensions are numeric;
        otherwise both are passed through unchanged. A mixed pair such as
        ``(200, "50%")`` is never suffixed field by field.

        Returns:
            Tuple of (width, height) CSS strings
        """
        if self.is_numeric:
            return f"{self.width}px", f"{self.height}px"
        return f"{self.width}", f"{self.height}"


class PlayerInfo(BaseModel):
    """
    Size readings for one player instance.

    One PlayerInfo is owned by each Core and handed to its SizeTracker; it is
    never shared between instances.

    ``computed_size`` is only refreshed by measuring the rendered element,
    never from configuration.
    """

    previous_size: Size = Field(default_factory=Size, description="Size before the last change")
    current_size: Size = Field(default_factory=Size, description="Logical size in effect")
    computed_size: Size = Field(default_factory=Size, description="Last measured element box size")
