from __future__ import annotations

import math
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Weight given to items whose priority is zero, negative or not finite.
# When every priority is unusable this spreads the weight evenly.
MIN_PRIORITY = 1e-6


def _non_negative(value: float) -> float:
    # NaN compares false, so max() keeps the 0.0
    return max(0.0, float(value))


class CamelModel(BaseModel):
    """Frozen model accepting both snake_case and the camelCase wire names."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Algorithm(str, Enum):
    """Packing strategies a host may select."""

    MAXRECTS = "maxrects"
    TREEMAP = "treemap"
    SHELF = "shelf"
    GUILLOTINE = "guillotine"
    MASONRY = "masonry"

    @property
    def is_implemented(self) -> bool:
        return self in (Algorithm.MAXRECTS, Algorithm.TREEMAP)


class Rect(CamelModel):
    """Axis-aligned rectangle in container-local coordinates."""

    x: float = Field(default=0.0, description="Left edge")
    y: float = Field(default=0.0, description="Top edge")
    width: float = Field(default=0.0, description="Width, never negative")
    height: float = Field(default=0.0, description="Height, never negative")

    @field_validator("width", "height", mode="after")
    @classmethod
    def _clamp_size(cls, value: float) -> float:
        return _non_negative(value)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height


class PackedRect(Rect):
    """Placement of one item, tagged with the item's id."""

    id: str = Field(description="Identifier of the placed item")


class PackableItem(CamelModel):
    """An item to lay out. Identity is by ``id``."""

    id: str = Field(description="Unique identifier for the item")
    min_width: float = Field(default=0.0, description="Minimum width")
    min_height: float = Field(default=0.0, description="Minimum height")
    max_width: Optional[float] = Field(
        default=None,
        description="Reserved; not enforced by the current algorithms")
    max_height: Optional[float] = Field(
        default=None,
        description="Reserved; not enforced by the current algorithms")
    priority: float = Field(
        default=1.0,
        description="Relative weight, higher = larger allocation / earlier pick")
    aspect_ratio: Optional[float] = Field(
        default=None,
        description="Reserved; not enforced by the current algorithms")

    @field_validator("min_width", "min_height", mode="after")
    @classmethod
    def _clamp_min_size(cls, value: float) -> float:
        return _non_negative(value)

    @property
    def min_area(self) -> float:
        return self.min_width * self.min_height

    @property
    def weight(self) -> float:
        """Priority as both packers use it; unusable values become MIN_PRIORITY."""
        if not math.isfinite(self.priority) or self.priority <= 0:
            return MIN_PRIORITY
        return self.priority


class PackingOptions(CamelModel):
    """Container size and spacing for a single packing call."""

    container_width: float = Field(description="Measured container width")
    container_height: float = Field(description="Measured container height")
    padding: float = Field(
        default=0.0,
        description="Inset subtracted from every side before layout")
    gap: float = Field(
        default=0.0,
        description="Spacing added to each item's footprint (MaxRects only)")
    sort_by: Optional[Literal["priority", "area", "width", "height"]] = Field(
        default=None,
        description="Ordering hint; unused by the current algorithms")

    @field_validator("container_width", "container_height", "padding", "gap", mode="after")
    @classmethod
    def _clamp_dimension(cls, value: float) -> float:
        return _non_negative(value)

    @property
    def usable_rect(self) -> Rect:
        """Usable area after padding, offset by the padding."""
        return Rect(
            x=self.padding,
            y=self.padding,
            width=self.container_width - 2 * self.padding,
            height=self.container_height - 2 * self.padding,
        )


class ContainerSize(CamelModel):
    width: float = 0.0
    height: float = 0.0


class PackingResult(CamelModel):
    """Standard result returned by packers."""

    packed: list[PackedRect] = Field(default_factory=list)
    unpacked: list[str] = Field(default_factory=list, description="Ids that did not fit")
    efficiency: float = Field(default=0.0, ge=0.0, le=1.0)
    container_size: ContainerSize = Field(default_factory=ContainerSize)
    algorithm: Algorithm = Field(
        default=Algorithm.MAXRECTS,
        description="Algorithm that actually produced this result")

    @property
    def packed_ids(self) -> list[str]:
        return [rect.id for rect in self.packed]


class PackingMetrics(CamelModel):
    """Diagnostics recomputed from a PackingResult."""

    efficiency: float = 0.0
    wasted_space: float = 0.0
    item_count: int = 0
    average_item_area: float = 0.0
