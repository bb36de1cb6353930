# src/layout_packer/density.py
from __future__ import annotations

from typing import Optional

from pydantic import Field

from layout_packer.models import Algorithm, PackingOptions, CamelModel


class DensityMode(CamelModel):
    """Spacing preset a host applies to every packing call."""

    padding: float = Field(ge=0, description="Container inset")
    gap: float = Field(ge=0, description="Spacing between items")
    min_item_size: float = Field(ge=0, description="Smallest item edge the host should request")
    jitter: Optional[float] = Field(default=None, ge=0, description="Host-side placement jitter")

    def options(self, width: float, height: float, sort_by: Optional[str] = None) -> PackingOptions:
        return PackingOptions(
            container_width=width,
            container_height=height,
            padding=self.padding,
            gap=self.gap,
            sort_by=sort_by,
        )


DENSITY_MODES: dict[str, DensityMode] = {
    "loose":    DensityMode(padding=16, gap=12, min_item_size=120),
    "tight":    DensityMode(padding=8,  gap=6,  min_item_size=80),
    "adaptive": DensityMode(padding=12, gap=8,  min_item_size=100),
    "natural":  DensityMode(padding=12, gap=8,  min_item_size=100, jitter=4),
}


def get_density_mode(name: str) -> DensityMode:
    key = name.strip().lower()
    if key not in DENSITY_MODES:
        raise ValueError(f"Unknown density mode '{name}'. Valid: {sorted(DENSITY_MODES.keys())}")
    return DENSITY_MODES[key]


class PackingVariant(CamelModel):
    """Named combination of algorithm, host animation preset and density."""

    algorithm: Algorithm
    animation: str = Field(description="Host animation preset name, passed through untouched")
    density: str
    name: str


def _variant(algorithm: str, animation: str, density: str, name: str) -> PackingVariant:
    return PackingVariant(algorithm=algorithm, animation=animation, density=density, name=name)


VARIANTS: list[PackingVariant] = [
    # Shelf (0-3)
    _variant("shelf", "snappy", "loose", "Shelf Snappy Loose"),
    _variant("shelf", "bouncy", "loose", "Shelf Bouncy Loose"),
    _variant("shelf", "snappy", "tight", "Shelf Snappy Tight"),
    _variant("shelf", "bouncy", "tight", "Shelf Bouncy Tight"),
    # Guillotine (4-7)
    _variant("guillotine", "snappy", "loose", "Guillotine Snappy Loose"),
    _variant("guillotine", "bouncy", "loose", "Guillotine Bouncy Loose"),
    _variant("guillotine", "snappy", "tight", "Guillotine Snappy Tight"),
    _variant("guillotine", "bouncy", "tight", "Guillotine Bouncy Tight"),
    # MaxRects (8-11)
    _variant("maxrects", "snappy", "loose", "MaxRects Snappy Loose"),
    _variant("maxrects", "bouncy", "loose", "MaxRects Bouncy Loose"),
    _variant("maxrects", "snappy", "tight", "MaxRects Snappy Tight"),
    _variant("maxrects", "bouncy", "tight", "MaxRects Bouncy Tight"),
    # Treemap (12-15)
    _variant("treemap", "snappy", "loose", "Treemap Snappy Loose"),
    _variant("treemap", "bouncy", "loose", "Treemap Bouncy Loose"),
    _variant("treemap", "snappy", "tight", "Treemap Snappy Tight"),
    _variant("treemap", "bouncy", "tight", "Treemap Bouncy Tight"),
    # Masonry (16-17)
    _variant("masonry", "wave", "adaptive", "Masonry Wave"),
    _variant("masonry", "cascade", "adaptive", "Masonry Cascade"),
    # Experimental (18-23)
    _variant("maxrects", "organic", "natural", "Organic Flow"),
    _variant("treemap", "flow", "natural", "Smooth Treemap"),
    _variant("maxrects", "gentle", "loose", "Gentle Pack"),
    _variant("treemap", "wave", "adaptive", "Treemap Wave"),
    _variant("maxrects", "chaos", "tight", "Chaos Pack"),
    _variant("treemap", "cascade", "loose", "Cascade Treemap"),
]


def get_variant(index: int) -> PackingVariant:
    """Variant at *index*, clamped into the table's range."""
    return VARIANTS[max(0, min(index, len(VARIANTS) - 1))]
