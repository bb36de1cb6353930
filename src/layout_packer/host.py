"""
Adapter between the packing engine and an animating host.

The host measures its container, feeds items and settings in, and animates
each rect from where it was to where the latest layout puts it.  The adapter
only keeps what the host needs for that hand-off; every layout is computed
from scratch by ``pack``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Union

from layout_packer.config import Settings, get_settings
from layout_packer.density import DensityMode, PackingVariant, get_density_mode, get_variant
from layout_packer.dispatch import pack, resolve_algorithm
from layout_packer.models import Algorithm, PackableItem, PackedRect, PackingResult, Rect

logger = logging.getLogger(__name__)

RenderItem = Callable[[PackableItem, PackedRect, int], Any]
LayoutCallback = Callable[[list[PackedRect]], None]


@dataclass(frozen=True)
class Transition:
    """Where an item moves from (None when it is newly shown) and to."""

    id: str
    start: Optional[Rect]
    end: PackedRect


class LayoutHost:
    """Holds the host-side inputs of a packing layout and recomputes on change."""

    def __init__(
        self,
        items: Iterable[PackableItem] = (),
        algorithm: Union[Algorithm, str, None] = None,
        density: Union[DensityMode, str, None] = None,
        strict: Optional[bool] = None,
        on_layout_complete: Optional[LayoutCallback] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self._items: list[PackableItem] = list(items)
        self._algorithm: Union[Algorithm, str] = algorithm or settings.default_algorithm
        self._density: DensityMode = self._resolve_density(density or settings.default_density)
        self._strict = settings.strict_algorithms if strict is None else strict
        resolve_algorithm(self._algorithm, strict=self._strict)
        self._on_layout_complete = on_layout_complete

        self._size: tuple[float, float] = (0.0, 0.0)
        self._layout: Optional[PackingResult] = None
        self._previous: dict[str, Rect] = {}

    @staticmethod
    def _resolve_density(density: Union[DensityMode, str]) -> DensityMode:
        if isinstance(density, DensityMode):
            return density
        return get_density_mode(density)

    # --- inputs -----------------------------------------------------------

    @property
    def items(self) -> list[PackableItem]:
        return list(self._items)

    @property
    def algorithm(self) -> Union[Algorithm, str]:
        return self._algorithm

    @property
    def density(self) -> DensityMode:
        return self._density

    @property
    def container_size(self) -> tuple[float, float]:
        return self._size

    def measure(self, width: float, height: float) -> Optional[PackingResult]:
        """Record the container size from the host's layout pass."""
        size = (max(0.0, float(width)), max(0.0, float(height)))
        if size == self._size:
            return self._layout
        return self._update(size=size)

    def set_items(self, items: Iterable[PackableItem]) -> Optional[PackingResult]:
        return self._update(items=list(items))

    def set_algorithm(self, algorithm: Union[Algorithm, str]) -> Optional[PackingResult]:
        return self._update(algorithm=algorithm)

    def set_density(self, density: Union[DensityMode, str]) -> Optional[PackingResult]:
        return self._update(density=self._resolve_density(density))

    def apply_variant(self, index: int) -> PackingVariant:
        """Switch algorithm and density to a numbered variant; returns it for its animation name."""
        variant = get_variant(index)
        self._update(algorithm=variant.algorithm, density=get_density_mode(variant.density))
        return variant

    # --- outputs ----------------------------------------------------------

    @property
    def layout(self) -> Optional[PackingResult]:
        """Latest layout, or None until both container dimensions are non-zero."""
        return self._layout

    def _update(
        self,
        items: Optional[list[PackableItem]] = None,
        algorithm: Union[Algorithm, str, None] = None,
        density: Optional[DensityMode] = None,
        size: Optional[tuple[float, float]] = None,
    ) -> Optional[PackingResult]:
        """
        Lay out with the changed inputs, then commit them.

        If the algorithm is rejected the host keeps its inputs, layout and
        transitions as they were.
        """
        items = self._items if items is None else items
        algorithm = self._algorithm if algorithm is None else algorithm
        density = self._density if density is None else density
        width, height = self._size if size is None else size

        runs = resolve_algorithm(algorithm, strict=self._strict)
        layout = None
        if width > 0 and height > 0:
            layout = pack(runs, items, density.options(width, height))

        if self._layout is not None:
            self._previous = {
                r.id: Rect(x=r.x, y=r.y, width=r.width, height=r.height)
                for r in self._layout.packed
            }
        self._items = items
        self._algorithm = algorithm
        self._density = density
        self._size = (width, height)
        self._layout = layout

        if layout is None:
            return None

        logger.debug(
            f"layout recomputed: size={width}x{height} packed={len(layout.packed)} "
            f"unpacked={len(layout.unpacked)}"
        )
        if self._on_layout_complete is not None:
            self._on_layout_complete(list(layout.packed))
        return layout

    def transitions(self) -> list[Transition]:
        if self._layout is None:
            return []
        return [
            Transition(id=rect.id, start=self._previous.get(rect.id), end=rect)
            for rect in self._layout.packed
        ]

    def removed_ids(self) -> list[str]:
        """Ids shown in the previous layout that the current one no longer places."""
        current = set(self._layout.packed_ids) if self._layout is not None else set()
        return [item_id for item_id in self._previous if item_id not in current]

    def render(self, render_item: RenderItem) -> list[Any]:
        """Call render_item(item, rect, index) for each placed rect whose item still exists."""
        if self._layout is None:
            return []
        items_by_id = {item.id: item for item in self._items}
        rendered = []
        for index, rect in enumerate(self._layout.packed):
            item = items_by_id.get(rect.id)
            if item is None:
                continue
            rendered.append(render_item(item, rect, index))
        return rendered
