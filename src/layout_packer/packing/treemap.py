"""
Squarified treemap packing.

Partitions the usable container area into sub-rectangles whose areas are
proportional to item priority, laying out one strip (row) at a time so that
cells stay close to square.  Every item is placed; minimum sizes are honored
even when that pushes a cell past its proportional share.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from layout_packer.geometry import clip_to
from layout_packer.metrics import clamp_efficiency, packed_area
from layout_packer.models import (
    Algorithm,
    ContainerSize,
    PackableItem,
    PackedRect,
    PackingOptions,
    PackingResult,
    Rect,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cell:
    """An item paired with the area it should receive."""

    item: PackableItem
    target_area: float


def _is_wide(region: Rect) -> bool:
    return region.width >= region.height


def _short_side(region: Rect) -> float:
    return region.height if _is_wide(region) else region.width


def target_cells(items: List[PackableItem], total_area: float) -> List[_Cell]:
    """Proportional target areas, largest first (stable for equal targets)."""
    weights = [item.weight for item in items]
    total_priority = sum(weights)
    cells = [
        _Cell(item=item, target_area=(weight / total_priority) * total_area)
        for item, weight in zip(items, weights)
    ]
    return sorted(cells, key=lambda cell: -cell.target_area)


def worst_aspect_ratio(row: List[_Cell], region: Rect) -> float:
    """
    Largest cell aspect ratio if *row* were laid along the short side of *region*.

    1.0 is a perfect square; the row is only grown while this does not get worse.
    """
    if not row:
        return math.inf

    row_area = sum(cell.target_area for cell in row)
    side = _short_side(region)
    if side <= 0 or row_area <= 0:
        return math.inf
    row_size = row_area / side

    worst = 0.0
    for cell in row:
        item_size = cell.target_area / row_size
        if item_size <= 0:
            return math.inf
        worst = max(worst, row_size / item_size, item_size / row_size)
    return worst


def grow_row(cells: List[_Cell], region: Rect) -> int:
    """Number of leading cells that form the best row for *region* (at least one)."""
    row: List[_Cell] = []
    for cell in cells:
        candidate = row + [cell]
        if row and worst_aspect_ratio(candidate, region) > worst_aspect_ratio(row, region):
            break
        row = candidate
    return len(row)


def layout_row(row: List[_Cell], region: Rect) -> Tuple[List[PackedRect], Rect]:
    """
    Lay *row* out as a strip across the short side of *region*.

    Returns the placed rects (floored at each item's minimum size) and the part
    of *region* left over for the following rows.
    """
    wide = _is_wide(region)
    row_area = sum(cell.target_area for cell in row)
    side = _short_side(region)
    row_size = row_area / side if side > 0 else 0.0

    rects: List[PackedRect] = []
    offset = 0.0
    for cell in row:
        item_size = cell.target_area / row_size if row_size > 0 else 0.0
        if wide:
            x, y, w, h = region.x, region.y + offset, row_size, item_size
        else:
            x, y, w, h = region.x + offset, region.y, item_size, row_size

        rects.append(PackedRect(
            id=cell.item.id,
            x=x,
            y=y,
            width=max(w, cell.item.min_width),
            height=max(h, cell.item.min_height),
        ))
        offset += item_size

    if wide:
        leftover = Rect(x=region.x + row_size, y=region.y,
                        width=region.width - row_size, height=region.height)
    else:
        leftover = Rect(x=region.x, y=region.y + row_size,
                        width=region.width, height=region.height - row_size)
    return rects, leftover


def squarify(cells: List[_Cell], region: Rect) -> List[PackedRect]:
    """Place every cell, one row at a time, into the shrinking *region*."""
    placed: List[PackedRect] = []
    remaining = list(cells)
    while remaining:
        count = grow_row(remaining, region)
        row, remaining = remaining[:count], remaining[count:]
        rects, region = layout_row(row, region)
        placed.extend(rects)
    return placed


def pack_treemap(items: Iterable[PackableItem], options: PackingOptions) -> PackingResult:
    """
    Squarified treemap packer.

    Each item's area is ``priority / sum(priorities)`` of the usable area.
    Rects are floored at the item's minimum size and then clipped to the usable
    area, so they always stay inside the container but may overlap a sibling
    when minimums exceed the proportional share.  ``unpacked`` is empty unless
    the usable area itself is empty.
    """
    items = list(items)
    usable = options.usable_rect
    container_size = ContainerSize(width=options.container_width, height=options.container_height)

    logger.debug(f"pack_treemap entry: items={len(items)} usable={usable.width}x{usable.height}")

    if not items:
        return PackingResult(container_size=container_size, algorithm=Algorithm.TREEMAP)

    if usable.area <= 0:
        logger.debug("pack_treemap: no usable area, nothing placed")
        return PackingResult(
            unpacked=[item.id for item in items],
            container_size=container_size,
            algorithm=Algorithm.TREEMAP,
        )

    min_area_total = sum(item.min_area for item in items)
    if min_area_total > usable.area:
        logger.warning(
            f"pack_treemap: minimum sizes need {min_area_total:.1f} but only "
            f"{usable.area:.1f} is available; layout will be cramped"
        )

    cells = target_cells(items, usable.area)
    packed = [clip_to(rect, usable) for rect in squarify(cells, usable)]
    efficiency = clamp_efficiency(packed_area(packed), usable.area)

    logger.debug(f"pack_treemap done: packed={len(packed)} efficiency={efficiency:.4f}")

    return PackingResult(
        packed=packed,
        unpacked=[],
        efficiency=efficiency,
        container_size=container_size,
        algorithm=Algorithm.TREEMAP,
    )
