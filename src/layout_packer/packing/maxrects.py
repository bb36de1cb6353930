# src/layout_packer/packing/maxrects.py

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from layout_packer.geometry import rect_contains, rects_overlap
from layout_packer.metrics import clamp_efficiency
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


def placement_order(items: Iterable[PackableItem]) -> list[PackableItem]:
    """
    Highest priority first; ties go to the larger minimum area. Stable otherwise.

    Sorts on ``item.weight`` so a NaN or non-positive priority sorts last
    instead of scrambling the order of the other items.
    """
    return sorted(items, key=lambda item: (-item.weight, -item.min_area))


def short_side_fit(free_rect: Rect, width: float, height: float) -> Optional[tuple[float, float]]:
    """
    Best Short Side Fit score of placing (width, height) in free_rect.

    Returns (short_leftover, long_leftover), lower is better, or None when the
    footprint does not fit.
    """
    if width > free_rect.width or height > free_rect.height:
        return None
    leftover_h = free_rect.width - width
    leftover_v = free_rect.height - height
    return min(leftover_h, leftover_v), max(leftover_h, leftover_v)


def find_best_free_rect(free_rects: list[Rect], width: float, height: float) -> Optional[Rect]:
    best: Optional[Rect] = None
    best_short = math.inf
    best_long = math.inf

    for free_rect in free_rects:
        score = short_side_fit(free_rect, width, height)
        if score is None:
            continue
        short_side, long_side = score
        if short_side < best_short or (short_side == best_short and long_side < best_long):
            best = free_rect
            best_short = short_side
            best_long = long_side

    return best


def split_free_rect(free_rect: Rect, used: Rect) -> list[Rect]:
    """
    Carve used out of free_rect, returning the maximal remainders.

    When used sits in the top-left corner of free_rect (the chosen rect) only the
    right and bottom remainders exist. Other free rects the footprint crosses may
    also yield left and top remainders. Degenerate remainders are dropped.
    """
    if not rects_overlap(free_rect, used):
        return [free_rect]

    pieces: list[Rect] = []

    # Right remainder
    if used.right < free_rect.right:
        pieces.append(Rect(
            x=used.right,
            y=free_rect.y,
            width=free_rect.right - used.right,
            height=free_rect.height,
        ))

    # Bottom remainder
    if used.bottom < free_rect.bottom:
        pieces.append(Rect(
            x=free_rect.x,
            y=used.bottom,
            width=free_rect.width,
            height=free_rect.bottom - used.bottom,
        ))

    # Left remainder
    if used.x > free_rect.x:
        pieces.append(Rect(
            x=free_rect.x,
            y=free_rect.y,
            width=used.x - free_rect.x,
            height=free_rect.height,
        ))

    # Top remainder
    if used.y > free_rect.y:
        pieces.append(Rect(
            x=free_rect.x,
            y=free_rect.y,
            width=free_rect.width,
            height=used.y - free_rect.y,
        ))

    return [r for r in pieces if r.width > 0 and r.height > 0]


def prune_free_rects(rects: list[Rect]) -> list[Rect]:
    """Remove rectangles fully contained in another; of two equal rects the first is kept."""
    kept: list[Rect] = []
    for i, a in enumerate(rects):
        contained = False
        for j, b in enumerate(rects):
            if i == j:
                continue
            if rect_contains(b, a) and (a != b or j < i):
                contained = True
                break
        if not contained:
            kept.append(a)
    return kept


def place_footprint(free_rects: list[Rect], used: Rect) -> list[Rect]:
    """Free list after reserving used: untouched rects first, then the remainders."""
    untouched = [r for r in free_rects if not rects_overlap(r, used)]
    remainders: list[Rect] = []
    for r in free_rects:
        if rects_overlap(r, used):
            remainders.extend(split_free_rect(r, used))
    return prune_free_rects(untouched + remainders)


def pack_maxrects(items: Iterable[PackableItem], options: PackingOptions) -> PackingResult:
    """
    MaxRects packer with the Best Short Side Fit heuristic.

    - Items are visited by descending priority, then descending minimum area
    - Each item is placed at its minimum size in the top-left corner of the
      free rect with the smallest short-side leftover (long side breaks ties)
    - The gap widens the reserved footprint but not the returned rect
    - Items that fit nowhere are reported in ``unpacked``; fit is all or nothing
    - Deterministic (no randomness)
    """
    items = list(items)
    usable = options.usable_rect
    gap = options.gap

    logger.debug(
        f"pack_maxrects entry: items={len(items)} usable={usable.width}x{usable.height} gap={gap}"
    )

    free_rects: list[Rect] = [usable] if usable.area > 0 else []
    packed: list[PackedRect] = []
    unpacked: list[str] = []
    packed_area = 0.0

    for item in placement_order(items):
        footprint_w = item.min_width + gap
        footprint_h = item.min_height + gap

        best = find_best_free_rect(free_rects, footprint_w, footprint_h)
        if best is None:
            unpacked.append(item.id)
            continue

        packed.append(PackedRect(
            id=item.id,
            x=best.x,
            y=best.y,
            width=item.min_width,
            height=item.min_height,
        ))
        packed_area += item.min_area

        footprint = Rect(x=best.x, y=best.y, width=footprint_w, height=footprint_h)
        free_rects = place_footprint(free_rects, footprint)

    efficiency = clamp_efficiency(packed_area, usable.area)

    logger.debug(
        f"pack_maxrects done: packed={len(packed)} unpacked={len(unpacked)} "
        f"free_rects={len(free_rects)} efficiency={efficiency:.4f}"
    )

    return PackingResult(
        packed=packed,
        unpacked=unpacked,
        efficiency=efficiency,
        container_size=ContainerSize(
            width=options.container_width,
            height=options.container_height,
        ),
        algorithm=Algorithm.MAXRECTS,
    )
