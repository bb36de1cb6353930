"""Geometry utilities for rectangle layout."""

from __future__ import annotations

from layout_packer.models import Rect


def rect_bounds(rect: Rect) -> tuple[float, float, float, float]:
    """Return bounds as (x1, y1, x2, y2)."""
    return (rect.x, rect.y, rect.x + rect.width, rect.y + rect.height)


def bounds_overlap(
    a: tuple[float, float, float, float],
    b: tuple[float, float, float, float],
) -> bool:
    """
    Axis-aligned bounding box (AABB) overlap test.

    a, b are bounds: (x1, y1, x2, y2)

    Overlap exists only if they overlap on BOTH axes with positive area.
    Touching edges (ax2 == bx1) is NOT considered overlap.
    """
    ax1, ay1, ax2, ay2 = a
    bx1, by1, bx2, by2 = b

    return (ax1 < bx2 and ax2 > bx1) and (ay1 < by2 and ay2 > by1)


def rects_overlap(a: Rect, b: Rect) -> bool:
    """True iff the interiors of a and b intersect."""
    return bounds_overlap(rect_bounds(a), rect_bounds(b))


def rect_contains(outer: Rect, inner: Rect) -> bool:
    """True iff inner lies entirely inside outer (shared edges allowed)."""
    return (
        inner.x >= outer.x
        and inner.y >= outer.y
        and inner.x + inner.width <= outer.x + outer.width
        and inner.y + inner.height <= outer.y + outer.height
    )


def clip_to(rect: Rect, bounds: Rect) -> Rect:
    """
    Trim rect so it does not extend past bounds.

    The origin is clamped into bounds first; the far edges are then cut back.
    A rect lying wholly outside bounds collapses to zero size on the bound edge.
    """
    x = min(max(rect.x, bounds.x), bounds.right)
    y = min(max(rect.y, bounds.y), bounds.bottom)
    right = min(max(rect.right, x), bounds.right)
    bottom = min(max(rect.bottom, y), bounds.bottom)
    return rect.model_copy(update={"x": x, "y": y, "width": right - x, "height": bottom - y})
