from __future__ import annotations

from layout_packer.geometry import (
    bounds_overlap,
    clip_to,
    rect_bounds,
    rect_contains,
    rects_overlap,
)
from layout_packer.models import PackedRect, Rect


def test_bounds_overlap_overlapping() -> None:
    """Test that overlapping rectangles are detected."""
    # Rect a: (0, 0) to (2, 2)
    a = (0.0, 0.0, 2.0, 2.0)
    # Rect b: (1, 1) to (3, 3) - overlaps with a
    b = (1.0, 1.0, 3.0, 3.0)

    assert bounds_overlap(a, b) is True


def test_bounds_overlap_not_overlapping() -> None:
    """Test that non-overlapping rectangles are detected."""
    a = (0.0, 0.0, 1.0, 1.0)
    b = (2.0, 2.0, 3.0, 3.0)

    assert bounds_overlap(a, b) is False


def test_touching_edges_do_not_overlap() -> None:
    a = Rect(x=0, y=0, width=10, height=10)
    right = Rect(x=10, y=0, width=5, height=10)
    below = Rect(x=0, y=10, width=10, height=5)

    assert rects_overlap(a, right) is False
    assert rects_overlap(a, below) is False


def test_zero_area_rect_never_overlaps() -> None:
    a = Rect(x=0, y=0, width=10, height=10)
    line = Rect(x=5, y=0, width=0, height=10)

    assert rects_overlap(a, line) is False


def test_rect_contains() -> None:
    outer = Rect(x=0, y=0, width=100, height=50)

    assert rect_contains(outer, Rect(x=10, y=10, width=20, height=20)) is True
    assert rect_contains(outer, outer) is True
    assert rect_contains(outer, Rect(x=90, y=0, width=20, height=10)) is False
    assert rect_contains(Rect(x=10, y=10, width=20, height=20), outer) is False


def test_rect_bounds() -> None:
    r = Rect(x=2, y=3, width=4, height=5)

    assert rect_bounds(r) == (2, 3, 6, 8)
    # Negative sizes are clamped on construction
    assert rect_bounds(Rect(x=0, y=0, width=-4, height=1)) == (0, 0, 0, 1)


def test_clip_to_trims_far_edges_and_keeps_id() -> None:
    bounds = Rect(x=10, y=10, width=100, height=50)
    rect = PackedRect(id="a", x=80, y=40, width=60, height=60)

    clipped = clip_to(rect, bounds)

    assert clipped.id == "a"
    assert (clipped.x, clipped.y, clipped.width, clipped.height) == (80, 40, 30, 20)
    assert rect_contains(bounds, clipped)


def test_clip_to_collapses_rect_outside_bounds() -> None:
    bounds = Rect(x=0, y=0, width=10, height=10)
    clipped = clip_to(Rect(x=20, y=20, width=5, height=5), bounds)

    assert clipped.area == 0
    assert rect_contains(bounds, clipped)
