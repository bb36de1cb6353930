from __future__ import annotations

from typing import Iterable

from layout_packer.models import PackingMetrics, PackingResult, Rect


def packed_area(rects: Iterable[Rect]) -> float:
    return sum(r.width * r.height for r in rects)


def clamp_efficiency(used_area: float, total_area: float) -> float:
    """used / total kept inside [0, 1]; a non-positive total yields 0."""
    if total_area <= 0:
        return 0.0
    return min(1.0, max(0.0, used_area / total_area))


def calculate_metrics(result: PackingResult) -> PackingMetrics:
    """
    Recompute efficiency diagnostics from the packed rects and container size.

    The packer's own ``efficiency`` field is not trusted: it is measured over the
    padded area, while these metrics use the full container.
    """
    total_area = float(result.container_size.width) * float(result.container_size.height)
    used_area = packed_area(result.packed)
    item_count = len(result.packed)

    return PackingMetrics(
        efficiency=0.0 if total_area <= 0 else used_area / total_area,
        wasted_space=total_area - used_area,
        item_count=item_count,
        average_item_area=used_area / item_count if item_count > 0 else 0.0,
    )
