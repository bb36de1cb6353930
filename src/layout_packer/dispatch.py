"""Select a packing algorithm by name and run it."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Union

from layout_packer.models import Algorithm, PackableItem, PackingOptions, PackingResult
from layout_packer.packing.maxrects import pack_maxrects
from layout_packer.packing.treemap import pack_treemap

logger = logging.getLogger(__name__)

Packer = Callable[[Iterable[PackableItem], PackingOptions], PackingResult]

PACKERS: dict[Algorithm, Packer] = {
    Algorithm.MAXRECTS: pack_maxrects,
    Algorithm.TREEMAP: pack_treemap,
}

FALLBACK_ALGORITHM = Algorithm.MAXRECTS


class AlgorithmNotImplementedError(NotImplementedError):
    """Raised by strict dispatch for an algorithm that is named but not built."""

    def __init__(self, algorithm: Algorithm):
        self.algorithm = algorithm
        super().__init__(f"Packing algorithm '{algorithm.value}' is not implemented yet")


def resolve_algorithm(algorithm: Union[Algorithm, str], strict: bool = False) -> Algorithm:
    """
    Map a selector to the algorithm that will actually run.

    - Unknown names raise ValueError listing the valid ones
    - shelf / guillotine / masonry fall back to MaxRects, or raise
      AlgorithmNotImplementedError when strict
    """
    try:
        requested = Algorithm(algorithm)
    except ValueError:
        valid = [a.value for a in Algorithm]
        raise ValueError(f"Unknown packing algorithm '{algorithm}'. Valid: {valid}") from None

    if requested.is_implemented:
        return requested
    if strict:
        raise AlgorithmNotImplementedError(requested)

    logger.warning(
        f"Packing algorithm '{requested.value}' is not implemented; "
        f"falling back to '{FALLBACK_ALGORITHM.value}'"
    )
    return FALLBACK_ALGORITHM


def pack(
    algorithm: Union[Algorithm, str],
    items: Iterable[PackableItem],
    options: PackingOptions,
    strict: bool = False,
) -> PackingResult:
    """
    Pack items with the selected algorithm.

    The returned result's ``algorithm`` field names the packer that ran, which
    differs from the request when a stub name fell back to MaxRects.
    """
    packer = PACKERS[resolve_algorithm(algorithm, strict=strict)]
    return packer(items, options)
