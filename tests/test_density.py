from __future__ import annotations

import pytest

from layout_packer.density import DENSITY_MODES, VARIANTS, get_density_mode, get_variant
from layout_packer.models import Algorithm


def test_density_presets() -> None:
    loose = get_density_mode("loose")

    assert (loose.padding, loose.gap, loose.min_item_size) == (16, 12, 120)
    assert get_density_mode(" Natural ").jitter == 4
    assert set(DENSITY_MODES) == {"loose", "tight", "adaptive", "natural"}


def test_unknown_density_lists_valid_names() -> None:
    with pytest.raises(ValueError, match="Unknown density mode 'cosy'"):
        get_density_mode("cosy")


def test_density_builds_packing_options() -> None:
    options = get_density_mode("tight").options(320, 240, sort_by="area")

    assert (options.container_width, options.container_height) == (320, 240)
    assert (options.padding, options.gap) == (8, 6)
    assert options.sort_by == "area"


def test_variant_table() -> None:
    assert len(VARIANTS) == 24
    assert all(variant.density in DENSITY_MODES for variant in VARIANTS)

    smooth = get_variant(19)
    assert smooth.name == "Smooth Treemap"
    assert smooth.algorithm == Algorithm.TREEMAP
    assert smooth.animation == "flow"


def test_get_variant_clamps_index() -> None:
    assert get_variant(-3) == VARIANTS[0]
    assert get_variant(500) == VARIANTS[-1]
