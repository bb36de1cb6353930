from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from layout_packer.config import configure_logging, get_settings
from layout_packer.dispatch import pack
from layout_packer.io.schemas import PackRequestSchema
from layout_packer.metrics import calculate_metrics
from layout_packer.models import Algorithm, PackableItem, PackingOptions, PackingResult

logger = logging.getLogger(__name__)


def load_input(path: Path, density: Optional[str] = None) -> tuple[list[PackableItem], PackingOptions]:
    """
    Read items and packing options from a JSON file.

    Accepted shapes:
      {"items": [...], "options": {"containerWidth": ..., "containerHeight": ...}}
      {"items": [...], "containerWidth": ..., "containerHeight": ...}

    In the second shape padding and gap come from the density mode, if one is
    given. The file is validated with the same schema as the /pack request body;
    any ``algorithm`` or ``strict`` key in it is ignored in favour of the flags.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Input must be a JSON object with 'items'")
    data = {key: value for key, value in data.items() if key not in ("algorithm", "strict")}
    if density is not None:
        data = {**data, "density": density}

    request = PackRequestSchema.model_validate(data)
    return request.items, request.packing_options()


def write_result(result: PackingResult, path: str = "layout.json") -> Path:
    """
    Write a packing result to a JSON file (camelCase keys).

    Creates parent folders if needed and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result.model_dump(mode="json", by_alias=True), f, indent=2, sort_keys=True)
    logger.debug(f"write_result: wrote {output_path}")
    return output_path


def print_summary(result: PackingResult) -> None:
    metrics = calculate_metrics(result)
    size = result.container_size

    print(f"📐 CONTAINER: {size.width:g} x {size.height:g}  ({result.algorithm.value})")
    print("✅ Packed   :", result.packed_ids if result.packed else "(none)")
    print("❌ Unpacked :", result.unpacked if result.unpacked else "(none)")

    print("\n📊 METRICS:")
    print(f"  Efficiency        : {metrics.efficiency * 100:.2f}%")
    print(f"  Wasted space      : {metrics.wasted_space:.2f}")
    print(f"  Average item area : {metrics.average_item_area:.2f}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Layout Packer CLI")
    parser.add_argument("--input", required=True, help="Input JSON file with items and container size")
    parser.add_argument("--output", default="layout.json", help="Output layout JSON file")
    parser.add_argument(
        "--algorithm",
        choices=[a.value for a in Algorithm],
        default=settings.default_algorithm.value,
        help="maxrects and treemap are implemented; shelf, guillotine and masonry fall back to maxrects",
    )
    parser.add_argument(
        "--density",
        default=None,
        help="Density mode (loose, tight, adaptive, natural) for padding and gap",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=settings.strict_algorithms,
        help="Fail instead of falling back for unimplemented algorithms",
    )

    args = parser.parse_args(argv)
    configure_logging(settings)

    try:
        items, options = load_input(Path(args.input), density=args.density)
        result = pack(args.algorithm, items, options, strict=args.strict)
    except (OSError, ValueError, NotImplementedError) as e:
        logger.error(f"layout-packer failed: {e}")
        return 1

    print_summary(result)
    output_path = write_result(result, args.output)
    print(f"\n💾 Layout written to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
