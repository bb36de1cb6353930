"""FastAPI endpoint for the layout packer."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from layout_packer.config import get_settings
from layout_packer.density import DENSITY_MODES, VARIANTS, DensityMode, PackingVariant
from layout_packer.dispatch import AlgorithmNotImplementedError, pack
from layout_packer.io.schemas import AlgorithmInfoSchema, PackRequestSchema, PackResponseSchema
from layout_packer.metrics import calculate_metrics
from layout_packer.models import Algorithm, PackingMetrics, PackingResult

logger = logging.getLogger(__name__)

settings = get_settings()

# FastAPI app instance (exactly one)
app = FastAPI(
    title="Layout Packer API",
    description="Rectangle layout service: MaxRects and squarified treemap packing",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    # Credentials only for an explicit origin list, never with the "*" wildcard
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}


@app.get("/algorithms", response_model=list[AlgorithmInfoSchema])
async def algorithms() -> list[AlgorithmInfoSchema]:
    """Every selectable algorithm and whether it has a real implementation."""
    return [AlgorithmInfoSchema(name=a, implemented=a.is_implemented) for a in Algorithm]


@app.get("/density-modes", response_model=dict[str, DensityMode])
async def density_modes() -> dict[str, DensityMode]:
    return DENSITY_MODES


@app.get("/variants", response_model=list[PackingVariant])
async def variants() -> list[PackingVariant]:
    return VARIANTS


@app.post("/pack", response_model=PackResponseSchema)
async def pack_items(request: PackRequestSchema) -> PackResponseSchema:
    """
    Lay out items and return the placement with its metrics.

    Input (request body):
        {
            "algorithm": "maxrects",
            "items": [
                { "id": "a", "minWidth": 200, "minHeight": 150, "priority": 10 }
            ],
            "options": { "containerWidth": 400, "containerHeight": 300 }
        }
    """
    current = get_settings()
    algorithm = request.algorithm or current.default_algorithm
    strict = current.strict_algorithms if request.strict is None else request.strict

    try:
        options = request.packing_options()
        result = pack(algorithm, request.items, options, strict=strict)
        metrics = calculate_metrics(result)
    except AlgorithmNotImplementedError as e:
        raise HTTPException(status_code=501, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"ERROR in /pack endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    # Log one concise line
    logger.info(
        f"algorithm={result.algorithm.value}, packed={len(result.packed)}, "
        f"unpacked={len(result.unpacked)}, efficiency={result.efficiency:.3f}"
    )

    return PackResponseSchema(result=result, metrics=metrics)


@app.post("/metrics", response_model=PackingMetrics)
async def metrics(result: PackingResult) -> PackingMetrics:
    """Recompute diagnostics for a result the caller already holds."""
    return calculate_metrics(result)
