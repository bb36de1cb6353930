"""Data schemas for input/output operations."""

from typing import List, Optional

from pydantic import Field, model_validator

from layout_packer.density import get_density_mode
from layout_packer.models import (
    Algorithm,
    CamelModel,
    PackableItem,
    PackingMetrics,
    PackingOptions,
    PackingResult,
)


class PackRequestSchema(CamelModel):
    """
    Schema for a packing request.

    Either ``options`` is given, or ``container_width``/``container_height``
    are given and spacing comes from the named ``density`` mode (or zero).
    ``density`` together with ``options`` is rejected.
    """
    algorithm: Optional[Algorithm] = Field(None, description="Defaults to the configured algorithm")
    items: List[PackableItem] = Field(default_factory=list, description="Items to lay out")
    options: Optional[PackingOptions] = None
    container_width: Optional[float] = Field(None, description="Used when options is omitted")
    container_height: Optional[float] = Field(None, description="Used when options is omitted")
    density: Optional[str] = Field(None, description="Density mode name for padding/gap")
    strict: Optional[bool] = Field(None, description="Reject unimplemented algorithms")

    @model_validator(mode="after")
    def _check_container(self) -> "PackRequestSchema":
        if self.options is None and (self.container_width is None or self.container_height is None):
            raise ValueError("Provide 'options' or both 'containerWidth' and 'containerHeight'")
        if self.options is not None and self.density is not None:
            raise ValueError("'density' sets padding and gap, so it cannot be combined with 'options'")
        return self

    def packing_options(self) -> PackingOptions:
        if self.options is not None:
            return self.options
        if self.density is not None:
            return get_density_mode(self.density).options(self.container_width, self.container_height)
        return PackingOptions(
            container_width=self.container_width,
            container_height=self.container_height,
        )


class PackResponseSchema(CamelModel):
    """Schema for a packing response."""
    result: PackingResult
    metrics: PackingMetrics


class AlgorithmInfoSchema(CamelModel):
    name: Algorithm
    implemented: bool
