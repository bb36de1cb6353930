"""Runtime settings; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from layout_packer.models import Algorithm

# Load .env when present (e.g. local dev); does not override existing env
load_dotenv()

ENV_PREFIX = "LAYOUT_PACKER_"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Process-wide defaults for hosts, the API and the CLI."""

    default_algorithm: Algorithm = Algorithm.MAXRECTS
    default_density: str = "loose"
    strict_algorithms: bool = Field(
        default=False,
        description="Raise instead of falling back for unimplemented algorithms")
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level


def _env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def get_settings() -> Settings:
    """Read settings from the environment. Nothing is cached between calls."""
    values: dict[str, object] = {}

    if (algorithm := _env("DEFAULT_ALGORITHM")) is not None:
        values["default_algorithm"] = algorithm.lower()
    if (density := _env("DEFAULT_DENSITY")) is not None:
        values["default_density"] = density.lower()
    if (strict := _env("STRICT")) is not None:
        values["strict_algorithms"] = strict.lower() in _TRUTHY
    if (level := _env("LOG_LEVEL")) is not None:
        values["log_level"] = level
    if (origins := _env("CORS_ORIGINS")) is not None:
        values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

    return Settings(**values)


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
