"""Engine defaults with environment-variable overrides.

Reads ``AFFINITY_*`` variables. Entry points always accept explicit
arguments; these settings only supply defaults to callers that opt in.
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class EngineSettings(BaseModel):
    """Tunable defaults for graph building, layout and partitioning."""

    min_similarity: float = Field(default=0.2, ge=0.0, le=1.0)
    max_per_cluster: int = Field(default=10, ge=1)
    canvas_width: float = Field(default=800.0, gt=0)
    canvas_height: float = Field(default=600.0, gt=0)
    layout_iterations: int = Field(default=120, ge=0)
    swap_iterations: int = Field(default=100, ge=0)
    diagnostics: bool = False


_ENV_FIELDS: dict[str, str] = {
    "AFFINITY_MIN_SIMILARITY": "min_similarity",
    "AFFINITY_MAX_PER_CLUSTER": "max_per_cluster",
    "AFFINITY_CANVAS_WIDTH": "canvas_width",
    "AFFINITY_CANVAS_HEIGHT": "canvas_height",
    "AFFINITY_LAYOUT_ITERATIONS": "layout_iterations",
    "AFFINITY_SWAP_ITERATIONS": "swap_iterations",
    "AFFINITY_DIAGNOSTICS": "diagnostics",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_settings() -> EngineSettings:
    """Build :class:`EngineSettings` from the environment.

    Raises:
        ValueError: If a variable is set but cannot be parsed or is out of range.
    """
    overrides: dict[str, object] = {}
    for env_name, field_name in _ENV_FIELDS.items():
        raw = os.getenv(env_name, "")
        if not raw.strip():
            continue
        if field_name == "diagnostics":
            overrides[field_name] = _parse_bool(env_name, raw)
        else:
            overrides[field_name] = raw.strip()

    try:
        settings = EngineSettings(**overrides)
    except ValueError as exc:
        raise ValueError(f"Invalid AFFINITY_* configuration: {exc}") from exc

    if overrides:
        logger.info("Engine settings overridden from environment: %s", sorted(overrides))
    return settings
