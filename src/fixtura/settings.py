# src/fixtura/settings.py
"""Population settings and YAML loading.

Settings tune the defaults a build falls back to when no restriction
applies. Precedence when loading (highest to lowest):

1. overrides   - dict passed by the caller
2. config_file - YAML mapping
3. defaults    - PopulationSettings field defaults

Usage:
    settings = load_settings(Path("fixtura.yaml"), overrides={"max_depth": 4})
    order = random_instance_of(Order, settings=settings)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import BaseModel, Field, model_validator

from fixtura.sizes import DEFAULT_MAX_SIZE, DEFAULT_MIN_SIZE, SizeRange


class PopulationSettings(BaseModel):
    """Defaults used when populating composite instances."""

    model_config = {"frozen": True, "extra": "forbid"}

    collection_min_size: int = Field(
        default=DEFAULT_MIN_SIZE,
        ge=0,
        description="Smallest size for collections with no size restriction",
    )
    collection_max_size: int = Field(
        default=DEFAULT_MAX_SIZE,
        ge=0,
        description="Largest size for collections with no size restriction",
    )
    max_depth: int = Field(
        default=8,
        gt=0,
        description="Deepest nesting of composite types before fields are left unset",
    )
    optional_none_probability: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Chance that an Optional field is left as None",
    )

    @model_validator(mode="after")
    def _check_collection_bounds(self) -> Self:
        if self.collection_min_size > self.collection_max_size:
            raise ValueError(
                f"collection_min_size ({self.collection_min_size}) exceeds collection_max_size ({self.collection_max_size})"
            )
        return self

    @property
    def collection_size(self) -> SizeRange:
        return SizeRange(self.collection_min_size, self.collection_max_size)


DEFAULT_SETTINGS = PopulationSettings()


def load_settings(
    config_file: Path | None = None,
    *,
    overrides: dict[str, Any] | None = None,
) -> PopulationSettings:
    """Load settings from an optional YAML file plus overrides.

    Raises:
        FileNotFoundError: If config_file does not exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the YAML document is not a mapping.
        pydantic.ValidationError: If the merged settings fail validation.
    """
    config_dict: dict[str, Any] = {}

    if config_file is not None:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        with config_file.open() as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {config_file} must be a YAML mapping, got {type(loaded).__name__}")
        config_dict.update(loaded)

    if overrides is not None:
        config_dict.update(overrides)

    return PopulationSettings(**config_dict)
