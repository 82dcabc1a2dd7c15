"""Configuration for Chimera.

Settings live in a YAML file and can be overridden from the environment:

    CHIMERA_MERGE_FEE        registry.merge_fee
    CHIMERA_ADMINISTRATOR    registry.administrator

Keys are addressed with dotted paths, e.g. ``registry.merge_fee``.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .rendering.metadata import DEFAULT_DESCRIPTION, DEFAULT_NAME_PREFIX


logger = logging.getLogger(__name__)

ENV_OVERRIDES: dict[str, str] = {
    "CHIMERA_MERGE_FEE": "registry.merge_fee",
    "CHIMERA_ADMINISTRATOR": "registry.administrator",
}


class RegistrySettings(BaseModel):
    """Registry economics and administration."""

    merge_fee: int = Field(default=0, ge=0)
    administrator: str = "admin"


class RenderingSettings(BaseModel):
    """Text used in metadata documents."""

    name_prefix: str = DEFAULT_NAME_PREFIX
    description: str = DEFAULT_DESCRIPTION


class ChimeraConfig(BaseModel):
    """Top-level configuration."""

    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    rendering: RenderingSettings = Field(default_factory=RenderingSettings)

    @classmethod
    def load(cls, path: Path | str | None = None, use_env: bool = True) -> "ChimeraConfig":
        """Load config from a YAML file, then apply environment overrides.

        A missing file yields the defaults.
        """
        data: dict[str, Any] = {}
        if path is not None and Path(path).exists():
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        elif path is not None:
            logger.warning(f"[Config] {path} not found, using defaults")

        config = cls.model_validate(data)

        if use_env:
            for env_var, key in ENV_OVERRIDES.items():
                value = os.environ.get(env_var)
                if value is not None:
                    config.set(key, value)

        return config

    def save(self, path: Path | str) -> None:
        """Write config to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(), f, sort_keys=False)

    def _resolve(self, key: str) -> tuple[BaseModel, str]:
        section_name, _, field_name = key.partition(".")
        if section_name not in type(self).model_fields:
            raise KeyError(f"Unknown key: {key}")
        section = getattr(self, section_name)
        if field_name not in type(section).model_fields:
            raise KeyError(f"Unknown key: {key}")
        return section, field_name

    def get(self, key: str) -> Any:
        """Read a value by dotted key."""
        section, field_name = self._resolve(key)
        return getattr(section, field_name)

    def set(self, key: str, value: Any) -> None:
        """Set a value by dotted key, validating and coercing it.

        Raises:
            KeyError: Unknown key
            ValueError: Value fails validation for that key
        """
        section, field_name = self._resolve(key)
        data = section.model_dump()
        data[field_name] = value
        try:
            updated = type(section).model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {value!r}") from e

        section_name = key.partition(".")[0]
        setattr(self, section_name, updated)
