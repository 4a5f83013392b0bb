"""Configuration loading and validation."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from doccatalog.errors import ConfigError, ConfigNotFoundError

__all__ = [
    "Config",
    "HtmlExtensionStyle",
    "LatestVersionSegmentStrategy",
    "UrlConfig",
]


class Config:
    """Configuration accessor with dot-path key support.

    Holds the parts of a site playbook the catalog reads (``urls`` and
    ``site``); any other keys are carried along untouched.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigNotFoundError(config_path=str(path))

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in configuration file: {path}") from e

        if parsed is None:
            return cls()
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Configuration file must be a YAML mapping: {path}")
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    @property
    def data(self) -> dict[str, Any]:
        """The raw configuration mapping."""
        return self._data


class HtmlExtensionStyle(str, Enum):
    """Controls how the .html extension of a page appears in its URL."""

    DEFAULT = "default"
    INDEXIFY = "indexify"
    DROP = "drop"


class LatestVersionSegmentStrategy(str, Enum):
    """Controls how the latest version segment is applied to URLs."""

    REPLACE = "replace"
    REDIRECT_FROM = "redirect:from"


class UrlConfig(BaseModel):
    """Validated ``urls`` section of the playbook.

    Keys are accepted in snake_case or in the playbook's camelCase form.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    html_extension_style: HtmlExtensionStyle = HtmlExtensionStyle.DEFAULT
    redirect_facility: str = "static"
    latest_version_segment_strategy: LatestVersionSegmentStrategy | None = None
    latest_version_segment: str | None = None
    latest_prerelease_version_segment: str | None = None

    @model_validator(mode="after")
    def _normalize_latest_version_segments(self) -> UrlConfig:
        if self.latest_version_segment is None and self.latest_prerelease_version_segment is None:
            self.latest_version_segment_strategy = None
            return self
        if self.latest_version_segment_strategy is None:
            self.latest_version_segment_strategy = LatestVersionSegmentStrategy.REPLACE
        elif self.latest_version_segment_strategy is LatestVersionSegmentStrategy.REDIRECT_FROM:
            if not self.latest_version_segment:
                self.latest_version_segment = None
            if not self.latest_prerelease_version_segment:
                self.latest_prerelease_version_segment = None
                if self.latest_version_segment is None:
                    self.latest_version_segment_strategy = None
        return self

    @classmethod
    def from_config(cls, config: Config | Mapping[str, Any] | None) -> UrlConfig:
        """Build URL options from the ``urls`` key of a playbook.

        Raises:
            ConfigError: If an option has an unsupported value.
        """
        if isinstance(config, Config):
            data = config.get("urls")
        else:
            data = (config or {}).get("urls")
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise ConfigError(message=f"Invalid urls configuration: {e}", cause=e) from e
