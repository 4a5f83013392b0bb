"""doccatalog - Content catalog for multi-repository, multi-version documentation sites."""

from __future__ import annotations

# Catalog
from doccatalog.catalog import (
    Component,
    ComponentRegistry,
    ComponentVersion,
    ComponentVersionBundle,
    ContentCatalog,
    Family,
    FileSource,
    Origin,
    OutCoordinates,
    PubCoordinates,
    Resource,
    ResourceId,
    SourceFile,
)
from doccatalog.classify import classify_content

# AsciiDoc
from doccatalog.asciidoc import AsciiDocAttribute, AsciiDocConfig, resolve_asciidoc_config

# Config
from doccatalog.config import Config, HtmlExtensionStyle, LatestVersionSegmentStrategy, UrlConfig

# Errors
from doccatalog.errors import (
    CatalogError,
    ConfigError,
    ConfigNotFoundError,
    DuplicateComponentVersionError,
    DuplicateResourceError,
    ErrorCodes,
    InvalidInputError,
    InvalidPageAliasError,
    InvalidResourceIdError,
)

__version__ = "0.1.0"

__all__ = [
    # Catalog
    "ContentCatalog",
    "ComponentRegistry",
    "classify_content",
    # Types
    "Component",
    "ComponentVersion",
    "ComponentVersionBundle",
    "Family",
    "FileSource",
    "Origin",
    "OutCoordinates",
    "PubCoordinates",
    "Resource",
    "ResourceId",
    "SourceFile",
    # AsciiDoc
    "AsciiDocAttribute",
    "AsciiDocConfig",
    "resolve_asciidoc_config",
    # Config
    "Config",
    "HtmlExtensionStyle",
    "LatestVersionSegmentStrategy",
    "UrlConfig",
    # Errors
    "CatalogError",
    "ConfigError",
    "ConfigNotFoundError",
    "DuplicateComponentVersionError",
    "DuplicateResourceError",
    "ErrorCodes",
    "InvalidInputError",
    "InvalidPageAliasError",
    "InvalidResourceIdError",
]
