"""doccatalog catalog: components, versions, resources and their addresses.

Provides the component registry, file classification, path and URL
derivation, and the ContentCatalog index.

Usage::

    from doccatalog.catalog import ContentCatalog

    catalog = ContentCatalog({"urls": {"html_extension_style": "indexify"}})
    catalog.register_component_version("the-component", "v1.2.3")
    catalog.get_component("the-component").url  # "/the-component/v1.2.3/"
"""

from __future__ import annotations

from doccatalog.catalog.catalog import ContentCatalog
from doccatalog.catalog.classifier import classify
from doccatalog.catalog.media_types import resolve_media_type
from doccatalog.catalog.paths import compute_out, compute_pub, is_publishable, root_path
from doccatalog.catalog.registry import ComponentRegistry
from doccatalog.catalog.resource_id import format_resource_id, parse_resource_id
from doccatalog.catalog.types import (
    Component,
    ComponentVersion,
    ComponentVersionBundle,
    Family,
    FileSource,
    NavInfo,
    Origin,
    OutCoordinates,
    PubCoordinates,
    Resource,
    ResourceId,
    SourceFile,
)
from doccatalog.catalog.version import compare_versions_desc, sort_versions

__all__ = [
    "Component",
    "ComponentRegistry",
    "ComponentVersion",
    "ComponentVersionBundle",
    "ContentCatalog",
    "Family",
    "FileSource",
    "NavInfo",
    "Origin",
    "OutCoordinates",
    "PubCoordinates",
    "Resource",
    "ResourceId",
    "SourceFile",
    "classify",
    "compare_versions_desc",
    "compute_out",
    "compute_pub",
    "format_resource_id",
    "is_publishable",
    "parse_resource_id",
    "resolve_media_type",
    "root_path",
    "sort_versions",
]
