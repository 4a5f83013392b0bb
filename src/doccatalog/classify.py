"""Build a content catalog from the aggregator's output."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from doccatalog.asciidoc import AsciiDocConfig, resolve_asciidoc_config
from doccatalog.catalog.catalog import ContentCatalog
from doccatalog.catalog.classifier import classify
from doccatalog.catalog.types import ComponentVersion, ComponentVersionBundle
from doccatalog.config import Config

logger = logging.getLogger(__name__)

__all__ = ["classify_content"]


def classify_content(
    playbook: Config | Mapping[str, Any] | None,
    aggregate: Iterable[ComponentVersionBundle | Mapping[str, Any]],
    site_asciidoc_config: AsciiDocConfig | Mapping[str, Any] | None = None,
) -> ContentCatalog:
    """Classify every aggregated file and return the finished catalog.

    All component versions are registered first so that version ordering
    (and therefore latest version URL segments) is final before any path is
    computed. Files are then classified and added group by group, after
    which the start pages of every component version and of the site are
    resolved.

    Args:
        playbook: Site playbook; its ``urls`` and ``site.start_page`` keys are read.
        aggregate: One bundle per (component, version) group.
        site_asciidoc_config: Site-wide AsciiDoc config that component
            version descriptors are merged onto.

    Returns:
        The populated ContentCatalog.

    Raises:
        ConfigError: If the ``urls`` options are invalid.
        DuplicateComponentVersionError: If a component version appears twice.
        DuplicateResourceError: If two files claim the same resource ID.
    """
    config = playbook if isinstance(playbook, Config) else Config(dict(playbook or {}))
    if site_asciidoc_config is not None and not isinstance(site_asciidoc_config, AsciiDocConfig):
        site_asciidoc_config = AsciiDocConfig.from_dict(site_asciidoc_config)

    catalog = ContentCatalog(config)
    bundles = [b if isinstance(b, ComponentVersionBundle) else ComponentVersionBundle.from_dict(b) for b in aggregate]

    registered: list[tuple[ComponentVersionBundle, ComponentVersion]] = []
    for bundle in bundles:
        component_version = catalog.register_component_version(
            bundle.name,
            bundle.version,
            title=bundle.title,
            display_version=bundle.display_version,
            prerelease=bundle.prerelease,
            asciidoc=resolve_asciidoc_config(site_asciidoc_config, bundle.asciidoc),
            start_page=False,
        )
        registered.append((bundle, component_version))

    for bundle, _ in registered:
        accepted = 0
        for file in bundle.files:
            resource = classify(file, bundle.name, bundle.version, bundle.nav)
            if resource is not None:
                catalog.add_file(resource)
                accepted += 1
        logger.debug(
            "Classified %d of %d files in %s@%s", accepted, len(bundle.files), bundle.version, bundle.name
        )

    for bundle, component_version in registered:
        catalog.register_component_version_start_page(bundle.name, component_version, bundle.start_page)

    site_start_page = config.get("site.start_page", config.get("site.startPage"))
    if site_start_page:
        catalog.register_site_start_page(site_start_page)
    return catalog
