"""The content catalog: components, versions and every classified resource."""

from __future__ import annotations

import logging
import posixpath
import threading
from dataclasses import replace
from typing import Any, Callable, Collection, Mapping

from doccatalog.asciidoc import AsciiDocConfig
from doccatalog.catalog.media_types import resolve_media_type
from doccatalog.catalog.paths import (
    ELIDED_VERSIONS,
    ROOT_COMPONENT,
    ROOT_MODULE,
    compute_nav_pub,
    compute_out,
    compute_pub,
    is_publishable,
    version_segment,
)
from doccatalog.catalog.registry import ComponentRegistry
from doccatalog.catalog.resource_id import format_resource_id, parse_resource_id
from doccatalog.catalog.types import (
    Component,
    ComponentVersion,
    Family,
    FileSource,
    Resource,
    ResourceId,
)
from doccatalog.config import Config, HtmlExtensionStyle, LatestVersionSegmentStrategy, UrlConfig
from doccatalog.errors import (
    DuplicateResourceError,
    InvalidPageAliasError,
    InvalidResourceIdError,
)

logger = logging.getLogger(__name__)

__all__ = ["ContentCatalog"]

_INDEX_RELATIVE = "index.adoc"
_ALIAS_MEDIA_TYPE = "text/html"
_PAGE_FAMILIES = frozenset({Family.PAGE})
_VERSION_FALLBACK = "master"


class ContentCatalog:
    """Index of all components and resources of a documentation site.

    The catalog is built by a single writer. Mutating methods hold an
    internal lock; lookups are safe to call concurrently once the catalog
    is no longer being modified.
    """

    def __init__(self, config: Config | Mapping[str, Any] | None = None, urls: UrlConfig | None = None) -> None:
        """Initialize the catalog.

        Args:
            config: Site playbook, used for its ``urls`` section.
            urls: Already validated URL options; takes precedence over config.

        Raises:
            ConfigError: If the ``urls`` section of config is invalid.
        """
        self._urls = urls if urls is not None else UrlConfig.from_config(config)
        self._registry = ComponentRegistry()
        self._files: dict[ResourceId, Resource] = {}
        self._write_lock = threading.RLock()

    # URL options

    @property
    def urls(self) -> UrlConfig:
        return self._urls

    @property
    def html_extension_style(self) -> HtmlExtensionStyle:
        return self._urls.html_extension_style

    @property
    def redirect_facility(self) -> str:
        return self._urls.redirect_facility

    @property
    def latest_version_segment_strategy(self) -> LatestVersionSegmentStrategy | None:
        return self._urls.latest_version_segment_strategy

    @property
    def latest_version_segment(self) -> str | None:
        return self._urls.latest_version_segment

    @property
    def latest_prerelease_version_segment(self) -> str | None:
        return self._urls.latest_prerelease_version_segment

    # Components

    def register_component_version(
        self,
        name: str,
        version: str,
        *,
        title: str | None = None,
        display_version: str | None = None,
        prerelease: bool | str = False,
        asciidoc: AsciiDocConfig | None = None,
        start_page: str | bool | None = None,
    ) -> ComponentVersion:
        """Register a component version and resolve its start page.

        Pass ``start_page=False`` to defer start page resolution, for example
        while files of the version have not been added yet. The version's URL
        is then left unset until :meth:`register_component_version_start_page`
        is called.

        Raises:
            DuplicateComponentVersionError: If the version is already registered.
        """
        with self._write_lock:
            component_version = self._registry.register(
                name,
                version,
                title=title,
                display_version=display_version,
                prerelease=prerelease,
                asciidoc=asciidoc,
                start_page=start_page if isinstance(start_page, str) else None,
            )
            if start_page is not False:
                self.register_component_version_start_page(name, component_version, component_version.start_page)
            return component_version

    def remove_component_version(self, name: str, version: str) -> bool:
        """Remove a component version; the remaining versions are re-sorted.

        Files of the removed version stay in the catalog. Returns False if
        the version is not registered.
        """
        with self._write_lock:
            removed = self._registry.remove(name, version)
            if removed:
                logger.debug("Removed version '%s' of component '%s'", version, name)
            return removed

    def get_component(self, name: str) -> Component | None:
        return self._registry.get_component(name)

    def get_component_version(self, component: str | Component, version: str) -> ComponentVersion | None:
        return self._registry.get_component_version(component, version)

    def get_components(self) -> list[Component]:
        """All components, in the order they were first registered."""
        return self._registry.components

    def get_components_sorted_by(self, attribute: str) -> list[Component]:
        """All components sorted by the value of the given attribute (e.g. ``title``)."""
        return sorted(self._registry.components, key=lambda component: getattr(component, attribute))

    def compute_version_segment(self, name: str, version: str, mode: str | None = None) -> str:
        """Return the URL segment used for a component version.

        ``""`` and ``master`` are elided. When a latest version segment is
        configured, the latest release and latest prerelease use it in place
        of their version: in published paths with the ``replace`` strategy,
        and for ``mode="alias"`` with the ``redirect:from`` strategy.
        ``mode="original"`` always returns the real segment.
        """
        if mode == "original" or version in ELIDED_VERSIONS:
            return version_segment(version)
        expected = (
            LatestVersionSegmentStrategy.REDIRECT_FROM if mode == "alias" else LatestVersionSegmentStrategy.REPLACE
        )
        if self.latest_version_segment_strategy is not expected:
            return version
        component = self.get_component(name)
        if component is None:
            return version
        component_version = self.get_component_version(component, version)
        if component_version is None:
            return version
        if component_version is component.latest_release:
            segment = self.latest_version_segment
        elif component_version is component.latest_prerelease:
            segment = self.latest_prerelease_version_segment
        else:
            segment = None
        return version if segment is None else segment

    # Files

    def add_file(self, resource: Resource) -> Resource:
        """Insert a classified resource, deriving its ``out`` and ``pub`` coordinates.

        Missing ``src`` details (basename, stem, extname, media type) are
        filled in from ``src.relative``.

        Raises:
            DuplicateResourceError: If a resource with the same ID is already
                registered. The message names the locations of both files.
        """
        with self._write_lock:
            src = resource.src
            existing = self._files.get(src.id)
            if existing is not None:
                raise self._duplicate_error(existing, resource)
            self._fill_src(src)
            if resource.media_type is None:
                resource.media_type = _ALIAS_MEDIA_TYPE if src.family is Family.ALIAS else src.media_type
            if src.family is Family.NAV:
                if resource.pub is None:
                    resource.pub = compute_nav_pub(src, self.compute_version_segment(src.component, src.version))
            elif is_publishable(src):
                style = self.html_extension_style
                if resource.out is None:
                    resource.out = compute_out(src, self.compute_version_segment(src.component, src.version), style)
                if resource.pub is None:
                    resource.pub = compute_pub(src, resource.out, style)
            self._files[src.id] = resource
            logger.debug("Added %s %s", src.family.value, format_resource_id(src.id))
            return resource

    register = add_file

    def remove_file(self, resource: Resource) -> bool:
        """Remove a resource. Returns False if that resource is not in the catalog."""
        with self._write_lock:
            if self._files.get(resource.id) is not resource:
                return False
            del self._files[resource.id]
            return True

    def get_by_id(self, resource_id: ResourceId | Mapping[str, Any]) -> Resource | None:
        """Look up a resource by its full ID. Returns None if absent or if the ID is incomplete."""
        if not isinstance(resource_id, ResourceId):
            try:
                resource_id = ResourceId.from_mapping(resource_id)
            except (AttributeError, TypeError, ValueError):
                return None
        return self._files.get(resource_id)

    def get_by_path(self, component: str, version: str, path: str) -> Resource | None:
        """Look up a resource by its repository-relative path within a component version."""
        path = posixpath.normpath(path)
        for resource in list(self._files.values()):
            src = resource.src
            if resource.path == path and src.component == component and src.version == version:
                return resource
        return None

    def find_by(self, criteria: Mapping[str, Any] | None = None, **kwargs: Any) -> list[Resource]:
        """Return the resources whose ``src`` fields match all criteria, in insertion order."""
        criteria = {**(criteria or {}), **kwargs}
        return [
            resource
            for resource in list(self._files.values())
            if all(getattr(resource.src, key, None) == value for key, value in criteria.items())
        ]

    def get_files(self) -> list[Resource]:
        return list(self._files.values())

    get_all = get_files

    def get_pages(self, predicate: Callable[[Resource], bool] | None = None) -> list[Resource]:
        pages = [resource for resource in list(self._files.values()) if resource.src.family is Family.PAGE]
        if predicate is None:
            return pages
        return [page for page in pages if predicate(page)]

    def __len__(self) -> int:
        return len(self._files)

    # Resolution

    def resolve_resource(
        self,
        spec: str,
        context: Any = None,
        default_family: Family = Family.PAGE,
        permitted_families: Collection[Family] | None = None,
    ) -> Resource | None:
        """Resolve a resource reference against the catalog.

        A reference naming a component but no version resolves in the
        component's latest version.

        Raises:
            InvalidResourceIdError: If the reference is malformed.
        """
        resource_id = self._resolve_id(spec, context, default_family, permitted_families)
        return self.get_by_id(resource_id) if resource_id is not None else None

    def resolve_page(self, spec: str, context: Any = None) -> Resource | None:
        """Resolve a page reference, following a page alias to its target.

        Raises:
            InvalidResourceIdError: If the reference is malformed.
        """
        resource_id = self._resolve_id(spec, context, Family.PAGE, _PAGE_FAMILIES)
        if resource_id is None:
            return None
        page = self.get_by_id(resource_id)
        if page is not None:
            return page
        alias = self.get_by_id(replace(resource_id, family=Family.ALIAS))
        return alias.rel if alias is not None else None

    def _resolve_id(
        self,
        spec: str,
        context: Any,
        default_family: Family,
        permitted_families: Collection[Family] | None,
    ) -> ResourceId | None:
        resource_id = parse_resource_id(spec, context, default_family, permitted_families)
        if resource_id.component is None:
            return None
        if resource_id.version is None:
            component = self.get_component(resource_id.component)
            if component is None:
                return None
            resource_id = replace(resource_id, version=component.latest.version)
        return resource_id

    def register_page_alias(self, spec: str, target: Resource) -> Resource:
        """Register an alias that redirects the page named by spec to target.

        The alias is resolved in the context of the target. The first alias
        registered for a page is recorded as the page's ``rel``.

        Raises:
            InvalidResourceIdError: If the alias reference is malformed.
            InvalidPageAliasError: If the alias names the target or another existing page.
            DuplicateResourceError: If the same alias is already registered.
        """
        with self._write_lock:
            resource_id = parse_resource_id(spec, target.src, Family.PAGE, _PAGE_FAMILIES)
            if resource_id.version is None:
                component = self.get_component(resource_id.component)
                version = component.latest.version if component is not None else _VERSION_FALLBACK
                resource_id = replace(resource_id, version=version)
            existing = self.get_by_id(resource_id)
            if existing is not None:
                qualified = format_resource_id(resource_id)
                if existing is target:
                    message = f"Page alias cannot reference itself: {qualified}"
                else:
                    message = f"Page alias cannot reference an existing page: {qualified}"
                raise InvalidPageAliasError(message=message, alias=spec)
            alias = self.add_file(_create_alias(replace(resource_id, family=Family.ALIAS), target))
            if target.rel is None:
                target.rel = alias
            return alias

    # Start pages

    def register_component_version_start_page(
        self,
        name: str,
        component_version: ComponentVersion,
        start_page_spec: str | None = None,
    ) -> Resource | None:
        """Resolve the start page of a component version and set the version's URL.

        Without a start page reference, the ``index.adoc`` page of the ``ROOT``
        module is used. A reference that is malformed, cannot be found, or
        points outside the component version is logged as a warning. When no
        start page resolves, the URL is the one the ``ROOT`` ``index.adoc``
        page would have.

        When the start page is a different page and the ``ROOT`` ``index.adoc``
        page does not exist, an alias is registered in its place.

        Returns:
            The start page, or None if none was resolved.
        """
        with self._write_lock:
            version = component_version.version
            index_id = ResourceId(name, version, ROOT_MODULE, Family.PAGE, _INDEX_RELATIVE)
            start_page: Resource | None = None
            if start_page_spec:
                component_version.start_page = start_page_spec
                try:
                    start_page = self.resolve_page(start_page_spec, index_id)
                except InvalidResourceIdError:
                    logger.warning(
                        "Start page specified for %s@%s has invalid syntax: %s", version, name, start_page_spec
                    )
                else:
                    if start_page is not None and (
                        start_page.src.component != name or start_page.src.version != version
                    ):
                        start_page = None
                    if start_page is None:
                        logger.warning("Start page specified for %s@%s not found: %s", version, name, start_page_spec)
            else:
                start_page = self.get_by_id(index_id)

            if start_page is not None and start_page.pub is not None:
                component_version.url = start_page.pub.url
                if start_page.src.id != index_id and self.get_by_id(index_id) is None:
                    alias_id = replace(index_id, family=Family.ALIAS)
                    if self.get_by_id(alias_id) is None:
                        self.add_file(_create_alias(alias_id, start_page))
                return start_page

            placeholder = FileSource(
                component=name,
                version=version,
                module=ROOT_MODULE,
                family=Family.PAGE,
                relative=_INDEX_RELATIVE,
            )
            self._fill_src(placeholder)
            style = self.html_extension_style
            out = compute_out(placeholder, self.compute_version_segment(name, version), style)
            component_version.url = compute_pub(placeholder, out, style).url
            return None

    def register_site_start_page(self, start_page_spec: str) -> Resource | None:
        """Register the site start page as an alias at the site root.

        The reference must name a component. Problems are logged as warnings.

        Returns:
            The alias resource, the start page itself if it already sits at
            the site root, or None if the start page could not be resolved.
        """
        with self._write_lock:
            try:
                resource_id = parse_resource_id(start_page_spec, None, Family.PAGE, _PAGE_FAMILIES)
            except InvalidResourceIdError:
                logger.warning("Start page specified for site has invalid syntax: %s", start_page_spec)
                return None
            if resource_id.component is None:
                logger.warning("Missing component name in start page for site: %s", start_page_spec)
                return None
            start_page = self.resolve_page(start_page_spec)
            if start_page is None:
                logger.warning("Start page specified for site not found: %s", start_page_spec)
                return None

            alias_id = ResourceId(ROOT_COMPONENT, "", ROOT_MODULE, Family.ALIAS, _INDEX_RELATIVE)
            if start_page.src.id == replace(alias_id, family=Family.PAGE):
                return start_page
            existing = self.get_by_id(alias_id)
            if existing is not None and existing.rel is start_page:
                return existing
            alias = _create_alias(alias_id, start_page)
            alias.synthetic = True
            return self.add_file(alias)

    def get_site_start_page(self) -> Resource | None:
        """The page served at the site root, following the site start page alias."""
        resource_id = ResourceId(ROOT_COMPONENT, "", ROOT_MODULE, Family.PAGE, _INDEX_RELATIVE)
        page = self.get_by_id(resource_id)
        if page is not None:
            return page
        alias = self.get_by_id(replace(resource_id, family=Family.ALIAS))
        return alias.rel if alias is not None else None

    # Internals

    @staticmethod
    def _fill_src(src: FileSource) -> None:
        if not src.basename:
            src.basename = posixpath.basename(src.relative)
        if not src.extname:
            src.extname = posixpath.splitext(src.basename)[1]
        if not src.stem:
            src.stem = src.basename[: len(src.basename) - len(src.extname)]
        if src.media_type is None:
            src.media_type = resolve_media_type(src.extname)

    @staticmethod
    def _duplicate_error(existing: Resource, rejected: Resource) -> DuplicateResourceError:
        src = rejected.src
        if src.family is Family.NAV:
            summary = f"Duplicate nav in {src.version}@{src.component}: {rejected.path}"
        else:
            summary = f"Duplicate {src.family.value}: {format_resource_id(src.id)}"
        return DuplicateResourceError(
            summary=summary,
            resource_id=src.id,
            locations=[_describe_location(existing), _describe_location(rejected)],
        )


def _create_alias(alias_id: ResourceId, target: Resource) -> Resource:
    src = FileSource(
        component=alias_id.component,
        version=alias_id.version,
        module=alias_id.module,
        family=Family.ALIAS,
        relative=alias_id.relative,
        origin=target.src.origin,
    )
    return Resource(path="", src=src, media_type=_ALIAS_MEDIA_TYPE, rel=target)


def _describe_location(resource: Resource) -> str:
    """Where a resource came from, e.g. ``docs/modules/nav.adoc in https://host/repo.git (ref: v1.0)``."""
    path = resource.path or format_resource_id(resource.id)
    origin = resource.src.origin
    if origin is None:
        return path
    if origin.start_path and resource.path:
        path = posixpath.join(origin.start_path, path)
    ref = origin.ref or ""
    if origin.worktree:
        ref = f"{ref} <worktree>".strip()
    return f"{path} in {origin.url} (ref: {ref})"
