"""Registry of components and their ordered versions."""

from __future__ import annotations

import logging
from typing import Iterator

from doccatalog.asciidoc import AsciiDocConfig
from doccatalog.catalog.types import Component, ComponentVersion
from doccatalog.catalog.version import sort_versions
from doccatalog.errors import DuplicateComponentVersionError, InvalidInputError

logger = logging.getLogger(__name__)

__all__ = ["ComponentRegistry", "compute_display_version"]


def compute_display_version(version: str, display_version: str | None, prerelease: bool | str) -> str:
    """Derive the display version of a component version."""
    if display_version:
        return display_version
    if isinstance(prerelease, str) and prerelease:
        return f"{version} {prerelease}" if version else prerelease
    return version or "default"


class ComponentRegistry:
    """Owns the components of a catalog and keeps each one's versions sorted.

    Components are listed in the order they were first seen. Versions
    within a component are ordered newest first by :func:`sort_versions`.
    """

    def __init__(self) -> None:
        self._components: dict[str, Component] = {}

    def register(
        self,
        name: str,
        version: str,
        *,
        title: str | None = None,
        display_version: str | None = None,
        prerelease: bool | str = False,
        asciidoc: AsciiDocConfig | None = None,
        start_page: str | None = None,
    ) -> ComponentVersion:
        """Add a version to a component, creating the component on first sighting.

        Raises:
            InvalidInputError: If name is empty or version is None.
            DuplicateComponentVersionError: If the version is already registered.
        """
        if not name:
            raise InvalidInputError(message="Component name must be a non-empty string")
        if version is None:
            raise InvalidInputError(message=f"Version of component {name} must be a string")

        component = self._components.get(name)
        if component is not None and any(cv.version == version for cv in component.versions):
            raise DuplicateComponentVersionError(name=name, version=version)

        component_version = ComponentVersion(
            name=name,
            version=version,
            display_version=compute_display_version(version, display_version, prerelease),
            title=title or name,
            prerelease=prerelease or False,
            asciidoc=asciidoc,
            start_page=start_page,
        )
        if component is None:
            component = Component(name=name)
            self._components[name] = component
        component_version.component = component
        component.versions = sort_versions([*component.versions, component_version])
        logger.debug("Registered version '%s' of component '%s'", version, name)
        return component_version

    def remove(self, name: str, version: str) -> bool:
        """Remove a component version. Returns False if it was not registered."""
        component = self._components.get(name)
        if component is None:
            return False
        remaining = [cv for cv in component.versions if cv.version != version]
        if len(remaining) == len(component.versions):
            return False
        if remaining:
            component.versions = sort_versions(remaining)
        else:
            del self._components[name]
        return True

    def get_component(self, name: str) -> Component | None:
        return self._components.get(name)

    def get_component_version(self, name: str | Component, version: str) -> ComponentVersion | None:
        component = name if isinstance(name, Component) else self._components.get(name)
        if component is None:
            return None
        return next((cv for cv in component.versions if cv.version == version), None)

    @property
    def components(self) -> list[Component]:
        """Components in registration order."""
        return list(self._components.values())

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, name: object) -> bool:
        return name in self._components
