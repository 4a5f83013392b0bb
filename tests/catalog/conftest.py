"""Shared pytest fixtures for the catalog test suite."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from doccatalog.catalog.catalog import ContentCatalog
from doccatalog.catalog.types import Family, FileSource, Origin, Resource


@pytest.fixture
def catalog() -> ContentCatalog:
    """Empty catalog with default URL options."""
    return ContentCatalog()


@pytest.fixture
def make_src() -> Callable[..., FileSource]:
    """Factory for the ``src`` of a classified resource."""

    def _make(
        relative: str,
        *,
        component: str = "the-component",
        version: str = "v1.2.3",
        module: str | None = "ROOT",
        family: Family | str = Family.PAGE,
        origin: Origin | None = None,
    ) -> FileSource:
        return FileSource(
            component=component,
            version=version,
            module=module,
            family=family,
            relative=relative,
            origin=origin,
        )

    return _make


@pytest.fixture
def make_resource(make_src: Callable[..., FileSource]) -> Callable[..., Resource]:
    """Factory for a classified resource; ``path`` defaults to the conventional source path."""

    family_dirs = {
        Family.PAGE: "pages",
        Family.PARTIAL: "partials",
        Family.IMAGE: "images",
        Family.ATTACHMENT: "attachments",
        Family.EXAMPLE: "examples",
    }

    def _make(relative: str, *, path: str | None = None, **kwargs: Any) -> Resource:
        src = make_src(relative, **kwargs)
        if path is None:
            path = f"modules/{src.module}/{family_dirs.get(src.family, src.family.value)}/{relative}"
        return Resource(path=path, src=src)

    return _make
