"""Shared test fixtures for the doccatalog test suite."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from doccatalog.catalog.types import Origin, SourceFile


@pytest.fixture
def create_file() -> Callable[..., SourceFile]:
    """Factory for aggregated files as the git aggregator would hand them over."""

    def _create(
        path: str,
        *,
        branch: str | None = "v1.2.3",
        tag: str | None = None,
        start_path: str = "",
        url: str = "https://githost/repo.git",
        contents: bytes | None = None,
    ) -> SourceFile:
        origin = Origin(url=url, branch=branch, tag=tag, start_path=start_path)
        return SourceFile(path=path, contents=contents, origin=origin)

    return _create


@pytest.fixture
def playbook() -> dict[str, Any]:
    """Minimal playbook with default URL options."""
    return {"site": {}, "urls": {"html_extension_style": "default"}}


@pytest.fixture
def aggregate() -> list[dict[str, Any]]:
    """A single component version with no files."""
    return [
        {
            "name": "the-component",
            "title": "The Component",
            "version": "v1.2.3",
            "files": [],
        }
    ]
