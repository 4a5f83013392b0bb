"""Classification of aggregated files into catalog resources.

A file is placed by its repository-relative path. Content lives under
``modules/<module>/<family root>/``; the family root decides the family and
everything after it becomes the family-relative path::

    modules/ROOT/pages/the-topic/page-one.adoc      page     the-topic/page-one.adoc
    modules/ROOT/pages/_partials/intro.adoc         partial  intro.adoc
    modules/ROOT/partials/intro.adoc                partial  intro.adoc
    modules/ROOT/images/foo.png                     image    foo.png
    modules/ROOT/assets/images/foo.png              image    foo.png
    modules/ROOT/attachments/example.zip            attachment example.zip
    modules/ROOT/assets/attachments/example.zip     attachment example.zip
    modules/ROOT/examples/Dockerfile                example  Dockerfile

Navigation files are the exception: any ``.adoc`` file listed in the
component version's nav list is a nav file, wherever it lives.

Files that fit none of these rules are rejected by returning None. Rejection
is not an error and is not logged.
"""

from __future__ import annotations

import posixpath
from typing import Sequence

from doccatalog.catalog.media_types import resolve_media_type
from doccatalog.catalog.paths import root_path
from doccatalog.catalog.types import Family, FileSource, NavInfo, Resource, SourceFile

__all__ = ["classify", "normalize_path"]

_MODULES_DIR = "modules"
_ADOC_EXT = ".adoc"
_PARTIALS_UNDER_PAGES = "_partials"
_ASSET_FAMILIES = {"images": Family.IMAGE, "attachments": Family.ATTACHMENT}


def normalize_path(path: str) -> str | None:
    """Normalize a repository-relative path, or return None if it leaves the repository."""
    if not path or path.startswith("/"):
        return None
    normalized = posixpath.normpath(path)
    if normalized == "." or normalized == ".." or normalized.startswith("../"):
        return None
    return normalized


def classify(
    file: SourceFile,
    component: str,
    version: str,
    nav: Sequence[str] | None = None,
) -> Resource | None:
    """Classify an aggregated file for the given component version.

    Args:
        file: The file as supplied by the aggregator.
        component: Name of the component the file belongs to.
        version: Version of the component the file belongs to.
        nav: Ordered nav file list declared for the component version.

    Returns:
        The classified resource (without ``out`` or ``pub``), or None if the
        file is not part of the catalog.
    """
    path = normalize_path(file.path)
    if path is None:
        return None
    segments = path.split("/")
    extname = file.extname or ""

    if nav and file.path in nav:
        if extname != _ADOC_EXT:
            return None
        if segments[0] == _MODULES_DIR and len(segments) > 2:
            module: str | None = segments[1]
            relative = "/".join(segments[2:])
        else:
            module, relative = None, path
        resource = _create_resource(file, path, component, version, module, Family.NAV, relative, segments)
        resource.nav = NavInfo(index=list(nav).index(file.path))
        return resource

    if segments[0] != _MODULES_DIR or len(segments) < 4:
        return None
    module = segments[1]
    family_root = segments[2]
    family: Family | None = None
    relative_segments: list[str] = []

    if family_root == "pages":
        if segments[3] == _PARTIALS_UNDER_PAGES:
            family, relative_segments = Family.PARTIAL, segments[4:]
        elif extname == _ADOC_EXT:
            family, relative_segments = Family.PAGE, segments[3:]
    elif family_root == "assets":
        if segments[3] in _ASSET_FAMILIES and extname:
            family, relative_segments = _ASSET_FAMILIES[segments[3]], segments[4:]
    elif family_root in _ASSET_FAMILIES:
        if extname:
            family, relative_segments = _ASSET_FAMILIES[family_root], segments[3:]
    elif family_root == "examples":
        family, relative_segments = Family.EXAMPLE, segments[3:]
    elif family_root == "partials":
        family, relative_segments = Family.PARTIAL, segments[3:]

    if family is None or not relative_segments:
        return None
    return _create_resource(file, path, component, version, module, family, "/".join(relative_segments), segments)


def _create_resource(
    file: SourceFile,
    path: str,
    component: str,
    version: str,
    module: str | None,
    family: Family,
    relative: str,
    segments: list[str],
) -> Resource:
    media_type = resolve_media_type(file.extname)
    src = FileSource(
        component=component,
        version=version,
        module=module,
        family=family,
        relative=relative,
        basename=file.basename or "",
        stem=file.stem or "",
        extname=file.extname or "",
        media_type=media_type,
        module_root_path=root_path(len(segments) - 3),
        origin=file.origin,
        abspath=file.abspath,
    )
    return Resource(path=path, src=src, contents=file.contents, media_type=media_type)
