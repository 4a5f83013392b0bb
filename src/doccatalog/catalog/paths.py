"""Derivation of output paths and published URLs for classified resources.

Every publishable resource has two sets of coordinates:

- ``out``: where the generated file is written, relative to the output root.
- ``pub``: the URL path at which the file is served.

Both are pure functions of the resource's ``src`` fields, the version segment
chosen by the catalog, and the active HTML extension style.
"""

from __future__ import annotations

import posixpath

from doccatalog.catalog.types import Family, FileSource, OutCoordinates, PubCoordinates
from doccatalog.config import HtmlExtensionStyle

__all__ = [
    "ROOT_COMPONENT",
    "ROOT_MODULE",
    "ELIDED_VERSIONS",
    "PUBLISHABLE_FAMILIES",
    "root_path",
    "path_depth",
    "version_segment",
    "is_publishable",
    "compute_out",
    "compute_pub",
    "compute_nav_pub",
]

ROOT_COMPONENT = "ROOT"
ROOT_MODULE = "ROOT"
ELIDED_VERSIONS = frozenset({"", "master"})
PUBLISHABLE_FAMILIES = frozenset({Family.PAGE, Family.IMAGE, Family.ATTACHMENT, Family.ALIAS})

_FAMILY_DIRS = {Family.IMAGE: "_images", Family.ATTACHMENT: "_attachments"}
_HTML_EXT = ".html"
_INDEX_STEM = "index"
_INDEX_BASENAME = _INDEX_STEM + _HTML_EXT


def _join(*segments: str | None) -> str:
    """Join segments with ``/``, skipping empty and ``.`` ones; an empty result is ``.``."""
    return "/".join(segment for segment in segments if segment and segment != ".") or "."


def root_path(depth: int) -> str:
    """Relative path that climbs ``depth`` directories (``.`` for zero)."""
    return "/".join([".."] * depth) if depth > 0 else "."


def path_depth(dirname: str) -> int:
    """Number of segments in a relative directory path (``.`` has none)."""
    if not dirname or dirname == ".":
        return 0
    return dirname.count("/") + 1


def version_segment(version: str | None) -> str:
    """Path segment for a version string; elided versions yield an empty segment."""
    if version is None or version in ELIDED_VERSIONS:
        return ""
    return version


def _component_segment(component: str) -> str:
    return "" if component == ROOT_COMPONENT else component


def _module_segment(module: str | None) -> str:
    return "" if module is None or module == ROOT_MODULE else module


def is_publishable(src: FileSource) -> bool:
    """Whether a resource gets ``out`` and ``pub`` coordinates.

    Only pages, images, attachments and aliases are published, and none
    whose relative path has a segment starting with ``_``.
    """
    if src.family not in PUBLISHABLE_FAMILIES:
        return False
    return not any(segment.startswith("_") for segment in src.relative.split("/"))


def compute_out(
    src: FileSource,
    version_seg: str,
    html_extension_style: HtmlExtensionStyle = HtmlExtensionStyle.DEFAULT,
) -> OutCoordinates:
    """Compute the output coordinates of a publishable resource."""
    family = src.family
    basename = src.basename or posixpath.basename(src.relative)
    indexify_dir = ""
    if family in (Family.PAGE, Family.ALIAS):
        stem = src.stem or posixpath.splitext(basename)[0]
        if html_extension_style is HtmlExtensionStyle.INDEXIFY and stem != _INDEX_STEM:
            indexify_dir = stem
            basename = _INDEX_BASENAME
        else:
            basename = stem + _HTML_EXT

    module_path = _join(_component_segment(src.component), version_seg, _module_segment(src.module))
    dirname = _join(
        module_path,
        _FAMILY_DIRS.get(family, ""),
        posixpath.dirname(src.relative),
        indexify_dir,
    )
    depth = path_depth(dirname)
    return OutCoordinates(
        path=basename if dirname == "." else f"{dirname}/{basename}",
        dirname=dirname,
        basename=basename,
        module_root_path=root_path(depth - path_depth(module_path)),
        root_path=root_path(depth),
    )


def compute_pub(
    src: FileSource,
    out: OutCoordinates,
    html_extension_style: HtmlExtensionStyle = HtmlExtensionStyle.DEFAULT,
) -> PubCoordinates:
    """Compute the URL coordinates of a publishable resource from its output coordinates.

    Pages and aliases follow the HTML extension style. Images and
    attachments are served at their output path unchanged.
    """
    if src.family in (Family.PAGE, Family.ALIAS):
        if html_extension_style is HtmlExtensionStyle.INDEXIFY:
            url = _directory_url(out.dirname)
        elif html_extension_style is HtmlExtensionStyle.DROP:
            if out.basename == _INDEX_BASENAME:
                url = _directory_url(out.dirname)
            else:
                url = "/" + out.path[: -len(_HTML_EXT)]
        else:
            url = "/" + out.path
    else:
        url = "/" + out.path
    return PubCoordinates(
        url=url.replace(" ", "%20"),
        module_root_path=out.module_root_path,
        root_path=out.root_path,
    )


def compute_nav_pub(src: FileSource, version_seg: str) -> PubCoordinates:
    """URL coordinates of a navigation file: the URL of its module root."""
    url = _directory_url(_join(_component_segment(src.component), version_seg, _module_segment(src.module)))
    return PubCoordinates(url=url.replace(" ", "%20"), module_root_path=".")


def _directory_url(dirname: str) -> str:
    return "/" if dirname == "." else f"/{dirname}/"
