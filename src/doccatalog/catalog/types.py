"""Catalog types: components, component versions, resources and their coordinates."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from doccatalog.asciidoc import AsciiDocConfig
from doccatalog.catalog.version import is_prerelease

__all__ = [
    "Family",
    "Origin",
    "SourceFile",
    "ComponentVersionBundle",
    "ResourceId",
    "FileSource",
    "OutCoordinates",
    "PubCoordinates",
    "NavInfo",
    "Resource",
    "ComponentVersion",
    "Component",
]


class Family(str, Enum):
    """Structural category of a resource, derived from its location."""

    PAGE = "page"
    PARTIAL = "partial"
    IMAGE = "image"
    ATTACHMENT = "attachment"
    EXAMPLE = "example"
    NAV = "nav"
    ALIAS = "alias"

    def __str__(self) -> str:
        return self.value


@dataclass
class Origin:
    """Where a file came from in version control. Passed through untouched."""

    url: str | None = None
    branch: str | None = None
    tag: str | None = None
    start_path: str = ""
    worktree: bool = False

    @property
    def ref(self) -> str | None:
        return self.branch or self.tag

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Origin:
        return cls(
            url=data.get("url"),
            branch=data.get("branch"),
            tag=data.get("tag"),
            start_path=data.get("start_path", data.get("startPath")) or "",
            worktree=bool(data.get("worktree", False)),
        )


@dataclass
class SourceFile:
    """A raw file as handed over by the content aggregator."""

    path: str
    contents: bytes | None = None
    basename: str | None = None
    stem: str | None = None
    extname: str | None = None
    origin: Origin | None = None
    abspath: str | None = None

    def __post_init__(self) -> None:
        if self.basename is None:
            self.basename = posixpath.basename(self.path)
        if self.extname is None:
            self.extname = posixpath.splitext(self.basename)[1]
        if self.stem is None:
            self.stem = self.basename[: len(self.basename) - len(self.extname)]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SourceFile:
        src = data.get("src") or {}
        origin = src.get("origin", data.get("origin"))
        if isinstance(origin, Mapping):
            origin = Origin.from_dict(origin)
        return cls(
            path=data["path"],
            contents=data.get("contents"),
            basename=src.get("basename"),
            stem=src.get("stem"),
            extname=src.get("extname"),
            origin=origin,
            abspath=src.get("abspath"),
        )


@dataclass
class ComponentVersionBundle:
    """One (component, version) group of files produced by the aggregator."""

    name: str
    version: str
    title: str | None = None
    display_version: str | None = None
    prerelease: bool | str = False
    start_page: str | None = None
    asciidoc: Mapping[str, Any] | None = None
    nav: list[str] | None = None
    files: list[SourceFile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ComponentVersionBundle:
        """Build a bundle from an aggregator mapping (snake_case or camelCase keys)."""
        files = [f if isinstance(f, SourceFile) else SourceFile.from_dict(f) for f in data.get("files") or []]
        version = data.get("version")
        return cls(
            name=data["name"],
            version="" if version is None else str(version),
            title=data.get("title"),
            display_version=data.get("display_version", data.get("displayVersion")),
            prerelease=data.get("prerelease") or False,
            start_page=data.get("start_page", data.get("startPage")),
            asciidoc=data.get("asciidoc"),
            nav=data.get("nav"),
            files=files,
        )


@dataclass(frozen=True)
class ResourceId:
    """Composite key that identifies a resource within the catalog.

    Fields may be None only while a reference is still being resolved.
    """

    component: str | None
    version: str | None
    module: str | None
    family: Family | None
    relative: str

    def __post_init__(self) -> None:
        # accept plain strings such as "page"
        if self.family is not None and not isinstance(self.family, Family):
            object.__setattr__(self, "family", Family(self.family))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ResourceId:
        return cls(
            component=data.get("component"),
            version=data.get("version"),
            module=data.get("module"),
            family=data.get("family"),
            relative=data.get("relative", ""),
        )


@dataclass
class FileSource:
    """Classification of a resource (the ``src`` of a resource)."""

    component: str
    version: str
    module: str | None
    family: Family
    relative: str
    basename: str = ""
    stem: str = ""
    extname: str = ""
    media_type: str | None = None
    module_root_path: str | None = None
    origin: Origin | None = None
    abspath: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.family, Family):
            self.family = Family(self.family)

    @property
    def id(self) -> ResourceId:
        return ResourceId(self.component, self.version, self.module, self.family, self.relative)


@dataclass
class OutCoordinates:
    """On-disk destination of a published resource, relative to the output root."""

    path: str
    dirname: str
    basename: str
    module_root_path: str
    root_path: str


@dataclass
class PubCoordinates:
    """Published address of a resource."""

    url: str
    module_root_path: str | None = None
    root_path: str | None = None


@dataclass
class NavInfo:
    index: int


@dataclass(eq=False)
class Resource:
    """One classified, addressable unit of content.

    Attributes:
        path: Repository-relative path of the source file.
        src: Classification of the file.
        contents: Raw file contents, if loaded.
        media_type: Media type of the published resource.
        out: On-disk coordinates; None for resources that are not published.
        pub: URL coordinates; None for resources that are not addressable.
        nav: Position in the component version's nav list (nav family only).
        rel: For an alias, the page it points to; for a page, its preferred alias.
        synthetic: Whether the catalog created this resource itself.
    """

    path: str
    src: FileSource
    contents: bytes | None = None
    media_type: str | None = None
    out: OutCoordinates | None = None
    pub: PubCoordinates | None = None
    nav: NavInfo | None = None
    rel: Resource | None = field(default=None, repr=False)
    synthetic: bool = False

    @property
    def id(self) -> ResourceId:
        return self.src.id


@dataclass(eq=False)
class ComponentVersion:
    """One versioned snapshot of a component."""

    name: str
    version: str
    display_version: str
    title: str
    prerelease: bool | str = False
    url: str | None = None
    asciidoc: AsciiDocConfig | None = None
    start_page: str | None = None
    component: Component | None = field(default=None, repr=False)


@dataclass(eq=False)
class Component:
    """A named documentation unit and its versions, newest first.

    ``latest``, ``title``, ``url`` and ``asciidoc`` are read through to the
    first version, so they always reflect the current ordering.
    """

    name: str
    versions: list[ComponentVersion] = field(default_factory=list)

    @property
    def latest(self) -> ComponentVersion:
        return self.versions[0]

    @property
    def title(self) -> str:
        return self.latest.title

    @property
    def url(self) -> str | None:
        return self.latest.url

    @property
    def asciidoc(self) -> AsciiDocConfig | None:
        return self.latest.asciidoc

    @property
    def latest_release(self) -> ComponentVersion | None:
        """The newest version that is not a prerelease, flagged or non-semantic."""
        return next((cv for cv in self.versions if not is_prerelease(cv)), None)

    @property
    def latest_prerelease(self) -> ComponentVersion | None:
        """The newest version, if it is a prerelease (flagged or non-semantic)."""
        if self.versions and is_prerelease(self.versions[0]):
            return self.versions[0]
        return None
