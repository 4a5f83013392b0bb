"""AsciiDoc configuration scoping for component versions.

The site defines AsciiDoc attributes in the playbook; each component version
may define its own in its descriptor. A site attribute is either *hard* (the
component version cannot change it) or *soft* (the component version may
override it), and either *set* (has a value) or *unset*. The playbook writes
these states with a compact notation (``"value@"`` for soft set, ``False``
for soft unset, ``None`` for hard unset). That notation is parsed once, at
the boundary, into :class:`AsciiDocAttribute`; merging never looks at the
raw values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

__all__ = [
    "AsciiDocAttribute",
    "AsciiDocConfig",
    "merge_attributes",
    "resolve_asciidoc_config",
]

_SOFT_MARKER = "@"


@dataclass(frozen=True)
class AsciiDocAttribute:
    """One AsciiDoc attribute with an explicit set/unset and hard/soft state.

    Attributes:
        value: The attribute value, or None when the attribute is unset.
        soft: Whether a component version may override this attribute.
    """

    value: str | None
    soft: bool = False

    @property
    def is_set(self) -> bool:
        return self.value is not None

    @classmethod
    def parse(cls, raw: Any) -> AsciiDocAttribute:
        """Convert a value written in playbook notation.

        ``True`` is read as a hard set empty value, which is how AsciiDoc
        sets a boolean attribute. :meth:`to_raw` renders it as ``""``.
        """
        if raw is None:
            return cls(value=None, soft=False)
        if raw is False:
            return cls(value=None, soft=True)
        if raw is True:
            return cls(value="", soft=False)
        text = str(raw)
        if text.endswith(_SOFT_MARKER):
            return cls(value=text[: -len(_SOFT_MARKER)], soft=True)
        return cls(value=text, soft=False)

    def to_raw(self) -> Any:
        """Render this attribute back into playbook notation."""
        if self.value is None:
            return False if self.soft else None
        return self.value + _SOFT_MARKER if self.soft else self.value


def merge_attributes(
    site: Mapping[str, AsciiDocAttribute],
    scoped: Mapping[str, AsciiDocAttribute],
) -> dict[str, AsciiDocAttribute]:
    """Overlay component version attributes onto site attributes.

    Precedence, per attribute name:

    1. A hard site attribute (set or unset) always wins.
    2. Otherwise the scoped attribute wins, keeping its own hard/soft state
       for the next level down (the page).
    3. Site attributes the scope does not mention are kept as they are.
    """
    merged = dict(site)
    for name, attribute in scoped.items():
        existing = site.get(name)
        if existing is None or existing.soft:
            merged[name] = attribute
    return merged


@dataclass
class AsciiDocConfig:
    """AsciiDoc settings in effect for a site or a component version."""

    attributes: dict[str, AsciiDocAttribute] = field(default_factory=dict)
    extensions: list[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AsciiDocConfig:
        data = data or {}
        attributes = {name: AsciiDocAttribute.parse(raw) for name, raw in (data.get("attributes") or {}).items()}
        return cls(attributes=attributes, extensions=list(data.get("extensions") or []))

    def to_dict(self) -> dict[str, Any]:
        return {
            "attributes": {name: attribute.to_raw() for name, attribute in self.attributes.items()},
            "extensions": list(self.extensions),
        }


def resolve_asciidoc_config(
    site: AsciiDocConfig | None,
    descriptor: AsciiDocConfig | Mapping[str, Any] | None,
) -> AsciiDocConfig | None:
    """Compute the AsciiDoc config for a component version.

    Returns the site config object itself when the descriptor defines no
    attributes, so versions without their own settings share it. Otherwise
    returns a new config whose attributes are the merge of both and whose
    extensions are the site's.
    """
    if descriptor is not None and not isinstance(descriptor, AsciiDocConfig):
        descriptor = AsciiDocConfig.from_dict(descriptor)
    if descriptor is None or not descriptor.attributes:
        return site
    if site is None:
        return descriptor
    return AsciiDocConfig(
        attributes=merge_attributes(site.attributes, descriptor.attributes),
        extensions=site.extensions,
    )
