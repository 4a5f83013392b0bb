"""Parsing and formatting of resource references.

A resource reference has the form ``[version@][component:][module:][family$]relative``.
Omitted parts are filled from a context resource. When the reference names a
component, the module defaults to ``ROOT`` and the version is left unset so
the caller can pick the component's latest version.
"""

from __future__ import annotations

import re
from typing import Any, Collection

from doccatalog.catalog.paths import ROOT_MODULE
from doccatalog.catalog.types import Family, ResourceId
from doccatalog.errors import InvalidResourceIdError

__all__ = ["RESOURCE_ID_PATTERN", "parse_resource_id", "format_resource_id"]

RESOURCE_ID_PATTERN = re.compile(
    r"^(?:([^@:$]+)@)?"  # version
    r"(?:(?:([^@:$]+):)?(?:([^@:$]+))?:)?"  # component, module
    r"(?:([^@:$]+)\$)?"  # family
    r"([^:$]+)$"  # relative
)


def parse_resource_id(
    spec: str,
    context: Any = None,
    default_family: Family = Family.PAGE,
    permitted_families: Collection[Family] | None = None,
) -> ResourceId:
    """Parse a resource reference into a ResourceId.

    Args:
        spec: The resource reference.
        context: Object with ``component``, ``version`` and ``module``
            attributes (a ResourceId or FileSource) used to fill omitted parts.
        default_family: Family assumed when the reference does not name one.
        permitted_families: Families the reference may name. None permits all.

    Returns:
        The parsed ResourceId. ``version`` is None when the reference names
        a component but no version.

    Raises:
        InvalidResourceIdError: If the reference is malformed or names a
            family that is not permitted.
    """
    match = RESOURCE_ID_PATTERN.match(spec or "")
    if not match:
        raise InvalidResourceIdError(spec=spec)
    version, component, module, family_name, relative = match.groups()

    if family_name is None:
        family = default_family
    else:
        try:
            family = Family(family_name)
        except ValueError as e:
            raise InvalidResourceIdError(spec=spec, cause=e) from e
    if permitted_families is not None and family not in permitted_families:
        raise InvalidResourceIdError(spec=spec)

    if component:
        module = module or ROOT_MODULE
    elif context is not None:
        component = context.component
        if version is None:
            version = context.version
        if not module:
            module = context.module
    return ResourceId(component=component, version=version, module=module, family=family, relative=relative)


def format_resource_id(resource_id: ResourceId) -> str:
    """Render a ResourceId in qualified reference form.

    The ``ROOT`` module and the ``page`` family are left implicit, as in
    ``v1.2.3@the-component::page-one.adoc``.
    """
    module = "" if resource_id.module in (None, ROOT_MODULE) else resource_id.module
    family = "" if resource_id.family in (None, Family.PAGE) else f"{resource_id.family.value}$"
    return f"{resource_id.version}@{resource_id.component}:{module}:{family}{resource_id.relative}"
