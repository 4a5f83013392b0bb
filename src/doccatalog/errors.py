"""Error hierarchy for the doccatalog content catalog."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "CatalogError",
    "ConfigNotFoundError",
    "ConfigError",
    "InvalidInputError",
    "DuplicateComponentVersionError",
    "DuplicateResourceError",
    "InvalidResourceIdError",
    "InvalidPageAliasError",
    "ErrorCodes",
]


class CatalogError(Exception):
    """Base error for all doccatalog errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(CatalogError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(CatalogError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class InvalidInputError(CatalogError):
    """Raised for invalid input."""

    def __init__(self, message: str = "Invalid input", **kwargs: Any) -> None:
        super().__init__(code="GENERAL_INVALID_INPUT", message=message, **kwargs)


class DuplicateComponentVersionError(CatalogError):
    """Raised when a component version is registered twice."""

    def __init__(self, name: str, version: str, **kwargs: Any) -> None:
        super().__init__(
            code="DUPLICATE_COMPONENT_VERSION",
            message=f"Duplicate version detected for component {name}: {version}",
            details={"name": name, "version": version},
            **kwargs,
        )

    @property
    def name(self) -> str:
        """The component name."""
        return self.details["name"]

    @property
    def version(self) -> str:
        """The version that was already registered."""
        return self.details["version"]


class DuplicateResourceError(CatalogError):
    """Raised when two resources claim the same resource ID.

    The message lists both contributing locations so the user can find
    the conflicting files in their repositories.
    """

    def __init__(self, summary: str, resource_id: Any, locations: list[str], **kwargs: Any) -> None:
        lines = [summary] + [f"  {idx}: {location}" for idx, location in enumerate(locations, 1)]
        super().__init__(
            code="DUPLICATE_RESOURCE",
            message="\n".join(lines),
            details={"resource_id": resource_id, "locations": locations},
            **kwargs,
        )

    @property
    def resource_id(self) -> Any:
        """The ResourceId both resources claimed."""
        return self.details["resource_id"]

    @property
    def locations(self) -> list[str]:
        """Human-readable locations of the existing and the rejected file."""
        return self.details["locations"]


class InvalidResourceIdError(CatalogError):
    """Raised when a resource reference has invalid syntax."""

    def __init__(self, spec: str, **kwargs: Any) -> None:
        super().__init__(
            code="INVALID_RESOURCE_ID",
            message=f"Invalid resource ID: {spec}",
            details={"spec": spec},
            **kwargs,
        )

    @property
    def spec(self) -> str:
        """The resource reference that failed to parse."""
        return self.details["spec"]


class InvalidPageAliasError(CatalogError):
    """Raised when a page alias conflicts with an existing page."""

    def __init__(self, message: str, alias: str, **kwargs: Any) -> None:
        super().__init__(
            code="INVALID_PAGE_ALIAS",
            message=message,
            details={"alias": alias},
            **kwargs,
        )


class ErrorCodes:
    """All catalog error codes as constants.

    Use these instead of hardcoding error code strings.

    Example:
        if error.code == ErrorCodes.DUPLICATE_RESOURCE:
            report_conflict(error.locations)
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    GENERAL_INVALID_INPUT = "GENERAL_INVALID_INPUT"
    DUPLICATE_COMPONENT_VERSION = "DUPLICATE_COMPONENT_VERSION"
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    INVALID_RESOURCE_ID = "INVALID_RESOURCE_ID"
    INVALID_PAGE_ALIAS = "INVALID_PAGE_ALIAS"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
