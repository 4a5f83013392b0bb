"""File extension to media type mapping."""

from __future__ import annotations

import mimetypes

__all__ = ["resolve_media_type"]

# Built-in defaults only, so results do not depend on the host's mime.types files.
_media_types = mimetypes.MimeTypes()
_media_types.add_type("text/asciidoc", ".adoc")
_media_types.add_type("application/xml", ".xml")


def resolve_media_type(extname: str | None) -> str | None:
    """Return the media type for a file extension (including the dot), or None if unknown."""
    if not extname:
        return None
    media_type, _ = _media_types.guess_type("file" + extname)
    return media_type
