"""🚨 Errors raised while building API documentation.

Everything here is fatal: the build stops and nothing is written.
Semantic gaps (unknown types, unparsable example values) never raise.
"""

from __future__ import annotations


class DocgenError(Exception):
    """Base exception for documentation builds."""

    pass


class DocumentationReadError(DocgenError):
    """A documentation comment could not be read from its source."""

    pass


class FieldExtractionError(DocgenError):
    """A struct field could not be turned into a documented field."""

    pass


class MissingTagError(FieldExtractionError):
    """Field has no json tag, so its external name is unknown."""

    pass


class UnsupportedTypeError(FieldExtractionError):
    """Field type expression has a shape the normalizer does not handle."""

    pass


class SourceParseError(DocgenError):
    """Go source files could not be read or scanned."""

    pass


class RenderError(DocgenError):
    """The documentation template failed to load or render."""

    pass
