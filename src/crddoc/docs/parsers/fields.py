"""🧩 Field Extractor - Turn struct fields into documented API fields.

For every declared field:
- The json tag decides the external name (`json:"name,omitempty"`)
- `,inline` fields are not fields: their type is merged in later
- `json:"-"` fields are not part of the API and are dropped
- `omitempty` makes the field optional
- The field doc comment goes through the annotation parser

A field without a json tag, or with a type the normalizer does not know,
stops the build.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ...exceptions import FieldExtractionError, MissingTagError
from ...source.declarations import DeclaredField, DeclaredType
from ..models import Field
from ..types import Named, Qualified, TypeRef, normalize_type
from .annotations import AnnotationParser

EXCLUDED_NAME = "-"
INLINE_OPTION = "inline"
OMIT_EMPTY_OPTION = "omitempty"


@dataclass
class StructTag:
    """A parsed Go struct tag: `json:"spec,omitempty" yaml:"spec"`."""

    values: dict[str, str] = field(default_factory=dict)

    # key:"value" pairs separated by spaces; the value may contain escapes.
    PAIR_PATTERN = re.compile(r'([^\s:"]+):"((?:\\.|[^"\\])*)"')

    @classmethod
    def parse(cls, tag: str | None) -> "StructTag":
        values: dict[str, str] = {}
        for match in cls.PAIR_PATTERN.finditer(tag or ""):
            key, value = match.group(1), re.sub(r"\\(.)", r"\1", match.group(2))
            # Go returns the first occurrence of a key.
            values.setdefault(key, value)
        return cls(values)

    def get(self, key: str) -> str:
        """Get a tag value, empty string when absent."""
        return self.values.get(key, "")


@dataclass
class JSONTag:
    """The json entry of a struct tag split into name and options."""

    name: str
    options: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, value: str) -> "JSONTag":
        name, *options = value.split(",")
        return cls(name=name, options=[o.strip() for o in options])

    @property
    def is_inline(self) -> bool:
        return INLINE_OPTION in self.options

    @property
    def omit_empty(self) -> bool:
        return OMIT_EMPTY_OPTION in self.options


@dataclass
class ExtractedFields:
    """Fields of one declared type, plus the names of inlined types."""

    fields: list[Field] = field(default_factory=list)
    embedded: list[str] = field(default_factory=list)


class FieldExtractor:
    """Extract documented fields from declared types."""

    def __init__(self, annotation_parser: AnnotationParser | None = None) -> None:
        self._annotations = annotation_parser or AnnotationParser()

    def extract(self, declared: DeclaredType) -> ExtractedFields:
        """Extract fields and inlined type names from a declared type.

        Args:
            declared: Type declaration from the source parser

        Returns:
            ExtractedFields in declaration order

        Raises:
            FieldExtractionError: If a field has no json tag or an unknown type shape
        """
        result = ExtractedFields()

        for declared_field in declared.fields:
            label = declared_field.name or "<embedded>"
            try:
                self._extract_field(declared_field, result)
            except FieldExtractionError as e:
                raise type(e)(f"type {declared.name}, field {label}: {e}") from e

        return result

    def _extract_field(self, declared: DeclaredField, result: ExtractedFields) -> None:
        type_ref = normalize_type(declared.type_expr)

        json_value = StructTag.parse(declared.tag).get("json")
        if not json_value:
            raise MissingTagError(f"no json tag: {declared.tag or '<none>'}")
        tag = JSONTag.parse(json_value)

        if tag.is_inline:
            result.embedded.append(str(type_ref))
            return

        name = tag.name or declared.name or _embedded_name(type_ref)
        if name == EXCLUDED_NAME:
            return

        result.fields.append(
            Field(
                name=name,
                type_ref=type_ref,
                doc=self._annotations.parse(declared.doc),
                is_required=not tag.omit_empty,
            )
        )


def _embedded_name(type_ref: TypeRef) -> str:
    """Name of an embedded field without json name: its type name."""
    if isinstance(type_ref, (Named, Qualified)):
        return type_ref.name
    return str(type_ref)


def extract_fields(declared: DeclaredType) -> ExtractedFields:
    """Convenience function to extract fields from a declared type."""
    return FieldExtractor().extract(declared)
