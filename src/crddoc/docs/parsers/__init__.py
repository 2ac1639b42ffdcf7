"""📝 Documentation Parsers - Extract docs and fields from declarations.

Parsers for:
- Doc comments → sanitized text + annotations
- Struct fields → documented API fields + inlined types
"""

from .annotations import AnnotationParser, parse_documentation
from .fields import ExtractedFields, FieldExtractor, StructTag, extract_fields

__all__ = [
    "AnnotationParser",
    "parse_documentation",
    "ExtractedFields",
    "FieldExtractor",
    "StructTag",
    "extract_fields",
]
