"""📦 Source Declarations - Read declared types from Go API packages."""

from .declarations import DeclaredField, DeclaredType, SourcePackage
from .go_parser import GoSourceParser, parse_go_package

__all__ = [
    "DeclaredField",
    "DeclaredType",
    "SourcePackage",
    "GoSourceParser",
    "parse_go_package",
]
