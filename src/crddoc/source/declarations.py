"""📦 Declared types - what a source scanner hands to the model builder.

A package is an ordered list of declared types. Each type has its raw doc
comment and an ordered list of fields; each field keeps its raw type
expression, raw struct tag and raw doc comment. Nothing is interpreted here.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# Type expression nodes, mirroring the shapes a Go struct field can declare.


@dataclass(frozen=True)
class Ident:
    """A plain identifier: `string`, `int32`, `Spec`."""

    name: str


@dataclass(frozen=True)
class Star:
    """Pointer indirection: `*T`."""

    x: TypeExpr


@dataclass(frozen=True)
class Selector:
    """Package-qualified identifier: `metav1.ObjectMeta`."""

    package: str
    name: str


@dataclass(frozen=True)
class ArrayType:
    """Slice or fixed-size array: `[]T`, `[4]T`."""

    elt: TypeExpr


@dataclass(frozen=True)
class MapType:
    """Map: `map[K]V`."""

    key: TypeExpr
    value: TypeExpr


@dataclass(frozen=True)
class UnsupportedExpr:
    """Anything else (func, chan, interface{}, anonymous struct)."""

    source: str


TypeExpr = Ident | Star | Selector | ArrayType | MapType | UnsupportedExpr


@dataclass
class DeclaredField:
    """One field of a struct declaration."""

    type_expr: TypeExpr
    name: str | None = None  # None for embedded fields
    tag: str | None = None  # raw tag without backquotes, e.g. 'json:"spec"'
    doc: str = ""


@dataclass
class DeclaredType:
    """One named type declaration."""

    name: str
    doc: str = ""
    fields: list[DeclaredField] = field(default_factory=list)


@dataclass
class SourcePackage:
    """All declarations of one package directory."""

    name: str
    doc: str = ""
    types: list[DeclaredType] = field(default_factory=list)

    def get_type(self, name: str) -> DeclaredType | None:
        """Get a declared type by name."""
        for declared in self.types:
            if declared.name == name:
                return declared
        return None
