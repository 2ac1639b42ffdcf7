"""🏷️ Field Type Descriptors - Normalized field types as a tagged union.

A field type is one of:
- Named: a scalar (`string`, `int32`) or a type declared in the same package
- Qualified: a reference into another package (`metav1.ObjectMeta`)
- Sequence: `[]T`
- Mapping: `map[K]V`

Pointers never appear here: `*T` normalizes to `T`.
str() gives the descriptor shown in documentation.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import UnsupportedTypeError
from ..source.declarations import (
    ArrayType,
    Ident,
    MapType,
    Selector,
    Star,
    TypeExpr,
)

INTEGER_TYPES = frozenset(
    {
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
    }
)
STRING_TYPES = frozenset({"string"})
BOOL_TYPES = frozenset({"bool"})


@dataclass(frozen=True)
class Named:
    name: str

    def __str__(self) -> str:
        return self.name

    def referenced_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class Qualified:
    package: str
    name: str

    def __str__(self) -> str:
        return f"{self.package}.{self.name}"

    def referenced_name(self) -> str:
        return str(self)


@dataclass(frozen=True)
class Sequence:
    element: TypeRef

    def __str__(self) -> str:
        return f"[]{self.element}"

    def referenced_name(self) -> str:
        return self.element.referenced_name()


@dataclass(frozen=True)
class Mapping:
    key: TypeRef
    value: TypeRef

    def __str__(self) -> str:
        return f"map[{self.key}]{self.value}"

    def referenced_name(self) -> str:
        return self.value.referenced_name()


TypeRef = Named | Qualified | Sequence | Mapping


def normalize_type(expr: TypeExpr) -> TypeRef:
    """Normalize a raw type expression.

    Args:
        expr: Type expression from the source parser

    Returns:
        The normalized TypeRef

    Raises:
        UnsupportedTypeError: For func, chan, interface or anonymous struct types
    """
    if isinstance(expr, Ident):
        return Named(expr.name)
    if isinstance(expr, Star):
        return normalize_type(expr.x)
    if isinstance(expr, Selector):
        return Qualified(expr.package, expr.name)
    if isinstance(expr, ArrayType):
        return Sequence(normalize_type(expr.elt))
    if isinstance(expr, MapType):
        return Mapping(normalize_type(expr.key), normalize_type(expr.value))
    raise UnsupportedTypeError(f"unhandled field type: {expr!r}")


def is_integer(ref: TypeRef) -> bool:
    return isinstance(ref, Named) and ref.name in INTEGER_TYPES


def is_string(ref: TypeRef) -> bool:
    return isinstance(ref, Named) and ref.name in STRING_TYPES


def is_bool(ref: TypeRef) -> bool:
    return isinstance(ref, Named) and ref.name in BOOL_TYPES
