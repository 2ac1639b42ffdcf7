"""🔗 Graph Resolver - Link sub-objects to the types that use them.

Passes, in order (each depends on the previous one):
1. Embedding: merge inlined types' fields into the inlining type and mark
   types that are only ever inlined (never a field type) as embedded
2. Parents: for each sub-object, list the types with a field of its type
3. Filtering: drop embedded sub-objects from the output
4. Doc backfill: fields without docs borrow the doc of their field type

Every pass returns new objects; inputs are left untouched.

Example:
    graph = GraphResolver().resolve(crs, sub_objects)
    graph.sub_objects      # filtered, with parents and backfilled docs
    graph.all_sub_objects  # flattened but unfiltered, for example lookups
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace

from .models import CustomResource, Field, SubObject


@dataclass
class ResolvedGraph:
    """Result of running all resolver passes."""

    crs: list[CustomResource] = field(default_factory=list)
    sub_objects: list[SubObject] = field(default_factory=list)
    # Flattened sub-objects before filtering; lookup table for examples.
    all_sub_objects: list[SubObject] = field(default_factory=list)


def _field_types(
    sub_objects: Iterable[SubObject], crs: Iterable[CustomResource]
) -> set[str]:
    """Every type name used as a field type, wrapping removed."""
    types = set()
    for obj in sub_objects:
        types.update(f.referenced_type for f in obj.fields)
    for cr in crs:
        types.update(f.referenced_type for f in cr.fields)
    return types


def resolve_embedding(
    sub_objects: list[SubObject], crs: list[CustomResource]
) -> list[SubObject]:
    """Merge inlined fields and mark inline-only types.

    Inlined fields are appended after the type's own fields in inlining
    order. Only the inlined type's declared fields are merged; its own
    inlined types are not followed.
    """
    declared = {obj.name: obj for obj in sub_objects}
    inlined = {name for obj in sub_objects for name in obj.embedded_sub_objects}
    used_as_field = _field_types(sub_objects, crs)

    resolved = []
    for obj in sub_objects:
        fields = list(obj.fields)
        for name in obj.embedded_sub_objects:
            source = declared.get(name)
            if source is not None:
                fields.extend(source.fields)

        resolved.append(
            replace(
                obj,
                fields=fields,
                is_embedded=obj.name in inlined and obj.name not in used_as_field,
            )
        )
    return resolved


def resolve_parents(
    sub_objects: list[SubObject], crs: list[CustomResource]
) -> list[SubObject]:
    """Set `parents` on every sub-object.

    Parents are listed sub-objects first, then resources, once per
    referencing field. Embedded sub-objects do not count as parents.
    """
    users: dict[str, list[str]] = {}
    for obj in sub_objects:
        if obj.is_embedded:
            continue
        for f in obj.fields:
            users.setdefault(f.referenced_type, []).append(obj.name)
    for cr in crs:
        for f in cr.fields:
            users.setdefault(f.referenced_type, []).append(cr.kind)

    return [replace(obj, parents=list(users.get(obj.name, []))) for obj in sub_objects]


def filter_embedded(sub_objects: list[SubObject]) -> list[SubObject]:
    """Drop sub-objects that only exist to be inlined."""
    return [obj for obj in sub_objects if not obj.is_embedded]


def _backfill(fields: list[Field], docs: Mapping[str, str]) -> list[Field]:
    backfilled = []
    for f in fields:
        if not f.doc.sanitized and docs.get(f.type):
            f = replace(f, doc=replace(f.doc, sanitized=docs[f.type]))
        backfilled.append(f)
    return backfilled


def backfill_field_docs(
    crs: list[CustomResource], sub_objects: list[SubObject]
) -> tuple[list[CustomResource], list[SubObject]]:
    """Give undocumented fields the doc of the sub-object they hold.

    Only direct references match: a `[]Foo` field keeps its empty doc.

    Args:
        crs: Custom resources
        sub_objects: Filtered sub-objects, also the source of docs

    Returns:
        New (crs, sub_objects)
    """
    docs = {obj.name: obj.doc.sanitized for obj in sub_objects}

    new_crs = [replace(cr, fields=_backfill(cr.fields, docs)) for cr in crs]
    new_objs = [replace(obj, fields=_backfill(obj.fields, docs)) for obj in sub_objects]
    return new_crs, new_objs


class GraphResolver:
    """Run the resolver passes in order."""

    def resolve(
        self, crs: list[CustomResource], sub_objects: list[SubObject]
    ) -> ResolvedGraph:
        """Resolve embedding, parents, filtering and doc backfill.

        Args:
            crs: Classified custom resources
            sub_objects: Classified sub-objects

        Returns:
            ResolvedGraph
        """
        flattened = resolve_embedding(sub_objects, crs)
        with_parents = resolve_parents(flattened, crs)
        visible = filter_embedded(with_parents)
        new_crs, new_objs = backfill_field_docs(crs, visible)

        return ResolvedGraph(
            crs=new_crs,
            sub_objects=new_objs,
            all_sub_objects=with_parents,
        )
