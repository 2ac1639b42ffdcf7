"""🧪 Example Synthesizer - Build example YAML objects for custom resources.

Field values are chosen in this order:
1. `+example=<yaml>` on the field
2. `+kubebuilder:default=<yaml>` on the field
3. Sequences: one element of the element type
4. Placeholders: integers → 42, strings → next lorem-ipsum word, bools → true
5. Sub-objects are filled in recursively; anything else becomes `{}`

Annotation values that are not valid YAML are used as plain strings.

Example:
    synthesizer = ExampleSynthesizer(sub_objects)
    print(synthesizer.example_yaml(cr))
    # apiVersion: example.com/v1
    # kind: Foo
    # metadata:
    #   name: example
    #   namespace: default
    # spec:
    #   size: 42
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import yaml

from .models import (
    DEFAULT_ANNOTATION,
    EXAMPLE_ANNOTATION,
    CustomResource,
    Field,
    Scope,
    SubObject,
)
from .types import Named, Sequence as SequenceType, TypeRef, is_bool, is_integer, is_string

PLACEHOLDER_INT = 42
PLACEHOLDER_BOOL = True
PLACEHOLDER_NAME = "example"
PLACEHOLDER_NAMESPACE = "default"

DEFAULT_WORDS = (
    "lorem",
    "ipsum",
    "dolor",
    "sit",
    "amet",
    "consetetur",
    "sadipscing",
    "elitr",
    "sed",
    "diam",
    "nonumy",
    "eirmod",
    "tempor",
)


class WordCycle:
    """Hand out placeholder words in order, wrapping around at the end."""

    def __init__(self, words: Sequence[str] = DEFAULT_WORDS, start: int = 0) -> None:
        if not words:
            raise ValueError("WordCycle needs at least one word")
        self._words = tuple(words)
        self._cursor = start % len(self._words)

    @property
    def cursor(self) -> int:
        return self._cursor

    def next(self) -> str:
        word = self._words[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._words)
        return word


class AnnotationValueLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as the strings the author wrote."""


AnnotationValueLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag != "tag:yaml.org,2002:timestamp"
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_annotation_value(value: str) -> Any:
    """Parse an annotation value as YAML, falling back to the raw string."""
    try:
        return yaml.load(value, Loader=AnnotationValueLoader)
    except yaml.YAMLError:
        return value


class ExampleSynthesizer:
    """Build example objects for one model build.

    One instance owns one word cycle, so placeholder words do not repeat
    across the resources of a build until the word list wraps.
    """

    def __init__(
        self,
        sub_objects: Iterable[SubObject],
        words: WordCycle | None = None,
    ) -> None:
        self._sub_objects = {obj.name: obj for obj in sub_objects}
        self._words = words or WordCycle()

    def example_yaml(self, cr: CustomResource) -> str:
        """Render the example object of a custom resource as YAML.

        Args:
            cr: Custom resource with resolved fields

        Returns:
            Block-style YAML with sorted keys
        """
        return yaml.safe_dump(
            self.example_document(cr),
            default_flow_style=False,
            sort_keys=True,
            allow_unicode=True,
        )

    def example_document(self, cr: CustomResource) -> dict[str, Any]:
        """Example object with kind, apiVersion and metadata set."""
        document = self.example_object(cr.fields)
        document["kind"] = cr.kind
        document["apiVersion"] = cr.api_version

        metadata = {"name": PLACEHOLDER_NAME}
        if cr.scope != Scope.CLUSTER:
            metadata["namespace"] = PLACEHOLDER_NAMESPACE
        document["metadata"] = metadata
        return document

    def example_object(
        self, fields: Iterable[Field], _visiting: frozenset[str] = frozenset()
    ) -> dict[str, Any]:
        """Example mapping with one entry per field, in field order."""
        return {
            f.name: self.field_value(f.type_ref, f.doc.annotations, _visiting)
            for f in fields
        }

    def field_value(
        self,
        type_ref: TypeRef,
        annotations: dict[str, str],
        _visiting: frozenset[str] = frozenset(),
    ) -> Any:
        """Example value for a field of the given type."""
        if EXAMPLE_ANNOTATION in annotations:
            return parse_annotation_value(annotations[EXAMPLE_ANNOTATION])
        if DEFAULT_ANNOTATION in annotations:
            return parse_annotation_value(annotations[DEFAULT_ANNOTATION])

        if isinstance(type_ref, SequenceType):
            return [self.field_value(type_ref.element, annotations, _visiting)]

        if is_integer(type_ref):
            return PLACEHOLDER_INT
        if is_string(type_ref):
            return self._words.next()
        if is_bool(type_ref):
            return PLACEHOLDER_BOOL

        if isinstance(type_ref, Named):
            sub_object = self._sub_objects.get(type_ref.name)
            # A type that contains itself stops at the first repetition.
            if sub_object is not None and type_ref.name not in _visiting:
                return self.example_object(
                    sub_object.fields, _visiting | {type_ref.name}
                )
        return {}


def build_example_yaml(cr: CustomResource, sub_objects: Iterable[SubObject]) -> str:
    """Convenience function to render one resource example with a fresh word cycle."""
    return ExampleSynthesizer(sub_objects).example_yaml(cr)
