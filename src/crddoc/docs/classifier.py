"""🗂️ Type Classifier - Sort declared types into resources and sub-objects.

A declared type becomes:
- A custom resource if its doc carries `+kubebuilder:object:root=true`
  (except the paired `...List` wrapper, which is dropped)
- A sub-object otherwise
- Nothing, if it has no documented fields
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..source.declarations import SourcePackage
from .models import (
    GROUP_NAME_ANNOTATION,
    OBJECT_ROOT_ANNOTATION,
    SCOPE_ANNOTATION,
    CustomResource,
    DocumentationBlock,
    GroupVersion,
    Scope,
    SubObject,
)
from .parsers.annotations import AnnotationParser
from .parsers.fields import FieldExtractor

LIST_SUFFIX = "List"


@dataclass
class Classification:
    """Custom resources and sub-objects in declaration order."""

    group_version: GroupVersion
    doc: DocumentationBlock
    crs: list[CustomResource] = field(default_factory=list)
    sub_objects: list[SubObject] = field(default_factory=list)


class TypeClassifier:
    """Classify the declared types of one API package."""

    def __init__(
        self,
        annotation_parser: AnnotationParser | None = None,
        field_extractor: FieldExtractor | None = None,
    ) -> None:
        self._annotations = annotation_parser or AnnotationParser()
        self._fields = field_extractor or FieldExtractor(self._annotations)

    def classify(self, package: SourcePackage) -> Classification:
        """Classify all declared types of a package.

        Args:
            package: Declarations from the source parser

        Returns:
            Classification with the group version and package doc
        """
        doc = self._annotations.parse(package.doc)
        group_version = group_version_for(package.name, doc)
        result = Classification(group_version=group_version, doc=doc)

        for declared in package.types:
            type_doc = self._annotations.parse(declared.doc)
            extracted = self._fields.extract(declared)

            if not extracted.fields:
                continue

            if type_doc.get_annotation(OBJECT_ROOT_ANNOTATION) == "true":
                if declared.name.endswith(LIST_SUFFIX):
                    continue
                result.crs.append(
                    CustomResource(
                        group_version_kind=group_version.with_kind(declared.name),
                        doc=type_doc,
                        scope=scope_for(type_doc),
                        fields=extracted.fields,
                    )
                )
                continue

            result.sub_objects.append(
                SubObject(
                    name=declared.name,
                    doc=type_doc,
                    fields=extracted.fields,
                    embedded_sub_objects=extracted.embedded,
                )
            )

        return result


def group_version_for(package_name: str, doc: DocumentationBlock) -> GroupVersion:
    """Group from the package `+groupName` marker, version from the package name."""
    return GroupVersion(
        group=doc.get_annotation(GROUP_NAME_ANNOTATION, ""),
        version=package_name,
    )


def scope_for(doc: DocumentationBlock) -> Scope:
    if doc.get_annotation(SCOPE_ANNOTATION) == Scope.CLUSTER.value:
        return Scope.CLUSTER
    return Scope.NAMESPACED
