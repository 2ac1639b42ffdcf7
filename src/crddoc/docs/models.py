"""📋 API Documentation Models - The model handed to the template renderer.

An APIGroup holds:
- Custom resources (top-level kinds) with their fields and an example YAML
- Sub-objects: every other struct that makes up those resources
- Documentation blocks (sanitized text + annotations) for all of the above

Templates read these objects directly, e.g. `{{ cr.doc.sanitized }}`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .types import TypeRef

# Annotations understood by the builder. Others are kept for templates only.
GROUP_NAME_ANNOTATION = "groupName"
OBJECT_ROOT_ANNOTATION = "kubebuilder:object:root"
RESOURCE_ANNOTATION_PREFIX = "kubebuilder:resource:"
SCOPE_ANNOTATION = RESOURCE_ANNOTATION_PREFIX + "scope"
DEFAULT_ANNOTATION = "kubebuilder:default"
EXAMPLE_ANNOTATION = "example"


class Scope(Enum):
    """API scope of a custom resource."""

    CLUSTER = "Cluster"
    NAMESPACED = "Namespaced"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GroupVersion:
    """An API group and version, e.g. `example.com/v1`."""

    group: str
    version: str

    @property
    def api_version(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    def with_kind(self, kind: str) -> GroupVersionKind:
        return GroupVersionKind(group=self.group, version=self.version, kind=kind)

    def __str__(self) -> str:
        return self.api_version


@dataclass(frozen=True)
class GroupVersionKind:
    """A kind within an API group version."""

    group: str
    version: str
    kind: str

    @property
    def group_version(self) -> GroupVersion:
        return GroupVersion(group=self.group, version=self.version)

    def __str__(self) -> str:
        return f"{self.group_version.api_version}, Kind={self.kind}"


@dataclass(frozen=True)
class DocumentationBlock:
    """A parsed documentation comment.

    `raw` is the comment as written. `sanitized` drops TODO lines and
    annotation lines. `annotations` maps annotation keys to their values
    (empty string for bare `+key` markers).
    """

    raw: str = ""
    sanitized: str = ""
    annotations: dict[str, str] = field(default_factory=dict)

    def has_annotation(self, key: str) -> bool:
        return key in self.annotations

    def get_annotation(self, key: str, default: str | None = None) -> str | None:
        return self.annotations.get(key, default)


@dataclass(frozen=True)
class Field:
    """A documented field of a resource or sub-object."""

    name: str
    type_ref: TypeRef
    doc: DocumentationBlock = field(default_factory=DocumentationBlock)
    is_required: bool = True

    @property
    def type(self) -> str:
        """Normalized type descriptor (`string`, `[]Foo`, `map[string]int`)."""
        return str(self.type_ref)

    @property
    def referenced_type(self) -> str:
        """Type name with sequence and map wrapping removed."""
        return self.type_ref.referenced_name()


@dataclass
class SubObject:
    """Any struct of the API group that is not a custom resource."""

    name: str
    doc: DocumentationBlock = field(default_factory=DocumentationBlock)
    fields: list[Field] = field(default_factory=list)
    # Types inlined into this one; their fields are merged into `fields`.
    embedded_sub_objects: list[str] = field(default_factory=list)
    # Only inlined and never used as a field type; excluded from output.
    is_embedded: bool = False
    # Types with a field referencing this one, one entry per field.
    parents: list[str] = field(default_factory=list)


@dataclass
class CustomResource:
    """A top-level API resource."""

    group_version_kind: GroupVersionKind
    doc: DocumentationBlock = field(default_factory=DocumentationBlock)
    scope: Scope = Scope.NAMESPACED
    fields: list[Field] = field(default_factory=list)
    example_yaml: str = ""

    @property
    def kind(self) -> str:
        return self.group_version_kind.kind

    @property
    def group(self) -> str:
        return self.group_version_kind.group

    @property
    def version(self) -> str:
        return self.group_version_kind.version

    @property
    def api_version(self) -> str:
        return self.group_version_kind.group_version.api_version

    def get_field(self, name: str) -> Field | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass
class APIGroup:
    """A versioned API group: the root of the documentation model."""

    group_version: GroupVersion
    doc: DocumentationBlock = field(default_factory=DocumentationBlock)
    crs: list[CustomResource] = field(default_factory=list)
    sub_objects: list[SubObject] = field(default_factory=list)

    @property
    def group(self) -> str:
        return self.group_version.group

    @property
    def version(self) -> str:
        return self.group_version.version

    def get_cr(self, kind: str) -> CustomResource | None:
        """Get a custom resource by kind."""
        for cr in self.crs:
            if cr.kind == kind:
                return cr
        return None

    def get_sub_object(self, name: str) -> SubObject | None:
        """Get a sub-object by name."""
        for obj in self.sub_objects:
            if obj.name == name:
                return obj
        return None
