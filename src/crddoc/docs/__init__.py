"""📚 Documentation Model - Build API reference docs from Go API types.

This module provides tools to:
- Parse doc comments and kubebuilder-style annotations
- Classify types into custom resources and sub-objects
- Resolve inlined fields, parent references and missing field docs
- Synthesize example YAML for every resource
- Render the model with a Jinja2 template

Usage:
    from crddoc.docs import DocumentationGenerator, ModelBuilder

    # Render docs for an API package
    generator = DocumentationGenerator()
    text = generator.generate("api/v1")

    # Or just build the model
    group = ModelBuilder().build(package)
"""

from .builder import ModelBuilder, build_api_group
from .generator import DocumentationGenerator, GenerationResult
from .models import (
    APIGroup,
    CustomResource,
    DocumentationBlock,
    Field,
    GroupVersion,
    GroupVersionKind,
    Scope,
    SubObject,
)

__all__ = [
    "ModelBuilder",
    "build_api_group",
    "DocumentationGenerator",
    "GenerationResult",
    "APIGroup",
    "CustomResource",
    "DocumentationBlock",
    "Field",
    "GroupVersion",
    "GroupVersionKind",
    "Scope",
    "SubObject",
]
