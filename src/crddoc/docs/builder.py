"""🏗️ Model Builder - Assemble the APIGroup documentation model.

Runs, in order:
1. Classification into custom resources and sub-objects
2. Graph resolution (embedding, parents, filtering, doc backfill)
3. Example synthesis for every custom resource

Each build starts from scratch with its own placeholder word cycle, so
building the same package twice gives the same model.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from ..source.declarations import SourcePackage
from .classifier import TypeClassifier
from .examples import DEFAULT_WORDS, ExampleSynthesizer, WordCycle
from .models import APIGroup
from .resolver import GraphResolver


class ModelBuilder:
    """Build an APIGroup from the declarations of one package."""

    def __init__(
        self,
        words: Sequence[str] = DEFAULT_WORDS,
        classifier: TypeClassifier | None = None,
        resolver: GraphResolver | None = None,
    ) -> None:
        self._words = tuple(words)
        self._classifier = classifier or TypeClassifier()
        self._resolver = resolver or GraphResolver()

    def build(self, package: SourcePackage) -> APIGroup:
        """Build the documentation model.

        Args:
            package: Declarations from the source parser

        Returns:
            Fully assembled APIGroup

        Raises:
            FieldExtractionError: If a field cannot be extracted
        """
        classification = self._classifier.classify(package)
        graph = self._resolver.resolve(classification.crs, classification.sub_objects)

        synthesizer = ExampleSynthesizer(graph.all_sub_objects, WordCycle(self._words))
        crs = [replace(cr, example_yaml=synthesizer.example_yaml(cr)) for cr in graph.crs]

        return APIGroup(
            group_version=classification.group_version,
            doc=classification.doc,
            crs=crs,
            sub_objects=graph.sub_objects,
        )


def build_api_group(package: SourcePackage) -> APIGroup:
    """Convenience function to build a model with default settings."""
    return ModelBuilder().build(package)
