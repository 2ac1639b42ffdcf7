"""🔖 Annotation Parser - Split doc comments into prose and code-generator markers.

Each line of a doc comment is one of:
- A TODO note (`TODO:` in any case) - dropped
- An annotation (`+key` or `+key=value`) - collected into a mapping
- Anything else - kept as documentation text

Example:
    doc = '''
    Spec defines the desired state.
    TODO: document defaults
    +optional
    +kubebuilder:resource:scope=Cluster,shortName=foo
    '''

    block = parse_documentation(doc)
    # block.sanitized == "Spec defines the desired state."
    # block.annotations == {
    #     "optional": "",
    #     "kubebuilder:resource:scope": "Cluster",
    #     "kubebuilder:resource:shortName": "foo",
    # }
"""

from __future__ import annotations

from typing import TextIO

from ...exceptions import DocumentationReadError
from ..models import RESOURCE_ANNOTATION_PREFIX, DocumentationBlock

ANNOTATION_MARKER = "+"
TODO_MARKER = "todo:"


class AnnotationParser:
    """Parse documentation comments into DocumentationBlocks.

    `+kubebuilder:resource:` markers may carry several comma separated
    attributes on one line; each becomes its own annotation, keyed by the
    full marker path.
    """

    def parse(self, raw: str) -> DocumentationBlock:
        """Parse a raw doc comment.

        Args:
            raw: Comment text with comment markers already removed

        Returns:
            DocumentationBlock with sanitized text and annotations
        """
        sanitized: list[str] = []
        annotations: dict[str, str] = {}

        for line in raw.splitlines():
            line = line.strip()

            if line[: len(TODO_MARKER)].lower() == TODO_MARKER:
                continue

            if line.startswith(ANNOTATION_MARKER):
                annotations.update(self._parse_annotation(line[1:]))
                continue

            sanitized.append(line)

        return DocumentationBlock(
            raw=raw,
            sanitized="\n".join(sanitized).strip(),
            annotations=annotations,
        )

    def parse_stream(self, stream: TextIO) -> DocumentationBlock:
        """Parse a doc comment read from a text stream.

        Raises:
            DocumentationReadError: If the stream cannot be read
        """
        try:
            raw = stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentationReadError(f"reading documentation: {e}") from e
        return self.parse(raw)

    def _parse_annotation(self, body: str) -> dict[str, str]:
        """Turn the text after `+` into one or more annotation entries."""
        key, sep, value = body.partition("=")
        if not sep:
            return {key: ""}

        if key.startswith(RESOURCE_ANNOTATION_PREFIX):
            return self._parse_resource_attributes(body[len(RESOURCE_ANNOTATION_PREFIX) :])

        return {key: value}

    def _parse_resource_attributes(self, attributes: str) -> dict[str, str]:
        """Split `scope=Cluster,shortName=foo` into separate annotations."""
        entries = {}
        for attribute in attributes.split(","):
            name, _, value = attribute.partition("=")
            entries[RESOURCE_ANNOTATION_PREFIX + name.strip()] = value.strip()
        return entries


def parse_documentation(raw: str | TextIO) -> DocumentationBlock:
    """Convenience function to parse a doc comment.

    Args:
        raw: Comment text or a readable text stream

    Returns:
        DocumentationBlock
    """
    parser = AnnotationParser()

    if isinstance(raw, str):
        return parser.parse(raw)
    return parser.parse_stream(raw)
