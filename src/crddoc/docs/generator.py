"""📚 Documentation Generator - Orchestrate doc generation for an API package.

Reads the Go files of one API package directory, builds the documentation
model and renders it with the configured template.

Usage:
    generator = DocumentationGenerator(template="docs.tmpl")
    text = generator.generate("api/v1")
    # or
    result = generator.generate_to("api/v1", "docs/api.md")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from ..exceptions import DocgenError
from ..source.go_parser import GoSourceParser
from .builder import ModelBuilder
from .examples import DEFAULT_WORDS
from .models import APIGroup
from .templates import TemplateRenderer


@dataclass
class GenerationResult:
    """Result of generating documentation for one API package."""

    package: str
    output: str | None = None
    resources: int = 0
    sub_objects: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


class DocumentationGenerator:
    """Generate API reference documentation for a Go API package."""

    def __init__(
        self,
        template: Path | str | None = None,
        words: Sequence[str] = DEFAULT_WORDS,
        console: Console | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the generator.

        Args:
            template: Path to a Jinja2 template (default: built-in Markdown)
            words: Placeholder words for string examples
            console: Rich console for progress output (optional)
            verbose: Report each build step on the console
        """
        self.template = Path(template) if template else None
        self.words = tuple(words)
        self.console = console or Console(stderr=True)
        self.verbose = verbose
        self._parser = GoSourceParser()

    def load_model(self, folder: Path | str) -> APIGroup:
        """Parse a package directory and build its documentation model.

        Raises:
            DocgenError: On unreadable sources or malformed declarations
        """
        folder = Path(folder)
        package = self._parser.parse_directory(folder)
        self._log(
            f"🔍 Parsed package [cyan]{package.name}[/cyan] "
            f"({len(package.types)} types)"
        )

        group = ModelBuilder(words=self.words).build(package)
        self._log(
            f"🏗️  Built [cyan]{group.group_version.api_version}[/cyan]: "
            f"{len(group.crs)} resources, {len(group.sub_objects)} sub-objects"
        )
        return group

    def render(self, group: APIGroup) -> str:
        """Render a model with the configured template."""
        if self.template:
            renderer = TemplateRenderer.from_file(self.template)
        else:
            renderer = TemplateRenderer()
        return renderer.render(group)

    def generate(self, folder: Path | str) -> str:
        """Generate documentation text for a package directory.

        Raises:
            DocgenError: If any step fails; nothing is produced in that case
        """
        return self.render(self.load_model(folder))

    def generate_to(
        self, folder: Path | str, output: Path | str | None = None
    ) -> tuple[GenerationResult, str | None]:
        """Generate documentation and optionally write it to a file.

        The file is only written when the whole build succeeded.

        Args:
            folder: API package directory
            output: File to write (default: return the text only)

        Returns:
            (GenerationResult, rendered text or None on failure)
        """
        result = GenerationResult(package=str(folder), output=str(output) if output else None)

        try:
            group = self.load_model(folder)
            text = self.render(group)
            if output:
                Path(output).write_text(text, encoding="utf-8")
                self._log(f"📝 Wrote [cyan]{output}[/cyan]")
        except (DocgenError, OSError) as e:
            result.errors.append(str(e))
            return result, None

        result.resources = len(group.crs)
        result.sub_objects = len(group.sub_objects)
        return result, text

    def _log(self, message: str) -> None:
        if self.verbose:
            self.console.print(message)


def generate_package_docs(folder: Path | str, template: Path | str | None = None) -> str:
    """Convenience function to render docs for a package directory.

    Args:
        folder: API package directory
        template: Optional template path

    Returns:
        Rendered documentation
    """
    return DocumentationGenerator(template=template).generate(folder)
