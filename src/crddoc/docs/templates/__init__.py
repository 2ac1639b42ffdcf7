"""📝 Documentation Templates - Render an APIGroup with Jinja2.

The template sees one variable, `group` (the APIGroup), plus the Jinja2
built-in filters and a few extras for Markdown:
- `anchor` - heading anchor for a name (`FooSpec` → `foospec`)
- `table_cell` - text safe to put in a Markdown table cell
- `type_link(group)` - a field's type, linked when it is a sub-object

Usage:
    renderer = TemplateRenderer()                     # built-in Markdown
    renderer = TemplateRenderer.from_file("doc.tmpl") # custom template
    text = renderer.render(api_group)
"""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateError

from ...exceptions import RenderError
from ..models import APIGroup, Field
from .default import DEFAULT_TEMPLATE


def anchor(name: str) -> str:
    """Markdown heading anchor, GitHub style."""
    slug = re.sub(r"[^\w\- ]", "", str(name).lower())
    return slug.replace(" ", "-")


def table_cell(text: str) -> str:
    """Keep multi-line text inside a single Markdown table cell."""
    return str(text).replace("|", "\\|").replace("\n", "<br>")


def type_link(field: Field, group: APIGroup) -> str:
    """Render a field type, linking it when it names a documented sub-object."""
    if group.get_sub_object(field.referenced_type) is not None:
        return f"[{field.type}](#{anchor(field.referenced_type)})"
    return f"`{field.type}`"


class TemplateRenderer:
    """Render API documentation from a Jinja2 template."""

    def __init__(self, source: str | None = None, name: str = "default") -> None:
        """Initialize the renderer.

        Args:
            source: Template text (default: built-in Markdown template)
            name: Template name used in error messages
        """
        self.name = name
        self._env = self._create_jinja_env()
        try:
            self._template = self._env.from_string(source or DEFAULT_TEMPLATE)
        except TemplateError as e:
            raise RenderError(f"parsing template {name}: {e}") from e

    @classmethod
    def from_file(cls, path: Path | str) -> "TemplateRenderer":
        """Load a template file.

        Raises:
            RenderError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise RenderError(f"reading template file: {e}") from e
        return cls(source, name=str(path))

    def _create_jinja_env(self) -> Environment:
        """Create Jinja2 environment with the documentation filters."""
        env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            # Unknown names are errors
            undefined=StrictUndefined,
        )
        env.filters["anchor"] = anchor
        env.filters["table_cell"] = table_cell
        env.filters["type_link"] = type_link
        return env

    def render(self, group: APIGroup) -> str:
        """Render the template for an API group.

        Returns:
            Rendered text with surrounding whitespace removed

        Raises:
            RenderError: If evaluating the template fails
        """
        try:
            text = self._template.render(group=group)
        except (
            TemplateError,
            TypeError,
            ValueError,
            AttributeError,
            ArithmeticError,
            LookupError,
        ) as e:
            raise RenderError(f"executing template {self.name}: {e}") from e
        return text.strip()


__all__ = [
    "DEFAULT_TEMPLATE",
    "TemplateRenderer",
    "anchor",
    "table_cell",
    "type_link",
]
