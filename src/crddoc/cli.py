#!/usr/bin/env python3
"""
📚 crddoc CLI - API reference docs for Go API types

Usage:
    crddoc render <folder>     Render documentation for an API package
    crddoc inspect <folder>    Show resources and sub-objects found
    crddoc --help              Show help
"""

import argparse
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from crddoc import __version__
from crddoc.config import GeneratorConfig, load_config
from crddoc.docs.generator import DocumentationGenerator
from crddoc.exceptions import DocgenError

console = Console()
err_console = Console(stderr=True)


def _load_config(config_path: Path | None, **overrides) -> GeneratorConfig:
    """Load config from environment and file, then apply CLI flags."""
    try:
        config = load_config(config_path)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        err_console.print(f"[red]Error:[/red] Invalid config {config_path}: {escape(str(e))}")
        sys.exit(1)
    return config.merged(**overrides)


def render_docs(
    folder: Path,
    template: Path | None = None,
    output: Path | None = None,
    config_path: Path | None = None,
    verbose: bool = False,
) -> None:
    """Render documentation for an API package.

    Args:
        folder: API package directory
        template: Jinja2 template file
        output: Output file (default: stdout)
        config_path: YAML config file
        verbose: Report build steps
    """
    config = _load_config(
        config_path, template=template, output=output, verbose=verbose or None
    )

    if not folder.is_dir():
        err_console.print(f"[red]Error:[/red] API package not found: {folder}")
        sys.exit(1)

    generator = DocumentationGenerator(
        template=config.template,
        words=config.words,
        console=err_console,
        verbose=config.verbose,
    )
    result, text = generator.generate_to(folder, config.output)

    if not result.success:
        for error in result.errors:
            err_console.print(f"[red]Error:[/red] {escape(error)}")
        sys.exit(1)

    if config.output is None:
        sys.stdout.write(text)
    else:
        err_console.print(
            f"[green]✅ {result.package}[/green] → {result.output} "
            f"({result.resources} resources, {result.sub_objects} sub-objects)"
        )


def inspect_package(folder: Path, config_path: Path | None = None) -> None:
    """Print the resources and sub-objects of an API package.

    Args:
        folder: API package directory
        config_path: YAML config file
    """
    config = _load_config(config_path)

    if not folder.is_dir():
        err_console.print(f"[red]Error:[/red] API package not found: {folder}")
        sys.exit(1)

    generator = DocumentationGenerator(words=config.words, console=err_console)
    try:
        group = generator.load_model(folder)
    except DocgenError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    console.print(f"📚 [bold]{group.group_version.api_version}[/bold]")
    if group.doc.sanitized:
        console.print(escape(group.doc.sanitized))
    console.print()

    resources = Table(title="Resources", show_header=True, header_style="bold cyan")
    resources.add_column("Kind", style="cyan")
    resources.add_column("Scope")
    resources.add_column("Fields", justify="right")
    for cr in group.crs:
        resources.add_row(cr.kind, str(cr.scope), str(len(cr.fields)))
    console.print(resources)

    objects = Table(title="Sub Resources", show_header=True, header_style="bold cyan")
    objects.add_column("Name", style="cyan")
    objects.add_column("Fields", justify="right")
    objects.add_column("Used by")
    for obj in group.sub_objects:
        used_by = ", ".join(dict.fromkeys(obj.parents)) or "-"
        objects.add_row(obj.name, str(len(obj.fields)), used_by)
    console.print(objects)


def main() -> None:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="crddoc",
        description="📚 crddoc - API reference docs for Go API types",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  crddoc render api/v1                   Print Markdown docs to stdout
  crddoc render api/v1 -o docs/api.md    Write docs to a file
  crddoc render api/v1 -t docs.tmpl      Use a custom Jinja2 template
  crddoc inspect api/v1                  List resources and sub-objects
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # render command
    render_parser = subparsers.add_parser(
        "render", help="Render documentation for an API package"
    )
    render_parser.add_argument("folder", type=Path, help="API package directory")
    render_parser.add_argument(
        "--template", "-t", type=Path, help="Jinja2 template (default: built-in Markdown)"
    )
    render_parser.add_argument(
        "--output", "-o", type=Path, help="Output file (default: stdout)"
    )
    render_parser.add_argument("--config", "-c", type=Path, help="YAML config file")
    render_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Report build steps on stderr"
    )

    # inspect command
    inspect_parser = subparsers.add_parser(
        "inspect", help="Show resources and sub-objects of an API package"
    )
    inspect_parser.add_argument("folder", type=Path, help="API package directory")
    inspect_parser.add_argument("--config", "-c", type=Path, help="YAML config file")

    # version
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args()

    if args.command == "render":
        render_docs(
            folder=args.folder,
            template=args.template,
            output=args.output,
            config_path=args.config,
            verbose=args.verbose,
        )
    elif args.command == "inspect":
        inspect_package(folder=args.folder, config_path=args.config)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
