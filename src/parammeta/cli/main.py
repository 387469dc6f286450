"""CLI entry point for parammeta.

Invoked as::

    parammeta [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m parammeta.cli.main

Commands
--------
inspect     Show the merged metadata of every field
check       Report what a document load degraded or ignored
dump        Write the merged view as JSON or YAML
version     Show version information

SCHEMA arguments are YAML or JSON schema descriptions (see
``parammeta.schema.loader``); DOCUMENT arguments are overlay documents.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from parammeta.diagnostics import LoadDiagnostic
    from parammeta.overlay.schema import SchemaOverlay
    from parammeta.schema.nodes import ParamDef

console = Console()
err_console = Console(stderr=True)


def _load_schema_or_exit(path: str) -> "ParamDef":
    """Read a schema description, exiting on error."""
    from parammeta.schema import SchemaLoadError, load_schema_file

    try:
        return load_schema_file(path)
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)
    except SchemaLoadError as exc:
        err_console.print(f"[red]Schema error[/red] in {path}: {exc}")
        sys.exit(1)


def _load_overlay(schema_path: str, document: str, strict: bool) -> "SchemaOverlay":
    import parammeta

    schema = _load_schema_or_exit(schema_path)
    return parammeta.load(document, schema, parammeta.OverlayRegistry("cli"), strict=strict)


def _severity_color(severity_name: str) -> str:
    """Map a DiagnosticSeverity name to a Rich color string."""
    colors = {
        "ERROR": "red",
        "WARNING": "yellow",
        "INFORMATION": "blue",
    }
    return colors.get(severity_name, "white")


def _diagnostics_table(title: str, diagnostics: "tuple[LoadDiagnostic, ...]") -> Table:
    table = Table(title=title, show_lines=True)
    table.add_column("Severity", style="bold", min_width=10)
    table.add_column("Code", min_width=8)
    table.add_column("Field", min_width=10)
    table.add_column("Message")
    for d in diagnostics:
        color = _severity_color(d.severity.name)
        loc = "" if d.field_name is None else d.field_name
        if d.index is not None:
            loc = f"{loc} (#{d.index})"
        table.add_row(f"[{color}]{d.severity.name}[/{color}]", d.code, loc, d.message)
    return table


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="parammeta")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log loader activity")
def cli(verbose: bool) -> None:
    """Merge human-authored field metadata onto param schemas."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from parammeta import __version__
    from parammeta.overlay import XML_VERSION

    table = Table(show_header=False, box=None)
    table.add_row("[bold]parammeta[/bold]", f"v{__version__}")
    table.add_row("Document version", str(XML_VERSION))
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# inspect command
# ---------------------------------------------------------------------------


@cli.command(name="inspect")
@click.argument("schema", type=click.Path(exists=False))
@click.argument("document", type=click.Path(exists=False))
@click.option("--strict", is_flag=True, default=False, help="Treat warnings as errors")
@click.option("--display-order", is_flag=True, default=False, help="List fields in the document's display order")
def inspect_command(schema: str, document: str, strict: bool, display_order: bool) -> None:
    """Show the merged metadata of every field.

    SCHEMA is a schema description; DOCUMENT is its overlay document.
    """
    from parammeta.schema.nodes import schema_name

    overlay = _load_overlay(schema, document, strict)
    fields = overlay.ordered_fields() if display_order else list(overlay.schema.fields)

    table = Table(title=f"Fields: {schema_name(overlay.schema)}")
    table.add_column("Field", style="bold")
    table.add_column("Display name")
    table.add_column("Refs")
    table.add_column("VRef")
    table.add_column("Enum")
    table.add_column("Bool")
    table.add_column("Wiki")
    for f in fields:
        fo = overlay.overlay_for(f)
        table.add_row(
            f.internal_name,
            fo.display_name(f),
            ", ".join(fo.ref_types or ()),
            fo.virtual_ref or "",
            fo.enum_type.name if fo.enum_type is not None else "",
            "yes" if fo.is_bool else "",
            fo.wiki or "",
        )
    console.print(table)

    if overlay.offset_size is not None:
        console.print(f"[bold]Offset size:[/bold] {overlay.offset_size}")
    if overlay.diagnostics:
        console.print(_diagnostics_table(f"Diagnostics: {document}", overlay.diagnostics))


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("schema", type=click.Path(exists=False))
@click.argument("document", type=click.Path(exists=False))
@click.option("--strict", is_flag=True, default=False, help="Treat warnings as errors")
def check_command(schema: str, document: str, strict: bool) -> None:
    """Report what loading DOCUMENT onto SCHEMA degraded or ignored."""
    overlay = _load_overlay(schema, document, strict)

    if not overlay.diagnostics:
        console.print(f"[green]OK[/green] {document}: no issues found")
        sys.exit(0)

    errors = [d for d in overlay.diagnostics if d.is_error]
    console.print(_diagnostics_table(f"Check: {document}", overlay.diagnostics))
    console.print(
        f"\n[bold]Summary:[/bold] {len(errors)} error(s), "
        f"{len(overlay.diagnostics) - len(errors)} other finding(s)"
    )

    if errors:
        sys.exit(1)


# ---------------------------------------------------------------------------
# dump command
# ---------------------------------------------------------------------------


@cli.command(name="dump")
@click.argument("schema", type=click.Path(exists=False))
@click.argument("document", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def dump_command(schema: str, document: str, output_format: str, output: str | None) -> None:
    """Write the merged view of SCHEMA and DOCUMENT as JSON or YAML."""
    from parammeta.serializer import OverlaySerializer

    overlay = _load_overlay(schema, document, strict=False)
    serializer = OverlaySerializer()

    if output_format.lower() == "json":
        text = serializer.to_json(overlay, indent=2)
        lang = "json"
    else:
        text = serializer.to_yaml(overlay)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Merged view written to[/green] {output}")
    else:
        console.print(Syntax(text, lang, line_numbers=True))


if __name__ == "__main__":
    cli()
