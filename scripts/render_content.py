#!/usr/bin/env python3
"""
Scientific Text Rendering CLI

Renders mixed scientific text (Markdown, LaTeX math and environments,
<smiles> tags) to HTML and exposes the segmentation steps for inspection.

Commands:
    render    - Render a file (or stdin) to HTML
    segment   - Show the spans the scanner finds
    classify  - Classify one delimited fragment
    validate  - Check a file (or stdin) against the content rules

Examples:
    # Render a file to stdout
    python scripts/render_content.py render notes.md

    # Plain-text mode, written to a file
    python scripts/render_content.py render notes.md --plain --output notes.html

    # Inspect spans from stdin
    echo 'Area $A = \\pi r^2$' | python scripts/render_content.py segment -

    # Classify a fragment
    python scripts/render_content.py classify '$x^2$'
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from scitext.contexts.rendering import ContentValidationError, RichTextRenderer, validate_content
from scitext.contexts.rendering.config import load_rendering_settings
from scitext.contexts.rendering.logger import setup_rendering_logger
from scitext.contexts.segmentation import classify_fragment, scan_content
from scitext.contexts.segmentation.logger import setup_segmentation_logger
from scitext.utils.text_processing import truncate_display

app = typer.Typer(
    help="Render and inspect mixed scientific text",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def read_source(source: str) -> str:
    """Read text from a path, or from stdin when source is '-'."""
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.exists():
        typer.secho(f"Error: File not found: {path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8")


SourceArgument = Annotated[str, typer.Argument(help="Input file, or '-' for stdin")]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Override YAML merged over the packaged settings"),
]


@app.command("render")
def render_command(
    source: SourceArgument,
    plain: Annotated[
        bool, typer.Option("--plain", help="Treat prose as plain text instead of Markdown")
    ] = False,
    inline: Annotated[
        bool, typer.Option("--inline", help="Wrap output in an inline container")
    ] = False,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write HTML here instead of stdout")
    ] = None,
    log_dir: Annotated[
        Optional[Path], typer.Option("--log-dir", help="Write a session log under this directory")
    ] = None,
    config: ConfigOption = None,
):
    """
    Render a document to HTML.

    Examples:\n

        $ render_content.py render notes.md

        $ render_content.py render notes.md --plain -o notes.html
    """
    if log_dir is not None:
        session_dir = log_dir / f"render_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        log_file = setup_rendering_logger(session_dir, render_as_markdown=not plain, console_level="WARNING")
        typer.secho(f"Log: {log_file}", fg=typer.colors.BLUE, err=True)

    content = read_source(source)
    renderer = RichTextRenderer(settings=load_rendering_settings(config))
    html = renderer.render_to_html(content, render_as_markdown=not plain, inline=inline)

    if output is None:
        typer.echo(html)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN, err=True)


@app.command("segment")
def segment_command(
    source: SourceArgument,
    width: Annotated[int, typer.Option("--width", "-w", help="Preview width")] = 60,
    log_dir: Annotated[
        Optional[Path], typer.Option("--log-dir", help="Write a session log under this directory")
    ] = None,
):
    """
    List the spans found in a document (kind, start, end, preview).

    Examples:\n

        $ render_content.py segment notes.md
    """
    if log_dir is not None:
        session_dir = log_dir / f"segment_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        log_file = setup_segmentation_logger(session_dir)
        typer.secho(f"Log: {log_file}", fg=typer.colors.BLUE, err=True)

    content = read_source(source)
    spans = scan_content(content)

    if not spans:
        typer.secho("No spans found (plain text only).", fg=typer.colors.YELLOW)
        return

    typer.secho(f"{'KIND':<12} {'START':>6} {'END':>6}  PREVIEW", bold=True)
    for span in spans:
        kind = span.kind.value
        if span.environment_name:
            kind = f"{kind}:{span.environment_name}"
        preview = truncate_display(span.content.replace("\n", "\\n"), width)
        typer.echo(f"{kind:<12} {span.start:>6} {span.end:>6}  {preview}")

    typer.echo(f"\n{len(spans)} spans")


@app.command("classify")
def classify_command(
    fragment: Annotated[str, typer.Argument(help="Delimited fragment, e.g. '$x^2$'")],
):
    """
    Classify one fragment as math, variable, environment or plain text.

    Examples:\n

        $ render_content.py classify '$x+y$'

        $ render_content.py classify '\\(m\\)'
    """
    classification = classify_fragment(fragment)
    color = typer.colors.YELLOW if classification.category.value == "plain_text" else typer.colors.GREEN
    typer.secho(classification.category.value, fg=color, bold=True)
    typer.echo(f"  Body: {classification.body}")
    if classification.environment_name:
        typer.echo(f"  Environment: {classification.environment_name}")


@app.command("validate")
def validate_command(
    source: SourceArgument,
    config: ConfigOption = None,
):
    """
    Check a document against the content rules.

    Exits 0 when the content is accepted and 1 when it is rejected.
    """
    content = read_source(source)
    settings = load_rendering_settings(config)

    try:
        validate_content(content, settings.max_content_length)
    except ContentValidationError as e:
        typer.secho("✗ Content rejected", fg=typer.colors.RED, bold=True, err=True)
        typer.echo(f"  {e}", err=True)
        raise typer.Exit(code=1)

    typer.secho("✓ Content accepted", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
