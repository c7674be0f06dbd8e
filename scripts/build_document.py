#!/usr/bin/env python3
"""
Document Build CLI

Builds PDF documents from a style config and a content file, and manages the
rasterized icon cache.

Commands:
    build        - Compose and render a document to PDF
    icons        - Pre-render every mapped icon into the cache
    clear-icons  - Delete every cached icon raster

Examples:\n

    build_document.py build config/document_config.yaml content.yaml -o outs/cv.pdf

    build_document.py build config/document_config.yaml content.yaml -p colors_forest

    build_document.py build config/document_config.yaml resume.json --legacy

    build_document.py icons config/document_config.yaml --size 128 --color accent

    build_document.py clear-icons config/document_config.yaml
"""

import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.content import ContentLoadError
from folio.contexts.icons import IconCache, IconPipeline
from folio.contexts.rendering import build_document
from folio.contexts.rendering.logger import setup_rendering_logger
from folio.contexts.styling import ConfigLoadError, load_config

load_dotenv()
FOLIO_CONFIG_PATH = Path(os.getenv("FOLIO_CONFIG_PATH", "config/document_config.yaml"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Build PDF documents from style configs and content files",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_config_or_exit(config_path: Path, presets: List[str] = ()):
    try:
        return load_config(config_path, presets=presets)
    except ConfigLoadError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("build")
def build_command(
    config_path: Annotated[
        Path,
        typer.Argument(help="Style config (YAML or JSON)"),
    ],
    content_path: Annotated[
        Path,
        typer.Argument(help="Content document (YAML or JSON)"),
    ],
    output_path: Annotated[
        Path,
        typer.Option("--output", "-o", help="PDF to write"),
    ] = Path("outs/document.pdf"),
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Style preset to apply (repeatable, later wins)"),
    ] = None,
    legacy: Annotated[
        bool,
        typer.Option("--legacy", help="Read content in the legacy flat resume format"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Echo debug logging to the console"),
    ] = False,
):
    """
    Compose and render a document to PDF.

    Examples:\n

        $ build_document.py build config/document_config.yaml content.yaml

        $ build_document.py build config/document_config.yaml content.yaml -o cv.pdf -v
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = setup_rendering_logger(
        LOGS_PATH / f"build_{timestamp}",
        config_path=config_path,
        content_path=content_path,
        verbose=verbose,
    )
    if verbose:
        typer.echo(f"Log: {log_file}")

    typer.secho(f"\nBuilding: {output_path}", fg=typer.colors.BLUE, bold=True)

    try:
        result = build_document(
            config_path,
            content_path,
            output_path,
            presets=presets or [],
            legacy=legacy,
        )
    except (ConfigLoadError, ContentLoadError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if not result.success:
        typer.secho(f"✗ Build failed: {result.error}", fg=typer.colors.RED, bold=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Wrote {result.output_path}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  Sections: {', '.join(result.composition.rendered) or '(none)'}")
    if result.composition.skipped:
        typer.echo(f"  Skipped: {', '.join(result.composition.skipped)}")
    if result.composition.missing_icons:
        typer.secho(
            f"  Missing icons: {', '.join(result.composition.missing_icons)}",
            fg=typer.colors.YELLOW,
        )


@app.command("icons")
def icons_command(
    config_path: Annotated[
        Path,
        typer.Argument(help="Style config (YAML or JSON)"),
    ] = FOLIO_CONFIG_PATH,
    size: Annotated[
        Optional[int],
        typer.Option("--size", "-s", help="Raster size in pixels (default: icons.default_size)", min=1),
    ] = None,
    color: Annotated[
        Optional[str],
        typer.Option("--color", "-c", help="Palette name or hex (default: icons.color)"),
    ] = None,
):
    """
    Pre-render every mapped icon into the cache.

    Examples:\n

        $ build_document.py icons config/document_config.yaml

        $ build_document.py icons config/document_config.yaml --size 128 --color accent
    """
    config = _load_config_or_exit(config_path)
    pipeline = IconPipeline.from_config(config)

    failed = []
    for icon_key in sorted(config.icons.mappings):
        path = pipeline.ensure_icon(icon_key, size=size, color_ref=color)
        if path is None:
            failed.append(icon_key)
            typer.secho(f"  ✗ {icon_key}", fg=typer.colors.RED)
        else:
            typer.echo(f"  ✓ {icon_key}: {path}")

    total = len(config.icons.mappings)
    typer.echo(f"\n{total - len(failed)}/{total} icons available in {config.icons.output_path}")


@app.command("clear-icons")
def clear_icons_command(
    config_path: Annotated[
        Path,
        typer.Argument(help="Style config (YAML or JSON)"),
    ] = FOLIO_CONFIG_PATH,
):
    """
    Delete every cached icon raster.

    Cached rasters never notice edits to their source SVGs; clear the cache after
    changing an icon.
    """
    config = _load_config_or_exit(config_path)
    removed = IconCache(config.icons.output_path).clear()
    typer.secho(f"Removed {removed} cached icon(s) from {config.icons.output_path}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
