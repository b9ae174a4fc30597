"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from epub_creator.commands.build import execute_build
from epub_creator.commands.info import execute_info
from epub_creator.errors import EpubBuildError

app = typer.Typer(
    name="epub-creator",
    help="Assemble EPUB packages from a content directory and a JSON build request.",
    add_completion=False,
)

console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def build(
    config_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the JSON build request",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output EPUB path (default: {config_name}.epub)",
        ),
    ] = None,
    content_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--content-dir",
            "-c",
            help="Override the content directory from the build request",
            resolve_path=True,
        ),
    ] = None,
    cover: Annotated[
        Optional[str],
        typer.Option("--cover", help="Cover image path, relative to the content directory"),
    ] = None,
    title: Annotated[
        Optional[str],
        typer.Option("--title", help="Book title (ignored if metadata has dc:title)"),
    ] = None,
    author: Annotated[
        Optional[str],
        typer.Option("--author", help="Book author (ignored if metadata has dc:creator)"),
    ] = None,
    language: Annotated[
        Optional[str],
        typer.Option("--language", help="Book language (ignored if metadata has dc:language)"),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress output",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every build stage",
        ),
    ] = False,
) -> None:
    """Build an EPUB from a build request."""
    configure_logging(verbose)

    try:
        execute_build(
            config_path=config_path,
            output_path=output,
            quiet=quiet,
            console=console,
            content_dir=content_dir,
            cover=cover,
            title=title,
            author=author,
            language=language,
        )
    except EpubBuildError as e:
        console.print(f"[red]Error ({e.error_type}): {escape(e.message)}[/]")
        raise typer.Exit(1)


@app.command()
def info(
    epub_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the EPUB file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display EPUB metadata, spine and table of contents."""
    try:
        execute_info(epub_path, console)
    except EpubBuildError as e:
        console.print(f"[red]Error reading file: {escape(e.message)}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
