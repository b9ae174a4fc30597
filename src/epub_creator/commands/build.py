"""Build command implementation."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from epub_creator.core.epub_creator import EpubCreator
from epub_creator.models.package import BuildResult
from epub_creator.models.request import BuildRequest


def get_default_output_path(config_path: Path) -> Path:
    """Default archive path: the config file name with an .epub suffix."""
    return config_path.with_suffix(".epub")


def apply_overrides(
    request: BuildRequest,
    content_dir: Path | None = None,
    cover: str | None = None,
    title: str | None = None,
    author: str | None = None,
    language: str | None = None,
) -> BuildRequest:
    """Apply command-line overrides on top of the loaded request.

    The result is validated again, so overrides obey the same rules as the
    build request file.
    """
    data = request.model_dump()
    if content_dir is not None:
        data["content_dir"] = content_dir
    if cover is not None:
        data["cover"] = cover
    for name, value in (("title", title), ("author", author), ("language", language)):
        if value is not None:
            data["simple_metadata"][name] = value
    return BuildRequest.from_data(data)


def execute_build(
    config_path: Path,
    output_path: Path | None,
    quiet: bool,
    console: Console,
    content_dir: Path | None = None,
    cover: str | None = None,
    title: str | None = None,
    author: str | None = None,
    language: str | None = None,
) -> BuildResult:
    """Execute the build command."""
    request = apply_overrides(
        BuildRequest.from_file(config_path),
        content_dir=content_dir,
        cover=cover,
        title=title,
        author=author,
        language=language,
    )
    final_output = output_path or get_default_output_path(config_path)
    creator = EpubCreator(request)

    if not quiet:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            progress.add_task("Building EPUB...", total=None)
            result = creator.create(final_output)
    else:
        result = creator.create(final_output)

    if not quiet:
        summary_lines = [
            f"[bold]{result.title}[/]",
            "",
            f"[dim]Output:[/] {result.output_path}",
            f"[dim]Identifier:[/] {result.unique_id}",
            f"[dim]Manifest items:[/] {result.manifest_items}",
            f"[dim]Spine items:[/] {result.spine_items}",
            f"[dim]Navigation points:[/] {result.nav_points} (depth {result.max_depth})",
        ]
        console.print()
        console.print(
            Panel(
                "\n".join(summary_lines),
                title="Complete",
                border_style="green",
            )
        )

    return result
