"""Info command implementation."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from epub_creator.core.epub_reader import EpubReader
from epub_creator.models.book import ParsedBook, TOCEntry


def _add_toc_branch(tree: Tree, entries: list[TOCEntry]) -> None:
    for entry in entries:
        branch = tree.add(f"{entry.title} [dim]({entry.href})[/]")
        _add_toc_branch(branch, entry.children)


def display_book(parsed: ParsedBook, console: Console) -> None:
    """Print metadata, spine and navigation tree."""
    info_lines = [
        f"[bold]{parsed.metadata.title}[/]",
        "",
        f"[dim]Author(s):[/] {', '.join(parsed.metadata.authors) or 'Unknown'}",
        f"[dim]Language:[/] {parsed.metadata.language or 'Unknown'}",
        f"[dim]Identifier:[/] {parsed.metadata.identifier or 'Unknown'}",
        f"[dim]Date:[/] {parsed.metadata.publication_date or 'Unknown'}",
        f"[dim]Manifest items:[/] {len(parsed.manifest)}",
    ]
    console.print()
    console.print(
        Panel(
            "\n".join(info_lines),
            title="Book Information",
            border_style="green",
        )
    )

    console.print()
    table = Table(title="Spine", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Id", style="white")
    table.add_column("File", style="green")
    for i, idref in enumerate(parsed.spine_order):
        table.add_row(str(i + 1), idref, parsed.manifest.get(idref, "?"))
    console.print(table)

    console.print()
    tree = Tree("[bold cyan]Table of Contents[/]")
    _add_toc_branch(tree, parsed.toc)
    console.print(tree)
    console.print()


def execute_info(epub_path: Path, console: Console) -> ParsedBook:
    """Execute the info command."""
    parsed = EpubReader(epub_path).parse()
    display_book(parsed, console)
    return parsed
