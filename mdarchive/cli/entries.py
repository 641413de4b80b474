"""Commands that inspect links and archive entries."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..archive import ArchiveStorage, link_id
from ..errors import ArchiverError, MalformedURLError
from ..extraction import iter_links
from ..pipeline import read_document

console = Console()


def list_command(
    output_dir: Path = typer.Option(
        ...,
        "--output",
        "-o",
        envvar="MDARCHIVE_OUTPUT",
        help="Archive directory",
    ),
) -> None:
    """List archived pages."""
    if not output_dir.is_dir():
        console.print("[red]output is not a directory[/red]")
        raise typer.Exit(1)

    entries = list(ArchiveStorage(output_dir).iter_entries())
    if not entries:
        console.print("[yellow]No archived pages.[/yellow]")
        return

    table = Table(title="Archived Pages")
    table.add_column("Link ID", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Archived", style="yellow")
    table.add_column("URL", style="blue")

    for entry in entries:
        table.add_row(
            escape(entry.link_id),
            escape(entry.metadata.title),
            entry.metadata.archived_at.strftime("%Y-%m-%d %H:%M"),
            escape(entry.metadata.url),
        )

    console.print(table)


def link_id_command(
    url: str = typer.Argument(..., help="URL to identify"),
) -> None:
    """Print the archive directory name for a URL."""
    try:
        console.print(link_id(url), markup=False, highlight=False, soft_wrap=True)
    except MalformedURLError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


def links_command(
    path: Path = typer.Argument(..., help="Markdown document to scan"),
) -> None:
    """Print the links found in one document."""
    try:
        text = read_document(path)
    except ArchiverError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    for url in iter_links(text):
        console.print(url, markup=False, highlight=False, soft_wrap=True)
