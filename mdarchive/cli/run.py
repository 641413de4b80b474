"""Run command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import build_archiver_config
from ..errors import ArchiverError
from ..pipeline import ArchivalOrchestrator, print_run_summary

console = Console()


def run_command(
    input_dir: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        envvar="MDARCHIVE_INPUT",
        help="Directory of Markdown documents to scan",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        envvar="MDARCHIVE_OUTPUT",
        help="Directory to archive pages into",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="MDARCHIVE_CONFIG",
        help="Settings file (default: ~/.config/mdarchive/config.yaml)",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Per-link fetch timeout in seconds",
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency",
        help="Maximum links fetched at once",
    ),
) -> None:
    """Archive every linked page in a Markdown tree that was not seen before."""
    try:
        config = build_archiver_config(
            input_dir,
            output_dir,
            config_path=config_path,
            timeout=timeout,
            max_concurrent=concurrency,
        )

        orchestrator = ArchivalOrchestrator(config)
        stats = orchestrator.run()
        print_run_summary(stats)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted, cache not saved[/yellow]")
        raise typer.Exit(1)
    except ArchiverError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
