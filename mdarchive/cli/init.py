"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ..config import DEFAULT_CONFIG_PATH, ConfigModel, FetchConfig, save_config

console = Console()


def init_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Settings file to create",
    ),
    timeout: float = typer.Option(5.0, "--timeout", help="Per-link fetch timeout in seconds"),
    concurrency: int = typer.Option(1, "--concurrency", help="Maximum links fetched at once"),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="User-Agent header"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing settings file"),
) -> None:
    """Write a settings file with the given fetch settings."""
    if config_path.exists() and not force:
        console.print(f"[red]{escape(str(config_path))} already exists (use --force)[/red]")
        raise typer.Exit(1)

    fetch = {"timeout": timeout, "max_concurrent": concurrency}
    if user_agent:
        fetch["user_agent"] = user_agent

    try:
        config = ConfigModel(fetch=FetchConfig(**fetch))
    except ValidationError as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {escape(str(config_path))}")
