"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .entries import link_id_command, links_command, list_command
from .init import init_command
from .run import run_command

app = typer.Typer(
    name="mdarchive",
    help="Archive the pages linked from a tree of Markdown documents",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("run")(run_command)
app.command("list")(list_command)
app.command("link-id")(link_id_command)
app.command("links")(links_command)


if __name__ == "__main__":
    app()
