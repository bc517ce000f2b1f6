"""Entry point for trees CLI."""

import sys
from pathlib import Path

import typer
from rich.console import Console

from trees import __version__
from trees.cli.list_worktrees import list_command
from trees.cli.new import new_command
from trees.cli.path import path_command
from trees.cli.pull import pull_command
from trees.cli.remove import remove_command
from trees.config.manager import ConfigManager, ConfigurationError
from trees.utils.exit_codes import ExitCode
from trees.utils.logging import setup_logging

app = typer.Typer(
    name="trees",
    help="Sync repositories and manage their git worktrees",
    add_completion=True,
    no_args_is_help=True,
)
console = Console()

# Register commands
app.command("pull")(pull_command)
app.command("new")(new_command)
app.command("list")(list_command)
app.command("remove")(remove_command)
app.command("path")(path_command)


@app.callback()
def _global_options(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show the trees version and exit",
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Path to the configuration file",
        envvar="TREES_CONFIG",
    ),
) -> None:
    """Global options processed before subcommands."""
    if version:
        console.print(f"trees {__version__}")
        raise typer.Exit()

    config = ConfigManager(config_path)
    try:
        config.load()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(ExitCode.INVALID_CONFIG) from e

    ctx.ensure_object(dict)
    ctx.obj["config"] = config

    # Initialize logging as early as possible
    setup_logging((log_level or config.get("logging.level", "INFO")).upper())


def main() -> int:
    """Main entry point for the CLI."""
    try:
        app()
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
