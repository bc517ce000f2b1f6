"""Helpers shared by trees commands."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from trees.config.manager import ConfigManager, ConfigurationError
from trees.errors import GitError, GitErrorKind
from trees.git.service import GitService
from trees.utils.exit_codes import ExitCode

console = Console()
err_console = Console(stderr=True)


def get_config(ctx: typer.Context | None) -> ConfigManager:
    """Return the ConfigManager stored by the global callback, or a default one."""
    if ctx is not None and isinstance(ctx.obj, dict) and "config" in ctx.obj:
        return ctx.obj["config"]
    return ConfigManager()


def build_service(ctx: typer.Context | None) -> GitService:
    """Create a GitService from the active configuration.

    Raises:
        typer.Exit: With INVALID_CONFIG if the configuration cannot be loaded
    """
    try:
        settings = get_config(ctx).git_settings()
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(ExitCode.INVALID_CONFIG) from e
    return GitService(
        executable=settings.executable,
        remote=settings.remote,
        timeout=settings.timeout,
    )


def resolve_repo(repo: Path) -> Path:
    return repo.expanduser().resolve()


def exit_code_for(error: GitError) -> ExitCode:
    if error.kind is GitErrorKind.NOT_A_REPOSITORY:
        return ExitCode.NOT_A_REPOSITORY
    if error.kind is GitErrorKind.PROCESS_LAUNCH_FAILED:
        return ExitCode.MISSING_DEPS
    return ExitCode.GIT_FAILED


def fail(error: GitError) -> typer.Exit:
    """Print a git error and build the Exit to raise for it."""
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    if error.kind is GitErrorKind.NOT_A_REPOSITORY:
        err_console.print("[yellow]Make sure the path points at a git repository[/yellow]")
    return typer.Exit(exit_code_for(error))
