"""Pull the default branch of a repository."""

from pathlib import Path

import typer

from trees.cli._shared import build_service, console, err_console, fail, resolve_repo
from trees.errors import GitError
from trees.utils.exit_codes import ExitCode


def pull_command(
    ctx: typer.Context,
    repo: Path = typer.Argument(Path("."), help="Repository to pull"),
) -> None:
    """Pull the repository's default branch from its remote.

    Repositories without the configured remote are left untouched.
    """
    repo_path = resolve_repo(repo)
    service = build_service(ctx)

    try:
        with err_console.status(f"Pulling {repo_path.name}..."):
            service.pull_default_branch(repo_path)
    except GitError as e:
        raise fail(e) from e

    console.print(f"[green]✓[/green] {repo_path.name} is up to date")
    raise typer.Exit(ExitCode.SUCCESS)
