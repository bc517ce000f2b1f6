"""Start a feature: sync the default branch and create a worktree."""

from pathlib import Path

import typer

from trees.cli._shared import build_service, err_console, fail, resolve_repo
from trees.errors import GitError, PullError
from trees.utils.exit_codes import ExitCode


def new_command(
    ctx: typer.Context,
    repo: Path = typer.Argument(..., help="Repository to branch from"),
    feature: str = typer.Argument(..., help="Feature branch name, also the worktree directory"),
    pull: bool = typer.Option(True, "--pull/--no-pull", help="Pull the default branch first"),
) -> None:
    """Create a worktree for a new or existing feature branch.

    The worktree is placed in <repo>.worktrees/<feature> next to the
    repository. Only the worktree path is written to stdout so the command
    composes with `cd "$(trees new ...)"`.
    """
    repo_path = resolve_repo(repo)
    service = build_service(ctx)

    try:
        if pull:
            with err_console.status(f"Pulling {repo_path.name}..."):
                service.pull_default_branch(repo_path)
        with err_console.status(f"Creating worktree {feature}..."):
            worktree_path = service.create_worktree(repo_path, feature)
    except PullError as e:
        err_console.print("[yellow]Worktree not created because the pull failed[/yellow]")
        raise fail(e) from e
    except GitError as e:
        raise fail(e) from e

    typer.echo(str(worktree_path))
    raise typer.Exit(ExitCode.SUCCESS)
