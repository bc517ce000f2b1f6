"""Remove a worktree and optionally its branch."""

from pathlib import Path

import typer
from rich.prompt import Confirm

from trees.cli._shared import build_service, console, err_console, fail, resolve_repo
from trees.errors import BranchDeletionError, GitError
from trees.git.models import Worktree
from trees.git.porcelain import normalize_path
from trees.utils.exit_codes import ExitCode


def find_worktree(worktrees: list[Worktree], target: str) -> Worktree | None:
    """Find a worktree by path or by branch name."""
    target_path = normalize_path(target)
    for wt in worktrees:
        if normalize_path(wt.path) == target_path:
            return wt
    for wt in worktrees:
        if not wt.is_detached and wt.branch == target:
            return wt
    return None


def remove_command(
    ctx: typer.Context,
    repo: Path = typer.Argument(..., help="Repository the worktree belongs to"),
    target: str = typer.Argument(..., help="Worktree path or branch name"),
    delete_branch: bool = typer.Option(
        False, "--delete-branch", "-d", help="Also delete the worktree's branch"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Remove a worktree, discarding any uncommitted changes in it."""
    repo_path = resolve_repo(repo)
    service = build_service(ctx)

    try:
        worktrees = service.list_worktrees(repo_path)
    except GitError as e:
        raise fail(e) from e

    worktree = find_worktree(worktrees, target)
    if worktree is None:
        err_console.print(f"[red]Error:[/red] No worktree matching '{target}'")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    if worktree.is_main:
        err_console.print("[red]Error:[/red] Refusing to remove the main worktree")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not force:
        what = f"{worktree.path}"
        if delete_branch and not worktree.is_detached:
            what += f" and branch {worktree.branch}"
        if not Confirm.ask(f"Remove {what}?", default=False):
            console.print("[yellow]Operation cancelled[/yellow]")
            raise typer.Exit(ExitCode.SUCCESS)

    try:
        service.remove_worktree(repo_path, worktree, delete_branch=delete_branch)
    except BranchDeletionError as e:
        console.print(f"[green]✓[/green] Removed {worktree.path}")
        err_console.print(f"[yellow]Branch {e.branch} was kept[/yellow]")
        raise fail(e) from e
    except GitError as e:
        raise fail(e) from e

    console.print(f"[green]✓[/green] Removed {worktree.path}")
    if delete_branch and not worktree.is_detached:
        console.print(f"[green]✓[/green] Deleted branch {worktree.branch}")
    raise typer.Exit(ExitCode.SUCCESS)
