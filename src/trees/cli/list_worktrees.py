"""List the worktrees of a repository."""

import json
from pathlib import Path

import typer
from rich.table import Table

from trees.cli._shared import build_service, console, fail, resolve_repo
from trees.errors import GitError
from trees.utils.exit_codes import ExitCode


def list_command(
    ctx: typer.Context,
    repo: Path = typer.Argument(Path("."), help="Repository to inspect"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
) -> None:
    """List every worktree of REPO, the main checkout included."""
    repo_path = resolve_repo(repo)
    service = build_service(ctx)

    try:
        worktrees = service.list_worktrees(repo_path)
    except GitError as e:
        raise fail(e) from e

    if json_output:
        data = [
            {"path": str(wt.path), "branch": wt.branch, "is_main": wt.is_main}
            for wt in worktrees
        ]
        typer.echo(json.dumps(data, indent=2))
        raise typer.Exit(ExitCode.SUCCESS)

    table = Table(title=f"Worktrees of {repo_path.name}")
    table.add_column("Branch", style="yellow")
    table.add_column("Path", style="cyan", overflow="fold")
    table.add_column("Main", justify="center")

    for wt in worktrees:
        branch = f"[dim]{wt.branch}[/dim]" if wt.is_detached else wt.branch
        table.add_row(branch, str(wt.path), "[green]✓[/green]" if wt.is_main else "")

    console.print(table)
    raise typer.Exit(ExitCode.SUCCESS)
