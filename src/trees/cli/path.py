"""Show where a feature's worktree lives."""

from pathlib import Path

import typer

from trees.cli._shared import fail, resolve_repo
from trees.errors import InvalidBranchNameError
from trees.git.worktree import resolve_worktree_path
from trees.utils.validation import validate_feature_name


def path_command(
    repo: Path = typer.Argument(..., help="Repository the worktree belongs to"),
    feature: str = typer.Argument(..., help="Feature branch name"),
) -> None:
    """Print the worktree path for FEATURE without touching git."""
    try:
        validate_feature_name(feature)
    except InvalidBranchNameError as e:
        raise fail(e) from e
    typer.echo(str(resolve_worktree_path(resolve_repo(repo), feature)))
