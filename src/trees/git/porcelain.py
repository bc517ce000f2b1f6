"""Parser for ``git worktree list --porcelain``.

Format::

    worktree /path/to/main
    HEAD 1234abcd...
    branch refs/heads/main

    worktree /path/to/other
    HEAD 5678ef01...
    detached

Blank lines separate records; attribute lines other than ``branch`` and
``detached`` are ignored.
"""

import os
from pathlib import Path

from trees.git.models import DETACHED, Worktree

_HEADS_PREFIX = "refs/heads/"


def normalize_path(path: Path | str) -> Path:
    """Absolute path with symlinks resolved, for comparing worktree locations."""
    return Path(os.path.realpath(os.path.abspath(os.path.expanduser(str(path)))))


def parse_worktree_list(output: str, repo_path: Path | str) -> list[Worktree]:
    """Parse porcelain worktree listing into records.

    Args:
        output: stdout of ``git worktree list --porcelain``
        repo_path: Root of the repository that was queried

    Returns:
        Worktree records in listing order
    """
    repo_root = normalize_path(repo_path)
    worktrees: list[Worktree] = []
    current_path: str | None = None
    current_branch: str | None = None

    def flush() -> None:
        if current_path is None:
            return
        path = Path(current_path)
        worktrees.append(
            Worktree(
                path=path,
                branch=current_branch or DETACHED,
                is_main=normalize_path(path) == repo_root,
            )
        )

    for line in output.splitlines():
        if line.startswith("worktree "):
            flush()
            current_path = line[len("worktree ") :]
            current_branch = None
        elif line.startswith("branch "):
            ref = line[len("branch ") :].strip()
            current_branch = ref[len(_HEADS_PREFIX) :] if ref.startswith(_HEADS_PREFIX) else ref
        elif line.startswith("detached"):
            current_branch = DETACHED

    flush()
    return worktrees
