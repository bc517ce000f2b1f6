"""Repository and worktree records."""

from dataclasses import dataclass, field
from pathlib import Path

# Branch value used for worktrees that are not on a local branch
DETACHED = "detached"

WORKTREES_SUFFIX = ".worktrees"


@dataclass(frozen=True)
class Worktree:
    """A git worktree as reported by ``git worktree list``.

    Identity is the path: two records with the same path compare equal even
    if their branch information differs.
    """

    path: Path
    branch: str = field(compare=False)
    is_main: bool = field(default=False, compare=False)

    @property
    def name(self) -> str:
        return self.branch

    @property
    def is_detached(self) -> bool:
        return self.branch == DETACHED

    def __str__(self) -> str:
        main_marker = " (main)" if self.is_main else ""
        return f"{self.branch} @ {self.path}{main_marker}"


@dataclass(frozen=True)
class Repository:
    """A directory under management."""

    name: str
    path: Path

    @classmethod
    def from_path(cls, path: Path | str) -> "Repository":
        resolved = Path(path).expanduser().resolve()
        return cls(name=resolved.name, path=resolved)

    @property
    def worktrees_base_path(self) -> Path:
        """Sibling directory holding this repository's worktrees."""
        return self.path.parent / f"{self.name}{WORKTREES_SUFFIX}"
