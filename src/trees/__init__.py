"""trees: sync, branch and manage git worktrees across repositories."""

__version__ = "0.1.0"
