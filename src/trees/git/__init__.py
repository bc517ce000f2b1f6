"""Git operations module."""

from trees.git.models import DETACHED, Repository, Worktree
from trees.git.repository import GitClient, RepositoryInspector, is_git_repository
from trees.git.service import AsyncGitService, GitService
from trees.git.sync import DefaultBranchSync
from trees.git.worktree import WorktreeManager, resolve_worktree_path

__all__ = [
    "DETACHED",
    "Repository",
    "Worktree",
    "GitClient",
    "RepositoryInspector",
    "is_git_repository",
    "GitService",
    "AsyncGitService",
    "DefaultBranchSync",
    "WorktreeManager",
    "resolve_worktree_path",
]
