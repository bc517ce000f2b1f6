"""Entry points for the worktree workflow.

:class:`GitService` exposes the blocking operations. :class:`AsyncGitService`
wraps the same operations so each one runs on a worker thread, leaving the
caller's event loop free. Neither serialises calls: mutating operations on one
repository (pull, create, remove) must not overlap, and keeping them apart is
the caller's job.
"""

import asyncio
import logging
from pathlib import Path

from trees.git.models import Worktree
from trees.git.repository import GitClient, RepositoryInspector
from trees.git.sync import DefaultBranchSync
from trees.git.worktree import WorktreeManager, resolve_worktree_path
from trees.utils.subprocess import ProcessRunner

logger = logging.getLogger(__name__)


class GitService:
    """Pull, create, list and remove worktrees for any repository path."""

    def __init__(
        self,
        executable: str = "git",
        remote: str = "origin",
        timeout: float | None = None,
    ):
        """Initialize git service.

        Args:
            executable: Name or path of the git executable
            remote: Remote that is pulled from and whose HEAD names the default branch
            timeout: Optional per-invocation deadline in seconds
        """
        self.client = GitClient(ProcessRunner(timeout=timeout), executable=executable)
        self.inspector = RepositoryInspector(self.client)
        self.sync = DefaultBranchSync(self.client, self.inspector, remote=remote)
        self.worktrees = WorktreeManager(self.client, self.inspector, remote=remote)

    def pull_default_branch(self, repo_path: Path) -> None:
        self.sync.pull(repo_path)

    def create_worktree(self, repo_path: Path, feature_name: str) -> Path:
        return self.worktrees.create_worktree(repo_path, feature_name)

    def list_worktrees(self, repo_path: Path) -> list[Worktree]:
        return self.worktrees.list_worktrees(repo_path)

    def remove_worktree(
        self, repo_path: Path, worktree: Worktree, delete_branch: bool = False
    ) -> None:
        self.worktrees.remove_worktree(repo_path, worktree, delete_branch)

    def default_branch(self, repo_path: Path) -> str:
        return self.inspector.default_branch(Path(repo_path), self.sync.remote)

    def start_feature(self, repo_path: Path, feature_name: str, pull: bool = True) -> Path:
        """Sync the default branch, then create the feature worktree.

        Args:
            repo_path: Path to the repository
            feature_name: Branch and directory name for the worktree
            pull: Pull the default branch first

        Returns:
            Path to the created worktree
        """
        logger.info(f"Starting feature {feature_name} in {repo_path}")
        if pull:
            self.pull_default_branch(repo_path)
        return self.create_worktree(repo_path, feature_name)

    @staticmethod
    def resolve_worktree_path(repo_path: Path, feature_name: str) -> Path:
        return resolve_worktree_path(repo_path, feature_name)


class AsyncGitService:
    """Runs GitService operations on worker threads."""

    def __init__(self, service: GitService | None = None):
        self.service = service or GitService()

    async def pull_default_branch(self, repo_path: Path) -> None:
        await asyncio.to_thread(self.service.pull_default_branch, repo_path)

    async def create_worktree(self, repo_path: Path, feature_name: str) -> Path:
        return await asyncio.to_thread(self.service.create_worktree, repo_path, feature_name)

    async def list_worktrees(self, repo_path: Path) -> list[Worktree]:
        return await asyncio.to_thread(self.service.list_worktrees, repo_path)

    async def remove_worktree(
        self, repo_path: Path, worktree: Worktree, delete_branch: bool = False
    ) -> None:
        await asyncio.to_thread(
            self.service.remove_worktree, repo_path, worktree, delete_branch
        )

    async def start_feature(self, repo_path: Path, feature_name: str, pull: bool = True) -> Path:
        return await asyncio.to_thread(self.service.start_feature, repo_path, feature_name, pull)

    async def list_many(self, repo_paths: list[Path]) -> dict[Path, list[Worktree]]:
        """List worktrees of several repositories concurrently.

        Listing is read-only, so repositories are queried in parallel. The
        first failure propagates.
        """
        results = await asyncio.gather(*(self.list_worktrees(path) for path in repo_paths))
        return dict(zip(repo_paths, results))
