"""Default branch synchronization."""

import logging
from pathlib import Path

from trees.errors import NotARepositoryError, PullFailedError
from trees.git.classifier import classify_pull_error
from trees.git.repository import GitClient, RepositoryInspector, is_git_repository
from trees.utils.logging import redact

logger = logging.getLogger(__name__)


class DefaultBranchSync:
    """Pull a repository's default branch from its remote."""

    def __init__(
        self,
        client: GitClient | None = None,
        inspector: RepositoryInspector | None = None,
        remote: str = "origin",
    ):
        """Initialize default branch sync.

        Args:
            client: Git client used for the pull itself
            inspector: Inspector used to find the remote and default branch
            remote: Remote to pull from
        """
        self.client = client or GitClient()
        self.inspector = inspector or RepositoryInspector(self.client)
        self.remote = remote

    def pull(self, repo_path: Path) -> None:
        """Pull the default branch into ``repo_path``.

        A repository without the remote has nothing to pull and succeeds
        without running git pull.

        Args:
            repo_path: Path to the repository

        Raises:
            NotARepositoryError: If repo_path has no git metadata
            PullError: If git pull fails; a specific subclass when the
                diagnostics were recognised, PullFailedError otherwise
            ProcessLaunchError: If git could not be run
        """
        repo_path = Path(repo_path)
        if not is_git_repository(repo_path):
            raise NotARepositoryError(repo_path)

        if not self.inspector.has_remote(self.remote, repo_path):
            logger.info(f"No '{self.remote}' remote for {repo_path}, skipping pull")
            return

        branch = self.inspector.default_branch(repo_path, self.remote)
        logger.info(f"Pulling {self.remote}/{branch} into {repo_path}")
        result = self.client.run(["pull", self.remote, branch], repo_path)

        if result.ok:
            logger.info(f"Pulled {self.remote}/{branch} into {repo_path}")
            return

        # git reports merge conflicts on stdout
        error = (
            classify_pull_error(result.stderr)
            or classify_pull_error(result.stdout)
            or PullFailedError(result.stderr)
        )
        logger.warning(
            f"Pull failed for {repo_path} ({error.kind.value}): {redact(result.stderr.strip())}"
        )
        raise error
