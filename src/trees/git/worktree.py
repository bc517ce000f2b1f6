"""Git worktree management."""

import logging
from pathlib import Path

from trees.errors import (
    BranchDeletionError,
    NotARepositoryError,
    WorktreeCreationError,
    WorktreeRemovalError,
)
from trees.git.classifier import classify_worktree_error
from trees.git.models import Repository, Worktree
from trees.git.porcelain import parse_worktree_list
from trees.git.repository import GitClient, RepositoryInspector, is_git_repository
from trees.utils.logging import redact
from trees.utils.validation import validate_feature_name

logger = logging.getLogger(__name__)


def resolve_worktree_path(repo_path: Path | str, feature_name: str) -> Path:
    """Compute where the worktree for ``feature_name`` lives.

    ``<parent>/<repo name>.worktrees/<feature name>``. The feature name is
    used verbatim, so a slash produces nested directories. Touches neither
    the filesystem nor git.
    """
    repo_path = Path(repo_path)
    return Repository(name=repo_path.name, path=repo_path).worktrees_base_path / feature_name


class WorktreeManager:
    """Creates, lists and removes the worktrees of repositories."""

    def __init__(
        self,
        client: GitClient | None = None,
        inspector: RepositoryInspector | None = None,
        remote: str = "origin",
    ):
        """Initialize worktree manager.

        Args:
            client: Git client used for worktree commands
            inspector: Inspector used for default branch and branch lookups
            remote: Remote whose HEAD names the default branch
        """
        self.client = client or GitClient()
        self.inspector = inspector or RepositoryInspector(self.client)
        self.remote = remote

    def _require_repository(self, repo_path: Path) -> None:
        if not is_git_repository(repo_path):
            raise NotARepositoryError(repo_path)

    def create_worktree(self, repo_path: Path, feature_name: str) -> Path:
        """Create a worktree for a feature branch.

        An existing local branch named ``feature_name`` is checked out;
        otherwise a new branch is started from the default branch.

        Args:
            repo_path: Path to the main repository
            feature_name: Branch name, also used as the worktree directory name

        Returns:
            Absolute path to the created worktree

        Raises:
            InvalidBranchNameError: If feature_name is blank or rejected by git
            NotARepositoryError: If repo_path has no git metadata
            WorktreeCreationError: If the target exists or git fails unrecognisably
            BranchAlreadyExistsError: If the branch is already checked out elsewhere
            BaseBranchNotFoundError: If the default branch does not resolve
        """
        validate_feature_name(feature_name)
        repo_path = Path(repo_path).resolve()
        self._require_repository(repo_path)

        worktree_path = resolve_worktree_path(repo_path, feature_name)
        if worktree_path.exists():
            logger.warning(f"Worktree path already exists: {worktree_path}")
            raise WorktreeCreationError("Worktree path already exists.")

        worktree_path.parent.mkdir(parents=True, exist_ok=True)

        default_branch = self.inspector.default_branch(repo_path, self.remote)
        if self.inspector.branch_exists(feature_name, repo_path):
            logger.info(f"Creating worktree at {worktree_path} on existing branch {feature_name}")
            args = ["worktree", "add", str(worktree_path), feature_name]
        else:
            logger.info(
                f"Creating worktree at {worktree_path} with new branch {feature_name} "
                f"from {default_branch}"
            )
            args = ["worktree", "add", "-b", feature_name, str(worktree_path), default_branch]

        result = self.client.run(args, repo_path)
        if not result.ok:
            error = classify_worktree_error(
                result.stderr, feature_name=feature_name, base_branch=default_branch
            ) or WorktreeCreationError(result.stderr)
            logger.warning(
                f"Worktree creation failed ({error.kind.value}): {redact(result.stderr.strip())}"
            )
            raise error

        logger.info(f"Successfully created worktree at {worktree_path}")
        return worktree_path

    def list_worktrees(self, repo_path: Path) -> list[Worktree]:
        """List all worktrees of a repository, main worktree included.

        Args:
            repo_path: Path to the main repository

        Returns:
            Worktree records in git's listing order

        Raises:
            NotARepositoryError: If git cannot list worktrees for repo_path
        """
        repo_path = Path(repo_path)
        if not repo_path.is_dir():
            raise NotARepositoryError(repo_path)

        result = self.client.run(["worktree", "list", "--porcelain"], repo_path)
        if not result.ok:
            logger.debug(f"git worktree list failed: {result.stderr.strip()}")
            raise NotARepositoryError(repo_path)

        worktrees = parse_worktree_list(result.stdout, repo_path)
        logger.debug(f"Found {len(worktrees)} worktrees in {repo_path}")
        return worktrees

    def remove_worktree(
        self, repo_path: Path, worktree: Worktree, delete_branch: bool = False
    ) -> None:
        """Remove a worktree, discarding uncommitted changes in it.

        Branch deletion runs only after the worktree is gone and is not rolled
        back into a restored worktree if it fails.

        Args:
            repo_path: Path to the main repository
            worktree: Worktree to remove
            delete_branch: Also delete the worktree's branch with ``git branch -d``

        Raises:
            NotARepositoryError: If repo_path has no git metadata
            WorktreeRemovalError: If git refuses to remove the worktree
            BranchDeletionError: If the worktree was removed but its branch was not
        """
        repo_path = Path(repo_path)
        self._require_repository(repo_path)

        logger.info(f"Removing worktree at {worktree.path}")
        result = self.client.run(["worktree", "remove", "--force", str(worktree.path)], repo_path)
        if not result.ok:
            logger.warning(f"Worktree removal failed: {redact(result.stderr.strip())}")
            raise WorktreeRemovalError(result.stderr)
        logger.info(f"Successfully removed worktree at {worktree.path}")

        if not delete_branch or worktree.is_detached:
            return

        result = self.client.run(["branch", "-d", worktree.branch], repo_path)
        if not result.ok:
            logger.warning(
                f"Worktree removed but branch {worktree.branch} was kept: "
                f"{redact(result.stderr.strip())}"
            )
            raise BranchDeletionError(worktree.branch, result.stderr)
        logger.info(f"Deleted branch {worktree.branch}")
