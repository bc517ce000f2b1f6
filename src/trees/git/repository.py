"""Read-only repository queries."""

import logging
from pathlib import Path

from trees.errors import ProcessLaunchError
from trees.utils.subprocess import ProcessResult, ProcessRunner

logger = logging.getLogger(__name__)

FALLBACK_BRANCHES = ("main", "master")


def is_git_repository(path: Path | str) -> bool:
    """Check if a path has git metadata.

    Args:
        path: Path to check.

    Returns:
        True if ``path/.git`` exists as a directory or a file, False otherwise.
    """
    git_dir = Path(path) / ".git"
    return git_dir.is_dir() or git_dir.is_file()


class GitClient:
    """Runs git commands against a repository through a ProcessRunner."""

    def __init__(self, runner: ProcessRunner | None = None, executable: str = "git"):
        """Initialize git client.

        Args:
            runner: Process runner used for every git invocation.
            executable: Name or path of the git executable.
        """
        self.runner = runner or ProcessRunner()
        self.executable = executable

    def run(self, args: list[str], repo_path: Path) -> ProcessResult:
        """Run ``git <args>`` in ``repo_path`` and return the raw result."""
        return self.runner.run(self.executable, args, cwd=repo_path)

    def probe(self, args: list[str], repo_path: Path) -> ProcessResult | None:
        """Run a query whose failure just means "no answer".

        Returns:
            The result, or None if git could not be launched.
        """
        try:
            return self.run(args, repo_path)
        except ProcessLaunchError as e:
            logger.debug(f"git {' '.join(args)} could not run: {e}")
            return None


class RepositoryInspector:
    """Answers questions about remotes and branches of a repository."""

    def __init__(self, client: GitClient | None = None):
        self.client = client or GitClient()

    def has_remote(self, name: str, repo_path: Path) -> bool:
        """Return True if a remote called ``name`` is configured."""
        result = self.client.probe(["remote", "get-url", name], repo_path)
        return result is not None and result.ok

    def branch_exists(self, name: str, repo_path: Path) -> bool:
        """Return True if ``refs/heads/<name>`` exists."""
        result = self.client.probe(
            ["show-ref", "--verify", "--quiet", f"refs/heads/{name}"], repo_path
        )
        return result is not None and result.ok

    def current_branch(self, repo_path: Path) -> str | None:
        """Return the checked-out branch, or None when HEAD is detached."""
        result = self.client.probe(["symbolic-ref", "--short", "HEAD"], repo_path)
        if result is None or not result.ok:
            return None
        return result.stdout.strip() or None

    def remote_default_branch(self, repo_path: Path, remote: str = "origin") -> str | None:
        """Return the branch the remote's HEAD points at, without the remote prefix."""
        result = self.client.probe(
            ["symbolic-ref", "--short", f"refs/remotes/{remote}/HEAD"], repo_path
        )
        if result is None or not result.ok:
            return None
        value = result.stdout.strip()
        prefix = f"{remote}/"
        if value.startswith(prefix) and len(value) > len(prefix):
            return value[len(prefix) :]
        return None

    def default_branch(self, repo_path: Path, remote: str = "origin") -> str:
        """Determine the default branch.

        Tries, in order: the remote's symbolic HEAD, the current branch, a
        local ``main``, a local ``master``, and finally the literal ``main``.
        """
        branch = self.remote_default_branch(repo_path, remote)
        if branch:
            return branch

        branch = self.current_branch(repo_path)
        if branch:
            return branch

        for candidate in FALLBACK_BRANCHES:
            if self.branch_exists(candidate, repo_path):
                return candidate

        logger.warning(f"Could not determine default branch of {repo_path}, using 'main'")
        return FALLBACK_BRANCHES[0]
