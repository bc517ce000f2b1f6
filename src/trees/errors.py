"""Error taxonomy for git operations.

Every failure surfaced by the git layer is one of the classes below. Each
carries a ``kind`` from :class:`GitErrorKind` so callers can branch on the
condition without isinstance chains, plus whatever detail was extracted from
git's diagnostics.
"""

from enum import Enum


class GitErrorKind(Enum):
    """Closed set of git failure conditions."""

    NOT_A_REPOSITORY = "not_a_repository"
    PULL_FAILED = "pull_failed"
    PULL_BLOCKED_BY_LOCAL_CHANGES = "pull_blocked_by_local_changes"
    PULL_AUTH_FAILED = "pull_auth_failed"
    PULL_REMOTE_NOT_FOUND = "pull_remote_not_found"
    PULL_NETWORK_ERROR = "pull_network_error"
    PULL_CONFLICTS = "pull_conflicts"
    PULL_BRANCH_NOT_FOUND = "pull_branch_not_found"
    PULL_DIVERGED = "pull_diverged"
    PULL_UNRELATED_HISTORIES = "pull_unrelated_histories"
    WORKTREE_CREATION_FAILED = "worktree_creation_failed"
    WORKTREE_REMOVAL_FAILED = "worktree_removal_failed"
    INVALID_BRANCH_NAME = "invalid_branch_name"
    BASE_BRANCH_NOT_FOUND = "base_branch_not_found"
    BRANCH_ALREADY_EXISTS = "branch_already_exists"
    BRANCH_DELETION_FAILED = "branch_deletion_failed"
    PROCESS_LAUNCH_FAILED = "process_launch_failed"


class GitError(Exception):
    """Base exception for git operations."""

    kind: GitErrorKind


class NotARepositoryError(GitError):
    """Raised when a path has no git metadata."""

    kind = GitErrorKind.NOT_A_REPOSITORY

    def __init__(self, path: object = None):
        self.path = path
        super().__init__("Not a git repository")


class ProcessLaunchError(GitError):
    """Raised when the git executable could not be started or was killed."""

    kind = GitErrorKind.PROCESS_LAUNCH_FAILED

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Failed to run git: {raw}")


class PullError(GitError):
    """Base class for failures of ``git pull``."""


class PullFailedError(PullError):
    """Pull failed for a reason the classifier did not recognise."""

    kind = GitErrorKind.PULL_FAILED

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Failed to pull from default branch: {raw}")


def _with_listing(message: str, heading: str, items: list[str]) -> str:
    if not items:
        return message
    listing = "\n".join(items)
    return f"{message}\n\n{heading}:\n{listing}"


class PullBlockedByLocalChangesError(PullError):
    """Local modifications would be overwritten by the pull."""

    kind = GitErrorKind.PULL_BLOCKED_BY_LOCAL_CHANGES

    def __init__(self, files: list[str]):
        self.files = list(files)
        super().__init__(
            _with_listing(
                "Cannot pull because local changes would be overwritten. "
                "Commit or stash your changes first.",
                "Files",
                self.files,
            )
        )


class PullAuthFailedError(PullError):
    kind = GitErrorKind.PULL_AUTH_FAILED

    def __init__(self):
        super().__init__(
            "Authentication failed when pulling. Check your credentials or access permissions."
        )


class PullRemoteNotFoundError(PullError):
    kind = GitErrorKind.PULL_REMOTE_NOT_FOUND

    def __init__(self):
        super().__init__("Remote repository not found. Check the remote URL and your access.")


class PullNetworkError(PullError):
    kind = GitErrorKind.PULL_NETWORK_ERROR

    def __init__(self):
        super().__init__(
            "Network error while contacting the remote. Check your connection and try again."
        )


class PullConflictsError(PullError):
    """The pull merged with conflicts."""

    kind = GitErrorKind.PULL_CONFLICTS

    def __init__(self, files: list[str]):
        self.files = list(files)
        super().__init__(
            _with_listing(
                "Pull resulted in merge conflicts. Resolve conflicts and commit before retrying.",
                "Conflicts",
                self.files,
            )
        )


class PullBranchNotFoundError(PullError):
    kind = GitErrorKind.PULL_BRANCH_NOT_FOUND

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            f"Remote branch '{branch}' was not found. Check that it exists on the remote."
        )


class PullDivergedError(PullError):
    kind = GitErrorKind.PULL_DIVERGED

    def __init__(self):
        super().__init__(
            "Local and remote branches have diverged. "
            "Configure pull strategy or reconcile manually."
        )


class PullUnrelatedHistoriesError(PullError):
    kind = GitErrorKind.PULL_UNRELATED_HISTORIES

    def __init__(self):
        super().__init__(
            "Cannot pull because the histories are unrelated. "
            "Check the remote branch or merge manually."
        )


class WorktreeCreationError(GitError):
    kind = GitErrorKind.WORKTREE_CREATION_FAILED

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Failed to create worktree: {raw}")


class WorktreeRemovalError(GitError):
    kind = GitErrorKind.WORKTREE_REMOVAL_FAILED

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Failed to remove worktree: {raw}")


class InvalidBranchNameError(GitError):
    kind = GitErrorKind.INVALID_BRANCH_NAME

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Branch name '{name}' is invalid. Use a valid branch name and try again.")


class BaseBranchNotFoundError(GitError):
    kind = GitErrorKind.BASE_BRANCH_NOT_FOUND

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            f"Base branch '{branch}' was not found. "
            "Check your repository branches and try again."
        )


class BranchAlreadyExistsError(GitError):
    kind = GitErrorKind.BRANCH_ALREADY_EXISTS

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Branch '{name}' already exists")


class BranchDeletionError(GitError):
    """Branch deletion failed after the worktree itself was removed.

    The removal is not rolled back; ``worktree_removed`` records that the
    first half of the operation completed.
    """

    kind = GitErrorKind.BRANCH_DELETION_FAILED
    worktree_removed = True

    def __init__(self, branch: str, raw: str):
        self.branch = branch
        self.raw = raw
        super().__init__(f"Failed to delete branch '{branch}': {raw}")
