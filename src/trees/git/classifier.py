"""Classify git stderr into typed errors.

git offers no structured error protocol, so failures are recognised by
matching the diagnostic text. Each classifier is an ordered table of rules;
a rule inspects the stderr and either returns an error or ``None``. The first
rule to return an error wins. Extend a table to recognise new wording without
touching the call sites.
"""

from collections.abc import Callable
from dataclasses import dataclass

from trees.errors import (
    BaseBranchNotFoundError,
    BranchAlreadyExistsError,
    GitError,
    InvalidBranchNameError,
    PullAuthFailedError,
    PullBlockedByLocalChangesError,
    PullBranchNotFoundError,
    PullConflictsError,
    PullDivergedError,
    PullError,
    PullNetworkError,
    PullRemoteNotFoundError,
    PullUnrelatedHistoriesError,
)


@dataclass(frozen=True)
class Diagnostic:
    """stderr text plus the context a rule may need to build its error."""

    stderr: str
    feature_name: str = ""
    base_branch: str = ""

    @property
    def lowered(self) -> str:
        return self.stderr.lower()


Rule = Callable[[Diagnostic], GitError | None]


def _contains_any(*patterns: str) -> Callable[[str], bool]:
    return lambda text: any(pattern in text for pattern in patterns)


def _when(predicate: Callable[[str], bool], factory: Callable[[], GitError]) -> Rule:
    """Rule that fires when ``predicate`` holds for the lowercased stderr."""

    def rule(diagnostic: Diagnostic) -> GitError | None:
        return factory() if predicate(diagnostic.lowered) else None

    return rule


# -- extractors --------------------------------------------------------------

_OVERWRITE_MARKERS = ("would be overwritten by merge", "would be overwritten by checkout")
_OVERWRITE_STOPS = ("please commit", "aborting", "error:")


def extract_overwritten_files(stderr: str) -> list[str] | None:
    """Return files listed after a "would be overwritten" line.

    Returns ``None`` if no such line exists, otherwise the (possibly empty)
    list of trimmed, non-blank lines up to the next stop line.
    """
    capturing = False
    files: list[str] = []

    for line in stderr.splitlines():
        trimmed = line.strip()
        lowered = trimmed.lower()

        if any(marker in lowered for marker in _OVERWRITE_MARKERS):
            capturing = True
            continue

        if not capturing:
            continue
        if lowered.startswith(_OVERWRITE_STOPS):
            break
        if trimmed:
            files.append(trimmed)

    return files if capturing else None


def extract_missing_remote_branch(stderr: str) -> str | None:
    """Return the branch named in a missing remote ref diagnostic."""
    ref_marker = "couldn't find remote ref "
    branch_start = "remote branch "
    branch_end = " not found"

    for line in stderr.splitlines():
        trimmed = line.strip()
        lowered = trimmed.lower()

        index = lowered.find(ref_marker)
        if index != -1:
            return trimmed[index + len(ref_marker) :].strip()

        start = lowered.find(branch_start)
        end = lowered.find(branch_end)
        if start != -1 and end != -1:
            branch = trimmed[start + len(branch_start) : end].strip()
            if branch:
                return branch

    return None


def extract_conflict_files(stderr: str) -> list[str]:
    """Return files named on ``CONFLICT (...): Merge conflict in <file>`` lines."""
    files = []
    for line in stderr.splitlines():
        trimmed = line.strip()
        if "CONFLICT" not in trimmed:
            continue
        _, sep, rest = trimmed.partition(" in ")
        if sep and rest.strip():
            files.append(rest.strip())
    return files


# -- pull rules --------------------------------------------------------------


def _local_changes(diagnostic: Diagnostic) -> GitError | None:
    files = extract_overwritten_files(diagnostic.stderr)
    return PullBlockedByLocalChangesError(files) if files is not None else None


def _remote_not_found(diagnostic: Diagnostic) -> GitError | None:
    text = diagnostic.lowered
    if "repository not found" in text or ("fatal: repository" in text and "not found" in text):
        return PullRemoteNotFoundError()
    return None


def _missing_remote_branch(diagnostic: Diagnostic) -> GitError | None:
    branch = extract_missing_remote_branch(diagnostic.stderr)
    return PullBranchNotFoundError(branch) if branch is not None else None


def _conflicts(diagnostic: Diagnostic) -> GitError | None:
    files = extract_conflict_files(diagnostic.stderr)
    text = diagnostic.lowered
    if files or "automatic merge failed" in text or "merge conflict" in text:
        return PullConflictsError(files)
    return None


PULL_RULES: tuple[Rule, ...] = (
    _local_changes,
    _when(
        _contains_any(
            "authentication failed",
            "permission denied",
            "could not read from remote repository",
            "returned error: 401",
            "returned error: 403",
        ),
        PullAuthFailedError,
    ),
    _remote_not_found,
    _when(
        _contains_any(
            "could not resolve host",
            "failed to connect",
            "connection timed out",
            "network is unreachable",
        ),
        PullNetworkError,
    ),
    _missing_remote_branch,
    _when(
        _contains_any("need to specify how to reconcile divergent branches"),
        PullDivergedError,
    ),
    _when(_contains_any("refusing to merge unrelated histories"), PullUnrelatedHistoriesError),
    _conflicts,
)


# -- worktree creation rules -------------------------------------------------


def _already_exists(diagnostic: Diagnostic) -> GitError | None:
    markers = _contains_any("already exists", "already checked out", "already used by worktree")
    if markers(diagnostic.lowered):
        return BranchAlreadyExistsError(diagnostic.feature_name)
    return None


def _invalid_branch_name(diagnostic: Diagnostic) -> GitError | None:
    if "not a valid branch name" in diagnostic.lowered:
        return InvalidBranchNameError(diagnostic.feature_name)
    return None


def _missing_base_branch(diagnostic: Diagnostic) -> GitError | None:
    text = diagnostic.lowered
    bad_ref = "invalid reference" in text or "not a valid object name" in text
    if bad_ref and diagnostic.base_branch and diagnostic.base_branch.lower() in text:
        return BaseBranchNotFoundError(diagnostic.base_branch)
    return None


WORKTREE_RULES: tuple[Rule, ...] = (
    _already_exists,
    _invalid_branch_name,
    _missing_base_branch,
)


def classify(diagnostic: Diagnostic, rules: tuple[Rule, ...]) -> GitError | None:
    """Apply ``rules`` in order and return the first error produced."""
    for rule in rules:
        error = rule(diagnostic)
        if error is not None:
            return error
    return None


def classify_pull_error(stderr: str) -> PullError | None:
    """Classify stderr from a failed ``git pull``.

    Returns:
        A specific PullError, or None if nothing matched
    """
    return classify(Diagnostic(stderr), PULL_RULES)


def classify_worktree_error(stderr: str, feature_name: str, base_branch: str) -> GitError | None:
    """Classify stderr from a failed ``git worktree add``.

    Args:
        stderr: Diagnostic output of the failed command
        feature_name: Branch the worktree was meant to check out
        base_branch: Branch a new feature branch was to be started from

    Returns:
        A specific error, or None if nothing matched
    """
    return classify(
        Diagnostic(stderr, feature_name=feature_name, base_branch=base_branch),
        WORKTREE_RULES,
    )
