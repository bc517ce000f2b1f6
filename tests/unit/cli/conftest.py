"""Fixtures for command tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from trees.git.models import Worktree


class FakeService:
    """Stands in for GitService; records calls and raises queued errors."""

    def __init__(self, **kwargs: object):
        self.kwargs = kwargs
        self.calls: list[tuple] = []
        self.worktrees: list[Worktree] = []
        self.errors: dict[str, Exception] = {}

    def _record(self, name: str, *args: object) -> None:
        self.calls.append((name, *args))
        if name in self.errors:
            raise self.errors[name]

    def pull_default_branch(self, repo_path: Path) -> None:
        self._record("pull", repo_path)

    def create_worktree(self, repo_path: Path, feature_name: str) -> Path:
        self._record("create", repo_path, feature_name)
        return repo_path.parent / f"{repo_path.name}.worktrees" / feature_name

    def list_worktrees(self, repo_path: Path) -> list[Worktree]:
        self._record("list", repo_path)
        return self.worktrees

    def remove_worktree(self, repo_path: Path, worktree: Worktree, delete_branch: bool = False):
        self._record("remove", repo_path, worktree, delete_branch)


@pytest.fixture
def fake_service(monkeypatch: pytest.MonkeyPatch) -> FakeService:
    service = FakeService()

    def factory(**kwargs: object) -> FakeService:
        service.kwargs = kwargs
        return service

    monkeypatch.setattr("trees.cli._shared.GitService", factory)
    return service
