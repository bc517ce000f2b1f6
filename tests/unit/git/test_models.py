"""Tests for repository and worktree records."""

from pathlib import Path

import pytest

from trees.git.models import DETACHED, Repository, Worktree


@pytest.mark.unit
def test_worktree_identity_is_path():
    a = Worktree(path=Path("/tmp/w"), branch="feat")
    b = Worktree(path=Path("/tmp/w"), branch="other", is_main=True)

    assert a == b
    assert len({a, b}) == 1


@pytest.mark.unit
def test_worktree_name_and_detached():
    wt = Worktree(path=Path("/tmp/w"), branch=DETACHED)

    assert wt.name == DETACHED
    assert wt.is_detached
    assert not Worktree(path=Path("/tmp/w"), branch="feat").is_detached


@pytest.mark.unit
def test_worktree_str_marks_main():
    assert str(Worktree(path=Path("/r"), branch="main", is_main=True)) == "main @ /r (main)"
    assert str(Worktree(path=Path("/w"), branch="feat")) == "feat @ /w"


@pytest.mark.unit
def test_repository_from_path(tmp_path):
    repo = Repository.from_path(tmp_path / "myapp")

    assert repo.name == "myapp"
    assert repo.path == (tmp_path / "myapp").resolve()
    assert repo.worktrees_base_path == tmp_path.resolve() / "myapp.worktrees"
