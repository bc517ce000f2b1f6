"""Shared pytest fixtures."""

import shutil
import subprocess
from pathlib import Path

import pytest


def git(*args: str, cwd: Path) -> str:
    """Run git in cwd and return stdout, failing the test on error."""
    completed = subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    )
    return completed.stdout


def init_repo(repo_path: Path) -> Path:
    """Initialize a repository with one commit on ``main``."""
    repo_path.mkdir(parents=True, exist_ok=True)
    git("init", cwd=repo_path)
    git("config", "user.email", "test@example.com", cwd=repo_path)
    git("config", "user.name", "Test User", cwd=repo_path)
    git("config", "commit.gpgsign", "false", cwd=repo_path)

    (repo_path / "README.md").write_text("# Test Repository\n")
    git("add", ".", cwd=repo_path)
    git("commit", "-m", "Initial commit", cwd=repo_path)
    git("branch", "-M", "main", cwd=repo_path)
    return repo_path.resolve()


@pytest.fixture(autouse=True)
def stable_environment(monkeypatch, tmp_path):
    """Keep git messages in English and isolate user configuration."""
    monkeypatch.setenv("LC_ALL", "C")
    monkeypatch.setenv("LANGUAGE", "")
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")
    monkeypatch.setenv("TREES_CONFIG", str(tmp_path / "trees-config.json"))


@pytest.fixture
def run_git():
    """Run git commands from tests."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    return git


@pytest.fixture
def make_repo(run_git):
    """Factory for throwaway repositories with an initial commit on main."""
    return init_repo


@pytest.fixture
def temp_repo(tmp_path, make_repo):
    """Create a temporary git repository for testing."""
    return make_repo(tmp_path / "project")


@pytest.fixture
def fake_repo(tmp_path):
    """A directory that only looks like a repository."""
    repo_path = tmp_path / "fake"
    repo_path.mkdir()
    (repo_path / ".git").mkdir()
    return repo_path
