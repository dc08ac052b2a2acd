"""Shared fixtures: throwaway git repositories with a bare remote."""

import subprocess
from pathlib import Path

import pytest

from git_manager.lib.config import RepoContext


def git(repo: Path, *args: str) -> str:
    """Run git in repo for test setup/inspection and return stripped stdout."""
    result = subprocess.run(
        ["git", "-C", str(repo), *args],
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def configure_identity(repo: Path) -> None:
    git(repo, "config", "user.name", "Test User")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "commit.gpgsign", "false")


def commit_file(repo: Path, name: str, content: str, message: str | None = None) -> str:
    """Write a file, commit it, return the commit hash."""
    path = repo / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-q", "-m", message or f"Update {name}")
    return git(repo, "rev-parse", "HEAD")


def clone(remote: Path, dest: Path) -> Path:
    subprocess.run(["git", "clone", "-q", str(remote), str(dest)], check=True, capture_output=True)
    configure_identity(dest)
    return dest


@pytest.fixture(autouse=True)
def git_env(monkeypatch, tmp_path_factory):
    """Isolate git from the user's configuration and keep it non-interactive."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_EDITOR", "true")
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")
    for var in ("TEST", "NON_INTERACTIVE", "ANSWERS", "REMOTE", "DEVELOP_BRANCH", "LOG_LEVEL"):
        monkeypatch.delenv(f"GIT_MANAGER_{var}", raising=False)


@pytest.fixture
def local_repo(tmp_path):
    """Repository with a single commit on main and no remote."""
    repo = tmp_path / "work"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    configure_identity(repo)
    commit_file(repo, "README.md", "# Test\n", "Initial commit")
    return repo


@pytest.fixture
def remote_path(tmp_path):
    return tmp_path / "remote.git"


@pytest.fixture
def repo(local_repo, remote_path):
    """Repository with main and develop, both pushed to a bare origin. Checked out on main."""
    git(local_repo, "branch", "develop")
    remote_path.mkdir()
    git(remote_path, "init", "-q", "--bare")
    git(remote_path, "symbolic-ref", "HEAD", "refs/heads/main")
    git(local_repo, "remote", "add", "origin", str(remote_path))
    git(local_repo, "push", "-q", "-u", "origin", "main", "develop")
    return local_repo


@pytest.fixture
def ctx(repo):
    return RepoContext(path=repo)
