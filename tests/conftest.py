"""Pytest configuration and fixtures."""

import shutil
import subprocess
from pathlib import Path

import pytest

from gitwrap.git.integration import GitIntegration


def run_git(cwd: Path, *args: str, check: bool = True) -> subprocess.CompletedProcess:
    """Run git directly, bypassing gitwrap, to arrange test repositories."""
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=check
    )


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the user's git config and gitwrap settings out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    for name in (
        "GITHUB_CLIENT_ID", "GITHUB_CLIENT_SECRET", "GITWRAP_OAUTH_PORT",
        "GITWRAP_OAUTH_TIMEOUT", "GITWRAP_GIT", "GITWRAP_AUTHOR_NAME",
        "GITWRAP_AUTHOR_EMAIL", "GITWRAP_STRICT_EXIT", "GITWRAP_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def git_available():
    if shutil.which("git") is None:
        pytest.skip("git executable not available")


@pytest.fixture
def repo_path(git_available, tmp_path):
    """Create an empty repository."""
    path = tmp_path / "repo"
    path.mkdir()
    run_git(path, "init")
    return path


@pytest.fixture
def repo(repo_path):
    return GitIntegration.open(repo_path)


@pytest.fixture
def conflicted_repo(repo_path):
    """Repository mid-merge with x.txt conflicted: ours is A, theirs is B."""
    target = repo_path / "x.txt"
    target.write_text("base\n")
    run_git(repo_path, "add", "x.txt")
    run_git(repo_path, "commit", "-m", "base")

    run_git(repo_path, "checkout", "-b", "feature")
    target.write_text("B\n")
    run_git(repo_path, "commit", "-am", "theirs")

    run_git(repo_path, "checkout", "-")
    target.write_text("A\n")
    run_git(repo_path, "commit", "-am", "ours")

    merge = run_git(repo_path, "merge", "feature", check=False)
    assert merge.returncode != 0
    return repo_path
