"""
Shared fixtures for gitall tests.
"""

import os

import pytest

from gitall.config import GitallConfig


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point HOME at a temp dir and drop any GITALL_* settings from the environment."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("GITALL_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def gitall_config(tmp_path):
    """GitallConfig with all files under a temp directory."""
    return GitallConfig.for_database(tmp_path / "state" / "gitall.db")


@pytest.fixture
def make_repo(tmp_path):
    """Factory creating a directory that looks like a git repository."""
    def _make(name, git_dir=True):
        path = tmp_path / "repos" / name
        path.mkdir(parents=True)
        if git_dir:
            (path / ".git").mkdir()
        return path
    return _make
