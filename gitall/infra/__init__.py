"""
Infrastructure layer for gitall.

Contains abstractions for external systems:
- GitClient: Git process execution
- LineStore: line-delimited text file persistence

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient, is_git_repo
from .line_store import LineStore

__all__ = [
    'GitClient',
    'is_git_repo',
    'LineStore',
]
