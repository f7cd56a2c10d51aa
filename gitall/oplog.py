"""
Operation log for gitall.

Keeps the most recent successful batch operations, newest first.
"""

from pathlib import Path
from typing import List, Sequence
import logging

from .infra.line_store import LineStore

logger = logging.getLogger(__name__)

MAX_ENTRIES = 50


def format_entry(repo_path: str, git_args: Sequence[str]) -> str:
    """Build the log line for one successful git invocation."""
    return f"{repo_path}: git {' '.join(git_args)}"


class OperationLog:
    """
    Bounded, newest-first log of executed commands.

    Example:
        log = OperationLog(Path("~/.gitall.db.log"))
        log.append("/src/project: git pull")
        log.list()[0]  # '/src/project: git pull'
    """

    def __init__(self, path: Path, limit: int = MAX_ENTRIES):
        self.limit = limit
        self._lines = LineStore(path)

    @property
    def path(self) -> Path:
        return self._lines.path

    def append(self, entry: str) -> None:
        """Record entry as the newest line, dropping the oldest past the limit."""
        entries = [entry] + self._lines.read()
        self._lines.write(entries[:self.limit])
        logger.debug(f"Recorded operation: {entry}")

    def list(self) -> List[str]:
        """
        Return entries newest first.

        A log that has never been written lists as empty.
        """
        return self._lines.read()
