"""
Git client infrastructure for gitall.

Provides a clean abstraction over git process execution.
All git invocations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import os
import shutil
import subprocess
from pathlib import Path
from typing import IO, List, Optional, Sequence, Union
import logging

from ..exit_codes import GitNotFoundError

logger = logging.getLogger(__name__)

# Stream handle accepted by run_streaming: None inherits the terminal.
Stream = Optional[Union[int, IO]]


def is_git_repo(path: Union[str, Path]) -> bool:
    """Check if path contains a .git directory."""
    return os.path.isdir(os.path.join(path, ".git"))


class GitClient:
    """
    Abstraction over git process execution.

    Unlike a capturing client, output is never buffered: the child
    process writes straight to the handles it is given, which default
    to the invoking terminal.

    Example:
        client = GitClient()
        client.ensure_available()
        code = client.run_streaming(["status", "-s"], cwd="/path/to/repo")
    """

    def __init__(self, binary: str = "git"):
        """
        Initialize GitClient.

        Args:
            binary: Name or path of the git executable (default: "git")
        """
        self.binary = binary

    def find_git(self) -> Optional[str]:
        """Return the resolved path of the git executable, or None."""
        return shutil.which(self.binary)

    def ensure_available(self) -> str:
        """
        Resolve the git executable.

        Raises:
            GitNotFoundError: If git is not installed or not on PATH
        """
        resolved = self.find_git()
        if resolved is None:
            raise GitNotFoundError(self.binary)
        return resolved

    def is_git_repo(self, path: Union[str, Path]) -> bool:
        """Check if path is a git repository."""
        return is_git_repo(path)

    def run_streaming(
        self,
        args: Sequence[str],
        cwd: Union[str, Path],
        stdin: Stream = None,
        stdout: Stream = None,
        stderr: Stream = None,
    ) -> int:
        """
        Run git with args in cwd and wait for it to exit.

        Args:
            args: Arguments after the git executable (e.g. ['pull', '--rebase'])
            cwd: Working directory
            stdin: Input handle (None inherits)
            stdout: Output handle (None inherits)
            stderr: Error handle (None inherits)

        Returns:
            The process exit status

        Raises:
            OSError: If the process could not be spawned
        """
        cmd: List[str] = [self.binary, *args]
        logger.debug(f"Running {' '.join(cmd)} in {cwd}")
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
            check=False,
        )
        return completed.returncode
