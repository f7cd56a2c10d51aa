"""
Repository registry for gitall.

The registry is a text file with one absolute repository path per line,
kept in insertion order, with no duplicates. It is always written
together with its digest file so later commands can detect edits made
outside gitall.
"""

import os
from pathlib import Path
from typing import List, Optional
import logging

from .config import GitallConfig
from .exit_codes import AlreadyTrackedError, InvalidPathError, NotAGitRepoError
from .infra.git_client import is_git_repo
from .infra.line_store import LineStore, discard, stage
from .integrity import IntegrityGuard

logger = logging.getLogger(__name__)


def resolve_path(path: str) -> str:
    """Return path as an absolute, normalised string (symlinks untouched)."""
    return os.path.abspath(os.path.expanduser(path))


class RegistryStore:
    """
    Owner of the registry file and its digest.

    Example:
        store = RegistryStore(GitallConfig.for_database("~/.gitall.db"))
        store.add("~/src/project")
        for path in store.load():
            print(path)
    """

    def __init__(self, config: GitallConfig, guard: Optional[IntegrityGuard] = None):
        """
        Initialize RegistryStore.

        Args:
            config: Resolved file locations
            guard: IntegrityGuard instance (creates new if None)
        """
        self.config = config
        self.guard = guard or IntegrityGuard()
        self._lines = LineStore(config.registry_path)

    def load(self) -> List[str]:
        """
        Read the tracked repository paths in insertion order.

        A registry file that does not exist yet is the first-run case
        and loads as an empty list rather than an error.
        """
        return self._lines.read()

    def add(self, path: str) -> str:
        """
        Track a repository.

        Args:
            path: Repository path (relative paths resolve against the cwd)

        Returns:
            The absolute path that was stored

        Raises:
            InvalidPathError: If the resolved path contains a line break
            NotAGitRepoError: If path has no .git directory
            AlreadyTrackedError: If the resolved path is already tracked
            OSError: If the registry or digest cannot be written
        """
        resolved = resolve_path(path)
        if '\n' in resolved or '\r' in resolved:
            raise InvalidPathError(resolved)
        if not is_git_repo(resolved):
            raise NotAGitRepoError(resolved)

        repos = self.load()
        if resolved in repos:
            raise AlreadyTrackedError(resolved)

        repos.append(resolved)
        self._persist(repos)
        logger.info(f"Added {resolved}")
        return resolved

    def delete(self, path: str) -> int:
        """
        Stop tracking a repository.

        Deleting a path that is not tracked is not an error; the registry
        and digest are rewritten either way.

        Returns:
            Number of entries removed
        """
        resolved = resolve_path(path)
        repos = self.load()
        kept = [repo for repo in repos if repo != resolved]
        self._persist(kept)
        removed = len(repos) - len(kept)
        logger.info(f"Removed {removed} entr{'y' if removed == 1 else 'ies'} for {resolved}")
        return removed

    def reinit(self) -> None:
        """
        Discard the registry, digest and operation log, then start over
        with an empty registry and its digest. The log is left absent.
        """
        for target in (self.config.registry_path, self.config.digest_path, self.config.log_path):
            try:
                target.unlink()
            except FileNotFoundError:
                continue
            logger.debug(f"Removed {target}")
        self._persist([])

    def _persist(self, repos: List[str]) -> None:
        """
        Rewrite the registry and its digest.

        Both files are fully written to temp files first, with the digest
        computed over the staged registry bytes, and only then renamed
        into place registry-first. A crash can only land between the two
        renames, which the next verify reports as a mismatch.
        """
        staged_registry = self._lines.stage(repos)
        staged_digest: Optional[Path] = None
        try:
            digest = self.guard.compute(staged_registry)
            staged_digest = stage(self.config.digest_path, digest.encode('utf-8'))
            os.replace(staged_registry, self.config.registry_path)
            os.replace(staged_digest, self.config.digest_path)
        except Exception:
            discard(staged_registry)
            if staged_digest is not None:
                discard(staged_digest)
            raise
