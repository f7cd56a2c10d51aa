"""
Registry integrity checks for gitall.

The registry file is paired with a SHA-256 digest of its exact bytes.
Every mutation rewrites the digest; every batch command verifies it
first and refuses to run if it does not match.
"""

import hashlib
from pathlib import Path
from typing import Union
import logging

from .exit_codes import DigestFileMissingError, DigestMismatchError
from .infra.line_store import read_text, write_atomic

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class IntegrityGuard:
    """
    Compute, persist and verify registry digests.

    Example:
        guard = IntegrityGuard()
        guard.write(digest_path, guard.compute(registry_path))
        guard.verify(digest_path, registry_path)  # raises on tampering
    """

    algorithm = "sha256"

    def compute(self, file_path: Union[str, Path]) -> str:
        """
        Hash a file in fixed-size chunks.

        Args:
            file_path: File to hash

        Returns:
            Lowercase hex digest

        Raises:
            OSError: If the file cannot be read
        """
        digest = hashlib.new(self.algorithm)
        with open(file_path, 'rb') as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
                digest.update(chunk)
        return digest.hexdigest()

    def write(self, digest_path: Union[str, Path], digest: str) -> None:
        """Persist digest as plain hex text."""
        write_atomic(Path(digest_path), digest.encode('utf-8'))

    def verify(self, digest_path: Union[str, Path], data_path: Union[str, Path]) -> None:
        """
        Check that data_path still hashes to the digest stored in digest_path.

        Raises:
            DigestFileMissingError: If there is no stored digest
            DigestMismatchError: If the stored and live digests differ
            OSError: If either file cannot be read
        """
        stored = read_text(Path(digest_path))
        if stored is None:
            raise DigestFileMissingError(str(digest_path))

        expected = stored.strip()
        actual = self.compute(data_path)
        if expected != actual:
            logger.debug(f"Digest mismatch for {data_path}: stored {expected!r}, live {actual!r}")
            raise DigestMismatchError(expected, actual)
