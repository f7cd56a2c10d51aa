"""
Line-delimited text file persistence for gitall.

Provides whole-file persistence with:
- Atomic writes (write to temp, then rename)
- Missing files read as an empty list
- Automatic parent directory creation
"""

import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

FILE_MODE = 0o644


def write_atomic(path: Path, data: bytes) -> None:
    """Write bytes to path atomically using a temp file and rename."""
    staged = stage(path, data)
    try:
        os.replace(staged, path)
    except OSError:
        discard(staged)
        raise


def stage(path: Path, data: bytes) -> Path:
    """
    Write bytes to a temp file next to path and return the temp path.

    The temp file is created with FILE_MODE permissions.

    The caller publishes it with os.replace() or removes it with discard().
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file in same directory
    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, 'wb') as f:
            os.chmod(temp_path, FILE_MODE)
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
    except Exception:
        # Clean up temp file on error
        discard(Path(temp_path))
        raise

    return Path(temp_path)


def discard(temp_path: Path) -> None:
    try:
        os.unlink(temp_path)
    except OSError:
        pass


def _strip_terminator(line: str) -> str:
    """Drop the trailing \\n and at most one \\r before it."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def encode_lines(lines: Iterable[str]) -> bytes:
    """Serialize lines as UTF-8, each terminated by a newline."""
    return "".join(f"{line}\n" for line in lines).encode("utf-8")


class LineStore:
    """
    A text file holding one record per line.

    Example:
        store = LineStore(Path("~/.gitall.db.log"))
        store.write(["first", "second"])
        store.read()  # ['first', 'second']
    """

    def __init__(self, path: Path):
        """
        Initialize LineStore.

        Args:
            path: Path to the text file
        """
        self.path = Path(path).expanduser()

    def read(self) -> List[str]:
        """
        Read all lines.

        A missing file is the first-run case and reads as an empty list.
        Any other read error propagates.

        Returns:
            Lines without their terminators
        """
        try:
            with open(self.path, 'r', encoding='utf-8', newline='\n') as f:
                return [_strip_terminator(line) for line in f]
        except FileNotFoundError:
            return []

    def write(self, lines: Iterable[str]) -> None:
        """
        Replace the file contents with lines.

        Args:
            lines: Records to write, in order
        """
        write_atomic(self.path, encode_lines(lines))

    def stage(self, lines: Iterable[str]) -> Path:
        """Write lines to a temp file beside the store without publishing them."""
        return stage(self.path, encode_lines(lines))


def read_text(path: Path) -> Optional[str]:
    """Read a small UTF-8 file, or None if it does not exist."""
    try:
        return Path(path).read_text(encoding='utf-8')
    except FileNotFoundError:
        return None
