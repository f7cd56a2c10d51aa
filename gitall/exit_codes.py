"""
Standard exit codes for gitall commands.

Following Unix/POSIX conventions for command-line tools.
"""

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
NOT_A_REPO = 64          # Path is not a git repository
ALREADY_TRACKED = 65     # Repository is already in the registry
CONFIG_ERROR = 66        # Configuration file error
PERMISSION_ERROR = 67    # Insufficient permissions
GIT_NOT_FOUND = 68       # git binary is not installed or not on PATH
INTEGRITY_ERROR = 69     # Registry digest missing or does not match
DATA_ERROR = 70          # Data format or validation error
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'IsADirectoryError': GENERAL_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'UnicodeDecodeError': DATA_ERROR,
    'UnicodeEncodeError': DATA_ERROR,
    'ValueError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class NotAGitRepoError(CommandError):
    """Raised when a path has no .git directory."""
    def __init__(self, path: str):
        super().__init__(f"not a git repo: {path}", NOT_A_REPO)
        self.path = path


class AlreadyTrackedError(CommandError):
    """Raised when adding a path that is already in the registry."""
    def __init__(self, path: str):
        super().__init__(f"already in registry: {path}", ALREADY_TRACKED)
        self.path = path


class IntegrityError(CommandError):
    """Base class for registry integrity failures."""
    def __init__(self, message: str):
        super().__init__(message, INTEGRITY_ERROR)


class DigestFileMissingError(IntegrityError):
    """Raised when the digest file cannot be read."""
    def __init__(self, path: str):
        super().__init__(f"digest file missing: {path}")
        self.path = path


class DigestMismatchError(IntegrityError):
    """Raised when the stored digest does not match the registry contents."""
    def __init__(self, expected: str, actual: str):
        super().__init__(
            "registry digest mismatch (registry was modified outside gitall; "
            "run 'gitall reinit' to reset it)"
        )
        self.expected = expected
        self.actual = actual


class GitNotFoundError(CommandError):
    """Raised when the git binary cannot be located."""
    def __init__(self, binary: str = "git"):
        super().__init__(f"{binary} is not installed or not in PATH", GIT_NOT_FOUND)
        self.binary = binary


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class InvalidPathError(CommandError):
    """Raised when a path cannot be stored as a single registry line."""
    def __init__(self, path: str):
        super().__init__(f"path contains a line break: {path!r}", DATA_ERROR)
        self.path = path
