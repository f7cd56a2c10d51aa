"""
Service layer for gitall.

Services orchestrate the registry, the operation log and the git
client. They have no knowledge of the CLI and report progress by
yielding messages.
"""

from .command_runner import CommandRunner

__all__ = [
    'CommandRunner',
]
