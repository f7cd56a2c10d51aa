"""
gitall - run git commands across a registry of repositories.

gitall keeps a list of repository paths in a registry file paired with
a SHA-256 digest, and runs any git command in each of them in turn.
The digest is checked before every batch command, so a registry edited
outside gitall never drives a batch run.

Quick Start:
    from gitall import GitallConfig, RegistryStore, CommandRunner

    config = GitallConfig.for_database("~/.gitall.db")

    # Track repositories
    store = RegistryStore(config)
    store.add("~/src/project")

    # Run a command everywhere
    runner = CommandRunner(config)
    for progress in runner.run(["status", "-s"]):
        print(progress)
    print(runner.last_result.successful)

Files:
    <db>           one absolute repository path per line
    <db>.sha256    hex SHA-256 of <db>
    <db>.log       last 50 successful operations, newest first
"""

__version__ = "0.1.0"

# Configuration
from .config import GitallConfig, load_config

# Core components
from .integrity import IntegrityGuard
from .registry import RegistryStore
from .oplog import OperationLog
from .services import CommandRunner

# Result objects
from .domain import OperationStatus, OperationDetail, OperationSummary

__all__ = [
    # Version
    "__version__",
    # Configuration
    "GitallConfig",
    "load_config",
    # Core components
    "IntegrityGuard",
    "RegistryStore",
    "OperationLog",
    "CommandRunner",
    # Result objects
    "OperationStatus",
    "OperationDetail",
    "OperationSummary",
]
