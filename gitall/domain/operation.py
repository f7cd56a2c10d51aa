"""
Operation result domain objects for gitall.

Provides standardized result types for batch git commands run
across the tracked repositories.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class OperationStatus(Enum):
    """Status of an individual operation."""
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class OperationDetail:
    """
    Details of a single operation on one repository.

    Used to track what happened to each repo during a batch run.
    """
    repo_path: str
    status: OperationStatus
    action: str  # e.g., "ran", "excluded", "not_a_repo", "exit_status"
    returncode: Optional[int] = None
    error: Optional[str] = None


@dataclass
class OperationSummary:
    """
    Summary of a batch command across the registry.

    Collects statistics and details from one CommandRunner.run() call.
    """
    git_args: List[str] = field(default_factory=list)
    total: int = 0
    successful: int = 0
    skipped: int = 0
    failed: int = 0
    details: List[OperationDetail] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if no failures occurred."""
        return self.failed == 0

    def add_detail(self, detail: OperationDetail) -> None:
        """Add an operation detail and update counters."""
        self.details.append(detail)
        self.total += 1

        if detail.status == OperationStatus.SUCCESS:
            self.successful += 1
        elif detail.status == OperationStatus.SKIPPED:
            self.skipped += 1
        elif detail.status == OperationStatus.FAILED:
            self.failed += 1
