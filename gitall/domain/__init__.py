"""
Domain layer for gitall.

Contains pure result objects with no I/O or side effects:
- OperationStatus: outcome of one repository in a batch run
- OperationDetail: what happened to one repository
- OperationSummary: totals for a whole batch run
"""

from .operation import OperationStatus, OperationDetail, OperationSummary

__all__ = [
    'OperationStatus',
    'OperationDetail',
    'OperationSummary',
]
