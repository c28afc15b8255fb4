"""
Validation package: syntax certification, drift detection, fix history and
snapshots.
"""

from .validator import CodeValidator
from .syntax import SyntaxChecker, check_brackets
from .history import FixHistory, SnapshotStore

__all__ = [
    "CodeValidator",
    "SyntaxChecker",
    "check_brackets",
    "FixHistory",
    "SnapshotStore",
]
