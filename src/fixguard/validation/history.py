"""
FixHistory and SnapshotStore: in-memory record of applied fixes and named
buffer copies.
"""

from collections import deque
from datetime import datetime
from typing import Deque, Dict, List, Optional

from fixguard.exceptions import SnapshotNotFoundError
from fixguard.logging_config import logger
from fixguard.schemas import DiffResult, FixRecord
from fixguard.context.position import line_count


class FixHistory:
    """
    Bounded FIFO of applied fixes.

    Once `limit` records are held, recording a new fix evicts the oldest.
    """

    def __init__(self, limit: int = 100):
        self.limit = limit
        self._records: Deque[FixRecord] = deque(maxlen=limit)

    def record(
        self,
        rule_id: str,
        line: int,
        column: int,
        original_text: str,
        fixed_text: str
    ) -> FixRecord:
        """Append a fix record and return it."""
        record = FixRecord(
            rule_id=rule_id,
            line=line,
            column=column,
            original_text=original_text,
            fixed_text=fixed_text,
        )
        self._records.append(record)
        logger.debug(f"Recorded {rule_id} fix at {line}:{column} ({len(self._records)}/{self.limit})")
        return record

    def last(self) -> Optional[FixRecord]:
        return self._records[-1] if self._records else None

    def export(self) -> List[FixRecord]:
        """Copy of the history, oldest first."""
        return list(self._records)

    @property
    def last_fix_time(self) -> Optional[datetime]:
        last = self.last()
        return last.timestamp if last else None

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


class SnapshotStore:
    """Named copies of buffers, kept until cleared or overwritten."""

    def __init__(self):
        self._snapshots: Dict[str, str] = {}

    def create(self, buffer: str, snapshot_id: str) -> None:
        if snapshot_id in self._snapshots:
            logger.debug(f"Overwriting snapshot '{snapshot_id}'")
        self._snapshots[snapshot_id] = buffer

    def get(self, snapshot_id: str) -> str:
        """
        Raises:
            SnapshotNotFoundError: If no snapshot has that id
        """
        try:
            return self._snapshots[snapshot_id]
        except KeyError:
            raise SnapshotNotFoundError(snapshot_id) from None

    def compare(self, buffer: str, snapshot_id: str) -> DiffResult:
        """
        Compare a buffer with a stored snapshot.

        Raises:
            SnapshotNotFoundError: If no snapshot has that id
        """
        snapshot = self.get(snapshot_id)
        return DiffResult(
            identical=buffer == snapshot,
            length_diff=len(buffer) - len(snapshot),
            line_diff=line_count(buffer) - line_count(snapshot),
            has_changes=buffer != snapshot,
        )

    def clear(self) -> None:
        self._snapshots.clear()

    def __contains__(self, snapshot_id: str) -> bool:
        return snapshot_id in self._snapshots

    def __len__(self) -> int:
        return len(self._snapshots)
