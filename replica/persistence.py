"""
Snapshot persistence for replicas running without a live transport.

The whole record set is written as one JSON array on every save. Load and
save never raise: a missing or corrupt snapshot reads as an empty log and
a failed write leaves the in-memory state as the only copy.
"""

import json
import logging
import os
from pathlib import Path
from typing import Iterable, List

from common.types import QsoRecord

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Single-file JSON snapshot of the full record set."""

    def __init__(self, path: Path):
        """
        Initialize snapshot store.

        Args:
            path: Snapshot file path (e.g. data/hamlog.qsos.v1.json)
        """
        self.path = Path(path)

    def save(self, records: Iterable[QsoRecord]) -> bool:
        """
        Overwrite the snapshot with ``records``.

        Writes to a temporary sibling file and renames it into place.

        Returns:
            True on success, False if the write failed (logged, not raised)
        """
        data = [record.to_dict() for record in records]
        tmp_path = self.path.with_name(self.path.name + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(
                f"Failed to save snapshot to {self.path}: {e}, "
                "continuing with in-memory state only"
            )
            return False

        logger.debug(f"Snapshot saved to {self.path} ({len(data)} QSO(s))")
        return True

    def load(self) -> List[QsoRecord]:
        """
        Read the snapshot.

        Returns:
            The stored records, or an empty list if the snapshot is absent,
            unreadable, or not a JSON array. Entries that are not usable
            records are dropped.
        """
        if not self.path.exists():
            logger.debug(f"Snapshot not found at {self.path}, starting with empty log")
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load snapshot from {self.path}: {e}, starting with empty log")
            return []

        if not isinstance(data, list):
            logger.warning(f"Snapshot at {self.path} is not a list, starting with empty log")
            return []

        records = [r for r in (QsoRecord.from_dict(item) for item in data) if r is not None]
        if len(records) != len(data):
            logger.debug(f"Dropped {len(data) - len(records)} unusable snapshot entr(ies)")

        logger.info(f"Snapshot loaded from {self.path} ({len(records)} QSO(s))")
        return records
