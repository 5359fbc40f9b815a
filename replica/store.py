"""In-memory replica state."""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional

from common.types import QsoRecord
from replica.delivery import DeliveryTracker

logger = logging.getLogger(__name__)


class ReplicaStore:
    """
    Everything a replica holds in memory.

    - records keyed by id, in insertion order
    - the display ordering (newest ``ts`` first), recomputed by ``resort``
    - the delivery tracker
    - the editing marker and the pending-delete marker with its timer

    All access happens on one event loop; nothing here is locked.
    """

    def __init__(self):
        self.records: Dict[str, QsoRecord] = {}
        self.ordered: List[QsoRecord] = []
        self.tracker = DeliveryTracker()
        self.editing_id: Optional[str] = None
        self.pending_delete_id: Optional[str] = None
        self.pending_delete_timer: Optional[asyncio.TimerHandle] = None

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, qso_id: str) -> bool:
        return qso_id in self.records

    def get(self, qso_id: str) -> Optional[QsoRecord]:
        return self.records.get(qso_id)

    def resort(self) -> None:
        """Recompute the display ordering: descending ts, stable for ties."""
        self.ordered = sorted(self.records.values(), key=lambda q: q.sort_ts, reverse=True)

    def replace_all(self, records: Iterable[QsoRecord]) -> None:
        """Load a full record set (e.g. from a snapshot); later ids win."""
        self.records = {}
        for record in records:
            self.records[record.id] = record
        self.resort()

    def search(self, query: str = "") -> List[QsoRecord]:
        """Display-ordered records whose text fields contain ``query``."""
        needle = (query or "").lower()
        if not needle:
            return list(self.ordered)
        return [q for q in self.ordered if needle in _haystack(q)]

    def clear_pending_delete(self) -> None:
        if self.pending_delete_timer is not None:
            self.pending_delete_timer.cancel()
        self.pending_delete_timer = None
        self.pending_delete_id = None

    def reset(self) -> None:
        """Return to the empty startup state."""
        self.clear_pending_delete()
        self.records = {}
        self.ordered = []
        self.tracker.clear()
        self.editing_id = None
        logger.debug("Replica store reset")


def _haystack(qso: QsoRecord) -> str:
    return " ".join(
        (
            qso.callsign,
            qso.band,
            qso.freq,
            qso.mode,
            qso.my_grid,
            qso.their_grid,
            qso.setup,
            qso.notes,
        )
    ).lower()
