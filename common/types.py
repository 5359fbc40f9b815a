"""Shared data types: the QSO record and its duplicate fingerprint."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Optional

from common.constants import FINGERPRINT_DELIMITER

# attribute name -> wire (JSON/CSV) key
WIRE_KEYS = {
    "id": "id",
    "callsign": "callsign",
    "dt": "dt",
    "band": "band",
    "freq": "freq",
    "mode": "mode",
    "setup": "setup",
    "my_grid": "myGrid",
    "their_grid": "theirGrid",
    "rst_sent": "rstS",
    "rst_received": "rstR",
    "notes": "notes",
    "ts": "ts",
}


@dataclass(frozen=True)
class QsoRecord:
    """
    One logged contact.

    ``id`` is assigned once at creation and is the only identity used for
    edit/delete addressing. ``ts`` is epoch milliseconds (None when unknown).
    """
    id: str
    callsign: str = ""
    dt: str = ""
    band: str = ""
    freq: str = ""
    mode: str = ""
    setup: str = ""
    my_grid: str = ""
    their_grid: str = ""
    rst_sent: str = ""
    rst_received: str = ""
    notes: str = ""
    ts: Optional[int] = None

    @property
    def sort_ts(self) -> int:
        """Timestamp used for ordering; a missing ts sorts as 0."""
        return self.ts or 0

    def with_changes(self, **changes) -> "QsoRecord":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase wire shape."""
        return {wire: getattr(self, attr) for attr, wire in WIRE_KEYS.items()}

    @classmethod
    def from_dict(cls, obj: Any) -> Optional["QsoRecord"]:
        """
        Build a record from a wire mapping.

        Returns None for anything that is not a mapping with a non-empty id.
        Missing or null text fields become empty strings.
        """
        if not isinstance(obj, dict):
            return None

        qso_id = obj.get("id")
        if qso_id is None or str(qso_id) == "":
            return None

        fields = {}
        for attr, wire in WIRE_KEYS.items():
            if attr in ("id", "ts"):
                continue
            value = obj.get(wire)
            fields[attr] = "" if value is None else str(value)

        return cls(id=str(qso_id), ts=_coerce_ts(obj.get("ts")), **fields)


def _coerce_ts(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def fingerprint(record: QsoRecord) -> str:
    """
    Case-normalized composite key for independently created duplicates.

    Returns "" when callsign or dt is empty; such records never match.
    """
    if not record.callsign or not record.dt:
        return ""
    parts = (
        record.callsign,
        record.dt,
        record.band,
        record.freq,
        record.mode,
        record.my_grid,
        record.their_grid,
    )
    return FINGERPRINT_DELIMITER.join(parts).upper()


def is_duplicate_of(candidate: QsoRecord, existing: Iterable[QsoRecord]) -> bool:
    """True if any existing record shares the candidate's id or fingerprint."""
    key = fingerprint(candidate)
    for record in existing:
        if record.id == candidate.id:
            return True
        if key and fingerprint(record) == key:
            return True
    return False
