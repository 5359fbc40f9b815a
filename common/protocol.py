"""Mutation message definitions and their JSON wire format."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union
import json
import logging

from common.types import QsoRecord

logger = logging.getLogger(__name__)

ADD_QSO = "add_qso"
EDIT_QSO = "edit_qso"
BULK_ADD = "bulk_add"
DELETE_QSO = "delete_qso"


@dataclass(frozen=True)
class AddQso:
    """Insert a record unless it duplicates an existing one."""
    qso: QsoRecord

    def to_payload(self) -> Dict[str, Any]:
        return {"type": ADD_QSO, "qso": self.qso.to_dict()}


@dataclass(frozen=True)
class EditQso:
    """Replace (or insert) the record with this id."""
    qso: QsoRecord

    def to_payload(self) -> Dict[str, Any]:
        return {"type": EDIT_QSO, "qso": self.qso.to_dict()}


@dataclass(frozen=True)
class BulkAdd:
    """Insert each record in order, skipping duplicates."""
    qsos: Tuple[QsoRecord, ...]

    def to_payload(self) -> Dict[str, Any]:
        return {"type": BULK_ADD, "qsos": [qso.to_dict() for qso in self.qsos]}


@dataclass(frozen=True)
class DeleteQso:
    """Remove the record with this id, if present."""
    qso_id: str

    def to_payload(self) -> Dict[str, Any]:
        return {"type": DELETE_QSO, "id": self.qso_id}


Mutation = Union[AddQso, EditQso, BulkAdd, DeleteQso]


def decode_mutation(payload: Any) -> Optional[Mutation]:
    """
    Decode a wire payload into a mutation variant.

    Unknown types and malformed bodies decode to None; callers treat that
    as a no-op.
    """
    if not isinstance(payload, dict):
        logger.warning(f"Ignoring update with non-object payload: {type(payload).__name__}")
        return None

    kind = payload.get("type")

    if kind in (ADD_QSO, EDIT_QSO):
        qso = QsoRecord.from_dict(payload.get("qso"))
        if qso is None:
            logger.warning(f"Ignoring {kind} update without a usable qso")
            return None
        return AddQso(qso) if kind == ADD_QSO else EditQso(qso)

    if kind == BULK_ADD:
        raw = payload.get("qsos")
        if not isinstance(raw, list):
            logger.warning("Ignoring bulk_add update without a qso list")
            return None
        qsos = tuple(q for q in (QsoRecord.from_dict(item) for item in raw) if q is not None)
        if len(qsos) != len(raw):
            logger.warning(f"bulk_add dropped {len(raw) - len(qsos)} malformed qso(s)")
        return BulkAdd(qsos)

    if kind == DELETE_QSO:
        qso_id = payload.get("id")
        if not qso_id:
            logger.debug("Ignoring delete_qso update without an id")
            return None
        return DeleteQso(str(qso_id))

    logger.warning(f"Unknown update type: {kind!r}")
    return None


@dataclass
class Update:
    """
    Envelope handed to and delivered by the transport.

    ``serial`` and ``sender`` are filled in by the transport and used only
    for delivery dedup.
    """
    payload: Any
    info: str = ""
    serial: Optional[int] = None
    sender: Optional[str] = None

    @classmethod
    def for_mutation(cls, mutation: Mutation, info: str = "") -> "Update":
        return cls(payload=mutation.to_payload(), info=info)

    @property
    def mutation(self) -> Optional[Mutation]:
        return decode_mutation(self.payload)

    def to_dict(self) -> Dict[str, Any]:
        obj: Dict[str, Any] = {"payload": self.payload}
        if self.info:
            obj["info"] = self.info
        if self.serial is not None:
            obj["serial"] = self.serial
        if self.sender is not None:
            obj["sender"] = self.sender
        return obj

    @classmethod
    def from_dict(cls, obj: Any) -> "Update":
        if not isinstance(obj, dict):
            obj = {}
        serial = obj.get("serial")
        return cls(
            payload=obj.get("payload"),
            info=obj.get("info") or "",
            serial=serial if isinstance(serial, int) and not isinstance(serial, bool) else None,
            sender=obj.get("sender"),
        )

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps(self.to_dict(), ensure_ascii=False).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> "Update":
        """Deserialize from JSON bytes."""
        return cls.from_dict(json.loads(data))


def payload_size(payload: Dict[str, Any]) -> int:
    """Serialized size in bytes of ``{"payload": payload}``."""
    return len(json.dumps({"payload": payload}, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))


def record_size(qso: QsoRecord) -> int:
    """Serialized size in bytes of one record as it appears inside a payload."""
    return len(json.dumps(qso.to_dict(), ensure_ascii=False, separators=(",", ":")).encode("utf-8"))

