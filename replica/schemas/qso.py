"""Pydantic schemas for QSO endpoints."""

from typing import List, Optional
from pydantic import BaseModel

from common.types import QsoRecord


class QsoForm(BaseModel):
    """Request model for the QSO form (camelCase wire keys)."""
    callsign: str = ""
    dt: str = ""
    band: str = ""
    freq: str = ""
    mode: str = ""
    setup: str = ""
    myGrid: str = ""
    theirGrid: str = ""
    rstS: str = ""
    rstR: str = ""
    notes: str = ""


class QsoResponse(BaseModel):
    """Response model for one QSO."""
    id: str
    callsign: str
    dt: str
    band: str
    freq: str
    mode: str
    setup: str
    myGrid: str
    theirGrid: str
    rstS: str
    rstR: str
    notes: str
    ts: Optional[int] = None

    @classmethod
    def from_record(cls, qso: QsoRecord) -> "QsoResponse":
        return cls(**qso.to_dict())


class ListQsosResponse(BaseModel):
    """Response model for QSO listing."""
    qsos: List[QsoResponse]
    editing_id: Optional[str] = None
    pending_delete_id: Optional[str] = None


class DeleteQsoResponse(BaseModel):
    """Response model for the two-step delete."""
    id: str
    status: str
