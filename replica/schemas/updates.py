"""Pydantic schemas for update delivery, import and export."""

from typing import Any, Optional
from pydantic import BaseModel


class UpdateEnvelope(BaseModel):
    """Update as delivered by the transport."""
    payload: Any = None
    info: str = ""
    serial: Optional[int] = None
    sender: Optional[str] = None


class UpdateAppliedResponse(BaseModel):
    """Response model for update delivery."""
    applied: bool


class ImportRequest(BaseModel):
    """Request model for CSV import."""
    text: str
    filename: Optional[str] = None


class ImportResponse(BaseModel):
    """Response model for CSV import."""
    imported: int
    message: str


class ShareExportResponse(BaseModel):
    """Response model for sharing the CSV export."""
    shared: bool
    path: Optional[str] = None
