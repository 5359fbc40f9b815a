"""Pydantic schemas for API requests and responses."""

from replica.schemas.qso import (
    QsoForm,
    QsoResponse,
    ListQsosResponse,
    DeleteQsoResponse
)
from replica.schemas.updates import (
    UpdateEnvelope,
    UpdateAppliedResponse,
    ImportRequest,
    ImportResponse,
    ShareExportResponse
)
from replica.schemas.common import ErrorResponse

__all__ = [
    "QsoForm",
    "QsoResponse",
    "ListQsosResponse",
    "DeleteQsoResponse",
    "UpdateEnvelope",
    "UpdateAppliedResponse",
    "ImportRequest",
    "ImportResponse",
    "ShareExportResponse",
    "ErrorResponse"
]
