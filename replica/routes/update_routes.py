"""Update delivery, import and export routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from common.logging_config import get_logger
from common.protocol import Update
from replica.schemas.common import ErrorResponse
from replica.schemas.updates import (
    UpdateEnvelope,
    UpdateAppliedResponse,
    ImportRequest,
    ImportResponse,
    ShareExportResponse
)
from replica.service import ReplicaService
from replica.service_locator import get_replica_service

logger = get_logger(__name__)

router = APIRouter(tags=["Updates"])


@router.post("/updates", response_model=UpdateAppliedResponse)
async def deliver_update(
    envelope: UpdateEnvelope,
    service: ReplicaService = Depends(get_replica_service)
):
    """
    Deliver one update from the broadcast channel.

    Replays of an already-applied (sender, serial) pair and unknown update
    types are accepted and ignored.

    Returns:
        - applied: whether the local record set changed
    """
    update = Update.from_dict(envelope.model_dump())
    applied = service.receive(update)
    return UpdateAppliedResponse(applied=applied)


@router.post("/import", response_model=ImportResponse, responses={400: {"model": ErrorResponse}})
async def import_qsos(
    request: ImportRequest,
    service: ReplicaService = Depends(get_replica_service)
):
    """
    Import QSOs from CSV text.

    Parameters:
        - text: CSV content with a header row
        - filename: Optional uploaded file name (must end in .csv)

    Returns:
        - imported: number of rows accepted

    Raises:
        - 400: Unsupported file type
    """
    count = service.import_csv(request.text, filename=request.filename)
    source = "" if request.filename else " from pasted text"
    return ImportResponse(imported=count, message=f"Imported {count} QSO(s){source}.")


@router.get("/export", response_class=PlainTextResponse)
async def export_qsos(service: ReplicaService = Depends(get_replica_service)):
    """
    Export the full log as CSV, oldest QSO first.
    """
    return PlainTextResponse(service.export_csv(), media_type="text/csv")


@router.post("/export/share", response_model=ShareExportResponse)
async def share_export(service: ReplicaService = Depends(get_replica_service)):
    """
    Share the CSV export through the transport, or write it to the export
    directory when that is not possible.
    """
    path = service.share_export()
    return ShareExportResponse(shared=path is None, path=str(path) if path else None)
