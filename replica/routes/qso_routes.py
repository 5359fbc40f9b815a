"""QSO log routes."""

from fastapi import APIRouter, Depends, Query, status

from replica.schemas.common import ErrorResponse
from replica.schemas.qso import (
    QsoForm,
    QsoResponse,
    ListQsosResponse,
    DeleteQsoResponse
)
from replica.service import ReplicaService
from replica.service_locator import get_replica_service

router = APIRouter(prefix="/qsos", tags=["QSOs"])


@router.get("", response_model=ListQsosResponse)
async def list_qsos(
    q: str = Query("", description="Case-insensitive search text"),
    service: ReplicaService = Depends(get_replica_service)
):
    """
    List QSOs newest first, optionally filtered by search text.
    """
    return ListQsosResponse(
        qsos=[QsoResponse.from_record(qso) for qso in service.list_qsos(q)],
        editing_id=service.store.editing_id,
        pending_delete_id=service.store.pending_delete_id,
    )


@router.post(
    "",
    response_model=QsoResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}}
)
async def submit_qso(
    form: QsoForm,
    service: ReplicaService = Depends(get_replica_service)
):
    """
    Save the QSO form.

    Creates a new QSO, or updates the QSO currently being edited.

    Raises:
        - 400: Missing callsign or date/time
    """
    qso = service.submit(form.model_dump())
    return QsoResponse.from_record(qso)


@router.post("/edit/cancel", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_edit(service: ReplicaService = Depends(get_replica_service)):
    """
    Leave edit mode without saving.
    """
    service.cancel_edit()


@router.post("/{qso_id}/edit", response_model=QsoResponse, responses={404: {"model": ErrorResponse}})
async def begin_edit(
    qso_id: str,
    service: ReplicaService = Depends(get_replica_service)
):
    """
    Enter edit mode for a QSO; the next form submission updates it.

    Raises:
        - 404: QSO not found
    """
    return QsoResponse.from_record(service.begin_edit(qso_id))


@router.delete("/{qso_id}", response_model=DeleteQsoResponse)
async def delete_qso(
    qso_id: str,
    service: ReplicaService = Depends(get_replica_service)
):
    """
    Two-step delete: the first request arms a confirmation, a second
    request for the same QSO within the timeout deletes it.

    Returns:
        - status: "pending" or "deleted"
    """
    result = service.request_delete(qso_id)
    return DeleteQsoResponse(id=qso_id, status=result)
