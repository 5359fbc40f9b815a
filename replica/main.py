"""Entry point for a replica service."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from replica.config import (
    DELETE_CONFIRM_TIMEOUT,
    EXPORT_DIR,
    MAX_UPDATE_SIZE,
    NODE_ID,
    PEERS,
    REPLICA_HOST,
    REPLICA_PORT,
    SNAPSHOT_PATH,
)
from replica.exceptions import (
    QsoLogException,
    InvalidQsoError,
    QsoNotFoundError,
    UnsupportedImportError
)
from replica.persistence import SnapshotStore
from replica.routes.qso_routes import router as qso_router
from replica.routes.update_routes import router as update_router
from replica.service import ReplicaService
from replica.service_locator import get_replica_service, set_replica_service
from replica.store import ReplicaStore
from replica.transport import HttpBroadcastTransport

logger = setup_logging('replica', node_id=NODE_ID)

app = FastAPI(
    title="Pocket QSO Replica",
    description="Peer-replicated ham radio contact log",
    version="1.0.0"
)


def build_service() -> ReplicaService:
    """
    Wire a replica from configuration.

    With peers configured, updates travel over HttpBroadcastTransport and
    the snapshot is not used; without peers the replica runs standalone on
    its snapshot.
    """
    transport = None
    snapshot = None

    if PEERS:
        transport = HttpBroadcastTransport(NODE_ID, PEERS, max_update_size=MAX_UPDATE_SIZE)
        logger.info(f"Broadcasting to {len(PEERS)} peer(s): {', '.join(PEERS)}")
    else:
        snapshot = SnapshotStore(SNAPSHOT_PATH)
        logger.info(f"No peers configured, using snapshot at {SNAPSHOT_PATH}")

    return ReplicaService(
        ReplicaStore(),
        transport=transport,
        snapshot=snapshot,
        export_dir=EXPORT_DIR,
        delete_confirm_timeout=DELETE_CONFIRM_TIMEOUT,
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Build the replica service (unless one was installed already) and start it.
    """
    logger.info(f"Replica {NODE_ID} starting up...")

    service = get_replica_service()
    if service is None:
        service = build_service()
        set_replica_service(service)

    service.startup()
    logger.info(f"Replica ready with {len(service.store)} QSO(s)")


@app.on_event("shutdown")
async def shutdown_event():
    """
    Flush in-flight peer pushes on shutdown.
    """
    logger.info(f"Replica {NODE_ID} shutting down...")

    service = get_replica_service()
    if service is not None:
        service.store.clear_pending_delete()
        if isinstance(service.transport, HttpBroadcastTransport):
            await service.transport.drain()


@app.exception_handler(InvalidQsoError)
async def invalid_qso_handler(request: Request, exc: InvalidQsoError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid QSO error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "code": "INVALID_QSO"}
    )


@app.exception_handler(QsoNotFoundError)
async def qso_not_found_handler(request: Request, exc: QsoNotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"QSO not found error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "code": "QSO_NOT_FOUND"}
    )


@app.exception_handler(UnsupportedImportError)
async def unsupported_import_handler(request: Request, exc: UnsupportedImportError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Unsupported import error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "code": "UNSUPPORTED_IMPORT"}
    )


@app.exception_handler(QsoLogException)
async def qsolog_exception_handler(request: Request, exc: QsoLogException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"QSO log exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "INTERNAL_ERROR"}
    )


app.include_router(qso_router)
app.include_router(update_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "Pocket QSO Replica API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint.
    Reports whether the replica runs on a live transport or its snapshot.
    """
    service = get_replica_service()
    return {
        "status": "healthy",
        "service": "replica",
        "node_id": NODE_ID,
        "transport": bool(service and service.has_transport),
        "qsos": len(service.store) if service else 0,
    }


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "replica.main:app",
        host=REPLICA_HOST,
        port=REPLICA_PORT
    )


if __name__ == "__main__":
    main()
