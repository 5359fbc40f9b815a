"""Configuration settings for a replica process."""

import os
import uuid
from pathlib import Path

from common.constants import (
    DEFAULT_REPLICA_PORT,
    DELETE_CONFIRM_SECONDS,
    MAX_UPDATE_SIZE_BYTES,
    SNAPSHOT_KEY,
)


REPLICA_HOST = os.environ.get("QSOLOG_HOST", "0.0.0.0")

REPLICA_PORT = int(os.environ.get("QSOLOG_PORT", str(DEFAULT_REPLICA_PORT)))

DATA_DIR = Path(os.environ.get("QSOLOG_DATA_DIR", "./data"))

SNAPSHOT_PATH = DATA_DIR / f"{SNAPSHOT_KEY}.json"

EXPORT_DIR = DATA_DIR / "exports"

NODE_ID = os.environ.get("QSOLOG_NODE_ID") or f"replica-{uuid.uuid4().hex[:8]}"

# Comma-separated peer base URLs; empty means no live transport
PEERS = [p.strip().rstrip("/") for p in os.environ.get("QSOLOG_PEERS", "").split(",") if p.strip()]

MAX_UPDATE_SIZE = int(os.environ.get("QSOLOG_MAX_UPDATE_SIZE", str(MAX_UPDATE_SIZE_BYTES)))

DELETE_CONFIRM_TIMEOUT = float(os.environ.get("QSOLOG_DELETE_CONFIRM_SECONDS", str(DELETE_CONFIRM_SECONDS)))
