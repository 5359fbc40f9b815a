"""Project-wide constants (wire limits, storage keys, CSV layout)."""

MAX_UPDATE_SIZE_BYTES: int = 128000  # transport default when it reports no limit

SNAPSHOT_KEY: str = "hamlog.qsos.v1"

DELETE_CONFIRM_SECONDS: float = 4.0

FINGERPRINT_DELIMITER: str = "|"

CSV_COLUMNS = (
    "callsign",
    "dt",
    "band",
    "freq",
    "mode",
    "setup",
    "myGrid",
    "theirGrid",
    "rstS",
    "rstR",
    "notes",
    "id",
    "ts",
)

EXPORT_FILENAME: str = "hamlog.csv"

DEFAULT_REPLICA_PORT: int = 8000
