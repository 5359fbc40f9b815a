"""Where the CLI finds its replica, and how patiently it talks to it."""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def _defaults() -> dict:
    # read at call time so QSOLOG_REPLICA_* can be changed between runs
    return {
        "replica_host": os.environ.get("QSOLOG_REPLICA_HOST", "localhost"),
        "replica_port": int(os.environ.get("QSOLOG_REPLICA_PORT", "8000")),
        "timeout": 30,
        "max_retries": 3,
        "retry_backoff_multiplier": 2,
    }


class Config:
    """
    CLI settings kept in ~/.qsolog/config.json.

    Only the keys in the defaults are meaningful; anything else in the file
    is carried along untouched. A file that is not a JSON object is moved
    aside to ``config.json.bak`` and replaced with defaults.
    """

    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)
        self.data = _defaults()

        stored = self._read()
        if stored is None:
            self.save()
        else:
            self.data.update(stored)

    def _read(self) -> dict | None:
        if not self.config_path.is_file():
            return None

        try:
            stored = json.loads(self.config_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            stored = e

        if isinstance(stored, dict):
            return stored

        logger.warning(f"Replacing unreadable config {self.config_path}: {stored!r}")
        try:
            self.config_path.replace(self.config_path.with_suffix(".json.bak"))
        except OSError as e:
            logger.warning(f"Could not back up {self.config_path}: {e}")
        return None

    def save(self) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Settings not saved to {self.config_path}: {e}")

    def set_replica(self, host: str, port: int) -> None:
        """Point the CLI at another replica and remember it."""
        self.data.update(replica_host=host, replica_port=port)
        self.save()

    def get_base_url(self) -> str:
        return f"http://{self.data['replica_host']}:{self.data['replica_port']}"

    def get_timeout(self) -> float:
        return self.data["timeout"]

    def get_retry_config(self) -> dict:
        return {
            "max_retries": self.data["max_retries"],
            "retry_backoff_multiplier": self.data["retry_backoff_multiplier"],
        }
