"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from cli.models import (
    CancelCommand,
    DeleteCommand,
    EditCommand,
    ExportCommand,
    ImportCommand,
    ListCommand,
    LogCommand,
)
from cli.config import Config
from cli.replica_client import ReplicaClient

logger = get_logger(__name__)


_client: Optional[ReplicaClient] = None


def get_client() -> ReplicaClient:
    """
    Get or create global ReplicaClient instance.

    Returns:
        ReplicaClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new ReplicaClient instance")
        config = Config(Path.home() / '.qsolog' / 'config.json')
        _client = ReplicaClient(config)
    return _client


def handle_log(cmd: LogCommand, client: Optional[ReplicaClient] = None) -> str:
    """
    Handle 'log' command.

    Args:
        cmd: LogCommand with callsign and key=value fields
        client: Optional ReplicaClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    if client is None:
        client = get_client()
    return client.log_qso(cmd.to_form())


def handle_list(cmd: ListCommand, client: Optional[ReplicaClient] = None) -> str:
    """
    Handle 'list' command.

    Args:
        cmd: ListCommand with optional search text
        client: Optional ReplicaClient for dependency injection (testing)

    Returns:
        Formatted QSO listing
    """
    if client is None:
        client = get_client()
    return client.list_qsos(cmd.query)


def handle_edit(cmd: EditCommand, client: Optional[ReplicaClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.begin_edit(cmd.qso_id)


def handle_cancel(cmd: CancelCommand, client: Optional[ReplicaClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.cancel_edit()


def handle_delete(cmd: DeleteCommand, client: Optional[ReplicaClient] = None) -> str:
    """
    Handle 'delete' command.

    The first call only arms the deletion; repeating it confirms.

    Args:
        cmd: DeleteCommand with the QSO id
        client: Optional ReplicaClient for dependency injection (testing)

    Returns:
        Confirmation prompt or result message
    """
    if client is None:
        client = get_client()
    return client.delete_qso(cmd.qso_id)


def handle_import(cmd: ImportCommand, client: Optional[ReplicaClient] = None) -> str:
    """
    Handle 'import' command.

    Args:
        cmd: ImportCommand with path to a CSV file
        client: Optional ReplicaClient for dependency injection (testing)

    Returns:
        Import summary or error message
    """
    if client is None:
        client = get_client()
    return client.import_file(cmd.path)


def handle_export(cmd: ExportCommand, client: Optional[ReplicaClient] = None) -> str:
    """
    Handle 'export' command.

    Args:
        cmd: ExportCommand with optional output path
        client: Optional ReplicaClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    if client is None:
        client = get_client()
    return client.export_file(cmd.output_path)
