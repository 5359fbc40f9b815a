import logging
import os
import sys
from typing import Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _make_formatter(node_id: Optional[str] = None) -> logging.Formatter:
    if node_id:
        return logging.Formatter(
            f'%(asctime)s - %(name)s - %(levelname)s - [{node_id}] - %(message)s',
            datefmt=DATE_FORMAT
        )
    return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    node_id: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Handlers are attached to the root logger so module loggers obtained
    with ``logging.getLogger(__name__)`` share the same output.

    Args:
        component_name: Name of the component (e.g., 'replica', 'cli')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO
        node_id: Optional replica node id to include in log format

    Returns:
        Logger for the component
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')

    level = getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if any(getattr(h, '_qsolog_handler', False) for h in root.handlers):
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(_make_formatter(node_id))
    handler._qsolog_handler = True

    root.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)

