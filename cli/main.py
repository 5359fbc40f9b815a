"""CLI entry point."""

import sys
import os
from pathlib import Path

from common.logging_config import setup_logging
from cli.config import Config
from cli.repl import repl_loop


def _pop_option(name: str) -> str | None:
    """Remove '--name value' from argv and return the value."""
    if name not in sys.argv:
        return None
    index = sys.argv.index(name)
    value = sys.argv[index + 1] if index + 1 < len(sys.argv) else None
    del sys.argv[index:index + 2]
    return value


def main() -> None:
    """Entry point for CLI."""
    log_level = 'DEBUG' if '--debug' in sys.argv else os.getenv('LOG_LEVEL', 'WARNING')

    logger = setup_logging('cli', log_level=log_level)

    if '--debug' in sys.argv:
        logger.info("Debug logging enabled")
        sys.argv.remove('--debug')

    replica = _pop_option('--replica')
    if replica:
        host, _, port = replica.rpartition(':')
        if not host or not port.isdigit():
            print(f"Error: --replica expects host:port, got '{replica}'")
            sys.exit(2)
        config = Config(Path.home() / '.qsolog' / 'config.json')
        config.set_replica(host, int(port))
        logger.info(f"Using replica at {config.get_base_url()}")

    logger.info("CLI starting...")
    try:
        repl_loop()
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("CLI exiting")


if __name__ == "__main__":
    main()
