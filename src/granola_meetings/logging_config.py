import logging
import sys

PACKAGE_LOGGER = "granola_meetings"


def setup_logging(level: str = "warning") -> logging.Logger:
    """Configure the package logger to write to stderr.

    stdout is left alone: the CLI prints results there and the MCP stdio
    transport owns it.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger
