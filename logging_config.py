import logging
import sys

LOGGER_NAME = "file_search"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Send server and MCP SDK logs to stderr.

    stdout belongs to the stdio transport, so nothing may be logged there.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger = logging.getLogger(LOGGER_NAME)
    for name in (LOGGER_NAME, "mcp"):
        target = logging.getLogger(name)
        target.setLevel(level.upper())
        target.handlers = [handler]
        target.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the server logger for a module."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
