"""
Utilities - Logging Configuration

Stderr logging with JSON or text output. Stdout is reserved for the stdio
MCP transport and for CLI results.
"""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(settings=None) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        settings: Settings instance (loaded from env if omitted)
    """
    if settings is None:
        from bitbucket_mcp.config import get_settings
        settings = get_settings()

    handler = logging.StreamHandler(sys.stderr)
    if settings.log.format == "json":
        handler.setFormatter(JsonFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log.level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
