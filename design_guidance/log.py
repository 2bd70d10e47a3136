"""
Design Guidance Logger
======================
Shared logging setup for the server process.

stdout carries the JSON-RPC stream, so console output always goes to stderr.
When a log directory is configured, records are also written to a rotating
file (``{log_dir}/design-guidance.log``).

Format: [TIMESTAMP] [NAME] [LEVEL] message

Usage:
    from design_guidance.log import get_logger

    logger = get_logger("server")
    logger.info("Tools: 13")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional, Union

ROOT_LOGGER = "design_guidance"
LOG_FORMAT = "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s"

_loggers: Dict[str, logging.Logger] = {}


def configure_logging(
    level: Union[str, int] = "INFO", log_dir: Optional[Path] = None
) -> logging.Logger:
    """Attach handlers to the package root logger. Idempotent."""
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.propagate = False

    # Avoid duplicate handlers on repeated configure_logging() calls
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(sh)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            log_dir / "design-guidance.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        fh.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger under the package namespace.

    Args:
        name: Component name (e.g., "server", "dispatcher")

    Returns:
        logging.Logger (cached per name)
    """
    if name not in _loggers:
        qualified = name if name.startswith(ROOT_LOGGER) else f"{ROOT_LOGGER}.{name}"
        _loggers[name] = logging.getLogger(qualified)
    return _loggers[name]
