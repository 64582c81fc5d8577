"""Centralized logging configuration for prlabeler.

Console output goes to stderr so stdout stays free for workflow commands.
A rotating file log is added when a log directory is configured.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_FILE = "prlabeler.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str | None = None, verbose: bool = False) -> str:
    """Work out the effective log level name.

    Args:
        level: Explicit level name. Wins over everything else.
        verbose: Force DEBUG (the CLI's --verbose flag).

    Returns:
        Upper-case level name. PRLABELER_LOG_LEVEL is used when no level is
        given, and RUNNER_DEBUG=1 (set by GitHub when debug logging is
        enabled for a re-run) turns on DEBUG.
    """
    if level:
        return level.upper()
    if verbose or os.environ.get("RUNNER_DEBUG") == "1":
        return "DEBUG"
    return os.environ.get("PRLABELER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    verbose: bool = False,
    console: bool = True,
) -> logging.Logger:
    """Set up the prlabeler logger.

    Args:
        log_dir: Directory for a rotating log file. Defaults to the
                 PRLABELER_LOG_DIR environment variable; no file log if unset.
        log_file: Log file name. Defaults to 'prlabeler.log'.
        max_bytes: Maximum size per log file before rotation. Defaults to 10MB.
        backup_count: Number of backup files to keep. Defaults to 5.
        level: Log level (DEBUG, INFO, WARNING, ERROR). See resolve_level.
        verbose: Shortcut for DEBUG.
        console: Whether to log to stderr. Defaults to True.

    Returns:
        The root prlabeler logger.
    """
    if log_dir is None:
        log_dir = os.environ.get("PRLABELER_LOG_DIR") or None

    level_name = resolve_level(level, verbose)
    log_level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger("prlabeler")
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    log_path = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / log_file
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.debug("prlabeler logging initialized (level=%s, file=%s)", level_name, log_path)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Args:
        name: Component name (e.g., 'tracker', 'reconciler').
              Will be prefixed with 'prlabeler.'.

    Returns:
        Logger instance for the component.
    """
    if not name.startswith("prlabeler."):
        name = f"prlabeler.{name}"
    return logging.getLogger(name)


def truncate_output(output: str, max_length: int = 500) -> str:
    """Truncate long output (e.g. an error response body) for logging."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Remove credentials from log output.

    Args:
        text: Text that may contain sensitive data.

    Returns:
        Sanitized text safe for logging.
    """
    patterns = [
        (r"ghp_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub PAT
        (r"gho_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub OAuth
        (r"ghs_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # Actions installation token
        (r"github_pat_[a-zA-Z0-9_]{82}", "[GITHUB_TOKEN]"),  # Fine-grained PAT
        (r"Bearer [a-zA-Z0-9._-]+", "Bearer [REDACTED]"),
        (r"Basic [a-zA-Z0-9+/=]+", "Basic [REDACTED]"),
    ]

    result = text
    for pat, replacement in patterns:
        result = re.sub(pat, replacement, result)

    return result
