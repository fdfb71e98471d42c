"""Structured logging for kube-autocomplete.

The tool runs once per completion keystroke, so a plain run only reports
warnings on stderr and touches nothing on disk. ``--verbose`` and ``--debug``
raise the console level and also keep a rotating JSON log under
``~/.local/state/kube-autocomplete/`` for diagnosing completion problems
after the fact.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

LOG_DIR = Path.home() / ".local" / "state" / "kube-autocomplete"
LOG_FILE = LOG_DIR / "kube-autocomplete.log"
MAX_LOG_SIZE = 1024 * 1024  # 1 MB
BACKUP_COUNT = 2
RETENTION_DAYS = 7

SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
]


def _cleanup_old_logs() -> None:
    """Delete rotated logs not modified within RETENTION_DAYS."""
    if not LOG_DIR.exists():
        return
    cutoff = datetime.now() - timedelta(days=RETENTION_DAYS)
    for log_file in LOG_DIR.glob(f"{LOG_FILE.name}*"):
        try:
            if datetime.fromtimestamp(log_file.stat().st_mtime) < cutoff:
                log_file.unlink()
        except OSError:
            continue


def _file_handler(level: int) -> logging.Handler:
    """Open the rotating JSON log file at the given level."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    _cleanup_old_logs()

    handler = RotatingFileHandler(LOG_FILE, maxBytes=MAX_LOG_SIZE, backupCount=BACKUP_COUNT)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=SHARED_PROCESSORS,
        )
    )
    return handler


def _console_handler(level: int, debug: bool) -> logging.Handler:
    """Stderr handler; stdout carries completion candidates only."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=debug),
            ),
            foreign_pre_chain=SHARED_PROCESSORS,
        )
    )
    return handler


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure structlog over stdlib logging for one CLI run.

    Args:
        verbose: Log INFO and above, and write the log file.
        debug: Log DEBUG and above, and write the log file.
    """
    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING

    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(_console_handler(log_level, debug))

    if not (verbose or debug):
        return

    try:
        root_logger.addHandler(_file_handler(log_level))
    except OSError as e:
        structlog.get_logger().warning("file_logging_unavailable", path=str(LOG_FILE), error=str(e))
