"""structlog configuration for teamboard.

Two output modes:
- JSON (default): structured JSON lines to stderr
- Human (LOG_JSON=false): colored console output to stderr

When LOG_DIR is set, records are also written to daily files under
``<LOG_DIR>/general`` and, for errors only, ``<LOG_DIR>/error``.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

import structlog


def _current_date() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def _file_handlers(log_dir: str) -> list[logging.Handler]:
    general_dir = os.path.join(log_dir, "general")
    error_dir = os.path.join(log_dir, "error")
    os.makedirs(general_dir, exist_ok=True)
    os.makedirs(error_dir, exist_ok=True)

    today = _current_date()
    general = logging.FileHandler(os.path.join(general_dir, f"{today}general.log"), encoding="utf-8")
    error = logging.FileHandler(os.path.join(error_dir, f"{today}error.log"), encoding="utf-8")
    error.setLevel(logging.ERROR)
    return [general, error]


def configure_logging(
    *,
    level: str = "INFO",
    log_json: bool = True,
    log_dir: Optional[str] = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        level: Level name for the ``teamboard`` logger hierarchy.
        log_json: Use JSON renderer instead of console renderer.
        log_dir: Optional directory for daily general/error log files.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(default=str)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    # Files always get JSON lines, whatever the console renderer is
    file_formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(default=str),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    if log_dir:
        for file_handler in _file_handlers(log_dir):
            file_handler.setFormatter(file_formatter)
            root_logger.addHandler(file_handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("teamboard").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
