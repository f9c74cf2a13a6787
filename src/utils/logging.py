from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, TextIO

import structlog

LOG_FORMATS = ("json", "console")


def _renderer(fmt: str):
    if fmt == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer(sort_keys=True)


def setup_logging(
    *,
    level: str | None = None,
    log_file: str | None = None,
    fmt: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Structured logging for the generator scripts.

    - events go to stderr; stdout only carries the script's own result line
    - `LOG_FORMAT=console` switches to key=value lines for local runs (default: json)
    - `LOG_FILE` additionally appends JSON lines to a file
    """
    lvl = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    if not isinstance(logging.getLevelName(lvl), int):
        raise ValueError(f"Unknown log level: {lvl}")
    file_path = log_file or os.getenv("LOG_FILE")
    log_format = (fmt or os.getenv("LOG_FORMAT") or "json").lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {log_format} (expected {'|'.join(LOG_FORMATS)})")

    root = logging.getLogger()
    root.setLevel(lvl)
    root.handlers.clear()

    formatter = logging.Formatter("%(message)s")

    console = logging.StreamHandler(stream or sys.stderr)
    console.setLevel(lvl)
    console.setFormatter(formatter)
    root.addHandler(console)

    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(file_path, encoding="utf-8")
        fh.setLevel(lvl)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(lvl)),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # scripts may call setup_logging more than once (tests, re-entry)
        cache_logger_on_first_use=False,
    )


def get_logger(**kwargs: Any):
    # Lazy proxy: module-level loggers must pick up setup_logging() config made later.
    return structlog.get_logger(**kwargs)
