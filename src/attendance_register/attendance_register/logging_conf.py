from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler


DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if not parent:
        return
    os.makedirs(parent, exist_ok=True)


def configure_logging(
    *,
    level: str = "INFO",
    log_file: str | None = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> None:
    """Configure application logging.

    Always logs to stderr; optionally also to a rotating file.
    Safe to call multiple times (handlers are replaced, not stacked).
    """

    level_value = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(level_value)

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level_value)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file:
        _ensure_parent_dir(log_file)
        file_handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
        file_handler.setLevel(level_value)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(max(level_value, logging.WARNING))
    logging.getLogger("httpcore").setLevel(max(level_value, logging.WARNING))
