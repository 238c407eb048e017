"""Logging helpers for service clients."""

from __future__ import annotations

import logging
from pathlib import Path

from service_client.config import get_settings


def configure_logging(level: str | None = None, log_file: str | Path | None = None) -> None:
    """Configure the root logger, optionally mirroring output to a fresh log file.

    ``level`` defaults to ``LOG_LEVEL`` from :class:`ClientSettings`.
    """

    level = level or get_settings().log_level
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode="w", encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
        force=True,
    )

    # Silence httpx request logging; the clients log their own requests
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
