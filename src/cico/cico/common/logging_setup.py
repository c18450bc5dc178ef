from __future__ import annotations

import logging
import os
import time
from logging.handlers import RotatingFileHandler
from typing import Optional

from flask import Flask, g, request

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_MAX_SIZE = 20 * 1024 * 1024  # 20 MB
LOG_BACKUP_COUNT = 5

request_logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Install console (and optional rotating file) handlers on the root logger."""

    root = logging.getLogger()
    root.setLevel(level.upper())
    if root.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_SIZE,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)


def register_request_logging(app: Flask) -> None:
    """Log method, path, status and processing time for every request."""

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.pop("request_started", None)
        if started is None:
            return response
        elapsed = time.perf_counter() - started
        request_logger.info(
            "IP=%s | %s %s | Status=%s | Time=%.4fs",
            request.remote_addr,
            request.method,
            request.path,
            response.status_code,
            elapsed,
        )
        response.headers["X-Process-Time"] = str(round(elapsed, 4))
        return response
