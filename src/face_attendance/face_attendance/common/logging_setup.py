from __future__ import annotations

import logging
import time
from logging.handlers import RotatingFileHandler
from typing import Optional

from flask import Flask, g, request

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_MAX_SIZE = 20 * 1024 * 1024  # 20 MB
LOG_BACKUP_COUNT = 5

PACKAGE_LOGGER = __name__.rsplit(".", 2)[0]

_configured = False


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger.

    Logs go to stderr and, when ``log_file`` is given, to a size-rotated file.
    Calling it again only updates the level.
    """

    global _configured
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if _configured:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_SIZE,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _configured = True
    return logger


def install_request_timing(app: Flask, logger: logging.Logger) -> None:
    """Log method, path, status and elapsed time of every request."""

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.pop("request_started", None)
        if started is None:
            return response
        elapsed = time.perf_counter() - started
        logger.info(
            "IP=%s | %s %s | Status=%s | Time=%.4fs",
            request.remote_addr,
            request.method,
            request.path,
            response.status_code,
            elapsed,
        )
        response.headers["X-Process-Time"] = str(round(elapsed, 4))
        return response
