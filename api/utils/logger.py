from __future__ import annotations

import copy
import logging
import os
import sys
import time
import uuid
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from api.config import settings

LOGGER_NAME = "codementor"
REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")

_FORMAT = (
    "%(asctime)s %(levelname)-8s %(name)s "
    "request_id=%(request_id)s src=%(filename)s:%(lineno)d "
    "%(message)s"
)
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.request_id = REQUEST_ID.get("-")
        return True


class ColorFormatter(logging.Formatter):
    """
    Console formatter that colors the level name (ANSI).
    Falls back to plain output when color is disabled.
    """

    _RESET = "\x1b[0m"
    _DIM = "\x1b[2m"

    _LEVEL_COLORS: dict[int, str] = {
        logging.DEBUG: "\x1b[36m",
        logging.INFO: "\x1b[32m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[35m",
    }

    def __init__(self, *args, enable_color: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.enable_color = enable_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.enable_color:
            return super().format(record)
        r = copy.copy(record)
        color = self._LEVEL_COLORS.get(r.levelno, "")
        r.levelname = f"{color}{r.levelname}{self._RESET}"
        r.name = f"{self._DIM}{r.name}{self._RESET}"
        return super().format(r)


def _color_enabled(stream) -> bool:
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(
    *,
    log_dir: Optional[str | Path] = None,
    log_file: str = "codementor.log",
    level: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the application logger: rotating file under LOG_DIR, plus a
    console handler when LOG_TO_CONSOLE is set.
    Idempotent: every module calls it at import time.
    """

    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, "_configured", False):
        return logger

    numeric_level = logging.getLevelNamesMapping().get((level or settings.LOG_LEVEL).upper(), logging.INFO)
    logger.setLevel(numeric_level)
    logger.propagate = False
    request_filter = RequestIdFilter()

    directory = Path(log_dir or settings.LOG_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    fh = RotatingFileHandler(
        filename=str(directory / log_file),
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    fh.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    fh.addFilter(request_filter)
    logger.addHandler(fh)

    if settings.LOG_TO_CONSOLE:
        ch = logging.StreamHandler(sys.stdout)
        ch.setFormatter(ColorFormatter(fmt=_FORMAT, datefmt=_DATEFMT, enable_color=_color_enabled(sys.stdout)))
        ch.addFilter(request_filter)
        logger.addHandler(ch)

    logger._configured = True  # type: ignore[attr-defined]
    return logger


def set_request_id(request_id: Optional[str] = None) -> str:
    rid = request_id or str(uuid.uuid4())
    REQUEST_ID.set(rid)
    return rid


def clear_request_id() -> None:
    REQUEST_ID.set("-")


class log_request:
    """
    Time a unit of work:
      with log_request(logger, "submit_attempt"):
          ...
    """

    def __init__(self, logger: logging.Logger, name: str):
        self.logger = logger
        self.name = name
        self.start = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        dur_ms = int((time.perf_counter() - self.start) * 1000)
        if exc is None:
            self.logger.info("%s ok duration_ms=%s", self.name, dur_ms)
        else:
            self.logger.warning("%s failed duration_ms=%s error=%r", self.name, dur_ms, exc)
        return False
