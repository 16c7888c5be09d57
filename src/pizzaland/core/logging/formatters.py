"""
Formatters used by the dictConfig in ``builder.py``.

  - JsonFormatter: one JSON object per record for log collectors, including
    every ``extra`` key (``op``, ``model``, ``duration_ms``, ...).
  - ColorFormatter: padded, ANSI-coloured line for a developer console.
"""

import json
import logging
from logging import LogRecord
from typing import Any

from pizzaland.utils.metadata import get_project_version

PROJECT_VERSION = get_project_version()

# attributes every LogRecord has; anything else on a record came from `extra`
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime", "request_id"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Base fields: timestamp, level, logger, message, pathname, lineno,
    request_id, service, env, version. Exception and stack text are added when
    present. Extras that are not JSON-serializable are written as ``str(v)``.
    """

    def __init__(self, *, env: str | None = None, service: str = "pizzaland", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED or key in log_record or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development console formatter:
    ``TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE [op=...]``.
    """

    COLOR_CODES = {
        "DEBUG": "\033[1;36;47m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        base = (
            f"{timestamp} | {color}{record.levelname:<10}{reset} | "
            f"{record.name:<30} | "
            f"{getattr(record, 'request_id', '-'):<10} | "
            f"{record.getMessage()}"
        )

        op = getattr(record, "op", None)
        if op:
            base += f" [op={op}]"

        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)

        return base
