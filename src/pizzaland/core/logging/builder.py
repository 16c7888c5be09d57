"""
Logging builder: assemble and apply the dictConfig for the service.

    setup_logging(settings)

is called once at process start (and once per test session). Components:

| Piece      | Choice                                                           |
| ---------- | ---------------------------------------------------------------- |
| Formatters | "standard" (ColorFormatter for text, plain otherwise), "json"    |
| Filters    | "request_id", "redact"                                           |
| Handlers   | console always; app.log + errors.log when writing to LOG_DIR,    |
|            | error_console otherwise                                          |
| Loggers    | root, uvicorn.error, uvicorn.access, sqlalchemy.engine           |
"""

import logging
import logging.config
from pathlib import Path

from pizzaland.config.settings import Settings
from pizzaland.utils.metadata import get_project_name

from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

STANDARD_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """Build the dictConfig mapping for ``settings``."""
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": STANDARD_FORMAT,
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """Create LOG_DIR when logging to files, apply the config, add a root RequestIdFilter."""
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    # records created by loggers without our handlers still get a request_id
    logging.getLogger().addFilter(RequestIdFilter())
