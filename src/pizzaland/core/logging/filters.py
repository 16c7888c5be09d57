"""
Logging filters.

``RequestIdFilter`` stamps every record with the id of the HTTP request being
served (kept in a ``contextvars.ContextVar`` so it follows the request across
awaits) or with ``-`` outside a request. ``RedactFilter`` masks sensitive
``extra`` values before any handler formats them.
"""

import contextvars
import logging
from logging import LogRecord

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Set the request id for the current context; returns a token for ``reset_request_id``."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee ``record.request_id``: an explicit ``extra`` value wins, then the
    context var, then ``-``. Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = getattr(record, "request_id", None) or get_request_id() or "-"
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "authorization", "db_url", "database_url", "dsn"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
