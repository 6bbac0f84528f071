"""The query-execution port every reconciliation operation talks to.

Statements arrive fully interpolated; transports never bind parameters.
"""

import abc
import logging
import re
from typing import Callable

import httpx

from .row import Row

logger = logging.getLogger(__name__)

RowCallback = Callable[[Row], None]

# ── Error classification ─────────────────────────────────

ERROR_CODES = {
    "AUTH_FAILED": "Authentication failed - check username and password.",
    "DNS_ERROR": "Could not resolve host - verify the hostname is correct.",
    "CONNECTION_REFUSED": "Connection refused - ensure ClickHouse is running and the port is correct.",
    "TIMEOUT": "Query timed out - the server may be unreachable or the timeout is too low.",
    "TLS_ERROR": "TLS/SSL handshake failed - verify the protocol and that the server supports TLS.",
    "PERMISSION_DENIED": "Permission denied - the user lacks the privilege to run this statement.",
    "UNKNOWN": "ClickHouse rejected the statement.",
}


def classify_error(exc: Exception) -> str:
    """Return an ERROR_CODES key for common ClickHouse/network failures."""
    msg = str(exc).lower()

    if any(k in msg for k in ("name or service not known", "nodename nor servname",
                               "getaddrinfo failed", "no address associated")):
        return "DNS_ERROR"
    if "connection refused" in msg or "connect call failed" in msg:
        return "CONNECTION_REFUSED"
    if any(k in msg for k in ("timed out", "timeout")):
        return "TIMEOUT"
    if any(k in msg for k in ("ssl", "certificate", "handshake")):
        return "TLS_ERROR"

    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        body = exc.response.text.lower()
        if code in (401, 403) and ("authentication" in body or "wrong password" in body):
            return "AUTH_FAILED"
        if "access_denied" in body or "not enough privileges" in body:
            return "PERMISSION_DENIED"

    if any(k in msg for k in ("authentication", "wrong password", "incorrect user")):
        return "AUTH_FAILED"
    if "access_denied" in msg or "not enough privileges" in msg:
        return "PERMISSION_DENIED"
    return "UNKNOWN"


class ClickHouseError(Exception):
    """A statement could not be executed."""

    def __init__(self, message: str, error_code: str = "UNKNOWN"):
        super().__init__(message)
        self.error_code = error_code

    @classmethod
    def from_exception(cls, exc: Exception, message: str | None = None) -> "ClickHouseError":
        return cls(message or str(exc), classify_error(exc))

    @property
    def hint(self) -> str:
        return ERROR_CODES.get(self.error_code, ERROR_CODES["UNKNOWN"])


_SECRET = re.compile(r"(BY ')((?:[^'\\]|\\.)*)(')")


def mask_sql(sql: str) -> str:
    """Hide credentials (IDENTIFIED ... BY '...') before a statement is logged."""
    return _SECRET.sub(r"\1***\3", sql)


class ClickHouseClient(abc.ABC):
    """Abstract transport: ``select`` streams rows to a callback, ``exec`` runs DDL/DCL."""

    @abc.abstractmethod
    async def select(self, sql: str, callback: RowCallback) -> None:
        ...

    @abc.abstractmethod
    async def exec(self, sql: str) -> None:
        ...

