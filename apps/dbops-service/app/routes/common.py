"""Shared helpers for the HTTP routes."""

import logging

from fastapi import HTTPException

from ..dbops.errors import DBOpsError, GrantSubsumedError, InvalidRequestError, NotFoundError
from ..grants.reference import GrantValidationError

logger = logging.getLogger(__name__)


def http_error(exc: Exception, action: str) -> HTTPException:
    """Map an operation failure onto the HTTP status callers expect."""
    if isinstance(exc, (InvalidRequestError, GrantValidationError)):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, GrantSubsumedError):
        return HTTPException(status_code=409, detail=exc.explanations or [str(exc)])
    if isinstance(exc, DBOpsError):
        logger.error("Failed %s: %s", action, exc)
        return HTTPException(status_code=502, detail=str(exc))
    logger.exception("Unexpected error %s", action)
    return HTTPException(status_code=500, detail=str(exc))


def not_found(kind: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{kind} not found")
