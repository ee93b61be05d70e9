"""Translation of domain errors into HTTP errors."""
import logging

from fastapi import HTTPException

from cafe.core.errors import (
    CafeError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(error: CafeError, tag: str) -> HTTPException:
    """
    Map a domain error to an ``HTTPException``.

    Validation, lookup and conflict errors carry user-facing messages and are
    passed through. Persistence failures are logged and answered with a
    generic message.
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, ValidationError):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, ConflictError):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, PersistenceError):
        logger.error(f"[{tag}] Persistence failure: {error}", exc_info=error)
        return HTTPException(status_code=500, detail="A storage error occurred, please try again")

    logger.error(f"[{tag}] Unhandled domain error: {error}", exc_info=error)
    return HTTPException(status_code=500, detail="Internal server error")
