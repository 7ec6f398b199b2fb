"""
Error taxonomy for the revisions API.

Services raise these; the handler registered on the app maps each kind to a
fixed status code and body. Nothing is retried.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RevisionAPIException(Exception):
    """Base class for errors that map to a fixed HTTP response."""
    status_code: int = 500
    error: str = "InternalServerError"
    message: str = "Internal Server Error"

    def __init__(self, detail: str = ""):
        self.detail = detail or self.message
        super().__init__(self.detail)

    def to_body(self) -> dict:
        return {"error": self.error, "message": self.message}


class ValidationError(RevisionAPIException):
    """Missing or malformed identifying fields, or an empty change set."""
    status_code = 400
    error = "BadRequest"
    message = "Bad Request"


class UnauthorizedError(RevisionAPIException):
    """Request did not come from a trusted origin (write path only)."""
    status_code = 403
    error = "Forbidden"
    message = "Forbidden"


class NotFoundError(RevisionAPIException):
    """Referenced entity does not exist."""
    status_code = 404
    error = "NotFound"
    message = "Not Found"


class StorageError(RevisionAPIException):
    """The database rejected a read or write."""
    status_code = 500
    error = "InternalServerError"
    message = "Internal Server Error"


async def revision_api_exception_handler(request: Request, exc: RevisionAPIException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RevisionAPIException, revision_api_exception_handler)
