"""JSON error responses for docflow.

Every error body has the shape {"error", "message", "details"?}. Service
errors carry their own error_code; the table below picks the status.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from docflow.core.config import get_settings
from docflow.domain.exceptions import DocflowException

logger = logging.getLogger(__name__)

STATUS_BY_ERROR_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "RESOURCE_NOT_FOUND": 404,
    "BUSINESS_RULE_VIOLATION": 409,
    "DOCUMENT_VERSION_CONFLICT": 409,
    "DOCUMENT_VALIDATION_FAILED": 422,
    "SERVICE_UNAVAILABLE": 503,
}


def _error_body(error: str, message: object, details: object = None) -> dict:
    body = {"error": error, "message": message}
    if details is not None:
        body["details"] = jsonable_encoder(details)
    return body


async def handle_docflow_error(request: Request, exc: DocflowException) -> JSONResponse:
    status = STATUS_BY_ERROR_CODE.get(exc.error_code, 400)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=jsonable_encoder(exc.to_dict()))


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed body, query or header: 422 with pydantic's error list."""
    return JSONResponse(
        status_code=422,
        content=_error_body("VALIDATION_ERROR", "Request validation failed", exc.errors()),
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    """A unique constraint lost a race with a concurrent insert (type code, field key)."""
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=409,
        content=_error_body(
            "BUSINESS_RULE_VIOLATION",
            "The change conflicts with existing data; reload and retry.",
            {"rule": "integrity_conflict"},
        ),
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTP_ERROR", exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log with traceback; the exception text is only returned in debug mode."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", message))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DocflowException, handle_docflow_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
