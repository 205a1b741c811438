from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.schemas.response import ErrorResponse, ErrorDetail
from datetime import datetime, timezone
import logging
import uuid

logger = logging.getLogger(__name__)

def _get_error_code(status_code: int) -> str:
    code_map = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_SERVER_ERROR",
        503: "PERSISTENCE_FAILURE",
    }
    return code_map.get(status_code, f"HTTP_{status_code}")

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())

def _error_response(request: Request, request_id: str, code: str, message: str, details=None) -> dict:
    error_response = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=str(request.url),
        request_id=request_id
    )
    return jsonable_encoder(error_response)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = _request_id(request)
    content = _error_response(
        request,
        request_id,
        "VALIDATION_ERROR",
        "Request validation failed",
        details={"validation_errors": jsonable_encoder(exc.errors())},
    )
    logger.warning(f"[{request_id}] Validation error: {exc.errors()}", extra={"request_id": request_id})
    return JSONResponse(status_code=422, content=content)

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    request_id = _request_id(request)
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    content = _error_response(request, request_id, _get_error_code(exc.status_code), message)
    logger.warning(f"[{request_id}] HTTP {exc.status_code}: {exc.detail}", extra={"request_id": request_id})
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

async def persistence_exception_handler(request: Request, exc: SQLAlchemyError):
    request_id = _request_id(request)
    content = _error_response(
        request,
        request_id,
        "PERSISTENCE_FAILURE",
        "The request could not be saved. Please retry.",
        details={"error_type": type(exc).__name__},
    )
    logger.error(f"[{request_id}] Persistence failure: {exc}", exc_info=True, extra={"request_id": request_id})
    return JSONResponse(status_code=503, content=content)

async def global_exception_handler(request: Request, exc: Exception):
    request_id = _request_id(request)

    if isinstance(exc, HTTPException):
        return await http_exception_handler(request, exc)
    if isinstance(exc, SQLAlchemyError):
        return await persistence_exception_handler(request, exc)

    content = _error_response(
        request,
        request_id,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
        details={"error_type": type(exc).__name__},
    )
    logger.error(f"[{request_id}] Unhandled exception: {exc}", exc_info=True, extra={"request_id": request_id})
    return JSONResponse(status_code=500, content=content)
