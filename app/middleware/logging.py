import logging
import time
import uuid
from typing import Optional
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

def _log_level(status_code: int, outcome: Optional[str] = None) -> int:
    """Expected business outcomes (e.g. ``out_of_order``) log at INFO even on 4xx."""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400 and outcome is None:
        return logging.WARNING
    return logging.INFO

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()
        method, path = request.method, request.url.path

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"[{request_id}] {method} {path} - ERROR",
                extra={
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "user_id": getattr(request.state, "user_id", None),
                    "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
                    "error": str(exc)
                }
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        user_id = getattr(request.state, "user_id", None)
        outcome = getattr(request.state, "outcome", None)
        cache_status = getattr(request.state, "cache_status", None)

        message = f"[{request_id}] {method} {path} - {response.status_code}"
        if user_id is not None:
            message += f" user={user_id}"
        if outcome:
            message += f" outcome={outcome}"
        if cache_status:
            message += f" [CACHE: {cache_status}]"

        logger.log(
            _log_level(response.status_code, outcome),
            f"{message} ({duration_ms}ms)",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "user_id": user_id,
                "outcome": outcome,
                "duration_ms": duration_ms,
                "cache_status": cache_status
            }
        )

        response.headers["X-Request-ID"] = request_id
        return response
