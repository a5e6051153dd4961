"""FastAPI middleware."""

import time
from typing_extensions import override

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from cto_coach.core.exceptions import AppError

logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses."""

    # Health checks and docs are too noisy to log
    SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

    @override
    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.perf_counter()
        path = request.url.path

        if path in self.SKIP_PATHS:
            return await call_next(request)

        logger.info(
            "request_started",
            method=request.method,
            path=path,
            query=str(request.query_params) if request.query_params else None,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "request_failed",
                method=request.method,
                path=path,
                error=str(e),
                duration_ms=round(duration_ms, 2),
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "request_completed",
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        response.headers["X-Process-Time-Ms"] = f"{duration_ms:.2f}"
        return response


class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """Turns escaping exceptions into ``{"error": {...}}`` JSON responses.

    Application errors keep their own status code; anything else is a 500.
    """

    @override
    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except AppError as e:
            if e.status_code >= 500:
                logger.exception("application_error", path=request.url.path, code=e.code, error=e.message)
            else:
                logger.warning("request_rejected", path=request.url.path, code=e.code, error=e.message)
            return JSONResponse(status_code=e.status_code, content=e.to_dict())
        except Exception as e:
            logger.exception("unhandled_exception", path=request.url.path, error=str(e))
            return JSONResponse(
                status_code=500,
                content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
            )
