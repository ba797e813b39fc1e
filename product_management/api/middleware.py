"""API middleware.

Provides:
- Request ID correlation
- Catch-all "Server Error" response
"""

import re
import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

# Client-supplied request ids are echoed into headers and logs.
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id for log and client correlation.

    A well-formed ``X-Request-ID`` from the client is reused, anything
    else is replaced by a fresh UUID. The id is stored on
    ``request.state`` (admin context picks it up from there), bound into
    the structlog context and returned in the response header.
    """

    HEADER_NAME = "X-Request-ID"

    @classmethod
    def request_id_for(cls, request: Request) -> str:
        """Return the client's request id if usable, else a new one."""
        supplied = request.headers.get(cls.HEADER_NAME, "")
        if _REQUEST_ID_PATTERN.match(supplied):
            return supplied
        return str(uuid4())

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = self.request_id_for(request)
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            log = logger.warning if status_code >= 500 else logger.info
            log(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns any exception no handler claimed into a 500 ``Server Error``.

    Details stay in the log; the client only sees the fixed message.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(
                "Unhandled exception",
                request_id=getattr(request.state, "request_id", None),
                method=request.method,
                path=request.url.path,
                error_type=type(exc).__name__,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"message": "Server Error"},
            )


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed).

    Args:
        app: FastAPI application instance.
    """
    # Inside request id so failures are still correlated
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)
