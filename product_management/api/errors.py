"""Exception handlers mapping errors to the API's JSON envelopes.

- ProductNotFoundError, InvalidStateTransitionError -> 400
  {"message": "Product not found"}
- request or domain validation errors -> 422 {"message": ..., "errors": {...}}
- HTTPException -> its status with {"message": detail}
"""

from collections import defaultdict
from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from product_management.domain.exceptions import (
    InvalidStateTransitionError,
    ProductNotFoundError,
    ValidationError,
)

logger = structlog.get_logger()

# Location prefixes FastAPI puts in front of the field path.
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def validation_errors_by_field(errors: list[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error entries by dotted field path.

    Args:
        errors: ``RequestValidationError.errors()`` output.

    Returns:
        Field path mapped to its messages.
    """
    grouped: dict[str, list[str]] = defaultdict(list)
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(loc) or "body"
        grouped[field].append(error.get("msg", "Invalid value"))
    return dict(grouped)


async def product_not_found_handler(
    request: Request, exc: ProductNotFoundError
) -> JSONResponse:
    """Unresolved product ids are reported as 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": exc.message},
    )


async def invalid_transition_handler(
    request: Request, exc: InvalidStateTransitionError
) -> JSONResponse:
    """A product not in the state an operation needs is reported as not found."""
    logger.info(
        "Product not in required state",
        path=request.url.path,
        method=request.method,
        **exc.details,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": ProductNotFoundError.MESSAGE},
    )


async def domain_validation_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Domain-level validation failures."""
    return JSONResponse(
        status_code=422,
        content={"message": exc.message, "errors": exc.errors},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed or missing request data."""
    errors = validation_errors_by_field(exc.errors())
    logger.info(
        "Request validation failed",
        path=request.url.path,
        method=request.method,
        fields=sorted(errors),
    )
    return JSONResponse(
        status_code=422,
        content={"message": ValidationError.MESSAGE, "errors": errors},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the exception handlers on the application.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(ProductNotFoundError, product_not_found_handler)
    app.add_exception_handler(InvalidStateTransitionError, invalid_transition_handler)
    app.add_exception_handler(ValidationError, domain_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
