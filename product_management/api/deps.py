"""FastAPI dependencies for the admin API.

The authenticated admin is resolved from the bearer credential and
handed to the services as an explicit ``AdminContext``.
"""

import hmac
from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from product_management.application.context import AdminContext
from product_management.application.lifecycle_service import (
    LifecycleService,
    get_lifecycle_service,
)
from product_management.application.product_service import (
    ProductService,
    get_product_service,
)
from product_management.infrastructure.config import settings
from product_management.infrastructure.database import get_session

logger = structlog.get_logger()

ADMIN_ACTOR = "admin"


def _unauthenticated(request: Request, reason: str) -> HTTPException:
    logger.warning(
        reason,
        path=request.url.path,
        method=request.method,
    )
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthenticated.",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_admin_context(request: Request) -> AdminContext:
    """Authenticate the caller from the ``Authorization`` header.

    Expects ``Authorization: Bearer <admin_api_key>``.

    Raises:
        HTTPException: 401 if the header is missing, malformed or wrong.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise _unauthenticated(request, "Missing authorization header")

    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise _unauthenticated(request, "Invalid authorization format")

    if not hmac.compare_digest(parts[1].strip(), settings.admin_api_key):
        raise _unauthenticated(request, "Invalid API key")

    return AdminContext(
        actor=ADMIN_ACTOR,
        request_id=getattr(request.state, "request_id", None),
    )


AdminDep = Annotated[AdminContext, Depends(get_admin_context)]
SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_lifecycle(admin: AdminDep, session: SessionDep) -> LifecycleService:
    """Get lifecycle service bound to the request's session and admin."""
    return get_lifecycle_service(session, context=admin)


def get_products(admin: AdminDep, session: SessionDep) -> ProductService:
    """Get product service bound to the request's session and admin."""
    return get_product_service(session, context=admin)
