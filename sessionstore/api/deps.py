# ==============================================================================
# FastAPI Dependencies
# ==============================================================================
"""
Request-boundary helpers for FastAPI applications consuming this package.

- get_token_details / get_current_user_id: authenticate the access token
  cookie; any TokenError becomes 401 Unauthorized
- register_exception_handlers: map store errors to HTTP responses
  (NotFoundError -> 404, StoreError -> 503)
"""

import logging
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from sessionstore.core.errors import NotFoundError, StoreError, TokenError
from sessionstore.core.models import TokenDetails
from sessionstore.security.tokens import access_token_verifier

logger = logging.getLogger(__name__)


def get_token_details(request: Request) -> TokenDetails:
    """Authenticate the request's access token cookie."""
    try:
        return access_token_verifier().extract_token_metadata(request)
    except TokenError as e:
        logger.info("Rejected request to %s: %s", request.url.path, e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


def get_current_user_id(
    details: Annotated[TokenDetails, Depends(get_token_details)],
) -> str:
    """User id of the authenticated caller, used to scope session queries."""
    return details.user_id


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers translating store errors into HTTP responses."""

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(StoreError)
    async def _store_error(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store failure on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Session store unavailable"},
        )
