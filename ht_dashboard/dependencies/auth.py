"""API key authentication dependency."""

from __future__ import annotations

import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader

from ..config import settings
from ..logging import logger

# Header name for API key
API_KEY_HEADER = APIKeyHeader(name="X-API-Key", auto_error=False)


def verify_api_key(
    request: Request,
    api_key: str | None = Depends(API_KEY_HEADER),
) -> str:
    """Validate the X-API-Key header against ``API_KEY``.

    When no key is configured (development) every request is allowed.

    Raises:
        HTTPException: 401 if key is missing or invalid.
    """
    if not settings.api_key:
        logger.debug("api_key_not_configured", path=request.url.path)
        return ""

    client_ip = request.client.host if request.client else "unknown"
    if not api_key:
        logger.warning("api_key_missing", client_ip=client_ip, path=request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    if not secrets.compare_digest(api_key, settings.api_key):
        logger.warning("api_key_invalid", client_ip=client_ip, path=request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return api_key
