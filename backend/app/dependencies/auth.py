import logging
import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader

from app.config import settings

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def _reject(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "ApiKey"},
    )


async def verify_api_key(
    request: Request,
    api_key: str | None = Depends(api_key_header),
) -> str:
    """Gate the game-day write and read routes behind the shared API key.

    An unset ``API_KEY`` leaves the routes open for local use.
    """
    if not settings.api_key:
        logger.warning(
            "API_KEY unset, %s %s served without a key", request.method, request.url.path
        )
        return ""

    caller = request.client.host if request.client else "unknown"
    if not api_key:
        logger.warning("Rejected %s from %s: no API key", request.url.path, caller)
        raise _reject("Missing API key")
    if not secrets.compare_digest(api_key, settings.api_key):
        logger.warning("Rejected %s from %s: wrong API key", request.url.path, caller)
        raise _reject("Invalid API key")
    return api_key
