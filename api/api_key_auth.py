"""API key authentication middleware.

Disabled by default. When enabled, requests under the protected path prefix
must carry the configured key in the API key header.
"""
import logging
import secrets

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from config import AuthConfig

logger = logging.getLogger(__name__)


class ApiKeyAuthMiddleware(BaseHTTPMiddleware):
    """Rejects requests to protected paths without a valid API key"""

    def __init__(self, app: ASGIApp, auth_config: AuthConfig):
        super().__init__(app)
        self.auth = auth_config

    def _is_protected(self, request: Request) -> bool:
        return self.auth.enabled and request.url.path.startswith(self.auth.protected_prefix)

    async def dispatch(self, request: Request, call_next):
        if not self._is_protected(request):
            return await call_next(request)

        provided = request.headers.get(self.auth.header_name)
        if not provided:
            logger.warning(f"Rejected {request.url.path}: API key is missing")
            return _unauthorized("API key is missing")
        if not secrets.compare_digest(provided.encode(), self.auth.api_key.encode()):
            logger.warning(f"Rejected {request.url.path}: invalid API key")
            return _unauthorized("Invalid API key")
        return await call_next(request)


def _unauthorized(detail: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": detail})
