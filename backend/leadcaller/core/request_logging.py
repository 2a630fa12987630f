"""
Request Logging Middleware
Logs every inbound request before routing.
"""
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method and path (with query string) of each request.
    
    Usage:
        app.add_middleware(RequestLoggingMiddleware)
    """
    
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        logger.info(f"{request.method} {path}")
        
        return await call_next(request)
