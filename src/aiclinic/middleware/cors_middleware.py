"""
CORS headers for browser clients.

Every ``OPTIONS`` request is answered directly with an empty 200 response,
whether or not it carries the preflight headers, and every other response
gets the same CORS headers.
"""
from typing import List

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

ALLOW_METHODS = "GET, POST, OPTIONS"


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, allowed_origins: List[str], allowed_headers: List[str]):
        super().__init__(app)
        self.allowed_origins = allowed_origins
        self.allowed_headers = ", ".join(allowed_headers)

    def _allow_origin(self, origin: str) -> str:
        if "*" in self.allowed_origins:
            return "*"
        if origin and origin in self.allowed_origins:
            return origin
        return ""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)

        allow_origin = self._allow_origin(request.headers.get("origin", ""))
        if allow_origin:
            response.headers["Access-Control-Allow-Origin"] = allow_origin
            if allow_origin != "*":
                response.headers["Vary"] = "Origin"
        response.headers["Access-Control-Allow-Headers"] = self.allowed_headers
        response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
        return response
