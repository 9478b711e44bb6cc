from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from .error_handler import error_handler


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds permissive CORS headers to all HTTP responses.

    Preflight ``OPTIONS`` requests are answered directly with 204. Exceptions
    that escape the application are turned into error responses here so
    that they carry the headers too.
    """

    def __init__(
        self,
        app,
        *,
        allow_origin: str = "*",
        allow_methods: str = "GET, POST, PUT, DELETE, OPTIONS",
        allow_headers: str = "Content-Type",
    ):
        super().__init__(app)
        self.allow_origin = allow_origin
        self.allow_methods = allow_methods
        self.allow_headers = allow_headers

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = error_handler(request, exc)

        response.headers["Access-Control-Allow-Origin"] = self.allow_origin
        response.headers["Access-Control-Allow-Methods"] = self.allow_methods
        response.headers["Access-Control-Allow-Headers"] = self.allow_headers
        return response
