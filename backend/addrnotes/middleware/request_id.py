"""
AddrNotes Backend — Request ID Middleware
===========================================

What:  Assigns an ID to each incoming request and adds it to the response.
Why:   Every log line and every error body of one request share the ID, so
       a client-reported error can be matched to the server log.
How:   Reuses an inbound X-Request-ID header or generates a short UUID, keeps
       it in a ContextVar, and echoes it in the X-Request-ID response header.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 chars of a UUID is enough for correlation and reads well in logs
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
