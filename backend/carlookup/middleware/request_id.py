"""
CarLookup Backend: Request ID Middleware
=========================================

What:  Reads or generates a correlation id for each request and echoes it
       in the X-Request-Id response header.
Why:   The same id appears in the response envelope (`meta.requestId`), in
       every log line about the request, and in the header, so a client
       report can be matched to server logs instantly.
How:   Client-supplied X-Request-Id wins; otherwise a full uuid4 is generated.
       The id is stored in a ContextVar and on request.state.
When:  Runs outside logging and the error boundary so both can read the id.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-Id"

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER, "").strip() or str(uuid.uuid4())

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
