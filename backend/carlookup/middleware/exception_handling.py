"""
CarLookup Backend: Exception Handling Middleware
=================================================

What:  The error boundary. Catches anything a route (or its dependencies)
       raises and writes the envelope chosen by the ExceptionMappingChain.
Why:   A pure ASGI middleware can see whether the response has already
       started. If it has, writing a second status line would corrupt the
       stream, so the error is logged and nothing more is sent.
How:   Wraps `send` to record `http.response.start`, then delegates.
When:  Innermost user middleware: request id and access logging see the
       final status code of the error response.
"""

import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from carlookup.error_handlers import ExceptionMappingChain
from carlookup.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class ExceptionHandlingMiddleware:
    def __init__(self, app: ASGIApp, chain: ExceptionMappingChain):
        self.app = app
        self.chain = chain

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            status_code, envelope = self.chain.resolve(exc)
            self.chain.log(exc, status_code, request_id_var.get(""), scope.get("path", ""))

            if response_started:
                logger.error(
                    "[%s] Response already started; error body not written",
                    request_id_var.get(""),
                )
                return

            response = JSONResponse(
                status_code=status_code,
                content=envelope.model_dump(mode="json", by_alias=True),
            )
            await response(scope, receive, send)
