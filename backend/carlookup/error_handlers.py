"""
CarLookup Backend: Exception-to-Response Mapping Chain
=======================================================

What:  Turns any exception that escapes a route into a status code and an
       error envelope.
Why:   One place decides how every failure looks on the wire, and one place
       logs it. Managers raise and forget.
How:   An ordered list of handlers, each with `can_handle(exc)` and
       `handle(exc) -> (status_code, envelope)`. The first handler that
       claims the exception wins. The catch-all is always last.
Who:   ExceptionHandlingMiddleware (unhandled exceptions) and the
       RequestValidationError handler registered in main.py.

Handler order:
    ┌────────────┐  ┌───────────┐  ┌──────────┐  ┌──────────────┐  ┌───────────┐  ┌─────────┐
    │ validation │─▶│ not found │─▶│ conflict │─▶│ unauthorized │─▶│ forbidden │─▶│ default │
    │    400     │  │    404    │  │   409    │  │     401      │  │    403    │  │   500   │
    └────────────┘  └───────────┘  └──────────┘  └──────────────┘  └───────────┘  └─────────┘

    Handlers match on `ErrorKind`, not on isinstance checks against an open
    set of classes. FastAPI's RequestValidationError (bad JSON, bad UUID in
    the path, non-integer query values) is classified as VALIDATION.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from fastapi.exceptions import RequestValidationError

from carlookup.exceptions import CarLookupError, ErrorKind, ValidationError
from carlookup.schemas.envelope import ApiResponse, failure

logger = logging.getLogger(__name__)

HandledError = Tuple[int, ApiResponse]

# Location prefixes FastAPI puts in front of the offending field name
_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def classify(exc: BaseException) -> ErrorKind:
    if isinstance(exc, CarLookupError):
        return exc.kind
    if isinstance(exc, RequestValidationError):
        return ErrorKind.VALIDATION
    return ErrorKind.INTERNAL


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _request_validation_details(exc: RequestValidationError) -> Tuple[Optional[str], str]:
    """First offending field (camelCase) and every message joined by '; '."""
    field: Optional[str] = None
    messages: List[str] = []
    for error in exc.errors():
        loc = [part for part in error.get("loc", ()) if isinstance(part, str)]
        names = [part for part in loc if part not in _REQUEST_PARTS]
        name = _camel(names[-1]) if names else None
        if field is None:
            field = name
        msg = error.get("msg", "Invalid value")
        messages.append(f"{name}: {msg}" if name else msg)
    return field, "; ".join(messages) or "Validation failed"


# ══════════════════════════════════════════════════════════════════════════
# Handlers
# ══════════════════════════════════════════════════════════════════════════


class ExceptionHandler:
    """Maps every exception of one ErrorKind to a fixed status, type and headline."""

    kind: Optional[ErrorKind] = None
    status_code: int = 500
    error_type: str = "InternalServerError"
    message: str = "An internal server error occurred"

    def can_handle(self, exc: BaseException) -> bool:
        return classify(exc) is self.kind

    def handle(self, exc: BaseException) -> HandledError:
        headline = getattr(exc, "title", None) or self.message
        return self.status_code, failure(
            code=self.status_code,
            error_type=self.error_type,
            message=headline,
            detail=self.detail(exc),
            field=self.field(exc),
        )

    def detail(self, exc: BaseException) -> str:
        return getattr(exc, "message", None) or str(exc)

    def field(self, exc: BaseException) -> Optional[str]:
        return None


class ValidationExceptionHandler(ExceptionHandler):
    kind = ErrorKind.VALIDATION
    status_code = 400
    error_type = "ValidationError"
    message = "Validation failed"

    def detail(self, exc: BaseException) -> str:
        if isinstance(exc, RequestValidationError):
            return _request_validation_details(exc)[1]
        return super().detail(exc)

    def field(self, exc: BaseException) -> Optional[str]:
        if isinstance(exc, RequestValidationError):
            return _request_validation_details(exc)[0]
        if isinstance(exc, ValidationError):
            return exc.field
        return None


class NotFoundExceptionHandler(ExceptionHandler):
    kind = ErrorKind.NOT_FOUND
    status_code = 404
    error_type = "NotFoundError"
    message = "Resource not found"


class ConflictExceptionHandler(ExceptionHandler):
    kind = ErrorKind.CONFLICT
    status_code = 409
    error_type = "ConflictError"
    message = "Conflict occurred"


class UnauthorizedExceptionHandler(ExceptionHandler):
    kind = ErrorKind.UNAUTHORIZED
    status_code = 401
    error_type = "UnauthorizedError"
    message = "Access denied"


class ForbiddenExceptionHandler(ExceptionHandler):
    kind = ErrorKind.FORBIDDEN
    status_code = 403
    error_type = "ForbiddenError"
    message = "Access denied - insufficient permissions"


class DefaultExceptionHandler(ExceptionHandler):
    """
    Catch-all. Outside debug mode the response never carries the exception
    text; the traceback goes to the server log only.
    """

    kind = ErrorKind.INTERNAL

    def __init__(self, debug: bool = False):
        self.debug = debug

    def can_handle(self, exc: BaseException) -> bool:
        return True

    def detail(self, exc: BaseException) -> str:
        if self.debug:
            return f"Internal server error: {exc}"
        return (
            "The server encountered an unexpected condition that prevented it "
            "from fulfilling the request"
        )


# ══════════════════════════════════════════════════════════════════════════
# Chain
# ══════════════════════════════════════════════════════════════════════════


class ExceptionMappingChain:
    """
    First-match dispatch over an ordered handler list.

    Raises:
        ValueError: the list does not end with exactly one DefaultExceptionHandler.
    """

    def __init__(self, handlers: Sequence[ExceptionHandler]):
        handlers = list(handlers)
        if not handlers or not isinstance(handlers[-1], DefaultExceptionHandler):
            raise ValueError("The last exception handler must be the default handler")
        if any(isinstance(h, DefaultExceptionHandler) for h in handlers[:-1]):
            raise ValueError("The default exception handler must appear only once, last")
        self.handlers = handlers

    @classmethod
    def default(cls, debug: bool = False) -> "ExceptionMappingChain":
        return cls([
            ValidationExceptionHandler(),
            NotFoundExceptionHandler(),
            ConflictExceptionHandler(),
            UnauthorizedExceptionHandler(),
            ForbiddenExceptionHandler(),
            DefaultExceptionHandler(debug=debug),
        ])

    def resolve(self, exc: BaseException) -> HandledError:
        for handler in self.handlers:
            if handler.can_handle(exc):
                return handler.handle(exc)
        # Unreachable: the default handler accepts everything
        raise AssertionError("no exception handler matched")

    def log(self, exc: BaseException, status_code: int, request_id: str, path: str) -> None:
        """The single log line for a handled error."""
        if status_code >= 500:
            logger.error(
                "[%s] Unhandled %s on %s: %s",
                request_id, type(exc).__name__, path, exc,
                exc_info=exc,
            )
        else:
            logger.warning(
                "[%s] %d %s on %s: %s",
                request_id, status_code, type(exc).__name__, path,
                getattr(exc, "message", None) or exc,
            )
