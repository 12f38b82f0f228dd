"""
CarLookup Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions, each tagged with an `ErrorKind`.
Why:   The exception mapping chain dispatches on the kind, so managers and
       security dependencies can raise without knowing about HTTP.
How:   Each exception carries a message and optional context dict. The
       boundary (see error_handlers.py) turns them into response envelopes.
Who:   Raised by validators, managers and the authentication dependencies.

Exception Hierarchy:
    CarLookupError (base, kind=INTERNAL)
    ├── ValidationError     → 400 Bad Request (field-level messages)
    ├── NotFoundError       → 404 Not Found
    ├── ConflictError       → 409 Conflict (duplicate name, blocked delete)
    ├── UnauthorizedError   → 401 Unauthorized (bad credentials, inactive account)
    │   └── AuthenticationRequiredError (missing or invalid token)
    └── ForbiddenError      → 403 Forbidden (authenticated, wrong role)

    Anything that is not a CarLookupError maps to 500.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FieldError:
    """One failed rule: the camelCase field name and a human-readable message."""

    field: Optional[str]
    message: str


class CarLookupError(Exception):
    """
    Base exception for all CarLookup application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    # Overrides the envelope headline chosen by the mapping chain
    title: Optional[str] = None

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CarLookupError):
    """
    Raised when client input fails validation.

    Carries every failed rule; the response reports all messages joined by
    "; " and names the first offending field.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        errors: Union[str, Sequence[FieldError]],
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if isinstance(errors, str):
            errors = [FieldError(field=field, message=errors)]
        self.errors: List[FieldError] = list(errors)
        message = "; ".join(e.message for e in self.errors) or "Validation failed"
        super().__init__(message=message, context=context)

    @property
    def field(self) -> Optional[str]:
        return self.errors[0].field if self.errors else None


class NotFoundError(CarLookupError):
    """
    Raised when a requested resource does not exist.

    Repositories return None for missing rows; managers convert that into
    this exception so the 404 is produced by the mapping chain.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        entity: str,
        entity_id: Any,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.entity = entity
        self.entity_id = entity_id
        ctx = context or {}
        ctx.update(entity=entity, entity_id=str(entity_id))
        super().__init__(
            message=f"{entity} with ID '{entity_id}' was not found.",
            context=ctx,
        )


class ConflictError(CarLookupError):
    """Raised when a write would break a business rule (duplicates, dependent rows)."""

    kind = ErrorKind.CONFLICT


class UnauthorizedError(CarLookupError):
    """Raised for bad credentials, inactive accounts and missing or invalid tokens."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationRequiredError(UnauthorizedError):
    """No bearer token, or one that fails signature/issuer/audience/expiry checks."""

    title = "Authentication required"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="A valid authentication token is required to access this resource.",
            context=context,
        )


class ForbiddenError(CarLookupError):
    """Raised when an authenticated caller lacks every role a policy allows."""

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        allowed_roles: Sequence[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.allowed_roles = list(allowed_roles)
        roles = ", ".join(f"({role})" for role in self.allowed_roles)
        super().__init__(
            message=(
                "Authorization failed. User must be part of one of the "
                f"following roles: {roles}"
            ),
            context=context,
        )
