"""
CarLookup Backend: Response Envelope
=====================================

What:  The wrapper every endpoint returns, success or failure.

    {
        "success": true,
        "message": "Car make retrieved successfully",
        "data": {...},
        "pagination": null,
        "meta": {"requestId": "4f0c...", "timestamp": "2024-01-15T12:00:00Z"},
        "error": null
    }

    On failure `data` is null and `error` is
    {"code": 404, "type": "NotFoundError", "details": {"field": null, "message": "..."}}.

The request id comes from the RequestIDMiddleware context variable, so the
body and the X-Request-Id header always agree.
"""

from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from pydantic import Field

from carlookup.middleware.request_id import request_id_var
from carlookup.schemas.base import CamelModel
from carlookup.schemas.pagination import PaginationInfo

T = TypeVar("T")


class ResponseMeta(CamelModel):
    request_id: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def current(cls) -> "ResponseMeta":
        """Meta for the request being served right now."""
        return cls(request_id=request_id_var.get(""))


class ErrorDetailInfo(CamelModel):
    field: Optional[str] = None
    message: str = ""


class ErrorDetails(CamelModel):
    code: int
    type: str
    details: ErrorDetailInfo = Field(default_factory=ErrorDetailInfo)


class ApiResponse(CamelModel, Generic[T]):
    success: bool
    message: str = ""
    data: Optional[T] = None
    pagination: Optional[PaginationInfo] = None
    meta: ResponseMeta = Field(default_factory=ResponseMeta.current)
    error: Optional[ErrorDetails] = None


class PagedResponse(ApiResponse[List[T]], Generic[T]):
    success: bool = True
    message: str = "Successful"
    data: List[T] = Field(default_factory=list)


def ok(data: Optional[T] = None, message: str = "Operation completed successfully") -> ApiResponse[T]:
    """Success envelope for a single item (or no item, for deletes)."""
    return ApiResponse(success=True, message=message, data=data)


def failure(
    code: int,
    error_type: str,
    message: str,
    detail: str,
    field: Optional[str] = None,
) -> ApiResponse[None]:
    """Error envelope; `message` is the headline, `detail` the specific reason."""
    return ApiResponse(
        success=False,
        message=message,
        error=ErrorDetails(
            code=code,
            type=error_type,
            details=ErrorDetailInfo(field=field, message=detail),
        ),
    )
