"""
CarLookup Backend: Request Validators
======================================

What:  Business validation for request bodies and list queries.
Why:   Pydantic only guarantees shapes (a string is a string). Rules such as
       "2 to 100 characters" or "no later than next year" live here so they
       produce field-level messages in the standard error envelope.
How:   Each validator returns a list of FieldError (empty when valid).
       `ensure_valid()` raises one ValidationError carrying all of them.
Who:   Called by the managers before any database work.

Field names are reported in their wire (camelCase) form.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from carlookup.exceptions import FieldError, ValidationError
from carlookup.schemas.auth import LoginRequest
from carlookup.schemas.car import CarMakeRequest, CarModelRequest
from carlookup.schemas.pagination import CarModelPaginationQuery, PaginationQuery

FIRST_MODEL_YEAR = 1885
MODEL_NAME_FILTER_MAX = 50
MAX_PAGE_NUMBER = 2**31 - 1


def latest_model_year() -> int:
    """Manufacturers announce next year's models early, so next year is allowed."""
    return datetime.now(timezone.utc).year + 1


def ensure_valid(errors: Sequence[FieldError]) -> None:
    if errors:
        raise ValidationError(list(errors))


def _check_length(
    errors: List[FieldError],
    field: str,
    label: str,
    value: Optional[str],
    min_length: int,
    max_length: int,
) -> None:
    text = (value or "").strip()
    if not text:
        errors.append(FieldError(field, f"{label} is required"))
    elif not min_length <= len(text) <= max_length:
        errors.append(
            FieldError(field, f"{label} must be between {min_length} and {max_length} characters")
        )


# ── Bodies ────────────────────────────────────────────────────────────────
def validate_car_make_request(request: CarMakeRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    _check_length(errors, "name", "Name", request.name, 2, 100)
    _check_length(errors, "countryOfOrigin", "Country of origin", request.country_of_origin, 2, 100)
    return errors


def validate_car_model_request(request: CarModelRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    if request.make_id is None or request.make_id == uuid.UUID(int=0):
        errors.append(FieldError("makeId", "Make ID is required"))
    _check_length(errors, "name", "Name", request.name, 1, 120)

    latest = latest_model_year()
    if request.model_year < FIRST_MODEL_YEAR:
        errors.append(FieldError("modelYear", f"Model year must be {FIRST_MODEL_YEAR} or later"))
    elif request.model_year > latest:
        errors.append(FieldError("modelYear", f"Model year cannot be later than {latest}"))
    return errors


def validate_login_request(request: LoginRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    if not (request.username or "").strip():
        errors.append(FieldError("username", "Username is required"))
    if not request.password:
        errors.append(FieldError("password", "Password is required"))
    return errors


# ── Queries ───────────────────────────────────────────────────────────────
def validate_pagination_query(
    query: PaginationQuery,
    max_page_size: int,
    max_name_filter_length: int,
) -> List[FieldError]:
    """
    Reject what clamping cannot repair. Zero page/limit are left alone:
    the pagination service turns them into page 1 and the default size.
    """
    errors: List[FieldError] = []
    if query.page < 0:
        errors.append(FieldError("page", "Page number cannot be negative"))
    elif query.page > MAX_PAGE_NUMBER:
        errors.append(FieldError("page", f"Page number cannot be greater than {MAX_PAGE_NUMBER}"))
    if query.limit < 0:
        errors.append(FieldError("limit", "Page size cannot be negative"))
    elif query.limit > max_page_size:
        errors.append(FieldError("limit", f"Page size cannot be greater than {max_page_size}"))
    if query.name_contains and len(query.name_contains) > max_name_filter_length:
        errors.append(
            FieldError(
                "nameContains",
                f"Name filter cannot be longer than {max_name_filter_length} characters",
            )
        )
    return errors


def validate_car_model_pagination_query(
    query: CarModelPaginationQuery,
    max_page_size: int,
    max_name_filter_length: int,
) -> List[FieldError]:
    errors = validate_pagination_query(
        query,
        max_page_size=max_page_size,
        max_name_filter_length=min(max_name_filter_length, MODEL_NAME_FILTER_MAX),
    )
    if query.year is not None:
        latest = latest_model_year()
        if query.year < FIRST_MODEL_YEAR:
            errors.append(FieldError("year", f"Year must be {FIRST_MODEL_YEAR} or later"))
        elif query.year > latest:
            errors.append(FieldError("year", f"Year cannot be later than {latest}"))
    return errors
