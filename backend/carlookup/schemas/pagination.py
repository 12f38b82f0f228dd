"""
CarLookup Backend: Pagination Schemas
======================================

What:  Offset-pagination query objects and the metadata block returned with
       every paged response.

Query semantics:
    page   1-based. 0 is accepted and clamped to 1.
    limit  0 selects the configured default page size; anything above the
           configured maximum is rejected by validation.
"""

from typing import Optional

from pydantic import Field

from carlookup.schemas.base import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Query Parameter Models
# ══════════════════════════════════════════════════════════════════════════


class PaginationQuery(CamelModel):
    page: int = Field(default=1, description="1-based page number")
    limit: int = Field(default=0, description="Items per page; 0 uses the default page size")
    name_contains: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring filter on the name",
    )


class CarModelPaginationQuery(PaginationQuery):
    year: Optional[int] = Field(default=None, description="Exact model year filter")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PaginationInfo(CamelModel):
    """
    Page metadata plus ready-to-follow links.

    next_page / prev_page are relative URLs carrying page, limit and every
    active filter; they are null at the ends of the result set.
    """

    current_page: int
    total_pages: int
    total_items: int
    limit: int
    next_page: Optional[str] = None
    prev_page: Optional[str] = None
