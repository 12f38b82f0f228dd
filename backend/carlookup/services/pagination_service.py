"""
CarLookup Backend: Pagination Service
======================================

What:  Normalizes page/limit and builds the pagination block with links.
Why:   Every list endpoint paginates the same way; the rules live in one place.
How:   `clamp()` turns a validated query into safe offsets. `build_page_info()`
       computes page counts from the total and renders next/prev URLs.
Who:   CarMakeManager (makes list, models-of-a-make list).

Clamping rules:
    page  → max(1, page)
    limit → default_page_size when 0, then bounded to [1, max_page_size]

Page info rules:
    total_pages  = ceil(total_items / limit), or 0 when there are no items
    current_page = 1 when total_pages is 0, else min(page, total_pages)
    next_page    present when current_page < total_pages
    prev_page    present when current_page > 1
"""

import math
from typing import Any, Dict, Optional, TypeVar
from urllib.parse import quote, urlencode

from carlookup.config import Settings
from carlookup.schemas.pagination import PaginationInfo, PaginationQuery

Q = TypeVar("Q", bound=PaginationQuery)


class PaginationService:
    def __init__(self, default_page_size: int = 20, max_page_size: int = 100):
        if default_page_size < 1 or max_page_size < 1:
            raise ValueError("Page sizes must be positive")
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "PaginationService":
        return cls(
            default_page_size=settings.default_page_size,
            max_page_size=settings.max_page_size,
        )

    def clamp(self, query: Q) -> Q:
        """Return a copy of `query` with page and limit made safe; filters pass through."""
        limit = self.default_page_size if query.limit == 0 else query.limit
        return query.model_copy(
            update={
                "page": max(1, query.page),
                "limit": min(self.max_page_size, max(1, limit)),
            }
        )

    def build_page_info(
        self,
        page: int,
        limit: int,
        total_items: int,
        base_path: str,
        extra_filters: Optional[Dict[str, Any]] = None,
    ) -> PaginationInfo:
        total_pages = 0 if total_items == 0 else math.ceil(total_items / limit)
        current_page = 1 if total_pages == 0 else min(page, total_pages)
        has_next = total_pages > 0 and current_page < total_pages
        has_prev = current_page > 1

        return PaginationInfo(
            current_page=current_page,
            total_pages=total_pages,
            total_items=total_items,
            limit=limit,
            next_page=(
                self._build_url(base_path, current_page + 1, limit, extra_filters)
                if has_next else None
            ),
            prev_page=(
                self._build_url(base_path, current_page - 1, limit, extra_filters)
                if has_prev else None
            ),
        )

    @staticmethod
    def _build_url(
        base_path: str,
        page: int,
        limit: int,
        extra_filters: Optional[Dict[str, Any]],
    ) -> str:
        params: Dict[str, str] = {"page": str(page), "limit": str(limit)}
        for key, value in (extra_filters or {}).items():
            # None and whitespace-only filters are dropped from links
            if value is None or not str(value).strip():
                continue
            params[key] = str(value)
        return f"{base_path}?{urlencode(params, quote_via=quote)}"
