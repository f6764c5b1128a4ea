"""Pagination and featured selection over loaded collections."""

import math
from typing import List, Optional, Sequence, Type, TypeVar

from contracts import PaginatedResult, PaginationOptions, Project

T = TypeVar("T")

FEATURED_LIMIT = 3


def paginate(
    items: Sequence[T],
    options: PaginationOptions,
    result_type: Type[PaginatedResult] = PaginatedResult,
) -> PaginatedResult[T]:
    """Slice one 1-indexed page out of a collection.

    The page is never clamped: a page past the end yields an empty `data`
    while `page`, `total` and `total_pages` still describe the request and the
    full collection.

    Args:
        items: Already filtered collection.
        options: Page number and page size.
        result_type: Concrete (parametrized) result model to build.

    Returns:
        PaginatedResult with the slice [(page-1)*limit, page*limit).
    """
    total = len(items)
    start = (options.page - 1) * options.limit
    end = start + options.limit
    return result_type(
        data=list(items[start:end]),
        total=total,
        page=options.page,
        limit=options.limit,
        total_pages=math.ceil(total / options.limit),
    )


def paginate_projects(projects: Sequence[Project], options: PaginationOptions) -> PaginatedResult[Project]:
    """Paginate a project collection."""
    return paginate(projects, options, PaginatedResult[Project])


def get_featured_projects(projects: Sequence[Project], limit: Optional[int] = None) -> List[Project]:
    """First featured projects in collection order, at most `limit` (default 3)."""
    limit = FEATURED_LIMIT if limit is None else limit
    return [p for p in projects if p.featured is True][:limit]
