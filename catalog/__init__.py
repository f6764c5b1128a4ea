"""In-memory filtering, pagination and facet utilities for content collections."""

from .filters import (
    filter_by_category,
    filter_by_tags,
    filter_by_search,
    matches_search,
    filter_knowledge_entries,
    get_unique_categories,
    get_unique_tags,
    parse_knowledge_filters,
)
from .pagination import (
    FEATURED_LIMIT,
    paginate,
    paginate_projects,
    get_featured_projects,
)

__all__ = [
    "filter_by_category",
    "filter_by_tags",
    "filter_by_search",
    "matches_search",
    "filter_knowledge_entries",
    "get_unique_categories",
    "get_unique_tags",
    "parse_knowledge_filters",
    "FEATURED_LIMIT",
    "paginate",
    "paginate_projects",
    "get_featured_projects",
]
