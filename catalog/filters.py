"""Filtering and facet extraction over loaded knowledge entries.

All functions are pure: they never mutate their input and always return new lists.
"""

from typing import Iterable, List, Mapping, Optional, Sequence, Union

from contracts import ContentFilters, KnowledgeEntry


def filter_by_category(entries: Sequence[KnowledgeEntry], category: Optional[str]) -> List[KnowledgeEntry]:
    """Keep entries whose category equals `category`, ignoring case."""
    if not category:
        return list(entries)
    wanted = category.lower()
    return [e for e in entries if e.category.lower() == wanted]


def filter_by_tags(entries: Sequence[KnowledgeEntry], tags: Optional[Iterable[str]]) -> List[KnowledgeEntry]:
    """Keep entries carrying every requested tag (AND), ignoring case."""
    wanted = {t.lower() for t in (tags or []) if t}
    if not wanted:
        return list(entries)
    return [e for e in entries if wanted <= {t.lower() for t in e.tags}]


def matches_search(entry: KnowledgeEntry, term: str) -> bool:
    """True when the lower-cased term occurs in title, summary, category or any tag."""
    needle = term.lower()
    return (
        needle in entry.title.lower()
        or needle in entry.summary.lower()
        or needle in entry.category.lower()
        or any(needle in tag.lower() for tag in entry.tags)
    )


def filter_by_search(entries: Sequence[KnowledgeEntry], term: Optional[str]) -> List[KnowledgeEntry]:
    """Keep entries matching a case-insensitive substring search."""
    if not term:
        return list(entries)
    return [e for e in entries if matches_search(e, term)]


def filter_knowledge_entries(
    entries: Sequence[KnowledgeEntry],
    filters: Optional[ContentFilters],
) -> List[KnowledgeEntry]:
    """Apply category AND tags AND search criteria.

    Args:
        entries: Already validated entries.
        filters: Criteria; None or empty criteria keep everything.

    Returns:
        Matching entries in their original order.
    """
    if filters is None:
        return list(entries)
    filtered = filter_by_category(entries, filters.category)
    filtered = filter_by_tags(filtered, filters.tags)
    return filter_by_search(filtered, filters.search)


def get_unique_categories(entries: Iterable[KnowledgeEntry]) -> List[str]:
    """Distinct categories, sorted."""
    return sorted({e.category for e in entries})


def get_unique_tags(entries: Iterable[KnowledgeEntry]) -> List[str]:
    """Distinct tags across all entries, sorted."""
    return sorted({tag for e in entries for tag in e.tags})


def _first(value: Union[str, Sequence[str], None]) -> Optional[str]:
    # Repeated query keys arrive as lists; only a single string is honoured
    if isinstance(value, str):
        return value
    return None


def parse_knowledge_filters(params: Optional[Mapping[str, Union[str, Sequence[str], None]]]) -> ContentFilters:
    """Build filters from listing query parameters.

    Accepts `category`, `tags` (comma-separated) and `search`. Missing or
    non-string values mean "no filter"; blank tags are dropped.
    """
    if not params:
        return ContentFilters()
    tags_param = _first(params.get("tags"))
    tags = [t.strip() for t in tags_param.split(",") if t.strip()] if tags_param else []
    return ContentFilters(
        category=_first(params.get("category")) or None,
        tags=tags,
        search=_first(params.get("search")) or None,
    )
