"""Page data builders.

Each builder gathers what one page template needs from a content loader.
HTML rendering happens elsewhere; listing pages show an empty state and
detail pages a not-found page instead of raising.
"""

from typing import Iterable, List, Mapping, Optional

from config import settings
from contracts import (
    HomePageData,
    KnowledgeDetailData,
    KnowledgePageData,
    PaginationOptions,
    ProjectDetailData,
    ProjectsPageData,
    RelatedProject,
)
from catalog import (
    filter_knowledge_entries,
    get_featured_projects,
    get_unique_categories,
    get_unique_tags,
    paginate_projects,
    parse_knowledge_filters,
)
from loaders import ContentLoader


def build_home_page(loader: ContentLoader) -> HomePageData:
    """Featured projects for the home page."""
    projects = loader.load_projects()
    return HomePageData(
        featured_projects=get_featured_projects(projects, settings.featured_limit)
    )


def build_projects_page(
    loader: ContentLoader,
    page: int = 1,
    limit: Optional[int] = None,
) -> ProjectsPageData:
    """One page of the projects listing.

    `not_found` is set when the page lies past the last page of a non-empty
    collection; the result itself is left unclamped.
    """
    options = PaginationOptions(page=page, limit=limit or settings.projects_page_size)
    result = paginate_projects(loader.load_projects(), options)
    return ProjectsPageData(
        result=result,
        not_found=result.total_pages > 0 and options.page > result.total_pages,
    )


def build_project_detail(loader: ContentLoader, slug: str) -> ProjectDetailData:
    return ProjectDetailData(slug=slug, project=loader.load_project_by_slug(slug))


def build_knowledge_page(
    loader: ContentLoader,
    params: Optional[Mapping[str, object]] = None,
) -> KnowledgePageData:
    """Knowledge listing narrowed by `category`, `tags` and `search` parameters.

    Facets (categories, tags) always come from the full collection.
    """
    entries = loader.load_knowledge_entries()
    filters = parse_knowledge_filters(params)
    return KnowledgePageData(
        entries=filter_knowledge_entries(entries, filters),
        total=len(entries),
        categories=get_unique_categories(entries),
        tags=get_unique_tags(entries),
        filters=filters,
    )


def resolve_related_projects(loader: ContentLoader, slugs: Iterable[str]) -> List[RelatedProject]:
    """Resolve project slugs; an unknown slug degrades to a stub titled by its slug."""
    related: List[RelatedProject] = []
    for slug in slugs:
        project = loader.load_project_by_slug(slug)
        related.append(RelatedProject.from_project(project) if project else RelatedProject.stub(slug))
    return related


def build_knowledge_detail(loader: ContentLoader, entry_id: str) -> KnowledgeDetailData:
    entry = loader.load_knowledge_entry_by_id(entry_id)
    if entry is None:
        return KnowledgeDetailData(entry_id=entry_id)
    return KnowledgeDetailData(
        entry_id=entry_id,
        entry=entry,
        related_projects=resolve_related_projects(loader, entry.related_projects or []),
    )
