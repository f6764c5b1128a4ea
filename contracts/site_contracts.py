"""Site-level contracts: identity, page metadata, page data and the contact form."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from enum import Enum

from .content_contracts import (
    ContentFilters,
    KnowledgeEntry,
    PaginatedResult,
    Project,
    RelatedProject,
)


class SiteConfig(BaseModel):
    """Immutable site identity passed into metadata generation."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str
    url: str = Field(..., description="Canonical origin, no trailing slash")
    og_image: str = Field(default="/og-image.jpg", description="Site-relative default OG image")
    author: str
    twitter_handle: Optional[str] = None
    social_links: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class StructuredDataKind(str, Enum):
    """schema.org types emitted as JSON-LD."""
    PERSON = "person"
    WEBSITE = "website"
    ARTICLE = "article"


class RobotsDirective(BaseModel):
    index: bool = True
    follow: bool = True


class OpenGraphImage(BaseModel):
    url: str
    width: int = 1200
    height: int = 630
    alt: str


class OpenGraph(BaseModel):
    type: str = "website"
    locale: str = "en_US"
    url: str
    title: str
    description: str
    site_name: str
    images: List[OpenGraphImage] = Field(default_factory=list)


class TwitterCard(BaseModel):
    card: str = "summary_large_image"
    title: str
    description: str
    images: List[str] = Field(default_factory=list)
    creator: Optional[str] = None


class PageMetadata(BaseModel):
    """Everything a page head needs for SEO and link previews."""
    title: str
    description: str
    canonical_url: str
    keywords: List[str] = Field(default_factory=list)
    authors: List[str] = Field(default_factory=list)
    robots: RobotsDirective = Field(default_factory=RobotsDirective)
    open_graph: OpenGraph
    twitter: TwitterCard


# --- Page data ---

class HomePageData(BaseModel):
    """Data for the home page."""
    featured_projects: List[Project] = Field(default_factory=list)


class ProjectsPageData(BaseModel):
    """Data for one page of the projects listing."""
    result: PaginatedResult[Project]
    not_found: bool = Field(default=False, description="Requested page lies beyond the last page")

    @property
    def is_empty(self) -> bool:
        return self.result.total == 0


class ProjectDetailData(BaseModel):
    """Data for a project detail page; `project` is None for the not-found page."""
    slug: str
    project: Optional[Project] = None

    @property
    def not_found(self) -> bool:
        return self.project is None


class KnowledgePageData(BaseModel):
    """Data for the filtered knowledge listing."""
    entries: List[KnowledgeEntry] = Field(default_factory=list)
    total: int = Field(default=0, description="Entries before filtering")
    categories: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    filters: ContentFilters = Field(default_factory=ContentFilters)

    @property
    def is_empty(self) -> bool:
        return not self.entries


class KnowledgeDetailData(BaseModel):
    """Data for a knowledge detail page; `entry` is None for the not-found page."""
    entry_id: str
    entry: Optional[KnowledgeEntry] = None
    related_projects: List[RelatedProject] = Field(default_factory=list)

    @property
    def not_found(self) -> bool:
        return self.entry is None


# --- Contact form ---

class FormStatus(str, Enum):
    """Lifecycle of the contact form."""
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


class ContactFormData(BaseModel):
    """Field values of the contact form."""
    name: str = ""
    email: str = ""
    message: str = ""


class ContactFormState(BaseModel):
    """Snapshot of the contact form: values, per-field errors and status."""
    status: FormStatus = FormStatus.EDITING
    data: ContactFormData = Field(default_factory=ContactFormData)
    errors: Dict[str, str] = Field(default_factory=dict)
