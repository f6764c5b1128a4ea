"""Content contracts for projects and knowledge entries.

Field names are snake_case in Python and camelCase on disk; every model
validates from and dumps to the camelCase JSON shape.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel
from typing import ClassVar, Dict, Generic, List, Optional, TypeVar
from enum import Enum


SLUG_PATTERN = r"^[a-z0-9-]+$"
SECURE_URL_PREFIX = "https://"
TITLE_MAX_LENGTH = 100
SUMMARY_MAX_LENGTH = 280


class ExperienceLevel(str, Enum):
    """Self-assessed proficiency for a knowledge entry."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ResourceType(str, Enum):
    """Kind of learning resource linked from a knowledge entry."""
    DOCUMENTATION = "documentation"
    TUTORIAL = "tutorial"
    COURSE = "course"
    CERTIFICATION = "certification"
    BLOG = "blog"


class ContentModel(BaseModel):
    """Base for file-backed content records.

    Unknown keys are kept so a validated record dumps back unchanged. Only the
    camelCase keys populate fields; a snake_case key is just another unknown key.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="allow",
        frozen=True,
    )

    # Display label per field, used in validation error messages
    FIELD_LABELS: ClassVar[Dict[str, str]] = {}

    def to_record(self) -> Dict:
        """Dump to the on-disk camelCase shape, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Project(ContentModel):
    """A portfolio entry. `slug` is the routing key, `id` the storage key."""

    FIELD_LABELS: ClassVar[Dict[str, str]] = {
        "id": "Invalid or missing id",
        "title": "Invalid title",
        "summary": "Invalid summary",
        "featured": "Invalid featured flag",
        "slug": "Invalid slug",
        "externalUrl": "Invalid external URL",
        "tags": "Invalid tags",
        "ogImage": "Invalid OG image",
    }

    id: str = Field(..., min_length=1, strict=True)
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, strict=True)
    summary: str = Field(..., min_length=1, max_length=SUMMARY_MAX_LENGTH, strict=True)
    featured: bool = Field(..., strict=True)
    slug: str = Field(..., pattern=SLUG_PATTERN, strict=True)
    external_url: str = Field(..., min_length=1, strict=True)
    tags: List[StrictStr] = Field(default_factory=list)
    og_image: Optional[str] = Field(None, strict=True)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value):
        # null tags are treated as absent
        if value is None:
            return []
        return value

    @field_validator("external_url")
    @classmethod
    def _require_https(cls, value: str) -> str:
        if not value.startswith(SECURE_URL_PREFIX):
            raise ValueError(f"must start with {SECURE_URL_PREFIX}")
        return value


class LearningResource(BaseModel):
    """A link to further reading for a knowledge entry."""
    model_config = ConfigDict(extra="allow", frozen=True)

    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    type: ResourceType


class KnowledgeEntry(ContentModel):
    """A skill or technology entry, grouped by category."""

    FIELD_LABELS: ClassVar[Dict[str, str]] = {
        "id": "Invalid or missing id",
        "title": "Invalid title",
        "summary": "Invalid summary",
        "category": "Invalid category",
        "tags": "Invalid or missing tags",
        "experienceLevel": "Invalid experience level",
        "yearsOfExperience": "Invalid years of experience",
        "relatedProjects": "Invalid related projects",
        "certifications": "Invalid certifications",
        "learningResources": "Invalid learning resources",
    }

    id: str = Field(..., min_length=1, strict=True)
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, strict=True)
    summary: str = Field(..., min_length=1, max_length=SUMMARY_MAX_LENGTH, strict=True)
    category: str = Field(..., min_length=1, strict=True)
    tags: List[StrictStr]
    link: Optional[str] = None
    description: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    years_of_experience: Optional[float] = Field(None, ge=0)
    related_projects: Optional[List[str]] = Field(
        None, description="Project slugs; resolved at render time, never owned"
    )
    certifications: Optional[List[str]] = None
    learning_resources: Optional[List[LearningResource]] = None
    last_updated: Optional[str] = None


class ContentFilters(BaseModel):
    """Criteria for narrowing a knowledge listing. Empty means no filter."""
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    search: Optional[str] = None

    def is_empty(self) -> bool:
        """True when no criterion is set."""
        return not (self.category or self.tags or self.search)


class PaginationOptions(BaseModel):
    """1-indexed page request."""
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=12, ge=1)


T = TypeVar("T")


class PaginatedResult(BaseModel, Generic[T]):
    """One page of a collection plus the numbers needed to render pagers."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: List[T]
    total: int = Field(..., ge=0, description="Collection size before slicing")
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class RelatedProject(BaseModel):
    """A project referenced from a knowledge entry.

    When the slug does not resolve, only `slug` is known and `title` falls
    back to the slug itself.
    """
    slug: str
    title: str
    summary: Optional[str] = None
    external_url: Optional[str] = None
    resolved: bool = False

    @classmethod
    def from_project(cls, project: Project) -> "RelatedProject":
        return cls(
            slug=project.slug,
            title=project.title,
            summary=project.summary,
            external_url=project.external_url,
            resolved=True,
        )

    @classmethod
    def stub(cls, slug: str) -> "RelatedProject":
        return cls(slug=slug, title=slug)
