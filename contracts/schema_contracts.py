"""Strict authoring schema for content files.

Stricter than the runtime contracts: every documented key is typed, long-form
fields are required, and unknown keys are rejected. Used by the content
validator before files are published.
"""

from typing import List, Optional

from pydantic import (
    AnyUrl,
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    StrictBool,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel


DOCUMENT_SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
DOCUMENT_SUMMARY_MAX_LENGTH = 200
PROJECT_MAX_TAGS = 10
KNOWLEDGE_MAX_TAGS = 8

# Stored values stay strings; these only check the format
_DATE_TIME = TypeAdapter(AwareDatetime)
_HTTP_URL = TypeAdapter(HttpUrl)
_ANY_URL = TypeAdapter(AnyUrl)


def _check(adapter: TypeAdapter, value: Optional[str], message: str) -> Optional[str]:
    if value is None:
        return value
    try:
        adapter.validate_python(value)
    except ValidationError as e:
        raise ValueError(f"{message}: {e.errors()[0]['msg']}") from e
    return value


def _check_date_time(value: Optional[str]) -> Optional[str]:
    return _check(_DATE_TIME, value, "must be a date-time with timezone (e.g. 2024-01-01T00:00:00Z)")


class _Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=False,
        extra="forbid",
    )


class ProjectDocument(_Document):
    """Authoring shape of a project file."""

    id: str = Field(..., min_length=1, strict=True)
    title: str = Field(..., min_length=1, strict=True)
    slug: str = Field(..., pattern=DOCUMENT_SLUG_PATTERN, strict=True)
    summary: str = Field(..., min_length=1, max_length=DOCUMENT_SUMMARY_MAX_LENGTH, strict=True)
    description: str = Field(..., min_length=1, strict=True)
    external_url: str = Field(..., min_length=1, strict=True)
    og_image: Optional[StrictStr] = None
    tags: List[StrictStr] = Field(..., min_length=1, max_length=PROJECT_MAX_TAGS)
    featured: Optional[StrictBool] = None
    published_at: str = Field(..., min_length=1, strict=True)
    content: str = Field(..., min_length=1, strict=True)

    _published_at = field_validator("published_at")(_check_date_time)

    @field_validator("external_url", "og_image")
    @classmethod
    def _http_uri(cls, value: Optional[str]) -> Optional[str]:
        return _check(_HTTP_URL, value, "must be an absolute http(s) URL")

    @field_validator("tags")
    @classmethod
    def _non_empty_tags(cls, value: List[str]) -> List[str]:
        if any(not tag for tag in value):
            raise ValueError("tags must be non-empty strings")
        return value


class KnowledgeDocument(_Document):
    """Authoring shape of a knowledge entry file."""

    id: str = Field(..., min_length=1, strict=True)
    title: str = Field(..., min_length=1, strict=True)
    summary: str = Field(..., min_length=1, max_length=DOCUMENT_SUMMARY_MAX_LENGTH, strict=True)
    description: str = Field(..., min_length=1, strict=True)
    category: str = Field(..., min_length=1, strict=True)
    tags: List[StrictStr] = Field(..., min_length=1, max_length=KNOWLEDGE_MAX_TAGS)
    link: Optional[StrictStr] = None
    published_at: str = Field(..., min_length=1, strict=True)
    last_updated: Optional[StrictStr] = None
    content: str = Field(..., min_length=1, strict=True)

    _dates = field_validator("published_at", "last_updated")(_check_date_time)

    @field_validator("link")
    @classmethod
    def _link(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value.startswith("/"):
            return value
        return _check(_ANY_URL, value, "must be an absolute URL or a site path starting with /")

    @field_validator("tags")
    @classmethod
    def _non_empty_tags(cls, value: List[str]) -> List[str]:
        if any(not tag for tag in value):
            raise ValueError("tags must be non-empty strings")
        return value


class SchemaIssue(BaseModel):
    """A single schema violation: JSON path plus message."""
    path: str = Field(..., description="Dotted path to the offending value, 'root' for the record")
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"
