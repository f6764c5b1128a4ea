"""Loaders and validators for portfolio content."""

from typing import Optional

from config import settings
from .errors import (
    ContentError,
    ContentValidationError,
    ContentFetchError,
    ContentLoadError,
)
from .validators import (
    validate_project,
    validate_knowledge_entry,
    is_valid_project,
    is_valid_knowledge_entry,
    schema_errors,
)
from .base import ContentLoader, PROJECTS, KNOWLEDGE
from .file_loader import FileContentLoader
from .http_loader import HttpContentLoader

__all__ = [
    "ContentError",
    "ContentValidationError",
    "ContentFetchError",
    "ContentLoadError",
    "validate_project",
    "validate_knowledge_entry",
    "is_valid_project",
    "is_valid_knowledge_entry",
    "schema_errors",
    "ContentLoader",
    "PROJECTS",
    "KNOWLEDGE",
    "FileContentLoader",
    "HttpContentLoader",
    "get_loader",
]


def get_loader(base_url: Optional[str] = None) -> ContentLoader:
    """Return an HTTP loader when a base URL is configured, else the file loader."""
    url = base_url if base_url is not None else settings.base_url
    if url:
        return HttpContentLoader(base_url=url)
    return FileContentLoader()
