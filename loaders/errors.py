"""Exceptions raised by content validation and loading."""

from typing import Optional


class ContentError(Exception):
    """Base class for content layer failures."""


class ContentValidationError(ContentError, ValueError):
    """A record is structurally invalid.

    Attributes:
        entity: Entity name, e.g. 'Project' or 'KnowledgeEntry'.
        field: On-disk field name that failed, '<root>' for the record itself.
        reason: Human-readable description of the failed constraint.
    """

    def __init__(self, entity: str, field: str, reason: str):
        self.entity = entity
        self.field = field
        self.reason = reason
        super().__init__(f"{entity} validation failed: {reason}")


class ContentFetchError(ContentError):
    """A content request failed after all retries, or returned a non-success status."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"{url}: {reason}")


class ContentLoadError(ContentError):
    """A whole collection could not be loaded (strict call sites only)."""

    def __init__(self, collection: str, reason: str):
        self.collection = collection
        super().__init__(
            f"Failed to load {collection}: {reason}. Check the content source and try again."
        )
