"""Base content loader shared by the build-time and runtime sources."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, TypeVar

from contracts import ContentFilters, KnowledgeEntry, Project
from catalog import filter_knowledge_entries
from .errors import ContentError, ContentLoadError
from .validators import validate_knowledge_entry, validate_project

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROJECTS = "projects"
KNOWLEDGE = "knowledge"
INDEX_NAME = "index"

# Failures a single read can produce: missing file, bad JSON, network, bad record
LOAD_ERRORS = (OSError, ValueError, ContentError)


class ContentLoader(ABC):
    """Loads and validates the `projects` and `knowledge` collections.

    Subclasses only supply `read_document`; collection assembly, validation,
    fault containment and by-key fallback live here.

    Every collection has an `index` document holding either full records or
    keys of per-entity documents. A failure anywhere in a collection load
    (read, parse or any single invalid record) aborts the whole collection.
    """

    @property
    @abstractmethod
    def source(self) -> str:
        """Human-readable description of where content comes from."""
        pass

    @abstractmethod
    def read_document(self, collection: str, name: str) -> Any:
        """Read and decode `{collection}/{name}.json`.

        Raises:
            OSError, ValueError or ContentError on any failure.
        """
        pass

    # --- Collections ---

    def load_projects(self, strict: bool = False) -> List[Project]:
        """Load every project.

        Args:
            strict: Raise ContentLoadError instead of returning [] on failure.
        """
        return self._load_or_empty(PROJECTS, validate_project, strict)

    def load_knowledge_entries(
        self,
        filters: Optional[ContentFilters] = None,
        strict: bool = False,
    ) -> List[KnowledgeEntry]:
        """Load every knowledge entry, optionally narrowed by filters.

        Args:
            filters: Category/tags/search criteria applied after validation.
            strict: Raise ContentLoadError instead of returning [] on failure.
        """
        entries = self._load_or_empty(KNOWLEDGE, validate_knowledge_entry, strict)
        if filters is not None and not filters.is_empty():
            entries = filter_knowledge_entries(entries, filters)
        return entries

    # --- Single entities ---

    def load_project_by_slug(self, slug: str) -> Optional[Project]:
        """Load one project by slug; None when it cannot be found."""
        return self._load_one(
            PROJECTS,
            slug,
            validate_project,
            lambda: self.load_projects(),
            lambda project: project.slug == slug,
        )

    def load_knowledge_entry_by_id(self, entry_id: str) -> Optional[KnowledgeEntry]:
        """Load one knowledge entry by id; None when it cannot be found."""
        return self._load_one(
            KNOWLEDGE,
            entry_id,
            validate_knowledge_entry,
            lambda: self.load_knowledge_entries(),
            lambda entry: entry.id == entry_id,
        )

    # --- Internals ---

    def _load_collection(self, collection: str, validator: Callable[[Any], T]) -> List[T]:
        index = self.read_document(collection, INDEX_NAME)
        if not isinstance(index, list):
            raise ValueError(f"{collection}/{INDEX_NAME}.json must be a JSON array")

        records: List[T] = []
        for item in index:
            raw = self.read_document(collection, item) if isinstance(item, str) else item
            records.append(validator(raw))
        return records

    def _load_or_empty(
        self,
        collection: str,
        validator: Callable[[Any], T],
        strict: bool,
    ) -> List[T]:
        try:
            records = self._load_collection(collection, validator)
        except LOAD_ERRORS as e:
            logger.error("Error loading %s from %s: %s", collection, self.source, e)
            if strict:
                raise ContentLoadError(collection, str(e)) from e
            return []
        logger.debug("Loaded %d %s from %s", len(records), collection, self.source)
        return records

    def _load_one(
        self,
        collection: str,
        key: str,
        validator: Callable[[Any], T],
        load_all: Callable[[], List[T]],
        matches: Callable[[T], bool],
    ) -> Optional[T]:
        try:
            return validator(self.read_document(collection, key))
        except LOAD_ERRORS as e:
            logger.warning(
                "Failed to load %s/%s.json (%s), falling back to %s.json...",
                collection, key, e, INDEX_NAME,
            )

        for record in load_all():
            if matches(record):
                return record
        logger.info("No %s entry matches %r", collection, key)
        return None
