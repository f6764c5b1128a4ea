"""Pydantic contracts for the portfolio content toolkit.

Content records, authoring schema, site/page data and tooling reports are all
typed through these contracts.
"""

from .content_contracts import (
    SLUG_PATTERN,
    SECURE_URL_PREFIX,
    TITLE_MAX_LENGTH,
    SUMMARY_MAX_LENGTH,
    ExperienceLevel,
    ResourceType,
    ContentModel,
    Project,
    LearningResource,
    KnowledgeEntry,
    ContentFilters,
    PaginationOptions,
    PaginatedResult,
    RelatedProject,
)

from .schema_contracts import (
    ProjectDocument,
    KnowledgeDocument,
    SchemaIssue,
)

from .site_contracts import (
    SiteConfig,
    StructuredDataKind,
    RobotsDirective,
    OpenGraphImage,
    OpenGraph,
    TwitterCard,
    PageMetadata,
    HomePageData,
    ProjectsPageData,
    ProjectDetailData,
    KnowledgePageData,
    KnowledgeDetailData,
    FormStatus,
    ContactFormData,
    ContactFormState,
)

from .tooling_contracts import (
    CollectionKind,
    FileValidationResult,
    ValidationStats,
    ValidationReport,
    CopyReport,
    CheckStatus,
    ExportCheck,
    ExportReport,
    AuditScores,
    Recommendation,
    AuditReport,
)

__all__ = [
    # Content
    "SLUG_PATTERN",
    "SECURE_URL_PREFIX",
    "TITLE_MAX_LENGTH",
    "SUMMARY_MAX_LENGTH",
    "ExperienceLevel",
    "ResourceType",
    "ContentModel",
    "Project",
    "LearningResource",
    "KnowledgeEntry",
    "ContentFilters",
    "PaginationOptions",
    "PaginatedResult",
    "RelatedProject",
    # Schema
    "ProjectDocument",
    "KnowledgeDocument",
    "SchemaIssue",
    # Site
    "SiteConfig",
    "StructuredDataKind",
    "RobotsDirective",
    "OpenGraphImage",
    "OpenGraph",
    "TwitterCard",
    "PageMetadata",
    "HomePageData",
    "ProjectsPageData",
    "ProjectDetailData",
    "KnowledgePageData",
    "KnowledgeDetailData",
    "FormStatus",
    "ContactFormData",
    "ContactFormState",
    # Tooling
    "CollectionKind",
    "FileValidationResult",
    "ValidationStats",
    "ValidationReport",
    "CopyReport",
    "CheckStatus",
    "ExportCheck",
    "ExportReport",
    "AuditScores",
    "Recommendation",
    "AuditReport",
]
