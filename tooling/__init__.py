"""Site tooling: content validation and copying, export checks, audits."""

from .content_validator import ContentValidator
from .content_copier import copy_content
from .export_verifier import BuildError, ExportVerifier, link_target
from .performance_auditor import (
    AuditError,
    PerformanceAuditor,
    recommendations_for,
    scores_from_report,
    serve_directory,
)

__all__ = [
    "ContentValidator",
    "copy_content",
    "BuildError",
    "ExportVerifier",
    "link_target",
    "AuditError",
    "PerformanceAuditor",
    "recommendations_for",
    "scores_from_report",
    "serve_directory",
]
