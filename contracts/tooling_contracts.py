"""Contracts for the site tooling reports (validation, export checks, audits)."""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from enum import Enum


class CollectionKind(str, Enum):
    """Content collections under the content directory."""
    PROJECTS = "projects"
    KNOWLEDGE = "knowledge"


class FileValidationResult(BaseModel):
    """Outcome of validating one content file."""
    path: str
    kind: CollectionKind
    valid: bool
    errors: List[str] = Field(default_factory=list)
    record: Optional[Dict[str, Any]] = Field(
        default=None, exclude=True, description="Decoded entity, when it parsed to an object"
    )


class ValidationStats(BaseModel):
    total: int = 0
    valid: int = 0
    invalid: int = 0
    projects: int = 0
    knowledge: int = 0

    @property
    def success_rate(self) -> float:
        """Share of valid files in percent; 0 when nothing was checked."""
        if self.total == 0:
            return 0.0
        return self.valid / self.total * 100


class ValidationReport(BaseModel):
    """Result of a full content validation run."""
    results: List[FileValidationResult] = Field(default_factory=list)
    stats: ValidationStats = Field(default_factory=ValidationStats)
    warnings: List[str] = Field(default_factory=list)
    directory_errors: List[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.stats.invalid == 0 and not self.directory_errors

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1


class CopyReport(BaseModel):
    """Files copied into the public content directory."""
    copied: List[str] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return 0 if self.error is None else 1


class CheckStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


class ExportCheck(BaseModel):
    """A single check against the static export."""
    category: str = Field(..., description="e.g. directory-structure, static-assets, html-content")
    target: str
    status: CheckStatus
    detail: str = ""


class ExportReport(BaseModel):
    """Result of verifying a static export directory."""
    export_dir: str
    checks: List[ExportCheck] = Field(default_factory=list)
    total_size: int = 0
    file_count: int = 0
    largest_files: List[Dict[str, Any]] = Field(default_factory=list, description="path and size of the biggest files")

    @property
    def failures(self) -> List[ExportCheck]:
        return [c for c in self.checks if c.status == CheckStatus.FAIL]

    @property
    def warnings(self) -> List[ExportCheck]:
        return [c for c in self.checks if c.status == CheckStatus.WARN]

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1


class AuditScores(BaseModel):
    """Lighthouse category scores for one URL, 0-100."""
    url: str
    performance: float = Field(..., ge=0, le=100)
    accessibility: float = Field(..., ge=0, le=100)
    best_practices: float = Field(..., ge=0, le=100)
    seo: float = Field(..., ge=0, le=100)

    def as_dict(self) -> Dict[str, float]:
        return {
            "performance": self.performance,
            "accessibility": self.accessibility,
            "best-practices": self.best_practices,
            "seo": self.seo,
        }

    def below(self, threshold: float) -> List[str]:
        """Category names scoring under the threshold."""
        return [name for name, score in self.as_dict().items() if score < threshold]


class Recommendation(BaseModel):
    """A suggested fix for a failing Lighthouse audit."""
    category: str
    issue: str
    suggestion: str
    priority: str = Field(default="medium", description="high, medium or low")


class AuditReport(BaseModel):
    """Result of a performance audit across URLs."""
    threshold: float
    scores: List[AuditScores] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)

    def averages(self) -> Dict[str, float]:
        """Mean score per category across audited URLs."""
        if not self.scores:
            return {}
        totals: Dict[str, float] = {}
        for scores in self.scores:
            for name, score in scores.as_dict().items():
                totals[name] = totals.get(name, 0.0) + score
        return {name: total / len(self.scores) for name, total in totals.items()}

    @property
    def passed(self) -> bool:
        if self.errors or not self.scores:
            return False
        return all(not s.below(self.threshold) for s in self.scores)

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1
