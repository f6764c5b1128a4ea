"""Content validator for the content directory.

Every entity file must pass both the runtime validator and the authoring
schema. Each collection's index.json is checked as a listing: inline records
must pass the runtime validator and keys must resolve to files.
"""

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import settings
from contracts import (
    CollectionKind,
    FileValidationResult,
    ValidationReport,
)
from loaders import (
    ContentValidationError,
    schema_errors,
    validate_knowledge_entry,
    validate_project,
)

logger = logging.getLogger(__name__)

INDEX_FILE = "index.json"

RUNTIME_VALIDATORS = {
    CollectionKind.PROJECTS: validate_project,
    CollectionKind.KNOWLEDGE: validate_knowledge_entry,
}

# Keys that must be unique within a collection
UNIQUE_KEYS = {
    CollectionKind.PROJECTS: ("id", "slug"),
    CollectionKind.KNOWLEDGE: ("id",),
}


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


class ContentValidator:
    """Validates every JSON file under `content/projects` and `content/knowledge`."""

    def __init__(self, content_dir: Optional[str] = None):
        self.content_dir = Path(content_dir) if content_dir else settings.get_content_path()

    def validate_record(self, data: Any, kind: CollectionKind) -> List[str]:
        """Runtime and schema errors for one decoded record."""
        errors: List[str] = []
        try:
            RUNTIME_VALIDATORS[kind](data)
        except ContentValidationError as e:
            errors.append(str(e))
        errors.extend(str(issue) for issue in schema_errors(data, kind))
        return errors

    def validate_file(self, path: Path, kind: CollectionKind) -> FileValidationResult:
        """Validate one entity file."""
        try:
            data = _read_json(path)
        except (OSError, ValueError) as e:
            return FileValidationResult(path=str(path), kind=kind, valid=False, errors=[str(e)])

        errors = self.validate_record(data, kind)
        return FileValidationResult(
            path=str(path),
            kind=kind,
            valid=not errors,
            errors=errors,
            record=data if isinstance(data, dict) else None,
        )

    def validate_index(self, path: Path, kind: CollectionKind) -> FileValidationResult:
        """Validate a collection listing: inline records or keys of sibling files."""
        try:
            data = _read_json(path)
        except (OSError, ValueError) as e:
            return FileValidationResult(path=str(path), kind=kind, valid=False, errors=[str(e)])

        if not isinstance(data, list):
            return FileValidationResult(
                path=str(path), kind=kind, valid=False, errors=["index must be a JSON array"]
            )

        errors: List[str] = []
        records: List[Dict[str, Any]] = []
        for position, item in enumerate(data):
            if isinstance(item, str):
                if not (path.parent / f"{item}.json").is_file():
                    errors.append(f"[{position}] {item}: no matching {item}.json")
            elif isinstance(item, dict):
                try:
                    RUNTIME_VALIDATORS[kind](item)
                except ContentValidationError as e:
                    errors.append(f"[{position}] {e}")
                records.append(item)
            else:
                errors.append(f"[{position}] must be a record or a key string")

        errors.extend(self._duplicate_errors(records, kind))
        return FileValidationResult(path=str(path), kind=kind, valid=not errors, errors=errors)

    def _duplicate_errors(self, records: List[Dict[str, Any]], kind: CollectionKind) -> List[str]:
        errors = []
        for key in UNIQUE_KEYS[kind]:
            counts = Counter(r.get(key) for r in records if isinstance(r.get(key), str))
            for value, count in sorted(counts.items()):
                if count > 1:
                    errors.append(f"duplicate {key} '{value}' ({count} records)")
        return errors

    def validate_directory(self, kind: CollectionKind, report: ValidationReport) -> None:
        """Validate every JSON file of one collection into the report."""
        directory = self.content_dir / kind.value
        if not directory.is_dir():
            message = f"Failed to read directory: {directory}"
            report.directory_errors.append(message)
            logger.error(message)
            return

        json_files = sorted(p for p in directory.iterdir() if p.suffix == ".json")
        if not json_files:
            warning = f"No JSON files found in {directory}"
            report.warnings.append(warning)
            logger.warning(warning)
            return

        logger.info("Validating %d %s files in %s", len(json_files), kind.value, directory)
        entity_records: List[Dict[str, Any]] = []
        for path in json_files:
            if path.name == INDEX_FILE:
                result = self.validate_index(path, kind)
            else:
                result = self.validate_file(path, kind)
                if result.record is not None:
                    entity_records.append(result.record)
            self._record(report, result)

        report.directory_errors.extend(
            f"{directory}: {error}" for error in self._duplicate_errors(entity_records, kind)
        )

    def _record(self, report: ValidationReport, result: FileValidationResult) -> None:
        report.results.append(result)
        stats = report.stats
        stats.total += 1
        if result.kind == CollectionKind.PROJECTS:
            stats.projects += 1
        else:
            stats.knowledge += 1
        if result.valid:
            stats.valid += 1
            logger.info("%s is valid", Path(result.path).name)
        else:
            stats.invalid += 1
            for error in result.errors:
                logger.error("%s - %s", Path(result.path).name, error)

    def validate_all(self) -> ValidationReport:
        """Validate both collections. `report.exit_code` is 0 only if all is valid."""
        logger.info("Starting content validation in %s", self.content_dir)
        report = ValidationReport()
        for kind in (CollectionKind.PROJECTS, CollectionKind.KNOWLEDGE):
            self.validate_directory(kind, report)
        return report
