"""Validators that narrow raw JSON records to typed content.

`validate_project` and `validate_knowledge_entry` enforce the runtime rules
shared by every load path and stop at the first failing field.
`schema_errors` checks the stricter authoring schema and reports every issue.
"""

from typing import Any, List, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from contracts import (
    CollectionKind,
    ContentModel,
    KnowledgeDocument,
    KnowledgeEntry,
    Project,
    ProjectDocument,
    SchemaIssue,
)
from .errors import ContentValidationError

M = TypeVar("M", bound=ContentModel)

ROOT_FIELD = "<root>"

SCHEMAS: dict = {
    CollectionKind.PROJECTS: ProjectDocument,
    CollectionKind.KNOWLEDGE: KnowledgeDocument,
}


def _validate(model: Type[M], entity: str, raw: Any) -> M:
    if not isinstance(raw, Mapping):
        raise ContentValidationError(entity, ROOT_FIELD, "record must be a JSON object")
    try:
        return model.model_validate(dict(raw))
    except ValidationError as e:
        first = e.errors()[0]
        loc = first.get("loc") or ()
        field = str(loc[0]) if loc else ROOT_FIELD
        label = model.FIELD_LABELS.get(field, f"Invalid {field}")
        raise ContentValidationError(entity, field, f"{label} ({first['msg']})") from e


def validate_project(raw: Any) -> Project:
    """Validate a raw project record.

    Args:
        raw: Decoded JSON value.

    Returns:
        The record as a Project; unknown keys are kept.

    Raises:
        ContentValidationError: On the first failing field.
    """
    return _validate(Project, "Project", raw)


def validate_knowledge_entry(raw: Any) -> KnowledgeEntry:
    """Validate a raw knowledge entry record.

    Raises:
        ContentValidationError: On the first failing field.
    """
    return _validate(KnowledgeEntry, "KnowledgeEntry", raw)


def is_valid_project(raw: Any) -> bool:
    try:
        validate_project(raw)
    except ContentValidationError:
        return False
    return True


def is_valid_knowledge_entry(raw: Any) -> bool:
    try:
        validate_knowledge_entry(raw)
    except ContentValidationError:
        return False
    return True


def schema_errors(raw: Any, kind: CollectionKind) -> List[SchemaIssue]:
    """Check a raw record against the authoring schema for its collection.

    Args:
        raw: Decoded JSON value.
        kind: Which collection the record belongs to.

    Returns:
        Every schema issue found; empty when the record conforms.
    """
    schema: Type[BaseModel] = SCHEMAS[CollectionKind(kind)]
    if not isinstance(raw, Mapping):
        return [SchemaIssue(path="root", message="must be an object")]
    try:
        schema.model_validate(dict(raw))
    except ValidationError as e:
        return [
            SchemaIssue(
                path=".".join(str(part) for part in err.get("loc", ())) or "root",
                message=err["msg"],
            )
            for err in e.errors()
        ]
    return []
