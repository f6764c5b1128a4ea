"""Shared fixtures: raw records and on-disk content trees."""

import json
from pathlib import Path

import pytest


def make_project(key="sample-project", **overrides):
    """A raw project record that passes runtime validation; `key` is its id and slug."""
    record = {
        "id": key,
        "title": key.replace("-", " ").title(),
        "slug": key,
        "summary": f"Summary of {key}",
        "externalUrl": f"https://github.com/example/{key}",
        "tags": ["python", "aws"],
        "featured": False,
    }
    record.update(overrides)
    return record


def make_entry(key="sample-entry", **overrides):
    """A raw knowledge entry record that passes runtime validation."""
    record = {
        "id": key,
        "title": key.replace("-", " ").title(),
        "summary": f"Summary of {key}",
        "category": "Frontend",
        "tags": ["react"],
    }
    record.update(overrides)
    return record


def make_project_document(key="sample-project", **overrides):
    """A project file that also satisfies the authoring schema."""
    record = make_project(
        key,
        description="Longer description",
        publishedAt="2024-01-01T00:00:00Z",
        content="Body text",
    )
    record.update(overrides)
    return record


def make_entry_document(key="sample-entry", **overrides):
    """A knowledge file that also satisfies the authoring schema."""
    record = make_entry(
        key,
        description="Longer description",
        publishedAt="2024-01-01T00:00:00Z",
        content="Body text",
    )
    record.update(overrides)
    return record


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def write_collection(root: Path, collection: str, records, key: str) -> None:
    """Write one file per record plus an index listing their keys."""
    for record in records:
        write_json(root / collection / f"{record[key]}.json", record)
    write_json(root / collection / "index.json", [r[key] for r in records])


@pytest.fixture
def content_dir(tmp_path):
    """A valid content tree with two projects and two knowledge entries."""
    root = tmp_path / "content"
    write_collection(
        root,
        "projects",
        [
            make_project_document("alpha", featured=True),
            make_project_document("beta"),
        ],
        "id",
    )
    write_collection(
        root,
        "knowledge",
        [
            make_entry_document("react-hooks", tags=["react", "hooks"]),
            make_entry_document("aws-lambda", category="Cloud", tags=["aws", "serverless"]),
        ],
        "id",
    )
    return root
