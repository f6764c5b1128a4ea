"""Tests for the runtime validators and the authoring schema check."""

import pytest

from contracts import CollectionKind, Project
from loaders import (
    ContentValidationError,
    is_valid_knowledge_entry,
    is_valid_project,
    schema_errors,
    validate_knowledge_entry,
    validate_project,
)
from conftest import make_entry, make_entry_document, make_project, make_project_document


class TestValidateProject:
    """Test validate_project."""

    def test_valid_record_round_trips(self):
        """A valid record comes back as a Project equal to its input."""
        raw = make_project(ogImage="/images/a.png")
        project = validate_project(raw)
        assert isinstance(project, Project)
        assert project.to_record() == raw

    def test_not_an_object(self):
        with pytest.raises(ContentValidationError) as exc:
            validate_project(["not", "a", "record"])
        assert exc.value.field == "<root>"

    def test_missing_id(self):
        raw = make_project()
        del raw["id"]
        with pytest.raises(ContentValidationError, match="Invalid or missing id"):
            validate_project(raw)

    def test_snake_case_key_does_not_satisfy_required_field(self):
        """`external_url` is not the on-disk key; `externalUrl` is still missing."""
        raw = make_project("alpha")
        raw["external_url"] = raw.pop("externalUrl")
        with pytest.raises(ContentValidationError) as exc:
            validate_project(raw)
        assert exc.value.field == "externalUrl"
        assert not is_valid_project(raw)

    def test_snake_case_extra_key_round_trips(self):
        """An `og_image` key is kept as an unknown key, not renamed."""
        raw = make_project("alpha", og_image="https://example.com/a.png")
        project = validate_project(raw)
        assert project.og_image is None
        assert project.to_record() == raw

    def test_invalid_slug(self):
        """Uppercase letters are not allowed in slugs."""
        with pytest.raises(ContentValidationError) as exc:
            validate_project(make_project(slug="Bad_Slug"))
        assert exc.value.field == "slug"
        assert str(exc.value).startswith("Project validation failed: Invalid slug")

    def test_http_url_rejected(self):
        """External URLs must be https."""
        with pytest.raises(ContentValidationError) as exc:
            validate_project(make_project(externalUrl="http://example.com"))
        assert exc.value.field == "externalUrl"

    def test_title_too_long(self):
        validate_project(make_project(title="t" * 100))
        with pytest.raises(ContentValidationError, match="Invalid title"):
            validate_project(make_project(title="t" * 101))

    def test_summary_too_long(self):
        validate_project(make_project(summary="s" * 280))
        with pytest.raises(ContentValidationError, match="Invalid summary"):
            validate_project(make_project(summary="s" * 281))

    def test_featured_must_be_boolean(self):
        """Truthy strings are not coerced."""
        with pytest.raises(ContentValidationError, match="Invalid featured flag"):
            validate_project(make_project(featured="true"))

    def test_tags_must_be_strings(self):
        with pytest.raises(ContentValidationError, match="Invalid tags"):
            validate_project(make_project(tags=["python", 3]))

    def test_first_failing_field_is_reported(self):
        """Only the first failing field in check order is reported."""
        with pytest.raises(ContentValidationError) as exc:
            validate_project(make_project(slug="BAD", externalUrl="http://x"))
        assert exc.value.field == "slug"

    def test_is_valid_project(self):
        assert is_valid_project(make_project()) is True
        assert is_valid_project(make_project(featured=None)) is False


class TestValidateKnowledgeEntry:
    """Test validate_knowledge_entry."""

    def test_valid_entry(self):
        raw = make_entry(link="/knowledge/react")
        assert validate_knowledge_entry(raw).to_record() == raw

    def test_snake_case_extra_key_round_trips(self):
        raw = make_entry("react", experience_level="advanced")
        entry = validate_knowledge_entry(raw)
        assert entry.experience_level is None
        assert entry.to_record() == raw

    def test_missing_category(self):
        raw = make_entry()
        del raw["category"]
        with pytest.raises(ContentValidationError) as exc:
            validate_knowledge_entry(raw)
        assert exc.value.entity == "KnowledgeEntry"
        assert exc.value.field == "category"

    def test_tags_required(self):
        raw = make_entry()
        del raw["tags"]
        with pytest.raises(ContentValidationError, match="Invalid or missing tags"):
            validate_knowledge_entry(raw)

    def test_empty_title(self):
        assert is_valid_knowledge_entry(make_entry(title="")) is False


class TestSchemaErrors:
    """Test the strict authoring schema."""

    def test_conforming_documents(self):
        assert schema_errors(make_project_document(), CollectionKind.PROJECTS) == []
        assert schema_errors(make_entry_document(), CollectionKind.KNOWLEDGE) == []

    def test_reports_every_issue(self):
        """Unlike the runtime validator, all problems are listed."""
        raw = make_project_document(slug="Bad--Slug", summary="s" * 201, tags=[])
        paths = {issue.path for issue in schema_errors(raw, CollectionKind.PROJECTS)}
        assert {"slug", "summary", "tags"} <= paths

    def test_rejects_unknown_keys(self):
        raw = make_project_document(stars=5)
        paths = [issue.path for issue in schema_errors(raw, CollectionKind.PROJECTS)]
        assert paths == ["stars"]

    def test_missing_long_form_fields(self):
        """Runtime-valid records can still miss authoring fields."""
        paths = {issue.path for issue in schema_errors(make_project(), CollectionKind.PROJECTS)}
        assert paths == {"description", "publishedAt", "content"}

    def test_date_time_format(self):
        raw = make_entry_document(publishedAt="2024-01-01")
        issues = schema_errors(raw, CollectionKind.KNOWLEDGE)
        assert [i.path for i in issues] == ["publishedAt"]

    def test_knowledge_tag_limit(self):
        raw = make_entry_document(tags=[f"t{i}" for i in range(9)])
        assert [i.path for i in schema_errors(raw, CollectionKind.KNOWLEDGE)] == ["tags"]

    @pytest.mark.parametrize("published_at", [
        "2024-13-01T00:00:00Z",
        "2024-01-01T00:00:00",
        "yesterday",
    ])
    def test_invalid_published_at(self, published_at):
        """Dates must parse and carry a timezone."""
        raw = make_project_document(publishedAt=published_at)
        issues = schema_errors(raw, CollectionKind.PROJECTS)
        assert [i.path for i in issues] == ["publishedAt"]

    def test_published_at_with_offset(self):
        raw = make_entry_document(publishedAt="2024-01-01T09:30:00.5+02:00")
        assert schema_errors(raw, CollectionKind.KNOWLEDGE) == []

    def test_invalid_last_updated(self):
        raw = make_entry_document(lastUpdated="2024-02-30T00:00:00Z")
        assert [i.path for i in schema_errors(raw, CollectionKind.KNOWLEDGE)] == ["lastUpdated"]

    @pytest.mark.parametrize("url", [
        "ftp://example.com/repo",
        "https://exa mple.com/x",
        "/projects/alpha",
        "github.com/example",
    ])
    def test_external_url_must_be_http(self, url):
        raw = make_project_document(externalUrl=url)
        assert [i.path for i in schema_errors(raw, CollectionKind.PROJECTS)] == ["externalUrl"]

    @pytest.mark.parametrize("url", ["mailto:someone@example.com", "/images/og.png"])
    def test_og_image_must_be_http(self, url):
        raw = make_project_document(ogImage=url)
        assert [i.path for i in schema_errors(raw, CollectionKind.PROJECTS)] == ["ogImage"]

    def test_og_image_http_url(self):
        raw = make_project_document(ogImage="https://example.com/og.png")
        assert schema_errors(raw, CollectionKind.PROJECTS) == []

    def test_knowledge_link_may_be_site_path(self):
        assert schema_errors(make_entry_document(link="/projects/alpha"), CollectionKind.KNOWLEDGE) == []

    def test_knowledge_link_may_be_absolute_url(self):
        raw = make_entry_document(link="https://docs.example.com/react")
        assert schema_errors(raw, CollectionKind.KNOWLEDGE) == []

    @pytest.mark.parametrize("link", ["react docs", "projects/alpha", ""])
    def test_malformed_knowledge_link(self, link):
        raw = make_entry_document(link=link)
        assert [i.path for i in schema_errors(raw, CollectionKind.KNOWLEDGE)] == ["link"]

    def test_non_object(self):
        issues = schema_errors("nope", CollectionKind.KNOWLEDGE)
        assert issues[0].path == "root"
