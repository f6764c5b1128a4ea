"""Tests for content validation, copying, export verification and audits."""

import json
import subprocess
from unittest.mock import patch

import pytest

from contracts import CheckStatus, CollectionKind
from tooling import (
    AuditError,
    BuildError,
    ContentValidator,
    ExportVerifier,
    PerformanceAuditor,
    copy_content,
    link_target,
    recommendations_for,
    scores_from_report,
)
from conftest import make_entry, make_project, make_project_document, write_json


PAGE = """<!DOCTYPE html>
<html lang="en"><head><meta charset="utf-8"><meta name="viewport" content="width=device-width">
<title>Portfolio</title></head>
<body>{body}</body></html>"""


def lighthouse_report(performance=0.95, accessibility=1.0, best_practices=0.92, seo=0.9, audits=None):
    return {
        "finalUrl": "http://localhost:3000/",
        "categories": {
            "performance": {"score": performance},
            "accessibility": {"score": accessibility},
            "best-practices": {"score": best_practices},
            "seo": {"score": seo},
        },
        "audits": audits or {},
    }


class TestContentValidator:
    """Test the content validator."""

    def test_valid_tree(self, content_dir):
        report = ContentValidator(str(content_dir)).validate_all()
        assert report.exit_code == 0
        assert report.stats.total == 6
        assert report.stats.projects == 3
        assert report.stats.knowledge == 3
        assert report.stats.success_rate == 100.0

    def test_schema_violation_fails(self, content_dir):
        write_json(content_dir / "projects" / "alpha.json", make_project_document("alpha", tags=[]))
        report = ContentValidator(str(content_dir)).validate_all()
        assert report.exit_code == 1
        bad = [r for r in report.results if not r.valid]
        assert len(bad) == 1
        assert bad[0].path.endswith("alpha.json")
        assert any(error.startswith("tags:") for error in bad[0].errors)

    def test_runtime_violation_reported(self, content_dir):
        write_json(content_dir / "projects" / "beta.json", make_project_document("beta", externalUrl="http://x.dev"))
        report = ContentValidator(str(content_dir)).validate_all()
        errors = [e for r in report.results for e in r.errors]
        assert any("Invalid external URL" in e for e in errors)

    def test_malformed_json(self, content_dir):
        (content_dir / "knowledge" / "broken.json").write_text("{", encoding="utf-8")
        report = ContentValidator(str(content_dir)).validate_all()
        assert report.stats.invalid == 1

    def test_index_key_must_resolve(self, content_dir):
        write_json(content_dir / "knowledge" / "index.json", ["react-hooks", "ghost"])
        result = ContentValidator(str(content_dir)).validate_index(
            content_dir / "knowledge" / "index.json", CollectionKind.KNOWLEDGE
        )
        assert result.valid is False
        assert "ghost" in result.errors[0]

    def test_index_inline_records_use_runtime_rules(self, tmp_path):
        path = write_json(tmp_path / "index.json", [make_project("alpha"), make_project("alpha")])
        result = ContentValidator(str(tmp_path)).validate_index(path, CollectionKind.PROJECTS)
        assert result.errors == [
            "duplicate id 'alpha' (2 records)",
            "duplicate slug 'alpha' (2 records)",
        ]

    def test_index_must_be_array(self, tmp_path):
        path = write_json(tmp_path / "index.json", {"projects": []})
        result = ContentValidator(str(tmp_path)).validate_index(path, CollectionKind.PROJECTS)
        assert result.errors == ["index must be a JSON array"]

    def test_duplicate_slugs_across_files(self, content_dir):
        write_json(content_dir / "projects" / "gamma.json", make_project_document("gamma", slug="alpha"))
        report = ContentValidator(str(content_dir)).validate_all()
        assert report.exit_code == 1
        assert any("duplicate slug 'alpha'" in e for e in report.directory_errors)

    def test_empty_directory_is_warning(self, tmp_path):
        (tmp_path / "projects").mkdir()
        write_json(tmp_path / "knowledge" / "index.json", [make_entry()])
        report = ContentValidator(str(tmp_path)).validate_all()
        assert report.warnings == [f"No JSON files found in {tmp_path / 'projects'}"]
        assert report.exit_code == 0

    def test_missing_directory_fails(self, tmp_path):
        report = ContentValidator(str(tmp_path)).validate_all()
        assert len(report.directory_errors) == 2
        assert report.exit_code == 1


class TestCopyContent:
    """Test copying content into the public directory."""

    def test_copies_json_files(self, content_dir, tmp_path):
        (content_dir / "projects" / "notes.txt").write_text("skip me", encoding="utf-8")
        target = tmp_path / "public" / "content"
        report = copy_content(str(content_dir), str(target))
        assert report.exit_code == 0
        assert "projects/alpha.json" in report.copied
        assert "knowledge/index.json" in report.copied
        assert not (target / "projects" / "notes.txt").exists()
        assert json.loads((target / "projects" / "alpha.json").read_text())["slug"] == "alpha"

    def test_malformed_file_aborts(self, content_dir, tmp_path):
        (content_dir / "knowledge" / "broken.json").write_text("{nope", encoding="utf-8")
        report = copy_content(str(content_dir), str(tmp_path / "public"))
        assert report.exit_code == 1
        assert report.error.startswith("Error copying content")

    def test_missing_source(self, tmp_path):
        report = copy_content(str(tmp_path / "missing"), str(tmp_path / "public"))
        assert report.exit_code == 1


@pytest.fixture
def export_dir(tmp_path):
    root = tmp_path / "out"
    links = '<a href="/">Home</a><a href="/projects">Projects</a><a href="/knowledge?tags=aws">K</a>' \
        '<link href="/_next/static/css/app.css">'
    (root / "projects").mkdir(parents=True)
    (root / "knowledge").mkdir()
    (root / "contact").mkdir()
    (root / "_next" / "static" / "css").mkdir(parents=True)
    (root / "index.html").write_text(PAGE.format(body=links), encoding="utf-8")
    for page in ("projects", "knowledge", "contact"):
        (root / page / "index.html").write_text(PAGE.format(body=page), encoding="utf-8")
    (root / "404.html").write_text(PAGE.format(body="Not found"), encoding="utf-8")
    (root / "_next" / "static" / "css" / "app.css").write_text("body{}", encoding="utf-8")
    return root


class TestExportVerifier:
    """Test the static export verifier."""

    def test_complete_export_passes(self, export_dir):
        report = ExportVerifier(str(export_dir), build_command="").verify()
        assert report.passed is True
        assert report.file_count == 6
        # chunks and media directories are missing
        assert {c.target for c in report.warnings} == {"_next/static/chunks", "_next/static/media"}

    def test_missing_page_fails(self, export_dir):
        (export_dir / "404.html").unlink()
        report = ExportVerifier(str(export_dir), build_command="").verify()
        assert [c.target for c in report.failures] == ["404.html"]

    def test_broken_html_fails(self, export_dir):
        (export_dir / "contact" / "index.html").write_text("<p>hi</p>", encoding="utf-8")
        report = ExportVerifier(str(export_dir), build_command="").verify()
        failure = next(c for c in report.failures if c.category == "html-content")
        assert failure.target == "contact/index.html"
        assert "doctype" in failure.detail

    def test_broken_link_fails(self, export_dir):
        index = export_dir / "index.html"
        index.write_text(index.read_text().replace("Home</a>", 'Home</a><a href="/blog">Blog</a>'))
        report = ExportVerifier(str(export_dir), build_command="").verify()
        assert [c.target for c in report.failures] == ["/blog"]

    def test_oversized_file_warns(self, export_dir):
        (export_dir / "big.bin").write_bytes(b"0" * (1024 * 1024 + 1))
        report = ExportVerifier(str(export_dir), build_command="").verify()
        assert report.passed is True
        assert any(c.category == "file-sizes" and c.target == "big.bin" for c in report.warnings)
        assert report.largest_files[0]["path"] == "big.bin"

    def test_missing_export_dir(self, tmp_path):
        report = ExportVerifier(str(tmp_path / "out"), build_command="").verify()
        assert report.exit_code == 1

    def test_runs_build_command(self, export_dir):
        with patch("tooling.export_verifier.subprocess.run") as mock_run:
            ExportVerifier(str(export_dir), build_command="npm run build").verify()
        assert mock_run.call_args[0][0] == ["npm", "run", "build"]

    def test_build_failure_raises(self, export_dir):
        error = subprocess.CalledProcessError(1, ["npm"], stderr="compile error")
        with patch("tooling.export_verifier.subprocess.run", side_effect=error):
            with pytest.raises(BuildError, match="compile error"):
                ExportVerifier(str(export_dir), build_command="npm run build").verify()

    def test_skip_build(self, export_dir):
        with patch("tooling.export_verifier.subprocess.run") as mock_run:
            ExportVerifier(str(export_dir), build_command="npm run build").verify(build=False)
        mock_run.assert_not_called()

    @pytest.mark.parametrize("link,target", [
        ("/", "index.html"),
        ("/projects", "projects/index.html"),
        ("/projects/", "projects/index.html"),
        ("/knowledge?tags=aws", "knowledge/index.html"),
        ("/contact#form", "contact/index.html"),
        ("/favicon.ico", "favicon.ico"),
    ])
    def test_link_target(self, link, target):
        assert link_target(link) == target


class TestPerformanceAuditor:
    """Test Lighthouse score handling."""

    def test_scores_from_report(self):
        scores = scores_from_report(lighthouse_report(), "http://localhost:3000/")
        assert scores.as_dict() == {
            "performance": 95.0,
            "accessibility": 100.0,
            "best-practices": 92.0,
            "seo": 90.0,
        }

    def test_null_score_counts_as_zero(self):
        assert scores_from_report(lighthouse_report(seo=None)).seo == 0.0

    def test_report_without_categories(self):
        with pytest.raises(AuditError):
            scores_from_report({"audits": {}})

    def test_recommendations_only_for_failing_categories(self):
        report = lighthouse_report(performance=0.5, audits={
            "render-blocking-resources": {"score": 0},
            "unused-css-rules": {"score": 0.95},
            "alt-text": {"score": 0},
        })
        scores = scores_from_report(report)
        issues = [r.issue for r in recommendations_for(report, scores, 90)]
        assert issues == ["Render-blocking resources"]

    def test_audit_reports(self, tmp_path):
        good = write_json(tmp_path / "a.json", lighthouse_report())
        bad = write_json(tmp_path / "b.json", lighthouse_report(performance=0.7))
        auditor = PerformanceAuditor(threshold=90)
        assert auditor.audit_reports([str(good)]).exit_code == 0
        result = auditor.audit_reports([str(good), str(bad)])
        assert result.exit_code == 1
        assert result.averages()["performance"] == pytest.approx(82.5)

    def test_unreadable_report(self, tmp_path):
        result = PerformanceAuditor(threshold=90).audit_reports([str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "missing.json" in result.errors[0]

    def test_audit_urls_runs_lighthouse(self, tmp_path):
        def fake_run(command, **kwargs):
            output = next(arg for arg in command if arg.startswith("--output-path="))
            write_json(tmp_path / output.split("=", 1)[1], lighthouse_report())

        auditor = PerformanceAuditor(threshold=90, lighthouse_command="npx lighthouse")
        with patch("tooling.performance_auditor.subprocess.run", side_effect=fake_run) as mock_run:
            result = auditor.audit_urls(["http://localhost:3000/"], output_dir=str(tmp_path))
        assert mock_run.call_args[0][0][:3] == ["npx", "lighthouse", "http://localhost:3000/"]
        assert result.passed is True
        assert result.scores[0].url == "http://localhost:3000/"

    def test_lighthouse_failure_is_collected(self):
        error = subprocess.CalledProcessError(1, ["npx"])
        with patch("tooling.performance_auditor.subprocess.run", side_effect=error):
            result = PerformanceAuditor(threshold=90).audit_urls(["http://localhost:3000/"])
        assert result.exit_code == 1
        assert "Lighthouse audit failed" in result.errors[0]
