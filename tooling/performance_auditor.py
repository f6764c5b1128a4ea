"""Lighthouse performance audit.

Runs the Lighthouse CLI against each URL (or reads reports it already
produced) and checks every category score against a minimum.
"""

import json
import logging
import shlex
import subprocess
import tempfile
import threading
from contextlib import contextmanager
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from config import settings
from contracts import AuditReport, AuditScores, Recommendation

logger = logging.getLogger(__name__)

# Lighthouse category id -> AuditScores field
CATEGORIES = {
    "performance": "performance",
    "accessibility": "accessibility",
    "best-practices": "best_practices",
    "seo": "seo",
}

# (category, audit id, passing score, issue, suggestion, priority)
AUDIT_HINTS = (
    ("performance", "render-blocking-resources", 1.0, "Render-blocking resources",
     "Eliminate render-blocking resources using async/defer attributes", "high"),
    ("performance", "unused-css-rules", 0.9, "Unused CSS rules",
     "Remove unused CSS rules to reduce page size", "medium"),
    ("performance", "uses-responsive-images", 1.0, "Unoptimized images",
     "Serve properly sized images and use modern formats", "high"),
    ("performance", "efficient-animated-content", 1.0, "Large animated content",
     "Optimize animated content or provide static alternatives", "medium"),
    ("accessibility", "alt-text", 1.0, "Missing alt text",
     "Add descriptive alt text to all meaningful images", "high"),
    ("accessibility", "color-contrast", 1.0, "Poor color contrast",
     "Improve color contrast ratios for better readability", "high"),
    ("accessibility", "label", 1.0, "Missing form labels",
     "Ensure all form inputs have proper labels", "high"),
    ("seo", "meta-description", 1.0, "Missing meta descriptions",
     "Add unique meta descriptions to all pages", "high"),
    ("seo", "http-status-code", 1.0, "HTTP status issues",
     "Fix HTTP status codes and redirects", "high"),
    ("best-practices", "errors-in-console", 1.0, "JavaScript errors",
     "Fix JavaScript errors in console", "high"),
)

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


class AuditError(RuntimeError):
    """Lighthouse could not produce a usable report."""


def scores_from_report(report: Mapping[str, Any], url: Optional[str] = None) -> AuditScores:
    """Extract 0-100 category scores from a Lighthouse JSON report.

    Lighthouse reports scores as 0-1; a null score (audit errored) counts as 0.
    """
    try:
        categories = report["categories"]
        values = {
            field: float(categories[category].get("score") or 0) * 100
            for category, field in CATEGORIES.items()
        }
    except (KeyError, TypeError, AttributeError) as e:
        raise AuditError(f"Report has no score for {e}") from e
    return AuditScores(url=url or report.get("finalUrl") or report.get("requestedUrl", ""), **values)


def recommendations_for(
    report: Mapping[str, Any],
    scores: AuditScores,
    threshold: float,
) -> List[Recommendation]:
    """Suggestions for failing audits in categories scoring under the threshold."""
    audits = report.get("audits") or {}
    failing = set(scores.below(threshold))
    found = []
    for category, audit_id, passing, issue, suggestion, priority in AUDIT_HINTS:
        if category not in failing:
            continue
        audit = audits.get(audit_id)
        if audit and audit.get("score") is not None and audit["score"] < passing:
            found.append(Recommendation(
                category=category, issue=issue, suggestion=suggestion, priority=priority,
            ))
    return found


@contextmanager
def serve_directory(directory: str, port: int) -> Iterator[str]:
    """Serve a static export on localhost for the duration of the block."""
    handler = partial(SimpleHTTPRequestHandler, directory=directory)
    server = ThreadingHTTPServer(("127.0.0.1", port), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    logger.info("Serving %s on port %d", directory, port)
    try:
        yield f"http://localhost:{port}/"
    finally:
        server.shutdown()
        server.server_close()


class PerformanceAuditor:
    """Collects Lighthouse scores and judges them against a threshold."""

    def __init__(
        self,
        threshold: Optional[float] = None,
        lighthouse_command: Optional[str] = None,
    ):
        self.threshold = settings.audit_min_score if threshold is None else threshold
        self.lighthouse_command = lighthouse_command or settings.lighthouse_command

    def run_lighthouse(self, url: str, output_path: Path) -> Dict[str, Any]:
        """Run Lighthouse for one URL and return the parsed JSON report."""
        command = shlex.split(self.lighthouse_command) + [
            url,
            "--output=json",
            f"--output-path={output_path}",
            "--chrome-flags=--headless --no-sandbox",
            "--preset=desktop",
            "--quiet",
        ]
        logger.info("Running Lighthouse audit for %s", url)
        try:
            subprocess.run(command, check=True, capture_output=True, text=True)
            return json.loads(output_path.read_text(encoding="utf-8"))
        except (OSError, ValueError, subprocess.CalledProcessError) as e:
            raise AuditError(f"Lighthouse audit failed for {url}: {e}") from e

    def _add(self, audit: AuditReport, report: Mapping[str, Any], url: Optional[str] = None) -> None:
        scores = scores_from_report(report, url)
        audit.scores.append(scores)
        for rec in recommendations_for(report, scores, self.threshold):
            if all(r.issue != rec.issue for r in audit.recommendations):
                audit.recommendations.append(rec)
        for name, score in scores.as_dict().items():
            logger.debug("%s %s: %.0f", scores.url, name, score)

    def _finish(self, audit: AuditReport) -> AuditReport:
        audit.recommendations.sort(key=lambda r: PRIORITY_ORDER.get(r.priority, len(PRIORITY_ORDER)))
        for scores in audit.scores:
            low = scores.below(self.threshold)
            if low:
                logger.warning("%s below %.0f: %s", scores.url, self.threshold, ", ".join(low))
        return audit

    def audit_urls(self, urls: Iterable[str], output_dir: Optional[str] = None) -> AuditReport:
        """Run Lighthouse for every URL. Failures are collected, not raised."""
        audit = AuditReport(threshold=self.threshold)
        with tempfile.TemporaryDirectory() as scratch:
            target_dir = Path(output_dir or scratch)
            target_dir.mkdir(parents=True, exist_ok=True)
            for index, url in enumerate(urls):
                try:
                    report = self.run_lighthouse(url, target_dir / f"lighthouse-{index}.json")
                    self._add(audit, report, url)
                except AuditError as e:
                    audit.errors.append(str(e))
                    logger.error(str(e))
        return self._finish(audit)

    def audit_reports(self, paths: Iterable[str]) -> AuditReport:
        """Score Lighthouse JSON reports already on disk."""
        audit = AuditReport(threshold=self.threshold)
        for path in paths:
            try:
                report = json.loads(Path(path).read_text(encoding="utf-8"))
                self._add(audit, report)
            except (OSError, ValueError, AuditError) as e:
                audit.errors.append(f"Failed to read Lighthouse report {path}: {e}")
                logger.error(audit.errors[-1])
        return self._finish(audit)
