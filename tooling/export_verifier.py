"""Static export verification.

Optionally runs the site build, then checks the export directory for the
expected pages, asset directories, basic HTML structure, resolvable internal
links from the home page and oversized files.
"""

import logging
import re
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from config import settings
from contracts import CheckStatus, ExportCheck, ExportReport

logger = logging.getLogger(__name__)

EXPECTED_FILES = (
    "index.html",
    "projects/index.html",
    "knowledge/index.html",
    "contact/index.html",
    "404.html",
)

ASSET_DIRS = (
    "_next/static/css",
    "_next/static/chunks",
    "_next/static/media",
)

# (file, page name)
HTML_PAGES = (
    ("index.html", "Home"),
    ("projects/index.html", "Projects"),
    ("knowledge/index.html", "Knowledge"),
    ("contact/index.html", "Contact"),
)

HTML_MARKERS = {
    "doctype": "<!DOCTYPE html>",
    "html": "<html",
    "head": "<head",
    "body": "<body",
    "title": "<title",
}

ACCESSIBILITY_MARKERS = {
    "lang": "lang=",
    "charset": "charset=",
    "viewport": 'name="viewport"',
}

INTERNAL_LINK = re.compile(r'href="(/[^"]*)"')
OVERSIZED_BYTES = 1024 * 1024
LARGEST_FILES_SHOWN = 10


class BuildError(RuntimeError):
    """The configured build command failed."""


def _mb(size: int) -> str:
    return f"{size / 1024 / 1024:.2f} MB"


def link_target(link: str) -> str:
    """Export-relative file a site link should resolve to."""
    path = link.split("#", 1)[0].split("?", 1)[0].strip("/")
    if not path:
        return "index.html"
    # Asset links point at files, page links at directory indexes
    if Path(path).suffix:
        return path
    return f"{path}/index.html"


class ExportVerifier:
    """Checks a static export directory."""

    def __init__(self, export_dir: Optional[str] = None, build_command: Optional[str] = None):
        self.export_dir = Path(export_dir) if export_dir else settings.get_export_path()
        self.build_command = settings.build_command if build_command is None else build_command

    def run_build(self) -> None:
        """Run the build command, if one is configured."""
        if not self.build_command:
            return
        logger.info("Running build: %s", self.build_command)
        try:
            subprocess.run(
                shlex.split(self.build_command),
                check=True,
                capture_output=True,
                text=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            output = getattr(e, "stderr", "") or ""
            raise BuildError(f"Build failed: {e}\n{output}".strip()) from e
        logger.info("Build completed")

    def check_structure(self) -> List[ExportCheck]:
        checks = []
        for name in EXPECTED_FILES:
            path = self.export_dir / name
            if path.is_file():
                checks.append(ExportCheck(
                    category="directory-structure", target=name,
                    status=CheckStatus.PASS, detail=f"{path.stat().st_size} bytes",
                ))
            else:
                checks.append(ExportCheck(
                    category="directory-structure", target=name,
                    status=CheckStatus.FAIL, detail="missing",
                ))
        return checks

    def check_assets(self) -> List[ExportCheck]:
        """Asset directories are optional; missing or empty ones only warn."""
        checks = []
        for name in ASSET_DIRS:
            path = self.export_dir / name
            if path.is_dir():
                count = sum(1 for _ in path.iterdir())
                checks.append(ExportCheck(
                    category="static-assets", target=name,
                    status=CheckStatus.PASS if count else CheckStatus.WARN,
                    detail=f"{count} files",
                ))
            else:
                checks.append(ExportCheck(
                    category="static-assets", target=name,
                    status=CheckStatus.WARN, detail="not found",
                ))
        return checks

    def check_html(self) -> List[ExportCheck]:
        checks = []
        for name, page in HTML_PAGES:
            try:
                content = (self.export_dir / name).read_text(encoding="utf-8")
            except OSError as e:
                checks.append(ExportCheck(
                    category="html-content", target=name,
                    status=CheckStatus.FAIL, detail=f"Cannot read {page} page: {e}",
                ))
                continue

            missing = [key for key, marker in HTML_MARKERS.items() if marker not in content]
            checks.append(ExportCheck(
                category="html-content", target=name,
                status=CheckStatus.FAIL if missing else CheckStatus.PASS,
                detail=f"missing {', '.join(missing)}" if missing else f"{page} page structure is valid",
            ))

            missing = [key for key, marker in ACCESSIBILITY_MARKERS.items() if marker not in content]
            if missing:
                checks.append(ExportCheck(
                    category="accessibility", target=name,
                    status=CheckStatus.WARN, detail=f"missing {', '.join(missing)}",
                ))
        return checks

    def check_links(self) -> List[ExportCheck]:
        """Every internal link on the home page must exist in the export."""
        try:
            content = (self.export_dir / "index.html").read_text(encoding="utf-8")
        except OSError as e:
            return [ExportCheck(
                category="internal-links", target="index.html",
                status=CheckStatus.FAIL, detail=f"Cannot verify links: {e}",
            )]

        links = sorted(set(INTERNAL_LINK.findall(content)))
        logger.debug("Found %d unique internal links", len(links))
        checks = []
        for link in links:
            # Protocol-relative URLs point off-site
            if link.startswith("//"):
                continue
            target = link_target(link)
            exists = (self.export_dir / target).is_file()
            checks.append(ExportCheck(
                category="internal-links", target=link,
                status=CheckStatus.PASS if exists else CheckStatus.FAIL,
                detail=f"-> {target}" if exists else f"-> {target} is missing",
            ))
        return checks

    def check_sizes(self, report: ExportReport) -> List[ExportCheck]:
        files: List[Tuple[str, int]] = [
            (p.relative_to(self.export_dir).as_posix(), p.stat().st_size)
            for p in self.export_dir.rglob("*")
            if p.is_file()
        ]
        files.sort(key=lambda f: f[1], reverse=True)

        report.file_count = len(files)
        report.total_size = sum(size for _, size in files)
        report.largest_files = [
            {"path": path, "size": size} for path, size in files[:LARGEST_FILES_SHOWN]
        ]
        logger.info("Total export size: %s", _mb(report.total_size))

        return [
            ExportCheck(
                category="file-sizes", target=path,
                status=CheckStatus.WARN, detail=f"larger than 1MB ({_mb(size)})",
            )
            for path, size in files
            if size > OVERSIZED_BYTES
        ]

    def verify(self, build: bool = True) -> ExportReport:
        """Run the build (when configured and `build` is set) and all checks.

        Raises:
            BuildError: When the build command fails.
        """
        if build:
            self.run_build()

        report = ExportReport(export_dir=str(self.export_dir))
        if not self.export_dir.is_dir():
            report.checks.append(ExportCheck(
                category="directory-structure", target=str(self.export_dir),
                status=CheckStatus.FAIL, detail="Export directory not found",
            ))
            logger.error("Export directory not found: %s", self.export_dir)
            return report

        report.checks.extend(self.check_structure())
        report.checks.extend(self.check_assets())
        report.checks.extend(self.check_html())
        report.checks.extend(self.check_links())
        report.checks.extend(self.check_sizes(report))

        for check in report.failures:
            logger.error("%s: %s %s", check.category, check.target, check.detail)
        for check in report.warnings:
            logger.warning("%s: %s %s", check.category, check.target, check.detail)
        return report
