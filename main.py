#!/usr/bin/env python3
"""Portfolio content CLI - validate, publish and browse the site content.

Usage:
    # Check every content file before a build
    python main.py validate

    # Copy content into public/ and verify the static export
    python main.py copy-content
    python main.py verify-export --build-command "npm run build"

    # Browse content the way the site pages see it
    python main.py projects --page 2
    python main.py knowledge --category Frontend --tags react,typescript
    python main.py --base-url https://example.com project sample-project
"""

import json
import logging
import sys
from typing import Optional, Tuple

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.markup import escape
    from rich.panel import Panel
    from rich.table import Table
except ImportError:
    print("Missing dependencies. Run: pip install click rich")
    sys.exit(1)

from config import settings
from contracts import CheckStatus
from loaders import ContentLoader, FileContentLoader, get_loader
from pages import (
    build_knowledge_detail,
    build_knowledge_page,
    build_project_detail,
    build_projects_page,
)
from tooling import (
    BuildError,
    ContentValidator,
    ExportVerifier,
    PerformanceAuditor,
    copy_content,
    serve_directory,
)


console = Console()
log_console = Console(stderr=True)

STATUS_STYLES = {
    CheckStatus.PASS: "[green]✓[/green]",
    CheckStatus.WARN: "[yellow]![/yellow]",
    CheckStatus.FAIL: "[red]✗[/red]",
}


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=log_console, show_path=False)],
        force=True,
    )


def make_loader(base_url: Optional[str], content_dir: Optional[str]) -> ContentLoader:
    """HTTP loader when a base URL is given, file loader otherwise."""
    if content_dir and not base_url:
        return FileContentLoader(content_dir)
    return get_loader(base_url)


def score_style(score: float, threshold: float) -> str:
    if score >= threshold:
        return "green"
    if score >= 70:
        return "yellow"
    return "red"


@click.group()
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Verbose output"
)
@click.option(
    "--content-dir",
    default=None,
    help=f"Content directory (default: {settings.content_dir})"
)
@click.option(
    "--base-url",
    default=None,
    help="Fetch content over HTTP from this site instead of the content directory"
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, content_dir: Optional[str], base_url: Optional[str]):
    """Portfolio: content tooling for the portfolio site."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["content_dir"] = content_dir
    ctx.obj["base_url"] = base_url


@cli.command()
@click.pass_context
def validate(ctx: click.Context):
    """Validate every project and knowledge file."""
    validator = ContentValidator(ctx.obj["content_dir"])
    console.print(Panel.fit(
        "[bold blue]Content validation[/bold blue]\n"
        f"[dim]{validator.content_dir}[/dim]",
        border_style="blue"
    ))

    report = validator.validate_all()
    stats = report.stats

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  Total files:  {stats.total}")
    console.print(f"  [green]Valid:[/green]        {stats.valid}")
    console.print(f"  [red]Invalid:[/red]      {stats.invalid}")
    console.print(f"  Projects:     {stats.projects}")
    console.print(f"  Knowledge:    {stats.knowledge}")
    console.print(f"  Success rate: {stats.success_rate:.1f}%")

    invalid = [r for r in report.results if not r.valid]
    if invalid or report.directory_errors:
        console.print(f"\n[red]Errors:[/red]")
        for result in invalid:
            for error in result.errors:
                console.print(f"  - {result.path}: {error}")
        for error in report.directory_errors:
            console.print(f"  - {error}")

    if report.warnings:
        console.print(f"\n[yellow]Warnings ({len(report.warnings)}):[/yellow]")
        for warning in report.warnings:
            console.print(f"  - {warning}")

    if report.passed:
        console.print("\n[green]All content files are valid[/green]")
    else:
        console.print("\n[red]Content validation failed[/red]")
    sys.exit(report.exit_code)


@cli.command("copy-content")
@click.option(
    "--public-dir",
    default=None,
    help=f"Target content directory (default: {settings.public_dir}/content)"
)
@click.pass_context
def copy_content_command(ctx: click.Context, public_dir: Optional[str]):
    """Copy content JSON into the public directory."""
    report = copy_content(ctx.obj["content_dir"], public_dir)
    if report.error:
        console.print(f"[red]{report.error}[/red]")
    else:
        for name in report.copied:
            console.print(f"  [green]✓[/green] Copied {name}")
        console.print(f"\n[green]Content files copied successfully[/green] ({len(report.copied)})")
    sys.exit(report.exit_code)


@cli.command("verify-export")
@click.option(
    "--export-dir", "-o",
    default=None,
    help=f"Static export directory (default: {settings.export_dir})"
)
@click.option(
    "--build-command",
    default=None,
    help="Command that produces the export (default: PORTFOLIO_BUILD_COMMAND)"
)
@click.option(
    "--skip-build",
    is_flag=True,
    help="Verify an existing export without building"
)
def verify_export(export_dir: Optional[str], build_command: Optional[str], skip_build: bool):
    """Build (optionally) and verify the static export."""
    verifier = ExportVerifier(export_dir, build_command)
    try:
        report = verifier.verify(build=not skip_build)
    except BuildError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    table = Table(title=f"Export verification: {report.export_dir}")
    table.add_column("", width=2)
    table.add_column("Check")
    table.add_column("Target")
    table.add_column("Detail", style="dim")
    for check in report.checks:
        table.add_row(STATUS_STYLES[check.status], check.category, check.target, check.detail)
    console.print(table)

    console.print(f"\n[dim]Files:[/dim] {report.file_count:,}")
    console.print(f"[dim]Total size:[/dim] {report.total_size / 1024 / 1024:.2f} MB")
    if report.largest_files:
        console.print("\n[bold]Largest files:[/bold]")
        for index, item in enumerate(report.largest_files, start=1):
            console.print(f"  {index}. {item['path']} ({item['size'] / 1024 / 1024:.2f} MB)")

    if report.passed:
        console.print("\n[green]All verification checks passed![/green]")
    else:
        console.print(f"\n[red]{len(report.failures)} verification checks failed[/red]")
    sys.exit(report.exit_code)


@cli.command()
@click.option(
    "--url", "-u", "urls",
    multiple=True,
    help="URL to audit (repeatable; default: PORTFOLIO_AUDIT_URLS)"
)
@click.option(
    "--report", "-r", "reports",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Score an existing Lighthouse JSON report instead of running Lighthouse"
)
@click.option(
    "--serve",
    "serve_dir",
    default=None,
    type=click.Path(exists=True, file_okay=False),
    help="Serve this export directory locally and audit it"
)
@click.option(
    "--port",
    type=int,
    default=3000,
    help="Port for --serve (default: 3000)"
)
@click.option(
    "--threshold",
    type=float,
    default=None,
    help=f"Minimum score per category (default: {settings.audit_min_score:.0f})"
)
@click.option(
    "--output-dir",
    default=None,
    help="Keep Lighthouse reports in this directory"
)
def audit(
    urls: Tuple[str, ...],
    reports: Tuple[str, ...],
    serve_dir: Optional[str],
    port: int,
    threshold: Optional[float],
    output_dir: Optional[str],
):
    """Run a Lighthouse audit and check scores against the threshold."""
    auditor = PerformanceAuditor(threshold=threshold)

    if reports:
        result = auditor.audit_reports(reports)
    elif serve_dir:
        with serve_directory(serve_dir, port) as root_url:
            result = auditor.audit_urls(list(urls) or [root_url], output_dir)
    else:
        result = auditor.audit_urls(list(urls) or settings.audit_urls, output_dir)

    if result.scores:
        table = Table(title="Lighthouse scores")
        table.add_column("URL")
        for name in ("performance", "accessibility", "best-practices", "seo"):
            table.add_column(name.replace("-", " ").title(), justify="right")
        rows = [(s.url, s.as_dict()) for s in result.scores]
        if len(result.scores) > 1:
            rows.append(("[bold]Average[/bold]", result.averages()))
        for url, values in rows:
            table.add_row(url, *(
                f"[{score_style(v, result.threshold)}]{v:.0f}[/]" for v in values.values()
            ))
        console.print(table)

    if result.recommendations:
        console.print("\n[bold]Recommendations:[/bold]")
        for rec in result.recommendations:
            console.print(f"  {escape(f'[{rec.priority}]')} {rec.category}: {rec.issue} - {rec.suggestion}")

    for error in result.errors:
        console.print(f"[red]Error:[/red] {error}")

    if result.passed:
        console.print(f"\n[green]All scores are at or above {result.threshold:.0f}[/green]")
    else:
        console.print(f"\n[red]Audit failed: scores must all reach {result.threshold:.0f}[/red]")
    sys.exit(result.exit_code)


@cli.command()
@click.option("--page", type=click.IntRange(min=1), default=1, help="Page number")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Projects per page")
@click.option("--json", "as_json", is_flag=True, help="Print raw records as JSON")
@click.pass_context
def projects(ctx: click.Context, page: int, limit: Optional[int], as_json: bool):
    """List one page of projects."""
    data = build_projects_page(make_loader(ctx.obj["base_url"], ctx.obj["content_dir"]), page, limit)
    result = data.result

    if as_json:
        click.echo(json.dumps(result.model_dump(by_alias=True, mode="json", exclude_none=True), indent=2))
        return
    if data.not_found:
        console.print(f"[red]Page {page} not found[/red] (last page is {result.total_pages})")
        sys.exit(1)
    if data.is_empty:
        console.print("[dim]No projects yet.[/dim]")
        return

    table = Table(title=f"Projects - page {result.page} of {result.total_pages} ({result.total} total)")
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("Tags", style="dim")
    table.add_column("Featured", justify="center")
    for project in result.data:
        table.add_row(project.slug, project.title, ", ".join(project.tags), "★" if project.featured else "")
    console.print(table)


@cli.command()
@click.option("--category", default=None, help="Exact category (case-insensitive)")
@click.option("--tags", default=None, help="Comma-separated tags; entries must have all of them")
@click.option("--search", default=None, help="Text to look for in title, summary, category or tags")
@click.option("--json", "as_json", is_flag=True, help="Print raw records as JSON")
@click.pass_context
def knowledge(
    ctx: click.Context,
    category: Optional[str],
    tags: Optional[str],
    search: Optional[str],
    as_json: bool,
):
    """List knowledge entries, optionally filtered."""
    params = {"category": category, "tags": tags, "search": search}
    data = build_knowledge_page(
        make_loader(ctx.obj["base_url"], ctx.obj["content_dir"]),
        {k: v for k, v in params.items() if v},
    )

    if as_json:
        click.echo(json.dumps([e.to_record() for e in data.entries], indent=2))
        return
    if data.is_empty:
        console.print("[dim]No knowledge entries match.[/dim]")
        return

    table = Table(title=f"Knowledge - {len(data.entries)} of {data.total}")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Tags", style="dim")
    for entry in data.entries:
        table.add_row(entry.id, entry.title, entry.category, ", ".join(entry.tags))
    console.print(table)
    console.print(f"[dim]Categories:[/dim] {', '.join(data.categories)}")
    console.print(f"[dim]Tags:[/dim] {', '.join(data.tags)}")


@cli.command()
@click.argument("slug")
@click.pass_context
def project(ctx: click.Context, slug: str):
    """Show one project by slug."""
    data = build_project_detail(make_loader(ctx.obj["base_url"], ctx.obj["content_dir"]), slug)
    if data.not_found:
        console.print(f"[red]Project not found:[/red] {slug}")
        sys.exit(1)
    click.echo(json.dumps(data.project.to_record(), indent=2))


@cli.command()
@click.argument("entry_id")
@click.pass_context
def entry(ctx: click.Context, entry_id: str):
    """Show one knowledge entry by id, with its related projects."""
    data = build_knowledge_detail(make_loader(ctx.obj["base_url"], ctx.obj["content_dir"]), entry_id)
    if data.not_found:
        console.print(f"[red]Knowledge entry not found:[/red] {entry_id}")
        sys.exit(1)
    click.echo(json.dumps(data.entry.to_record(), indent=2))
    if data.related_projects:
        console.print("\n[bold]Related projects:[/bold]")
        for related in data.related_projects:
            marker = "" if related.resolved else " [dim](not found)[/dim]"
            console.print(f"  - {related.title} ({related.slug}){marker}")


if __name__ == "__main__":
    cli()
