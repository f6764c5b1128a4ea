"""SEO metadata and JSON-LD structured data for site pages."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from config import settings, SITE_KEYWORDS
from contracts import (
    OpenGraph,
    OpenGraphImage,
    PageMetadata,
    RobotsDirective,
    SiteConfig,
    StructuredDataKind,
    TwitterCard,
)

SCHEMA_CONTEXT = "https://schema.org"
SCHEMA_TYPES = {
    StructuredDataKind.PERSON: "Person",
    StructuredDataKind.WEBSITE: "WebSite",
    StructuredDataKind.ARTICLE: "Article",
}


def site_config_from_settings() -> SiteConfig:
    """Build the immutable site identity from configuration."""
    return SiteConfig(
        name=settings.site_name,
        description=settings.site_description,
        url=settings.site_url.rstrip("/"),
        og_image=settings.site_og_image,
        author=settings.site_author,
        twitter_handle=settings.site_twitter_handle or None,
        social_links=list(settings.site_social_links),
        keywords=list(SITE_KEYWORDS),
    )


def generate_metadata(
    site: SiteConfig,
    title: Optional[str] = None,
    description: Optional[str] = None,
    url: Optional[str] = None,
    og_image: Optional[str] = None,
    no_index: bool = False,
) -> PageMetadata:
    """Generate page metadata.

    Args:
        site: Site identity.
        title: Page title; rendered as "<title> | <site name>".
        description: Page description; defaults to the site description.
        url: Site-relative page path, e.g. "/projects".
        og_image: Site-relative preview image; defaults to the site image.
        no_index: Ask crawlers not to index or follow the page.

    Returns:
        PageMetadata with canonical URL, Open Graph and Twitter card.
    """
    page_title = f"{title} | {site.name}" if title else site.name
    page_description = description or site.description
    page_url = f"{site.url}{url}" if url else site.url
    page_image = f"{site.url}{og_image or site.og_image}"

    return PageMetadata(
        title=page_title,
        description=page_description,
        canonical_url=page_url,
        keywords=list(site.keywords),
        authors=[site.author],
        robots=RobotsDirective(index=not no_index, follow=not no_index),
        open_graph=OpenGraph(
            url=page_url,
            title=page_title,
            description=page_description,
            site_name=site.name,
            images=[OpenGraphImage(url=page_image, alt=page_title)],
        ),
        twitter=TwitterCard(
            title=page_title,
            description=page_description,
            images=[page_image],
            creator=site.twitter_handle,
        ),
    )


def _publisher(site: SiteConfig) -> Dict[str, Any]:
    return {
        "@type": "Organization",
        "name": site.name,
        "logo": {"@type": "ImageObject", "url": f"{site.url}/logo.png"},
    }


def generate_structured_data(
    site: SiteConfig,
    kind: StructuredDataKind = StructuredDataKind.WEBSITE,
    data: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Generate a schema.org JSON-LD document.

    Args:
        site: Site identity.
        kind: person, website or article.
        data: Article fields: title, description, datePublished, dateModified.
        now: Timestamp used when article dates are missing.
    """
    kind = StructuredDataKind(kind)
    data = data or {}
    base: Dict[str, Any] = {"@context": SCHEMA_CONTEXT, "@type": SCHEMA_TYPES[kind]}

    if kind == StructuredDataKind.PERSON:
        return {
            **base,
            "name": site.author,
            "url": site.url,
            "sameAs": list(site.social_links),
            "jobTitle": site.author,
            "knowsAbout": list(site.keywords),
        }

    if kind == StructuredDataKind.WEBSITE:
        return {
            **base,
            "name": site.name,
            "description": site.description,
            "url": site.url,
            "author": {"@type": "Person", "name": site.author},
            "publisher": _publisher(site),
            "potentialAction": {
                "@type": "SearchAction",
                "target": f"{site.url}/knowledge?search={{search_term_string}}",
                "query-input": "required name=search_term_string",
            },
        }

    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return {
        **base,
        "headline": data.get("title", ""),
        "description": data.get("description", ""),
        "author": {"@type": "Person", "name": site.author},
        "publisher": _publisher(site),
        "datePublished": data.get("datePublished") or timestamp,
        "dateModified": data.get("dateModified") or timestamp,
    }
