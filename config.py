"""Configuration settings for the portfolio content toolkit."""

from dotenv import load_dotenv

load_dotenv()

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    """Global settings for the portfolio site tooling.

    Settings can be overridden via environment variables with PORTFOLIO_ prefix.
    Example: PORTFOLIO_CONTENT_DIR=./content
    """

    # Paths
    content_dir: str = Field(
        default="./content",
        description="Source directory holding projects/ and knowledge/ JSON"
    )
    public_dir: str = Field(
        default="./public",
        description="Public output directory; content is copied to <public_dir>/content"
    )
    export_dir: str = Field(
        default="./out",
        description="Static export directory checked by the export verifier"
    )

    # Runtime content endpoint
    base_url: str = Field(
        default="",
        description="Base URL serving /content/<collection>/*.json (empty = same origin)"
    )
    fetch_retry_count: int = Field(
        default=3,
        ge=0,
        description="Retries after the first failed fetch"
    )
    fetch_retry_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Fixed delay between fetch attempts"
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Per-request timeout for content fetches"
    )

    # Listing
    projects_page_size: int = Field(
        default=12,
        ge=1,
        description="Projects per page on the projects listing"
    )
    featured_limit: int = Field(
        default=3,
        ge=0,
        description="Maximum featured projects on the home page"
    )

    # Contact form
    contact_submit_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Simulated latency of a contact form submission"
    )

    # Audits
    audit_min_score: float = Field(
        default=90.0,
        ge=0.0,
        le=100.0,
        description="Minimum Lighthouse category score (0-100) for the audit to pass"
    )
    audit_urls: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000/"],
        description="URLs audited when none are given on the command line"
    )
    lighthouse_command: str = Field(
        default="npx lighthouse",
        description="Command used to run Lighthouse"
    )
    build_command: str = Field(
        default="",
        description="Optional build command run before verifying the static export"
    )

    # Site identity
    site_name: str = Field(default="DevOps Portfolio")
    site_description: str = Field(
        default=(
            "Modern DevOps Portfolio Website showcasing infrastructure automation, "
            "cloud solutions, and technical expertise"
        )
    )
    site_url: str = Field(default="https://your-domain.com")
    site_og_image: str = Field(default="/og-image.jpg")
    site_author: str = Field(default="DevOps Engineer")
    site_twitter_handle: str = Field(default="@yourusername")
    site_social_links: List[str] = Field(
        default_factory=lambda: [
            "https://gitlab.com/yourusername",
            "https://linkedin.com/in/yourusername",
            "https://github.com/yourusername",
        ]
    )

    model_config = {
        "env_prefix": "PORTFOLIO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def get_content_path(self) -> Path:
        """Get content path as Path object."""
        return Path(self.content_dir)

    def get_public_content_path(self) -> Path:
        """Get the public content output path as Path object."""
        return Path(self.public_dir) / "content"

    def get_export_path(self) -> Path:
        """Get static export path as Path object."""
        return Path(self.export_dir)


SITE_KEYWORDS: List[str] = [
    "DevOps",
    "Cloud Infrastructure",
    "Automation",
    "Docker",
    "Kubernetes",
    "AWS",
    "Terraform",
    "CI/CD",
    "GitLab",
]


# Create singleton instance
settings = Settings()
