"""Page-level data, metadata and form state for the portfolio site."""

from .builders import (
    build_home_page,
    build_projects_page,
    build_project_detail,
    build_knowledge_page,
    build_knowledge_detail,
    resolve_related_projects,
)
from .metadata import (
    site_config_from_settings,
    generate_metadata,
    generate_structured_data,
)
from .contact import ContactForm, validate_contact_form

__all__ = [
    "build_home_page",
    "build_projects_page",
    "build_project_detail",
    "build_knowledge_page",
    "build_knowledge_detail",
    "resolve_related_projects",
    "site_config_from_settings",
    "generate_metadata",
    "generate_structured_data",
    "ContactForm",
    "validate_contact_form",
]
