"""Absolute URL composition for content and hero images."""

from __future__ import annotations

from typing import Optional

from pagegraft.errors import DocumentContractError
from pagegraft.models import ContentDocument, SiteManifest


def compose_site_base(site: Optional[SiteManifest]) -> str:
    """Join the site URL and base path without doubled or trailing slashes."""
    if site is None:
        return ""
    site_url = (site.site_url or "").rstrip("/")
    base_url = (site.base_url or "").strip("/")
    return f"{site_url}/{base_url}".rstrip("/")


def compose_content_url(document: Optional[ContentDocument], site: Optional[SiteManifest]) -> str:
    """Build the canonical URL of ``document``.

    A root slug collapses to the bare site base with no trailing slash.
    """
    site_base = compose_site_base(site)
    path = ""
    if document is not None:
        slug = document.metadata.slug
        if slug is None:
            raise DocumentContractError(
                f"Document {document.source_path or '<synthetic>'!s} has no slug"
            )
        path = slug.lstrip("/")
    return f"{site_base}/{path}".rstrip("/")


def compose_hero_image_url(document: Optional[ContentDocument], site: Optional[SiteManifest]) -> str:
    """Build the hero image URL, preferring the document's own image."""
    site_base = compose_site_base(site)
    image = document.metadata.hero_image if document is not None else None
    if image is None:
        image = site.hero_image if site is not None else None
    return f"{site_base}/{(image or '').lstrip('/')}"
