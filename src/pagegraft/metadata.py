"""Effective metadata resolution across document, plugin and site layers.

Both the HTML injection path and the live preview path go through
:func:`resolve_social_metadata`, so the two always agree on every value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from pagegraft.models import ContentDocument, ContentKind, PluginManifest, SiteManifest
from pagegraft.options import get_string_option
from pagegraft.urls import compose_content_url, compose_hero_image_url

LOGGER = logging.getLogger(__name__)

TWITTER_SITE_ID = "TwitterSiteId"
TWITTER_CREATOR_ID = "TwitterCreatorId"

TITLE_SEPARATOR = " | "


@dataclass(slots=True, frozen=True)
class SocialMetadata:
    """Values substituted into the Open Graph template."""

    title: str
    description: Optional[str]
    locale: str
    url: str
    hero_image_url: str
    site_name: str
    twitter_site: Optional[str]
    twitter_creator: Optional[str]


def use_content_metadata(
    documents: Optional[Iterable[ContentDocument]], document: Optional[ContentDocument]
) -> bool:
    """Return True when a single file-backed document is being rendered."""
    if documents is not None:
        return False
    if document is None:
        return False
    if not (document.source_path or "").strip():
        return False
    return True


def resolve_title(document: Optional[ContentDocument], site: SiteManifest, *, content: bool) -> str:
    if content and document is not None:
        return f"{document.metadata.title}{TITLE_SEPARATOR}{site.title}"
    return site.title


def resolve_description(
    document: Optional[ContentDocument], site: SiteManifest, *, content: bool
) -> Optional[str]:
    if content and document is not None and document.metadata.description is not None:
        return document.metadata.description
    return site.description


def resolve_creator_handle(
    document: Optional[ContentDocument], plugin: Optional[PluginManifest], *, content: bool
) -> Optional[str]:
    """Pick the author handle: document front matter, then plugin option.

    Only single posts carry an author; pages, other kinds and listing renders
    never do.
    """
    creator = get_string_option(plugin, TWITTER_CREATOR_ID)
    if document is not None and document.metadata.twitter_handle is not None:
        creator = document.metadata.twitter_handle

    if not content or document is None or document.kind is not ContentKind.POST:
        if creator is not None:
            LOGGER.debug("Suppressing creator handle %s for non-post render", creator)
        return None
    return creator


def resolve_site_handle(plugin: Optional[PluginManifest]) -> Optional[str]:
    return get_string_option(plugin, TWITTER_SITE_ID)


def resolve_social_metadata(
    document: Optional[ContentDocument],
    plugin: Optional[PluginManifest],
    site: SiteManifest,
    documents: Optional[Iterable[ContentDocument]] = None,
) -> SocialMetadata:
    """Resolve every value the Open Graph fragment needs."""
    content = use_content_metadata(documents, document)
    return SocialMetadata(
        title=resolve_title(document, site, content=content),
        description=resolve_description(document, site, content=content),
        locale=site.locale,
        url=compose_content_url(document, site),
        hero_image_url=compose_hero_image_url(document, site),
        site_name=site.title,
        twitter_site=resolve_site_handle(plugin),
        twitter_creator=resolve_creator_handle(document, plugin, content=content),
    )
