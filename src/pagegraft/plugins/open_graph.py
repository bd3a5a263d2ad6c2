"""Open Graph and Twitter Card metadata plugin."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from pagegraft.metadata import TWITTER_CREATOR_ID, TWITTER_SITE_ID, resolve_social_metadata
from pagegraft.models import ContentDocument, PluginManifest, SiteManifest
from pagegraft.plugins.base import ResolvedValues, raise_if_cancelled, render_complete
from pagegraft.rendering.injector import inject
from pagegraft.rendering.template import optional_block

LOGGER = logging.getLogger(__name__)

PLACEHOLDER = "<plugin:open-graph></plugin:open-graph>"

TWITTER_SITE_MARKUP = '<meta name="twitter:site" content="{value}">'
TWITTER_CREATOR_MARKUP = '<meta name="twitter:creator" content="{value}">'

OPEN_GRAPH_TEMPLATE = """<meta property="og:title" content="{{CONTENT_TITLE}}" />
<meta property="og:description" content="{{CONTENT_DESCRIPTION}}" />
<meta property="og:type" content="website" />
<meta property="og:locale" content="{{CONTENT_LOCALE}}" />
<meta property="og:url" content="{{CONTENT_URL}}" />
<meta property="og:image" content="{{CONTENT_HERO_IMAGE_URL}}" />
<meta property="og:site_name" content="{{SITE_NAME}}" />

<meta name="twitter:card" content="summary_large_image">
{{TWITTER_CARD_SITE}}
{{TWITTER_CARD_CREATOR}}
<meta name="twitter:title" content="{{CONTENT_TITLE}}">
<meta name="twitter:description" content="{{CONTENT_DESCRIPTION}}">
<meta name="twitter:image" content="{{CONTENT_HERO_IMAGE_URL}}">"""


class OpenGraphPlugin:
    """Injects Open Graph and Twitter Card ``<meta>`` tags."""

    name = "Open Graph"
    slug = "open-graph"
    marker = PLACEHOLDER
    option_keys = (TWITTER_SITE_ID, TWITTER_CREATOR_ID)

    def resolve_values(
        self,
        document: Optional[ContentDocument],
        plugin: Optional[PluginManifest],
        site: SiteManifest,
        documents: Optional[Iterable[ContentDocument]] = None,
    ) -> ResolvedValues:
        resolved = resolve_social_metadata(document, plugin, site, documents)
        return {
            "CONTENT_TITLE": resolved.title,
            "CONTENT_DESCRIPTION": resolved.description,
            "CONTENT_LOCALE": resolved.locale,
            "CONTENT_URL": resolved.url,
            "CONTENT_HERO_IMAGE_URL": resolved.hero_image_url,
            "SITE_NAME": resolved.site_name,
            "TWITTER_SITE_ID": resolved.twitter_site,
            "TWITTER_CREATOR_ID": resolved.twitter_creator,
        }

    def render_fragment(self, values: ResolvedValues) -> str:
        tokens = dict(values)
        tokens["TWITTER_CARD_SITE"] = optional_block(TWITTER_SITE_MARKUP, values.get("TWITTER_SITE_ID"))
        tokens["TWITTER_CARD_CREATOR"] = optional_block(
            TWITTER_CREATOR_MARKUP, values.get("TWITTER_CREATOR_ID")
        )
        return render_complete(OPEN_GRAPH_TEMPLATE, tokens, self.name)

    def transform_html(
        self,
        html: str,
        document: ContentDocument,
        plugin: PluginManifest,
        site: SiteManifest,
        cancellation: Optional[threading.Event] = None,
    ) -> str:
        raise_if_cancelled(cancellation, self.name)

        values = self.resolve_values(document, plugin, site)
        LOGGER.debug("%s: resolved %s for %s", self.name, values, document.source_path or "<synthetic>")

        return inject(html, self.marker, self.render_fragment(values))
