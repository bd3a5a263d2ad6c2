"""Plugin lookup and multi-plugin application."""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Sequence

from pagegraft.errors import UnknownPluginError
from pagegraft.models import ContentDocument, PluginManifest, SiteManifest
from pagegraft.plugins.base import ContentPlugin
from pagegraft.plugins.google_analytics import GoogleAnalyticsPlugin
from pagegraft.plugins.open_graph import OpenGraphPlugin

LOGGER = logging.getLogger(__name__)

PLUGINS: Dict[str, ContentPlugin] = {
    plugin.slug: plugin for plugin in (GoogleAnalyticsPlugin(), OpenGraphPlugin())
}


def _normalize(key: str) -> str:
    return key.strip().lower().replace(" ", "-")


def available_plugins() -> List[str]:
    return sorted(PLUGINS)


def get_plugin(key: str) -> ContentPlugin:
    """Find a plugin by slug or display name."""
    normalized = _normalize(key)
    plugin = PLUGINS.get(normalized)
    if plugin is None:
        raise UnknownPluginError(
            f"Unknown plugin '{key}'. Available: {', '.join(available_plugins())}"
        )
    return plugin


def apply_plugins(
    html: str,
    document: ContentDocument,
    manifests: Sequence[PluginManifest],
    site: SiteManifest,
    cancellation: Optional[threading.Event] = None,
) -> str:
    """Run each manifest's plugin over ``html`` in manifest order."""
    for manifest in manifests:
        plugin = get_plugin(manifest.name)
        LOGGER.debug("Applying %s", plugin.name)
        html = plugin.transform_html(html, document, manifest, site, cancellation)
    return html
