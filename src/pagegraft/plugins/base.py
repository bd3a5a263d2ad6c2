"""Shared contract for HTML post-processing plugins."""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, Optional, Protocol, Tuple

from pagegraft.errors import PluginCancelledError
from pagegraft.models import ContentDocument, PluginManifest, SiteManifest
from pagegraft.rendering.template import find_unresolved_tokens, render_template

LOGGER = logging.getLogger(__name__)

ResolvedValues = Dict[str, Optional[str]]


class ContentPlugin(Protocol):
    """Interface implemented by every plugin.

    ``resolve_values`` is the live preview entry point; ``transform_html`` runs
    the same resolution and splices the rendered fragment into a page.
    """

    name: str
    slug: str
    marker: str
    option_keys: Tuple[str, ...]

    def resolve_values(
        self,
        document: Optional[ContentDocument],
        plugin: Optional[PluginManifest],
        site: SiteManifest,
        documents: Optional[Iterable[ContentDocument]] = None,
    ) -> ResolvedValues:
        """Return the template values for this rendering context."""

    def render_fragment(self, values: ResolvedValues) -> str:
        """Fill the plugin template with resolved values."""

    def transform_html(
        self,
        html: str,
        document: ContentDocument,
        plugin: PluginManifest,
        site: SiteManifest,
        cancellation: Optional[threading.Event] = None,
    ) -> str:
        """Return ``html`` with every plugin marker replaced."""


def raise_if_cancelled(cancellation: Optional[threading.Event], plugin_name: str) -> None:
    if cancellation is not None and cancellation.is_set():
        LOGGER.debug("%s: cancelled before start", plugin_name)
        raise PluginCancelledError(f"{plugin_name} was cancelled")


def render_complete(template: str, values: ResolvedValues, plugin_name: str) -> str:
    """Render ``template`` so that none of its tokens survive as literal text.

    Tokens the plugin did not resolve render as empty strings.
    """
    tokens = {name.upper(): value for name, value in values.items()}
    missing = [name for name in find_unresolved_tokens(template) if name.upper() not in tokens]
    if missing:
        LOGGER.debug("%s: no value for %s, rendering empty", plugin_name, ", ".join(sorted(set(missing))))
        tokens.update({name.upper(): None for name in missing})
    return render_template(template, tokens)
