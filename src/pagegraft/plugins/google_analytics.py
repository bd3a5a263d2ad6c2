"""Google Analytics (gtag.js) plugin."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from pagegraft.models import ContentDocument, PluginManifest, SiteManifest
from pagegraft.options import get_string_option
from pagegraft.plugins.base import ResolvedValues, raise_if_cancelled, render_complete
from pagegraft.rendering.injector import inject

LOGGER = logging.getLogger(__name__)

MEASUREMENT_ID = "MeasurementId"

PLACEHOLDER = "<plugin:google-analytics></plugin:google-analytics>"

GOOGLE_ANALYTICS_SCRIPT = """<!-- Google tag (gtag.js) -->
<script async src="https://www.googletagmanager.com/gtag/js?id={{MEASUREMENT_ID}}"></script>
<script>
window.dataLayer = window.dataLayer || [];
function gtag(){dataLayer.push(arguments);}
gtag('js', new Date());
gtag('config', '{{MEASUREMENT_ID}}');
</script>"""


class GoogleAnalyticsPlugin:
    """Injects the gtag.js snippet configured by ``MeasurementId``."""

    name = "Google Analytics"
    slug = "google-analytics"
    marker = PLACEHOLDER
    option_keys = (MEASUREMENT_ID,)

    def resolve_values(
        self,
        document: Optional[ContentDocument],
        plugin: Optional[PluginManifest],
        site: SiteManifest,
        documents: Optional[Iterable[ContentDocument]] = None,
    ) -> ResolvedValues:
        return {"MEASUREMENT_ID": get_string_option(plugin, MEASUREMENT_ID)}

    def render_fragment(self, values: ResolvedValues) -> str:
        return render_complete(GOOGLE_ANALYTICS_SCRIPT, values, self.name)

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
        if values["MEASUREMENT_ID"] is None:
            LOGGER.debug("%s: no %s configured, rendering an empty id", self.name, MEASUREMENT_ID)

        return inject(html, self.marker, self.render_fragment(values))
