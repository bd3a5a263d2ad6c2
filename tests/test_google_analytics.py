"""Tests for the Google Analytics plugin."""

from __future__ import annotations

import re
import threading
from typing import Optional

import pytest

from pagegraft.errors import PluginCancelledError
from pagegraft.models import ContentDocument, ContentKind, ContentMetadata, PluginManifest, SiteManifest
from pagegraft.plugins.google_analytics import GoogleAnalyticsPlugin

HTML = "<html><head><plugin:google-analytics></plugin:google-analytics></head><body>Test</body></html>"
MARKER = "<plugin:google-analytics></plugin:google-analytics>"
GOOGLE_TAG = re.compile(r"<!-- Google tag \(gtag\.js\) -->")


def _document() -> ContentDocument:
    return ContentDocument(
        kind=ContentKind.POST,
        source_path="/posts/hello-world.md",
        metadata=ContentMetadata(title="Hello", slug="/hello-world", description="Document description"),
    )


def _plugin(measurement_id: object = None) -> PluginManifest:
    return PluginManifest(name="google-analytics", options={"MeasurementId": measurement_id})


def _site() -> SiteManifest:
    return SiteManifest(
        site_url="https://example.com",
        title="Site title",
        description="Site description",
        locale="en-US",
        hero_image="/images/site-hero.png",
    )


@pytest.fixture
def plugin() -> GoogleAnalyticsPlugin:
    return GoogleAnalyticsPlugin()


class TestGoogleAnalyticsPlugin:
    """Test GoogleAnalyticsPlugin.transform_html."""

    def test_name(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should expose its display name and slug."""
        assert plugin.name == "Google Analytics"
        assert plugin.slug == "google-analytics"

    def test_cancelled_before_start(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should abort when cancellation is already requested."""
        cancellation = threading.Event()
        cancellation.set()

        with pytest.raises(PluginCancelledError):
            plugin.transform_html(HTML, ContentDocument(), PluginManifest(), SiteManifest(), cancellation)

    def test_unset_cancellation_runs(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should run normally when cancellation is not requested."""
        result = plugin.transform_html(HTML, _document(), _plugin("G-1"), _site(), threading.Event())

        assert "gtag('config', 'G-1');" in result

    def test_measurement_id_rendered(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should replace the marker with the configured tag."""
        result = plugin.transform_html(HTML, _document(), _plugin("G-XXXXXXXXXX"), _site())

        assert "https://www.googletagmanager.com/gtag/js?id=G-XXXXXXXXXX" in result
        assert "gtag('config', 'G-XXXXXXXXXX');" in result
        assert MARKER not in result
        assert "{{MEASUREMENT_ID}}" not in result

    def test_script_structure(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should insert the full gtag.js snippet."""
        result = plugin.transform_html(HTML, _document(), _plugin("G-XXXXXXXXXX"), _site())

        assert "<!-- Google tag (gtag.js) -->" in result
        assert "<script async src=" in result
        assert "window.dataLayer = window.dataLayer || [];" in result
        assert "function gtag(){dataLayer.push(arguments);}" in result
        assert "gtag('js', new Date());" in result

    @pytest.mark.parametrize(
        "manifest",
        [
            PluginManifest(options=None),
            PluginManifest(options={"SomeOtherKey": "SomeValue"}),
            PluginManifest(options={"MeasurementId": None}),
            PluginManifest(options={"MeasurementId": 12345}),
        ],
    )
    def test_missing_measurement_id_renders_empty(
        self, plugin: GoogleAnalyticsPlugin, manifest: PluginManifest
    ) -> None:
        """Should render the tag with an empty id instead of failing."""
        result = plugin.transform_html(HTML, _document(), manifest, _site())

        assert MARKER not in result
        assert "<!-- Google tag (gtag.js) -->" in result
        assert "gtag/js?id=\"" in result
        assert "gtag('config', '');" in result

    def test_no_marker_returns_original(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should return the input unchanged when no marker exists."""
        html = "<html><head></head><body>Test</body></html>"

        assert plugin.transform_html(html, _document(), _plugin("G-XXXXXXXXXX"), _site()) == html

    def test_empty_html(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should return an empty string for empty HTML."""
        assert plugin.transform_html("", _document(), _plugin("G-XXXXXXXXXX"), _site()) == ""

    def test_multiple_markers(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should replace all markers."""
        html = f"<html><head>{MARKER}</head><body>{MARKER}</body></html>"

        result = plugin.transform_html(html, _document(), _plugin("G-XXXXXXXXXX"), _site())

        assert MARKER not in result
        assert len(GOOGLE_TAG.findall(result)) == 2

    def test_input_not_mutated(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should leave the caller's string as it was."""
        html = str(HTML)

        plugin.transform_html(html, _document(), _plugin("G-1"), _site())

        assert html == HTML


class TestGoogleAnalyticsPreview:
    """Test GoogleAnalyticsPlugin.resolve_values."""

    def test_null_plugin(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should resolve an absent id without failing."""
        assert plugin.resolve_values(ContentDocument(), None, SiteManifest()) == {"MEASUREMENT_ID": None}

    @pytest.mark.parametrize("measurement_id", ["G-XXXXXXXXXX", None, 12345])
    def test_preview_matches_injection(
        self, plugin: GoogleAnalyticsPlugin, measurement_id: Optional[object]
    ) -> None:
        """Should render the same fragment the injection path splices in."""
        manifest = _plugin(measurement_id)
        fragment = plugin.render_fragment(plugin.resolve_values(_document(), manifest, _site()))

        result = plugin.transform_html(HTML, _document(), manifest, _site())

        assert f"\n{fragment}\n" in result

    def test_fragment_without_values(self, plugin: GoogleAnalyticsPlugin) -> None:
        """Should render an empty id rather than a literal token."""
        fragment = plugin.render_fragment({})

        assert "{{" not in fragment
        assert "gtag('config', '');" in fragment
