"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path

from pagegraft.config import AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = AppConfig()

        assert config.encoding == "utf-8"
        assert config.html_suffixes == (".html", ".htm")
        assert config.output_dir is None
        assert config.default_locale == "en-US"

    def test_custom_config(self) -> None:
        """Should create config with custom values."""
        config = AppConfig(encoding="latin-1", output_dir=Path("/out"), default_locale="it-IT")

        assert config.encoding == "latin-1"
        assert config.output_dir == Path("/out")
        assert config.default_locale == "it-IT"

    def test_resolve_output_path_in_place(self) -> None:
        """Should return the source path when no output dir is set."""
        config = AppConfig()
        source = Path("/site/blog/index.html")

        assert config.resolve_output_path(source, Path("/site")) == source

    def test_resolve_output_path_keeps_relative_layout(self) -> None:
        """Should mirror the path below the input root."""
        config = AppConfig(output_dir=Path("/out"))

        resolved = config.resolve_output_path(Path("/site/blog/index.html"), Path("/site"))

        assert resolved == Path("/out/blog/index.html")

    def test_resolve_output_path_single_file(self) -> None:
        """Should place a lone input file directly under the output dir."""
        config = AppConfig(output_dir=Path("/out"))
        source = Path("/site/about.html")

        assert config.resolve_output_path(source, source) == Path("/out/about.html")
        assert config.resolve_output_path(source) == Path("/out/about.html")
