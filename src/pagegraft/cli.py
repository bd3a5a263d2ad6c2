"""Command line interface for pagegraft."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pagegraft.config import AppConfig
from pagegraft.errors import UnknownPluginError
from pagegraft.metadata import TITLE_SEPARATOR
from pagegraft.models import ContentDocument, ContentKind, ContentMetadata, PluginManifest, SiteManifest
from pagegraft.plugins.base import ContentPlugin
from pagegraft.plugins.registry import PLUGINS, apply_plugins, get_plugin
from pagegraft.utils.files import derive_slug, iter_html_paths, read_text, write_text
from pagegraft.web.app import app as web_app

LOGGER = logging.getLogger(__name__)

TITLE_PATTERN = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)

console = Console()
app = typer.Typer(help="pagegraft - analytics and Open Graph injection for static sites")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _parse_options(pairs: List[str]) -> Dict[str, str]:
    options: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected Key=Value, got '{pair}'", param_hint="--option")
        options[key.strip()] = value
    return options


def _resolve_plugins(names: List[str]) -> List[ContentPlugin]:
    try:
        return [get_plugin(name) for name in names]
    except UnknownPluginError as exc:
        raise typer.BadParameter(str(exc), param_hint="--plugin") from exc


def _page_title(html: str, fallback: str, site_title: str = "") -> str:
    """Read the document title from ``<title>``, minus a trailing site title."""
    match = TITLE_PATTERN.search(html)
    if match is None:
        return fallback
    title = " ".join(match.group(1).split())
    suffix = f"{TITLE_SEPARATOR}{site_title}" if site_title else ""
    if suffix and title.lower().endswith(suffix.lower()):
        title = title[: -len(suffix)].rstrip()
    return title or fallback


@app.command()
def transform(
    inputs: List[Path] = typer.Argument(
        ..., help="HTML files or directories to transform.", resolve_path=True
    ),
    plugin: List[str] = typer.Option(..., "--plugin", "-p", help="Plugin slug, repeatable"),
    option: List[str] = typer.Option([], "--option", "-o", help="Plugin option as Key=Value"),
    site_url: str = typer.Option("", help="Absolute site URL"),
    base_url: str = typer.Option("", help="Path prefix under the site URL"),
    site_title: str = typer.Option("", help="Site title"),
    site_description: str = typer.Option("", help="Site description"),
    locale: str = typer.Option(AppConfig().default_locale, help="Site locale"),
    site_hero_image: Optional[str] = typer.Option(None, help="Default hero image path"),
    kind: ContentKind = typer.Option(ContentKind.POST, case_sensitive=False, help="Content kind"),
    title: Optional[str] = typer.Option(None, help="Document title (defaults to the page <title>)"),
    slug: Optional[str] = typer.Option(None, help="Document slug (defaults to the path under the input root)"),
    description: Optional[str] = typer.Option(None, help="Document description"),
    hero_image: Optional[str] = typer.Option(None, help="Document hero image path"),
    twitter_handle: Optional[str] = typer.Option(None, help="Document author handle"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Write results here instead of in place"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Replace plugin markers in generated HTML pages."""
    _setup_logging(verbose)
    config = AppConfig(output_dir=output_dir)
    plugins = _resolve_plugins(plugin)
    options = _parse_options(option)

    site = SiteManifest(
        site_url=site_url,
        base_url=base_url,
        title=site_title,
        description=site_description,
        locale=locale,
        hero_image=site_hero_image,
    )
    manifests = [PluginManifest(name=selected.slug, options=options) for selected in plugins]

    pages = list(iter_html_paths(inputs, config.html_suffixes))
    if not pages:
        console.print("[yellow]No HTML pages found.[/yellow]")
        return

    changed = 0
    for page, root in pages:
        html = read_text(page, config.encoding)
        document = ContentDocument(
            kind=kind,
            source_path=str(page),
            metadata=ContentMetadata(
                title=title if title is not None else _page_title(html, page.stem, site_title),
                slug=slug if slug is not None else derive_slug(page, root),
                description=description,
                hero_image=hero_image,
                twitter_handle=twitter_handle,
            ),
        )
        result = apply_plugins(html, document, manifests, site)
        target = config.resolve_output_path(page, root)
        if result != html:
            changed += 1
            LOGGER.debug("Transformed %s", page)
        if result != html or target != page:
            write_text(target, result, config.encoding)

    console.print(f"Transformed: {changed}, unchanged: {len(pages) - changed}")


@app.command()
def preview(
    plugin: str = typer.Option(..., "--plugin", "-p", help="Plugin slug"),
    option: List[str] = typer.Option([], "--option", "-o", help="Plugin option as Key=Value"),
    site_url: str = typer.Option("", help="Absolute site URL"),
    base_url: str = typer.Option("", help="Path prefix under the site URL"),
    site_title: str = typer.Option("", help="Site title"),
    site_description: str = typer.Option("", help="Site description"),
    locale: str = typer.Option(AppConfig().default_locale, help="Site locale"),
    site_hero_image: Optional[str] = typer.Option(None, help="Default hero image path"),
    kind: ContentKind = typer.Option(ContentKind.POST, case_sensitive=False, help="Content kind"),
    title: str = typer.Option("", help="Document title"),
    slug: str = typer.Option("/", help="Document slug"),
    description: Optional[str] = typer.Option(None, help="Document description"),
    hero_image: Optional[str] = typer.Option(None, help="Document hero image path"),
    twitter_handle: Optional[str] = typer.Option(None, help="Document author handle"),
    source_path: Optional[str] = typer.Option(None, help="Document source path (defaults to the slug)"),
    synthetic: bool = typer.Option(False, "--synthetic", help="Treat the document as generated"),
    listing: bool = typer.Option(False, "--listing", help="Resolve as a listing page"),
) -> None:
    """Show the values a plugin would render for one document."""
    selected = _resolve_plugins([plugin])[0]
    site = SiteManifest(
        site_url=site_url,
        base_url=base_url,
        title=site_title,
        description=site_description,
        locale=locale,
        hero_image=site_hero_image,
    )
    document = ContentDocument(
        kind=kind,
        source_path="" if synthetic else (source_path if source_path is not None else slug),
        metadata=ContentMetadata(
            title=title,
            slug=slug,
            description=description,
            hero_image=hero_image,
            twitter_handle=twitter_handle,
        ),
    )
    manifest = PluginManifest(name=selected.slug, options=_parse_options(option))

    if listing:
        values = selected.resolve_values(None, manifest, site, [document])
    else:
        values = selected.resolve_values(document, manifest, site)

    table = Table(show_header=True, header_style="bold magenta", title=selected.name)
    table.add_column("Token", no_wrap=True)
    table.add_column("Value")
    for key, value in values.items():
        table.add_row(key, "[dim]<absent>[/dim]" if value is None else escape(value))

    console.print(table)


@app.command("plugins")
def list_plugins() -> None:
    """List the registered plugins."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Slug", no_wrap=True)
    table.add_column("Name")
    table.add_column("Marker")
    table.add_column("Options")

    for slug, registered in sorted(PLUGINS.items()):
        table.add_row(slug, registered.name, escape(registered.marker), ", ".join(registered.option_keys))

    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the live preview service."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting preview service on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
