"""FastAPI application backing the pagegraft live preview."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from pagegraft.errors import DocumentContractError, UnknownPluginError
from pagegraft.models import (
    ContentDocument,
    ContentKind,
    ContentMetadata,
    OptionValue,
    PluginManifest,
    SiteManifest,
)
from pagegraft.plugins.base import ContentPlugin
from pagegraft.plugins.registry import PLUGINS, get_plugin
from pagegraft.web.frontend import router as frontend_router

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="pagegraft preview", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(frontend_router)


class SitePayload(BaseModel):
    site_url: str = ""
    base_url: str = ""
    title: str = ""
    description: str = ""
    locale: str = ""
    hero_image: Optional[str] = None

    def to_manifest(self) -> SiteManifest:
        return SiteManifest(**self.model_dump())


class DocumentPayload(BaseModel):
    kind: ContentKind = ContentKind.POST
    source_path: Optional[str] = ""
    title: str = ""
    slug: Optional[str] = "/"
    description: Optional[str] = None
    hero_image: Optional[str] = None
    twitter_handle: Optional[str] = None

    def to_document(self) -> ContentDocument:
        return ContentDocument(
            kind=self.kind,
            source_path=self.source_path,
            metadata=ContentMetadata(
                title=self.title,
                slug=self.slug,
                description=self.description,
                hero_image=self.hero_image,
                twitter_handle=self.twitter_handle,
            ),
        )


class PreviewPayload(BaseModel):
    site: SitePayload = Field(default_factory=SitePayload)
    document: Optional[DocumentPayload] = None
    documents: Optional[List[DocumentPayload]] = None
    options: Optional[Dict[str, OptionValue]] = None


class TransformPayload(BaseModel):
    html: str
    site: SitePayload = Field(default_factory=SitePayload)
    document: DocumentPayload = Field(default_factory=DocumentPayload)
    options: Optional[Dict[str, OptionValue]] = None


def _lookup(slug: str) -> ContentPlugin:
    try:
        return get_plugin(slug)
    except UnknownPluginError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/plugins")
async def list_plugins() -> dict[str, List[dict[str, Any]]]:
    return {
        "plugins": [
            {
                "slug": slug,
                "name": plugin.name,
                "marker": plugin.marker,
                "options": list(plugin.option_keys),
            }
            for slug, plugin in sorted(PLUGINS.items())
        ]
    }


@app.post("/preview/{slug}")
async def preview_plugin(slug: str, payload: PreviewPayload) -> dict[str, Any]:
    """Resolve the values a plugin renders for the given context."""
    plugin = _lookup(slug)
    manifest = PluginManifest(name=plugin.slug, options=payload.options)
    document = payload.document.to_document() if payload.document is not None else None
    documents = (
        [item.to_document() for item in payload.documents] if payload.documents is not None else None
    )

    try:
        values = plugin.resolve_values(document, manifest, payload.site.to_manifest(), documents)
    except DocumentContractError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return {"plugin": plugin.slug, "values": values, "fragment": plugin.render_fragment(values)}


@app.post("/transform/{slug}")
async def transform_html(slug: str, payload: TransformPayload) -> dict[str, Any]:
    """Run a plugin over an HTML page."""
    plugin = _lookup(slug)
    manifest = PluginManifest(name=plugin.slug, options=payload.options)

    try:
        html = plugin.transform_html(
            payload.html, payload.document.to_document(), manifest, payload.site.to_manifest()
        )
    except DocumentContractError as exc:
        LOGGER.error("Rejected document for %s: %s", plugin.name, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return {"plugin": plugin.slug, "html": html, "changed": html != payload.html}
