"""Core pagegraft data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Union

OptionValue = Union[str, int, float, bool, None]


class ContentKind(str, Enum):
    """Kind of content a document represents."""

    POST = "post"
    PAGE = "page"
    NOTE = "note"


@dataclass(slots=True, frozen=True)
class SiteManifest:
    """Build-wide site settings supplied by the generator."""

    site_url: str = ""
    base_url: str = ""
    title: str = ""
    description: str = ""
    locale: str = ""
    hero_image: Optional[str] = None


@dataclass(slots=True, frozen=True)
class ContentMetadata:
    """Front matter of a single document."""

    title: str = ""
    slug: Optional[str] = "/"
    description: Optional[str] = None
    hero_image: Optional[str] = None
    twitter_handle: Optional[str] = None


@dataclass(slots=True, frozen=True)
class ContentDocument:
    """One page or post; a blank source path marks a synthetic document."""

    kind: ContentKind = ContentKind.POST
    source_path: Optional[str] = ""
    metadata: ContentMetadata = field(default_factory=ContentMetadata)


@dataclass(slots=True, frozen=True)
class PluginManifest:
    """Per-plugin configuration; ``options`` may be missing altogether."""

    name: str = ""
    options: Optional[Mapping[str, OptionValue]] = None
