"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

DEFAULT_ENCODING = "utf-8"
DEFAULT_LOCALE = "en-US"


@dataclass(slots=True)
class AppConfig:
    encoding: str = DEFAULT_ENCODING
    html_suffixes: Tuple[str, ...] = (".html", ".htm")
    output_dir: Path | None = None
    default_locale: str = DEFAULT_LOCALE

    def resolve_output_path(self, source: Path, root: Path | None = None) -> Path:
        """Map an input page to where its transformed copy is written.

        Without an output directory pages are rewritten in place. Otherwise the
        path relative to ``root`` is kept under the output directory.
        """
        if self.output_dir is None:
            return source
        if root is None or root == source:
            return Path(self.output_dir) / source.name
        return Path(self.output_dir) / source.relative_to(root)
