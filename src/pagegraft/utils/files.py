"""Utility helpers for working with generated pages."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, Sequence, Tuple

INDEX_NAMES = ("index.html", "index.htm")


def iter_html_paths(
    inputs: Iterable[Path], suffixes: Sequence[str] = (".html", ".htm")
) -> Iterator[Tuple[Path, Path]]:
    """Yield ``(page, root)`` pairs, descending into directories.

    ``root`` is the input the page was found under, so slugs can be derived
    relative to it.
    """
    for item in inputs:
        if item.is_dir():
            for child in sorted(item.rglob("*")):
                if child.is_file() and child.suffix.lower() in suffixes:
                    yield child, item
        elif item.is_file() and item.suffix.lower() in suffixes:
            yield item, item


def derive_slug(path: Path, root: Path) -> str:
    """Compute the site-relative slug of a generated page.

    ``blog/hello/index.html`` becomes ``/blog/hello``; a lone file or the
    root index becomes ``/`` or ``/<stem>``.
    """
    if path == root:
        relative = PurePosixPath(path.name)
    else:
        relative = PurePosixPath(path.relative_to(root).as_posix())

    if relative.name.lower() in INDEX_NAMES:
        relative = relative.parent
    else:
        relative = relative.with_suffix("")

    text = relative.as_posix()
    if text in ("", "."):
        return "/"
    return "/" + text


def read_text(path: Path, encoding: str = "utf-8") -> str:
    with path.open("r", encoding=encoding) as handle:
        return handle.read()


def write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding=encoding) as handle:
        handle.write(content)
