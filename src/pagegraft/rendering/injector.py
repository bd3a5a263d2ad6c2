"""Placeholder marker substitution inside generated HTML."""

from __future__ import annotations

import re


def _marker_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(re.escape(marker), re.IGNORECASE)


def count_markers(html: str, marker: str) -> int:
    if not html or not marker:
        return 0
    return len(_marker_pattern(marker).findall(html))


def inject(html: str, marker: str, rendered: str) -> str:
    """Replace every occurrence of ``marker`` with ``rendered``.

    The fragment is padded with a newline on each side. When the marker does
    not occur, ``html`` itself is returned.
    """
    if not html or not marker:
        return html
    fragment = f"\n{rendered}\n"
    result, replaced = _marker_pattern(marker).subn(lambda _match: fragment, html)
    if not replaced:
        return html
    return result
