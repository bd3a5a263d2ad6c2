"""Token substitution for plugin templates."""

from __future__ import annotations

import re
from typing import List, Mapping, Optional

TOKEN_PATTERN = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")


def render_template(template: str, values: Mapping[str, Optional[str]]) -> str:
    """Replace every ``{{NAME}}`` token found in ``values``.

    Token names are matched without regard to case and ``None`` renders as an
    empty string. Substitution is a single pass, so text coming from values is
    never scanned for tokens. Tokens without a value are left in place.
    """
    lookup = {name.upper(): value for name, value in values.items()}

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1).upper()
        if name not in lookup:
            return match.group(0)
        value = lookup[name]
        return "" if value is None else str(value)

    return TOKEN_PATTERN.sub(_substitute, template)


def optional_block(markup: str, value: Optional[str]) -> str:
    """Format ``markup`` with ``value``, or drop the block when it is absent."""
    if value is None:
        return ""
    return markup.format(value=value)


def find_unresolved_tokens(text: str) -> List[str]:
    """List template tokens that are still present in ``text``."""
    return [match.group(1) for match in TOKEN_PATTERN.finditer(text)]
