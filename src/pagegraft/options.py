"""Typed lookups over a plugin manifest's option bag."""

from __future__ import annotations

import logging
from typing import Optional, Type, TypeVar

from pagegraft.models import PluginManifest

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def _matches(value: object, expected_type: type) -> bool:
    # bool is an int subclass, but a flag is never a count
    if isinstance(value, bool) and expected_type is not bool:
        return False
    return isinstance(value, expected_type)


def get_option(plugin: Optional[PluginManifest], key: str, expected_type: Type[T]) -> Optional[T]:
    """Return the option stored under ``key`` if it has ``expected_type``.

    A missing manifest, a missing options map, a missing key, a stored ``None``
    and a value of another type all come back as ``None``.
    """
    if plugin is None or plugin.options is None:
        return None

    value = plugin.options.get(key)
    if value is None:
        return None

    if not _matches(value, expected_type):
        LOGGER.debug(
            "Ignoring option %s=%r: expected %s, got %s",
            key,
            value,
            expected_type.__name__,
            type(value).__name__,
        )
        return None
    return value  # type: ignore[return-value]


def get_string_option(plugin: Optional[PluginManifest], key: str) -> Optional[str]:
    return get_option(plugin, key, str)
