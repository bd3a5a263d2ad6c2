"""Exceptions raised by pagegraft.

Soft absences (missing options, missing documents, markers not found) never
raise. Only the conditions below reach the caller.
"""

from __future__ import annotations


class PagegraftError(Exception):
    """Base class for all pagegraft errors."""


class PluginCancelledError(PagegraftError):
    """The caller's cancellation signal was set before the plugin ran."""


class DocumentContractError(PagegraftError, ValueError):
    """A document was passed in a shape callers must never produce."""


class UnknownPluginError(PagegraftError, KeyError):
    """No plugin is registered under the requested slug."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


__all__ = [
    "PagegraftError",
    "PluginCancelledError",
    "DocumentContractError",
    "UnknownPluginError",
]
