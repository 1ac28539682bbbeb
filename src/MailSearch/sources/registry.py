"""Source registry and builders for search engines."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from MailSearch.config import ServerConfig
    from MailSearch.services.search import MailSource
    from MailSearch.sources.estraier.source import ErrorReporter

SourceBuilder = Callable[["ServerConfig", "ErrorReporter | None"], "MailSource"]


def build_source(server: ServerConfig, *, on_error: ErrorReporter | None = None) -> MailSource:
    """Build a mail source for one configured server.

    Args:
        server: Server configuration; ``server.engine`` selects the builder.
        on_error: Error channel for non-fatal failures; None keeps the
            source's default (log a warning).

    Returns:
        MailSource: Initialized source for the server.

    Raises:
        ValueError: If ``server.engine`` is not registered.
    """
    builder = _source_builders().get(server.engine)
    if builder is None:
        raise ValueError(f"Unsupported search engine for server {server.name}: {server.engine}")
    return builder(server, on_error)


def supported_engine_names() -> tuple[str, ...]:
    """Return all engine names that can be built by the registry."""
    return tuple(_source_builders().keys())


def _source_builders() -> dict[str, SourceBuilder]:
    """Return source builder registry."""
    return {
        "estraier": _build_estraier_source,
    }


def _build_estraier_source(server: ServerConfig, on_error: ErrorReporter | None) -> MailSource:
    """Build Hyper Estraier source."""
    from MailSearch.sources.estraier.client import EstcmdClient
    from MailSearch.sources.estraier.source import EstraierSource

    if on_error is None:
        return EstraierSource(server=server, client=EstcmdClient())
    return EstraierSource(server=server, client=EstcmdClient(), on_error=on_error)
