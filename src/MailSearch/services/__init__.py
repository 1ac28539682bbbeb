"""Search service layer for MailSearch.

Provides the multi-server search service and the factory that wires it from
configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from MailSearch.services.search import ErrorCollector, MailSearchService, MailSource
from MailSearch.sources.registry import build_source

if TYPE_CHECKING:
    from MailSearch.config import AppConfig


def create_search_service(config: AppConfig) -> MailSearchService:
    """Create a search service with one source per configured server.

    Every source reports its non-fatal errors into a shared collector, so the
    service can hand them back with the results.

    Args:
        config: Application configuration containing server settings.

    Returns:
        Configured MailSearchService instance.
    """
    errors = ErrorCollector()
    sources = tuple(build_source(server, on_error=errors) for server in config.servers)
    return MailSearchService(sources=sources, errors=errors)


__all__ = [
    "ErrorCollector",
    "MailSearchService",
    "MailSource",
    "create_search_service",
]
