"""Search service layer for multi-server mail search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol, Sequence

from MailSearch.core.models import ResultItem, SearchReport, sort_by_score
from MailSearch.utils.log import log


class MailSource(Protocol):
    """Protocol for one searchable mail index."""

    name: str

    def search(self, query: str, *, group: str | None = None) -> Sequence[ResultItem]:
        """Search this index; failures are reported, not raised."""
        raise NotImplementedError

    def close(self) -> None:
        """Close resources held by source."""
        raise NotImplementedError


@dataclass(slots=True)
class ErrorCollector:
    """Error channel that records messages for the current search."""

    messages: list[str] = field(default_factory=list)

    def __call__(self, message: str) -> None:
        log.warning("%s", message)
        self.messages.append(message)

    def drain(self) -> tuple[str, ...]:
        out = tuple(self.messages)
        self.messages.clear()
        return out


@dataclass(slots=True)
class MailSearchService:
    """Application service that searches mail across configured servers."""

    sources: tuple[MailSource, ...]
    errors: ErrorCollector | None = None

    @property
    def server_names(self) -> tuple[str, ...]:
        return tuple(getattr(source, "name", "unknown") for source in self.sources)

    def search(
        self,
        query: str,
        *,
        servers: Sequence[str] | None = None,
        group: str | None = None,
    ) -> SearchReport:
        """Run one query on every selected server.

        Args:
            query: Raw query line.
            servers: Server names to search; None searches all of them.
            group: Group scope handed to each source.

        Returns:
            Merged results, highest score first, with the errors servers
            reported on the way. Equal scores keep server order.

        Raises:
            RuntimeError: If no sources are configured, a requested server
                does not exist, or every selected server raised.
        """
        selected = self._select(servers)
        if self.errors is not None:
            self.errors.drain()

        aggregated: list[ResultItem] = []
        failures: list[str] = []
        failed_sources: list[str] = []
        for source in selected:
            source_name = getattr(source, "name", "unknown")
            try:
                items = source.search(query, group=group)
            except Exception as error:  # noqa: BLE001 - source failure must be isolated
                failed_sources.append(source_name)
                message = f"{source_name}: {error}"
                if self.errors is not None:
                    self.errors(message)
                else:
                    log.warning("Search server failed: %s", message)
                    failures.append(message)
                continue

            log.info("Search server completed: server=%s count=%d", source_name, len(items))
            aggregated.extend(items)

        if len(failed_sources) == len(selected):
            raise RuntimeError(f"All search servers failed: {', '.join(failed_sources)}")

        errors = self.errors.drain() if self.errors is not None else tuple(failures)
        return SearchReport(items=sort_by_score(aggregated), errors=errors)

    def close(self) -> None:
        """Close all sources and release external resources."""
        for source in self.sources:
            close_func: Callable[[], None] | None = getattr(source, "close", None)
            if callable(close_func):
                try:
                    close_func()
                except Exception as error:  # noqa: BLE001 - close failure must be isolated
                    log.warning("Search server close failed: server=%s error=%s", source.name, error)

    def _select(self, servers: Sequence[str] | None) -> tuple[MailSource, ...]:
        if not self.sources:
            raise RuntimeError("No search servers are configured")
        if not servers:
            return self.sources
        by_name = {getattr(source, "name", ""): source for source in self.sources}
        unknown = [name for name in servers if name not in by_name]
        if unknown:
            raise RuntimeError(f"Unknown search server(s): {', '.join(unknown)}")
        return tuple(by_name[name] for name in dict.fromkeys(servers))
