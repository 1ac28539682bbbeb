"""Command implementations for MailSearch CLI.

Encapsulates business logic for the search, show and translate commands,
separated from CLI parameter handling and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from MailSearch.config import ServerConfig
from MailSearch.core.models import SearchReport
from MailSearch.renderers import OutputWriter
from MailSearch.renderers.json import load_json_file
from MailSearch.services.search import MailSearchService
from MailSearch.sources.estraier.source import EstraierSource
from MailSearch.sources.estraier.query import translate_query
from MailSearch.utils.log import log


@dataclass(slots=True)
class SearchCommand:
    """Run one query over the selected servers and hand results to the writer."""

    search_service: MailSearchService
    output_writer: OutputWriter
    servers: Sequence[str] = ()

    def execute(self, query: str) -> SearchReport:
        """Execute the search.

        Returns:
            The merged report, also passed to the output writer.
        """
        names = list(self.servers) or list(self.search_service.server_names)
        log.debug("Running query=%r servers=%s", query, names)

        report = self.search_service.search(query, servers=self.servers or None)
        log.info("Found %d matches", len(report.items))
        if not report.ok:
            log.warning("%d server error(s) during search", len(report.errors))

        self.output_writer.write_query_result(report, query)
        return report


@dataclass(slots=True)
class ShowCommand:
    """Replay results saved by the JSON writer."""

    output_writer: OutputWriter

    def execute(self, path: Path) -> list[SearchReport]:
        reports: list[SearchReport] = []
        for query, items in load_json_file(path):
            report = SearchReport(items=items)
            self.output_writer.write_query_result(report, query)
            reports.append(report)
        return reports


@dataclass(slots=True)
class TranslateCommand:
    """Show how a query would be handed to ``estcmd`` without running it."""

    server: ServerConfig

    def execute(self, query: str) -> list[str]:
        """Translate the query and log the pieces.

        Returns:
            The argv that a search on this server would execute.

        Raises:
            QuerySyntaxError: When the query cannot be tokenized.
        """
        translated = translate_query(query)
        argv = EstraierSource(server=self.server).build_argv(translated)

        log.info("server=%s", self.server.name)
        log.info("text=%s", translated.text)
        for item in translated.filters:
            log.info("attr=%s", item.render())
        log.info("argv=%s", argv)
        return argv
