"""Command runner for coordinating CLI execution.

Manages component lifecycle, logging configuration, and error handling for
command execution.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import click

from MailSearch.cli.commands import SearchCommand, ShowCommand, TranslateCommand
from MailSearch.config import AppConfig
from MailSearch.renderers import ConsoleOutputWriter, create_output_writer
from MailSearch.services import create_search_service
from MailSearch.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_search(self, action: str, query: str, servers: Sequence[str] = ()) -> None:
        """Execute the search command.

        Args:
            action: The CLI command name (e.g., 'search').
            query: Raw query line.
            servers: Server names to restrict the search to.

        Raises:
            click.Abort: When the search fails.
        """
        self._configure_logging(action)
        try:
            search_service = create_search_service(self.config)
            output_writer = create_output_writer(self.config)
            command = SearchCommand(
                search_service=search_service,
                output_writer=output_writer,
                servers=tuple(servers),
            )
            try:
                command.execute(query)
                output_writer.finalize(action)
            finally:
                search_service.close()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e

    def run_show(self, action: str, path: Path) -> None:
        """Print results saved by an earlier search with JSON output.

        Raises:
            click.Abort: When the file cannot be read or parsed.
        """
        self._configure_logging(action)
        try:
            reports = ShowCommand(output_writer=ConsoleOutputWriter()).execute(path)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Show failed: %s", e)
            raise click.Abort from e
        log.info("Shown %d saved queries", len(reports))

    def run_translate(self, action: str, query: str, server: str | None = None) -> list[str]:
        """Execute the translate command against one server's settings.

        Raises:
            click.Abort: When the query or the server name is invalid.
        """
        self._configure_logging(action)
        try:
            server_config = self.config.server(server) if server else self.config.servers[0]
            return TranslateCommand(server=server_config).execute(query)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Translate failed: %s", e)
            raise click.Abort from e
