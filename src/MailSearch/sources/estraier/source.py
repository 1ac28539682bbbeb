"""Hyper Estraier search source.

Composes query translation, one ``estcmd search`` run and output parsing into
a `MailSource` for a single configured server.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from MailSearch.config.servers import ServerConfig
from MailSearch.core.errors import QuerySyntaxError, SearchProcessError
from MailSearch.core.models import ResultItem
from MailSearch.core.query import TranslatedQuery
from MailSearch.sources.estraier.client import EstcmdClient, build_search_argv, child_env
from MailSearch.sources.estraier.parser import parse_search_output
from MailSearch.sources.estraier.query import translate_query
from MailSearch.utils.log import log

ErrorReporter = Callable[[str], None]


def _log_error(message: str) -> None:
    log.warning("%s", message)


@dataclass(slots=True)
class EstraierSource:
    """`MailSource` implementation backed by ``estcmd``.

    Failures never raise out of `search`: a bad query or a failed process is
    reported once through ``on_error`` and whatever output exists is still
    parsed.
    """

    server: ServerConfig
    client: EstcmdClient = field(default_factory=EstcmdClient)
    on_error: ErrorReporter = _log_error

    @property
    def name(self) -> str:
        return self.server.name

    def build_argv(self, query: TranslatedQuery) -> list[str]:
        """Build the command line for a translated query."""
        return build_search_argv(
            program=self.server.program,
            index_dir=self.server.index_dir,
            text=query.text,
            attribute_args=query.attribute_args(),
            additional_switches=self.server.additional_switches,
            max_results=self.server.max_results,
        )

    def search(self, query: str, *, group: str | None = None) -> list[ResultItem]:
        """Search this server.

        Args:
            query: Raw query line, possibly with ``@field`` markers.
            group: Group scope requested by the caller; ``estcmd`` searches
                the whole index, so it is ignored.

        Returns:
            Result items, highest score first. Empty when the query cannot be
            parsed or nothing matched.
        """
        del group
        try:
            translated = translate_query(query)
        except QuerySyntaxError as e:
            self.on_error(f"{self.name}: {e}")
            return []
        log.debug("estraier query: server=%s text=%r filters=%s", self.name, translated.text, translated.filters)

        argv = self.build_argv(translated)
        exit_code, output = self.client.run(argv, child_env(self.server.env))
        if exit_code != 0:
            error = SearchProcessError(argv, exit_code, output)
            self.on_error(f"{self.name}: {error}")
            log.debug("estcmd output for %s:\n%s", self.name, output)

        items = parse_search_output(
            output,
            server=self.name,
            remove_prefix=self.server.remove_prefix,
            backend=self.server.backend,
        )
        log.debug("estraier parsed %d results for server=%s", len(items), self.name)
        return items

    def close(self) -> None:
        """Nothing to release; each search runs its own process."""
