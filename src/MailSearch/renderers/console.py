"""Console text output renderers.

Renders result items into one line each and writes them through the logger.
"""

from __future__ import annotations

from typing import Iterable

from MailSearch.core.models import ResultItem, SearchReport
from MailSearch.renderers.base import OutputWriter
from MailSearch.utils.log import log


def render_text(items: Iterable[ResultItem]) -> str:
    """Render result items into a human-readable text block.

    Each line reads ``<n>. [<score>] <server>:<group> <article>``.
    """
    lines = [
        f"{idx}. [{item.score}] {item.server}:{item.group} {item.article}"
        for idx, item in enumerate(items, start=1)
    ]
    if not lines:
        return "No matches.\n"
    return "\n".join(lines) + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_query_result(self, report: SearchReport, query: str) -> None:
        log.info("query=%s", query)
        for line in render_text(report.items).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
