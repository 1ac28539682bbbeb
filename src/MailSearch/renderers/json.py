"""JSON output renderers.

Renders result items into JSON-serializable objects and provides
JsonFileWriter, which accumulates query results and writes them to one file
when the command finishes.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Iterable

from MailSearch.core.models import ResultItem, SearchReport
from MailSearch.renderers.base import OutputWriter
from MailSearch.utils.log import log


def render_json(items: Iterable[ResultItem]) -> list[dict]:
    """Render result items into JSON-serializable Python objects."""
    return [
        {
            "server": item.server,
            "group": item.group,
            "article": item.article,
            "score": item.score,
        }
        for item in items
    ]


def load_json(json_data: dict) -> ResultItem:
    """Load a single result item from its JSON form."""
    return ResultItem(
        server=json_data["server"],
        group=json_data["group"],
        article=int(json_data["article"]),
        score=str(json_data["score"]),
    )


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        """Initialize JSON writer.

        Args:
            base_dir: Base output directory; files go to ``<base_dir>/json``.
        """
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict] = []
        self.output_path: Path | None = None

    def write_query_result(self, report: SearchReport, query: str) -> None:
        """Accumulate query result for later writing."""
        self.all_results.append(
            {
                "query": query,
                "errors": list(report.errors),
                "results": render_json(report.items),
            }
        )

    def finalize(self, action: str) -> None:
        """Write accumulated results to ``<action>_<timestamp>.json``."""
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.output_path = self.output_dir / f"{action}_{timestamp}.json"
        self.output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", self.output_path)


def load_json_file(filepath: str | Path) -> list[tuple[str, list[ResultItem]]]:
    """Load ``(query, results)`` pairs back from a file written by JsonFileWriter."""
    path = Path(filepath)
    data = json.loads(path.read_text(encoding="utf-8"))
    out: list[tuple[str, list[ResultItem]]] = []
    for entry in data if isinstance(data, list) else []:
        if not isinstance(entry, dict) or "results" not in entry:
            continue
        out.append((entry.get("query", ""), [load_json(item) for item in entry["results"]]))
    log.info("Loaded %d queries from %s", len(out), path)
    return out
