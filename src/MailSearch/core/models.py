from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass(frozen=True, slots=True)
class ResultItem:
    """One matched message reduced to what the mail reader needs.

    Attributes:
        server: Name of the configured search server that produced the hit.
        group: Group name derived from the message directory.
        article: Article number inside the group.
        score: Relevance score exactly as printed by the engine.
    """

    server: str
    group: str
    article: int
    score: str

    @property
    def rank(self) -> int:
        """Numeric value of `score` used for ordering."""
        return int(self.score)


def sort_by_score(items: Sequence[ResultItem]) -> list[ResultItem]:
    """Stable sort by numeric score, highest first."""
    return sorted(items, key=lambda item: -item.rank)


@dataclass(frozen=True, slots=True)
class SearchReport:
    """Merged outcome of one query over several servers.

    Attributes:
        items: Results from every server, highest score first.
        errors: Non-fatal error messages reported by servers, in order.
    """

    items: Sequence[ResultItem] = ()
    errors: Sequence[str] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors
