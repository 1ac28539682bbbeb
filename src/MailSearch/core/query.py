"""Query model shared by the translator and the search sources.

A raw query line mixes free text with inline field markers such as
``@title=foo`` or ``@cdate>2013/01/01``. Translation splits it into the
residual free text and a list of `AttributeFilter` objects; how those are
rendered on a command line is up to each source.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class AttributeFilter:
    """One structured comparison on a document attribute.

    Attributes:
        attribute: Attribute name including the leading ``@`` (e.g. ``@title``).
        keyword: Engine operator keyword (``NUMEQ``, ``STRINC``, ``NUMLE``, ``NUMGE``).
        value: Subject value, passed through unchanged (may be empty).
    """

    attribute: str
    keyword: str
    value: str

    def render(self) -> str:
        """Return the ``"<attr> <KEYWORD> <value>"`` expression."""
        return f"{self.attribute} {self.keyword} {self.value}"


@dataclass(frozen=True, slots=True)
class TranslatedQuery:
    """Result of splitting a raw query line.

    Attributes:
        text: Residual free-text query, tokens joined by single spaces.
        filters: Attribute filters in the order they were written.
    """

    text: str
    filters: Sequence[AttributeFilter] = ()

    def attribute_args(self, flag: str = "-attr") -> list[str]:
        """Serialize filters as argv pairs: ``[flag, expr, flag, expr, ...]``."""
        args: list[str] = []
        for item in self.filters:
            args.extend((flag, item.render()))
        return args
