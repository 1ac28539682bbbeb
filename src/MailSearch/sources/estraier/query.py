"""Hyper Estraier query translator.

Splits a raw query line into free text and ``estcmd`` attribute filters.

Rules
- The line is tokenized with shell-like quoting, so ``@title="a b"`` is one
  token with the value ``a b``.
- A token starting with one of the field markers below (case-insensitive)
  becomes an attribute filter; every other token stays in the free text.
- Free-text tokens keep their relative order and are joined by single spaces.

Field markers
- @cdate=  @cdate>  @cdate<
- @author=
- @size>   @size<
- @title=
- @uri=

Operator mapping
- ``=`` on @cdate -> NUMEQ
- ``=`` elsewhere -> STRINC
- ``<``           -> NUMLE
- anything else   -> NUMGE
"""

from __future__ import annotations

import re
import shlex

from MailSearch.core.errors import QuerySyntaxError
from MailSearch.core.query import AttributeFilter, TranslatedQuery


FIELD_PREFIXES: tuple[str, ...] = (
    "@cdate=",
    "@cdate>",
    "@cdate<",
    "@author=",
    "@size>",
    "@size<",
    "@title=",
    "@uri=",
)

_RE_FIELD = re.compile(
    "^(" + "|".join(re.escape(p) for p in FIELD_PREFIXES) + ")(.*)$",
    re.IGNORECASE | re.DOTALL,
)


def operator_keyword(attribute: str, operator: str) -> str:
    """Map a field operator character to an ``estcmd`` keyword.

    Args:
        attribute: Attribute name, with or without the leading ``@``.
        operator: Operator character taken from the field marker.

    Returns:
        One of NUMEQ, STRINC, NUMLE, NUMGE.
    """
    if operator == "=":
        return "NUMEQ" if attribute.lstrip("@").lower() == "cdate" else "STRINC"
    if operator == "<":
        return "NUMLE"
    return "NUMGE"


def parse_field(token: str) -> AttributeFilter | None:
    """Turn one token into an attribute filter.

    Returns:
        The filter, or None when the token carries no field marker.
    """
    m = _RE_FIELD.match(token)
    if m is None:
        return None
    prefix, value = m.group(1).lower(), m.group(2)
    attribute, operator = prefix[:-1], prefix[-1]
    return AttributeFilter(
        attribute=attribute,
        keyword=operator_keyword(attribute, operator),
        value=value,
    )


def tokenize(query: str) -> list[str]:
    """Split a query line, honoring single and double quotes.

    Raises:
        QuerySyntaxError: On unbalanced quotes or a dangling escape.
    """
    try:
        return shlex.split(query)
    except ValueError as e:
        raise QuerySyntaxError(f"Cannot parse query {query!r}: {e}") from e


def translate_query(query: str) -> TranslatedQuery:
    """Split a raw query line into free text and attribute filters.

    Args:
        query: Raw query line as typed by the user.

    Returns:
        Residual text plus filters in encounter order. A marker with an empty
        subject (``@title=``) still yields a filter with an empty value.

    Raises:
        QuerySyntaxError: When the line cannot be tokenized.
    """
    words: list[str] = []
    filters: list[AttributeFilter] = []
    for token in tokenize(query):
        attr = parse_field(token)
        if attr is None:
            words.append(token)
        else:
            filters.append(attr)
    return TranslatedQuery(text=" ".join(words), filters=tuple(filters))
