"""``estcmd search -vu`` output parser.

Turns the tab-separated result listing into `ResultItem` objects. Only lines
of the form ``<score>\\tfile://<percent-encoded path>`` are considered; the
header, the hit summary and any diagnostics are ignored.
"""

from __future__ import annotations

import posixpath
import re
from typing import Iterable
from urllib.parse import unquote

from MailSearch.core.models import ResultItem, sort_by_score


BACKENDS = ("nnml", "nnmaildir")

_RE_RESULT_LINE = re.compile(r"^(\d+)\tfile://(.+)$")

# nnml stores one message per numbered file; nnmaildir file names carry the
# article number after the last colon.
_RE_ARTICLE = {
    "nnml": re.compile(r"^(\d+)$"),
    "nnmaildir": re.compile(r"^.*:(\d+)$"),
}


def article_number(basename: str, backend: str) -> int | None:
    """Extract the article number from a message file name.

    Args:
        basename: Last path component of the message file.
        backend: Mailbox backend, ``nnml`` or ``nnmaildir``.

    Returns:
        The article number, or None when the name does not have the shape
        the backend uses.

    Raises:
        ValueError: If ``backend`` is unknown.
    """
    try:
        pattern = _RE_ARTICLE[backend]
    except KeyError:
        raise ValueError(f"Unsupported mailbox backend: {backend}") from None
    m = pattern.match(basename)
    return int(m.group(1)) if m else None


def group_name(directory: str, remove_prefix: str) -> str:
    """Derive a group name from a message directory.

    The prefix is compared against the directory with a trailing slash, so
    both ``/home/john/Mail`` and ``/home/john/Mail/`` strip the same way.
    Directories outside the prefix are returned unchanged.
    """
    path = directory.rstrip("/") + "/"
    if remove_prefix:
        prefix = remove_prefix if remove_prefix.endswith("/") else remove_prefix + "/"
        if path.startswith(prefix):
            path = path[len(prefix):]
    return path.rstrip("/")


def parse_result_line(
    line: str,
    *,
    server: str,
    remove_prefix: str,
    backend: str = "nnml",
) -> ResultItem | None:
    """Parse one output line.

    Returns:
        A result item, or None when the line is not a result line or the file
        name is not an article of ``backend``.
    """
    m = _RE_RESULT_LINE.match(line.rstrip("\r"))
    if m is None:
        return None
    score, path = m.group(1), unquote(m.group(2))
    directory, basename = posixpath.split(path)
    article = article_number(basename, backend)
    if article is None:
        return None
    return ResultItem(
        server=server,
        group=group_name(directory, remove_prefix),
        article=article,
        score=score,
    )


def iter_results(
    lines: Iterable[str],
    *,
    server: str,
    remove_prefix: str,
    backend: str = "nnml",
) -> Iterable[ResultItem]:
    """Yield result items in output order, skipping everything else."""
    for line in lines:
        item = parse_result_line(line, server=server, remove_prefix=remove_prefix, backend=backend)
        if item is not None:
            yield item


def parse_search_output(
    text: str,
    *,
    server: str,
    remove_prefix: str,
    backend: str = "nnml",
) -> list[ResultItem]:
    """Parse the full ``estcmd search`` output.

    Args:
        text: Captured program output.
        server: Server name attached to every item.
        remove_prefix: Directory prefix stripped from group names.
        backend: Mailbox backend deciding the article-number shape.

    Returns:
        Result items sorted by numeric score, highest first. Ties keep the
        order in which the engine printed them.
    """
    items = iter_results(text.splitlines(), server=server, remove_prefix=remove_prefix, backend=backend)
    return sort_by_score(list(items))
