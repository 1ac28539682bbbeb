"""Tests for the multi-server search service."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from MailSearch.config import parse_config_dict
from MailSearch.core.models import ResultItem
from MailSearch.services import ErrorCollector, MailSearchService, create_search_service
from MailSearch.sources.estraier.source import EstraierSource


def _item(server: str, score: str, article: int = 1) -> ResultItem:
    return ResultItem(server=server, group="mail/misc", article=article, score=score)


class _StubSource:
    def __init__(
        self,
        *,
        name: str,
        items: list[ResultItem] | None = None,
        error: str | None = None,
        on_error=None,
    ) -> None:
        self.name = name
        self._items = items or []
        self._error = error
        self._on_error = on_error
        self.queries: list[tuple[str, str | None]] = []
        self.closed = False

    def search(self, query: str, *, group: str | None = None) -> list[ResultItem]:
        self.queries.append((query, group))
        if self._error and self._on_error:
            self._on_error(f"{self.name}: {self._error}")
        return list(self._items)

    def close(self) -> None:
        self.closed = True


class _RaisingSource(_StubSource):
    def search(self, query: str, *, group: str | None = None) -> list[ResultItem]:
        self.queries.append((query, group))
        raise RuntimeError("boom")


class TestMailSearchService(unittest.TestCase):
    def test_results_merged_by_numeric_score(self) -> None:
        service = MailSearchService(
            sources=(
                _StubSource(name="a", items=[_item("a", "5"), _item("a", "1")]),
                _StubSource(name="b", items=[_item("b", "20"), _item("b", "5")]),
            )
        )

        report = service.search("foo")

        self.assertEqual([(i.server, i.score) for i in report.items], [("b", "20"), ("a", "5"), ("b", "5"), ("a", "1")])
        self.assertTrue(report.ok)

    def test_errors_are_collected_per_search(self) -> None:
        errors = ErrorCollector()
        service = MailSearchService(
            sources=(
                _StubSource(name="a", error="exit status 1", on_error=errors),
                _StubSource(name="b", items=[_item("b", "3")]),
            ),
            errors=errors,
        )

        first = service.search("foo")
        self.assertEqual(tuple(first.errors), ("a: exit status 1",))
        self.assertEqual(len(first.items), 1)
        self.assertFalse(first.ok)

        second = service.search("bar")
        self.assertEqual(tuple(second.errors), ("a: exit status 1",))

    def test_failing_server_does_not_stop_others(self) -> None:
        errors = ErrorCollector()
        boom = _RaisingSource(name="boom")
        good = _StubSource(name="good", items=[_item("good", "4")])
        service = MailSearchService(sources=(boom, good), errors=errors)

        report = service.search("x")

        self.assertEqual([i.server for i in report.items], ["good"])
        self.assertEqual(tuple(report.errors), ("boom: boom",))
        self.assertEqual(good.queries, [("x", None)])
        self.assertEqual(errors.messages, [])

    def test_failure_without_collector_is_still_reported(self) -> None:
        service = MailSearchService(
            sources=(_RaisingSource(name="boom"), _StubSource(name="good", items=[_item("good", "1")]))
        )
        report = service.search("x")
        self.assertEqual(tuple(report.errors), ("boom: boom",))
        self.assertEqual(len(report.items), 1)

    def test_all_servers_failing_raises(self) -> None:
        errors = ErrorCollector()
        service = MailSearchService(
            sources=(_RaisingSource(name="a"), _RaisingSource(name="b")),
            errors=errors,
        )
        with self.assertRaises(RuntimeError):
            service.search("x")

        service = MailSearchService(sources=(_StubSource(name="c"),), errors=errors)
        self.assertEqual(tuple(service.search("y").errors), ())

    def test_server_selection(self) -> None:
        a = _StubSource(name="a", items=[_item("a", "1")])
        b = _StubSource(name="b", items=[_item("b", "2")])
        service = MailSearchService(sources=(a, b))

        report = service.search("foo", servers=["b", "b"])

        self.assertEqual([i.server for i in report.items], ["b"])
        self.assertEqual(a.queries, [])
        self.assertEqual(b.queries, [("foo", None)])

    def test_group_is_forwarded(self) -> None:
        a = _StubSource(name="a")
        MailSearchService(sources=(a,)).search("foo", group="mail.misc")
        self.assertEqual(a.queries, [("foo", "mail.misc")])

    def test_unknown_server(self) -> None:
        service = MailSearchService(sources=(_StubSource(name="a"),))
        with self.assertRaises(RuntimeError):
            service.search("foo", servers=["nope"])

    def test_no_sources(self) -> None:
        with self.assertRaises(RuntimeError):
            MailSearchService(sources=()).search("foo")

    def test_close_closes_all_sources(self) -> None:
        a, b = _StubSource(name="a"), _StubSource(name="b")
        MailSearchService(sources=(a, b)).close()
        self.assertTrue(a.closed and b.closed)


class TestCreateSearchService(unittest.TestCase):
    def test_one_source_per_server(self) -> None:
        cfg = parse_config_dict(
            {
                "servers": [
                    {"name": "mail", "index_dir": "/srv/a"},
                    {"name": "work", "index_dir": "/srv/b", "backend": "nnmaildir"},
                ]
            }
        )

        service = create_search_service(cfg)

        self.assertEqual(service.server_names, ("mail", "work"))
        self.assertTrue(all(isinstance(s, EstraierSource) for s in service.sources))
        self.assertIs(service.sources[0].on_error, service.errors)
        self.assertEqual(service.sources[1].server.backend, "nnmaildir")


if __name__ == "__main__":
    unittest.main()
