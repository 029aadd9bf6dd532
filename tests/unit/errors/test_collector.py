"""Unit tests for ErrorCollector."""

from stencil_core.errors import ErrorCollector, ProcessingIssue
from stencil_core.types import Severity


class TestErrorCollector:
    """Tests for ErrorCollector."""

    def test_empty(self):
        collector = ErrorCollector()
        assert len(collector) == 0
        assert not collector.has_errors()
        assert not collector.has_warnings()
        assert collector.format_errors() == "No errors found."

    def test_severities_are_counted_separately(self):
        collector = ErrorCollector()
        collector.add_simple_error("broken", node_id="0")
        collector.add_warning("odd", node_id="0.1", extension="react")
        collector.add_info("note")

        assert collector.get_error_count() == 3
        assert collector.get_error_count(Severity.ERROR) == 1
        assert collector.get_error_count("warning") == 1
        assert collector.has_errors()
        assert collector.has_warnings()

    def test_warnings_only_is_not_an_error(self):
        collector = ErrorCollector()
        collector.add_warning("careful")
        assert not collector.has_errors()

    def test_insertion_order_kept(self):
        collector = ErrorCollector()
        for message in ("a", "b", "c"):
            collector.add_warning(message)
        assert [issue.message for issue in collector.get_errors()] == ["a", "b", "c"]

    def test_get_errors_returns_copy(self):
        collector = ErrorCollector()
        collector.add_warning("one")
        collector.get_errors().clear()
        assert len(collector) == 1

    def test_merge_and_clear(self):
        first = ErrorCollector()
        second = ErrorCollector()
        first.add_warning("a")
        second.add_error(ProcessingIssue(message="b", extension="bem"))

        first.merge(second)
        assert [issue.message for issue in first] == ["a", "b"]
        assert len(second) == 1

        first.clear()
        assert len(first) == 0

    def test_format_groups_by_node(self):
        collector = ErrorCollector()
        collector.add_simple_error("first", node_id="0")
        collector.add_warning("second", node_id="0", extension="vue")
        collector.add_info("third")

        report = collector.format_errors()
        assert report.splitlines() == [
            "Node 0:",
            "  [ERROR] first",
            "  [WARNING] (vue) second",
            "Node general:",
            "  [INFO] third",
        ]

    def test_to_list(self):
        collector = ErrorCollector()
        collector.add_warning("w", node_id="1", context={"code": "X"})
        assert collector.to_list() == [
            {
                "message": "w",
                "node_id": "1",
                "extension": None,
                "severity": "warning",
                "context": {"code": "X"},
            }
        ]
