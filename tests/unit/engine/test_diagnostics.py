"""Unit tests for diagnostic sinks."""

import logging

from adf_convert.engine import diagnostics as diag
from adf_convert.engine.diagnostics import (
    CollectingDiagnosticSink,
    DiagnosticCode,
    LoggingDiagnosticSink,
)


class TestDiagnosticFactories:
    """Test cases for the diagnostic constructors."""

    def test_unknown_node_type_is_debug(self):
        diagnostic = diag.unknown_node_type("widget")

        assert diagnostic.code == DiagnosticCode.UNKNOWN_NODE_TYPE
        assert diagnostic.level == logging.DEBUG
        assert diagnostic.level_name == "DEBUG"
        assert "widget" in diagnostic.message

    def test_unknown_mark_type_names_node_and_mark(self):
        diagnostic = diag.unknown_mark_type("text", "sparkle")

        assert diagnostic.level == logging.DEBUG
        assert diagnostic.message == 'Unsupported mark type "sparkle" on node type "text"'

    def test_implicit_wrap_is_warning(self):
        diagnostic = diag.implicit_document_wrap("heading")

        assert diagnostic.level == logging.WARNING
        assert diagnostic.node_type == "heading"


class TestLoggingDiagnosticSink:
    """Test cases for LoggingDiagnosticSink."""

    def test_logs_at_diagnostic_level(self, caplog):
        sink = LoggingDiagnosticSink()

        with caplog.at_level(logging.DEBUG, logger="adf_convert"):
            sink.report(diag.unknown_node_type("widget"))
            sink.report(diag.implicit_document_wrap("paragraph"))

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.DEBUG, logging.WARNING]

    def test_uses_given_logger(self, caplog):
        custom = logging.getLogger("tests.custom_sink")
        sink = LoggingDiagnosticSink(custom)

        with caplog.at_level(logging.WARNING, logger="tests.custom_sink"):
            sink.report(diag.implicit_document_wrap("paragraph"))

        assert caplog.records[0].name == "tests.custom_sink"


class TestCollectingDiagnosticSink:
    """Test cases for CollectingDiagnosticSink."""

    def test_records_in_order(self):
        sink = CollectingDiagnosticSink()
        first = diag.unknown_node_type("a")
        second = diag.unknown_mark_type("text", "b")

        sink.report(first)
        sink.report(second)

        assert sink.diagnostics == [first, second]

    def test_warnings_filters_by_level(self):
        sink = CollectingDiagnosticSink()
        sink.report(diag.unknown_node_type("a"))
        sink.report(diag.implicit_document_wrap("paragraph"))

        assert [d.code for d in sink.warnings] == [DiagnosticCode.IMPLICIT_DOCUMENT_WRAP]

    def test_forwards_to_other_sink(self):
        target = CollectingDiagnosticSink()
        sink = CollectingDiagnosticSink(forward_to=target)
        diagnostic = diag.unknown_node_type("a")

        sink.report(diagnostic)

        assert target.diagnostics == [diagnostic]

    def test_clear(self):
        sink = CollectingDiagnosticSink()
        sink.report(diag.unknown_node_type("a"))

        sink.clear()

        assert sink.diagnostics == []
