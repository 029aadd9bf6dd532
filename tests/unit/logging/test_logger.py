"""Tests for the stencil logger."""

import json
from io import StringIO

import pytest

from stencil_core.errors import ProcessingIssue
from stencil_core.logging import RED, RESET, YELLOW, LogConfig, StencilLogger
from stencil_core.types import LogFormat, LogLevel, Severity


@pytest.fixture
def stream():
    return StringIO()


def make_logger(stream, **overrides):
    return StencilLogger(LogConfig(output=stream, **overrides))


class TestLogConfig:
    def test_default_components_enabled(self):
        config = LogConfig()
        assert config.components == {
            "pipeline": True,
            "analyzer": True,
            "registry": True,
            "styles": True,
            "output": True,
        }

    def test_explicit_components_kept(self):
        assert LogConfig(components={"styles": False}).components == {"styles": False}


class TestLevelFiltering:
    def test_below_level_dropped(self, stream):
        logger = make_logger(stream, level=LogLevel.WARN)
        logger._log(LogLevel.INFO, "pipeline", "hidden")
        assert stream.getvalue() == ""

    def test_at_level_written(self, stream):
        logger = make_logger(stream, level=LogLevel.WARN)
        logger._log(LogLevel.ERROR, "pipeline", "shown")
        assert "shown" in stream.getvalue()

    def test_disabled_component_dropped(self, stream):
        logger = make_logger(stream, components={"styles": False})
        logger._log(LogLevel.INFO, "styles", "hidden")
        logger._log(LogLevel.INFO, "output", "shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_configure_replaces_config(self, stream):
        logger = make_logger(stream)
        logger.configure(LogConfig(level=LogLevel.ERROR, output=stream))
        logger._log(LogLevel.INFO, "pipeline", "hidden")
        assert stream.getvalue() == ""


class TestFormats:
    def test_json_entry(self, stream):
        logger = make_logger(stream, format=LogFormat.JSON)
        logger._log(LogLevel.INFO, "registry", "Registered", {"key": "react"})

        entry = json.loads(stream.getvalue())
        assert entry["level"] == "INFO"
        assert entry["component"] == "registry"
        assert entry["message"] == "Registered"
        assert entry["key"] == "react"
        assert entry["timestamp"].endswith("Z")

    def test_colored_prefix(self, stream):
        logger = make_logger(stream)
        logger._log(LogLevel.WARN, "output", "Slow write")

        line = stream.getvalue()
        assert "[OUTPUT]" in line
        assert f"{YELLOW}Slow write{RESET}" in line

    def test_context_truncated(self, stream):
        logger = make_logger(stream, truncate_at=10)
        logger._log(LogLevel.INFO, "pipeline", "msg", {"key": "x" * 50})

        assert str({"key": "x" * 50})[:10] + "..." in stream.getvalue()

    def test_context_hidden(self, stream):
        logger = make_logger(stream, show_context=False)
        logger._log(LogLevel.INFO, "pipeline", "msg", {"secret_key": 1})

        assert "secret_key" not in stream.getvalue()


class TestPipelineLogger:
    def setup_method(self):
        self.stream = StringIO()
        self.logger = StencilLogger(
            LogConfig(level=LogLevel.DEBUG, format=LogFormat.JSON, output=self.stream)
        )

    def entries(self):
        return [json.loads(line) for line in self.stream.getvalue().splitlines()]

    def test_run_lifecycle(self):
        run = self.logger.pipeline("Card")
        run.started("vue", 2)
        run.completed(12.345, 0, 1)

        started, completed = self.entries()
        assert started["event"] == "pipeline_started"
        assert started["message"] == "Processing 'Card' for vue (2 root nodes)"
        assert completed["level"] == "INFO"
        assert completed["duration_ms"] == 12.35
        assert completed["warnings"] == 1

    def test_completed_with_errors_is_warning(self):
        self.logger.pipeline("Card").completed(1.0, 2, 0)
        assert self.entries()[0]["level"] == "WARN"

    def test_failed(self):
        self.logger.pipeline("Card").failed(ValueError("bad"))

        entry = self.entries()[0]
        assert entry["level"] == "ERROR"
        assert entry["error_type"] == "ValueError"

    def test_issue_severity_mapping(self):
        run = self.logger.pipeline("Card")
        run.issue(ProcessingIssue("oops", node_id="root.children[0]", extension="bem"))
        run.issue(ProcessingIssue("careful", severity=Severity.WARNING))

        error, warning = self.entries()
        assert error["level"] == "ERROR"
        assert error["node_id"] == "root.children[0]"
        assert error["extension"] == "bem"
        assert warning["level"] == "WARN"
        assert "node_id" not in warning

    def test_stage_events(self):
        stage = self.logger.pipeline("Card").stage("render_component")
        stage.started("react")
        stage.completed(0.5)
        stage.failed("react", RuntimeError("boom"))

        started, completed, failed = self.entries()
        assert started["message"] == "Stage 'render_component' started (react)"
        assert completed["stage"] == "render_component"
        assert failed["message"] == "Stage 'render_component' failed in 'react': boom"
        assert failed["level"] == "ERROR"


def test_error_color_used(stream):
    make_logger(stream)._log(LogLevel.ERROR, "pipeline", "bad")
    assert f"{RED}bad{RESET}" in stream.getvalue()
