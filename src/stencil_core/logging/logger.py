"""Stencil logger - hierarchical colored logging for template processing."""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TextIO

from stencil_core.logging.colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from stencil_core.types import LogFormat, LogLevel, Severity

if TYPE_CHECKING:
    from stencil_core.errors import ProcessingIssue


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_context: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stderr)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {
                "pipeline": True,
                "analyzer": True,
                "registry": True,
                "styles": True,
                "output": True,
            }


class StencilLogger:
    """Main logger facade. Creates component-specific loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def pipeline(self, component_name: str) -> "PipelineLogger":
        """Get a logger scoped to one pipeline run.

        Args:
            component_name: Name of the component being rendered

        Returns:
            PipelineLogger instance
        """
        return PipelineLogger(self, component_name)

    def configure(self, config: LogConfig) -> None:
        """Replace the configuration.

        Args:
            config: New logger configuration
        """
        self.config = config

    def _should_log(self, level: LogLevel) -> bool:
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (pipeline, analyzer, registry, styles, output)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        level_colors = {
            LogLevel.DEBUG: LIGHT_BLUE,
            LogLevel.INFO: CYAN,
            LogLevel.WARN: YELLOW,
            LogLevel.ERROR: RED,
        }

        color = level_colors.get(level, RESET)
        component_color = {
            "pipeline": MAGENTA,
            "analyzer": CYAN,
            "registry": GREEN,
            "styles": ORANGE,
            "output": LIGHT_BLUE,
        }.get(component, RESET)

        # Format: [COMPONENT] message
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_context:
            context_str = str(context)
            if len(context_str) > self.config.truncate_at:
                context_str = context_str[: self.config.truncate_at] + "..."
            output += f" {LIGHT_BLUE}{context_str}{RESET}"

        print(output, file=self.config.output)


class PipelineLogger:
    """Logger for one run of the processing pipeline."""

    def __init__(self, parent: StencilLogger, component_name: str):
        self.parent = parent
        self.component_name = component_name

    def started(self, framework: str | None, node_count: int) -> None:
        """Log pipeline start."""
        context = {
            "component": self.component_name,
            "event": "pipeline_started",
            "framework": framework,
            "node_count": node_count,
        }
        target = f" for {framework}" if framework else ""
        message = f"Processing '{self.component_name}'{target} ({node_count} root nodes)"
        self.parent._log(LogLevel.INFO, "pipeline", message, context)

    def completed(self, duration_ms: float, error_count: int, warning_count: int) -> None:
        """Log pipeline completion with summary."""
        context = {
            "component": self.component_name,
            "event": "pipeline_completed",
            "duration_ms": round(duration_ms, 2),
            "errors": error_count,
            "warnings": warning_count,
        }
        mark = "✓" if error_count == 0 else "✗"
        message = (
            f"Processed '{self.component_name}' in {duration_ms:.2f}ms "
            f"({error_count} errors, {warning_count} warnings) {mark}"
        )
        level = LogLevel.INFO if error_count == 0 else LogLevel.WARN
        self.parent._log(level, "pipeline", message, context)

    def failed(self, error: Exception) -> None:
        """Log a failure that escaped every stage guard."""
        context = {
            "component": self.component_name,
            "event": "pipeline_failed",
            "error": str(error),
            "error_type": type(error).__name__,
        }
        message = f"Processing '{self.component_name}' failed: {error}"
        self.parent._log(LogLevel.ERROR, "pipeline", message, context)

    def issue(self, issue: "ProcessingIssue") -> None:
        """Surface one collected issue on the diagnostic stream."""
        level = {
            Severity.ERROR: LogLevel.ERROR,
            Severity.WARNING: LogLevel.WARN,
            Severity.INFO: LogLevel.INFO,
        }[issue.severity]
        context = {"event": "issue", "severity": issue.severity.value}
        if issue.node_id:
            context["node_id"] = issue.node_id
        if issue.extension:
            context["extension"] = issue.extension
        self.parent._log(level, "pipeline", issue.message, context)

    def stage(self, name: str) -> "StageLogger":
        """Get a logger scoped to a pipeline stage."""
        return StageLogger(self, name)


class StageLogger:
    """Logger for stage-level events."""

    def __init__(self, parent: PipelineLogger, stage: str):
        self.parent = parent
        self.stage = stage

    def started(self, extension_key: str | None = None) -> None:
        context = {"component": self.parent.component_name, "stage": self.stage}
        message = f"Stage '{self.stage}' started"
        if extension_key:
            context["extension"] = extension_key
            message += f" ({extension_key})"
        self.parent.parent._log(LogLevel.DEBUG, "pipeline", message, context)

    def completed(self, duration_ms: float) -> None:
        context = {
            "component": self.parent.component_name,
            "stage": self.stage,
            "duration_ms": round(duration_ms, 2),
        }
        message = f"Stage '{self.stage}' completed ({duration_ms:.2f}ms)"
        self.parent.parent._log(LogLevel.DEBUG, "pipeline", message, context)

    def failed(self, extension_key: str, error: Exception) -> None:
        context = {
            "component": self.parent.component_name,
            "stage": self.stage,
            "extension": extension_key,
            "error_type": type(error).__name__,
        }
        message = f"Stage '{self.stage}' failed in '{extension_key}': {error}"
        self.parent.parent._log(LogLevel.ERROR, "pipeline", message, context)
