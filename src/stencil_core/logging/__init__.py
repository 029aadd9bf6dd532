"""Stencil logging - hierarchical colored logging for template processing."""

from .colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from .logger import LogConfig, PipelineLogger, StageLogger, StencilLogger

__all__ = [
    # Logger classes
    "StencilLogger",
    "PipelineLogger",
    "StageLogger",
    "LogConfig",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
