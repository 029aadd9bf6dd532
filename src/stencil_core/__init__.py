"""Stencil Core - concept-driven UI template compilation.

Templates are trees of framework-agnostic nodes. The analyzer extracts
concepts (events, styling, conditionals, iterations, slots, attributes),
extensions turn concepts into framework syntax and style sheets, and the
pipeline ties it together without ever raising.
"""

from stencil_core.application import StencilApplication
from stencil_core.pipeline import ProcessingOptions, ProcessingPipeline, ProcessingResult
from stencil_core.registry import ExtensionRegistry

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "StencilApplication",
    "ProcessingPipeline",
    "ProcessingOptions",
    "ProcessingResult",
    "ExtensionRegistry",
]
