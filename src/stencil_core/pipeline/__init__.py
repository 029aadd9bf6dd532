"""Processing pipeline."""

from .outcome import ExtensionFault, ExtensionOutcome, fold_utilities, invoke
from .performance import PerformanceMetrics, PerformanceTracker
from .pipeline import FRAMEWORK_TRANSFORMS, ProcessingPipeline
from .types import ProcessingMetadata, ProcessingOptions, ProcessingResult

__all__ = [
    "ProcessingPipeline",
    "ProcessingOptions",
    "ProcessingResult",
    "ProcessingMetadata",
    "PerformanceTracker",
    "PerformanceMetrics",
    "ExtensionOutcome",
    "ExtensionFault",
    "invoke",
    "fold_utilities",
    "FRAMEWORK_TRANSFORMS",
]
