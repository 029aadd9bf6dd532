"""Writing rendered output to disk."""

from .types import Formatter, OutputOptions
from .writer import FileOutputManager

__all__ = ["FileOutputManager", "OutputOptions", "Formatter"]
