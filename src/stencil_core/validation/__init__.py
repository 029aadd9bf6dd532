"""Concept validation - quality checks and scoring of extracted concepts."""

from .types import (
    ConceptSuggestion,
    ConceptValidation,
    ConceptWarning,
    ValidationOptions,
    ValidationRule,
)
from .validator import ConceptValidator, is_valid_attribute_name, is_valid_class_name

__all__ = [
    "ConceptValidator",
    "ConceptValidation",
    "ConceptWarning",
    "ConceptSuggestion",
    "ValidationOptions",
    "ValidationRule",
    "is_valid_class_name",
    "is_valid_attribute_name",
]
