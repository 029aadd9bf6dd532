"""Extension Registry - validated catalog of framework, styling and utility extensions."""

from __future__ import annotations

import logging
import re
from typing import Any

from stencil_core.extensions.base import REQUIRED_OPERATIONS
from stencil_core.logging.logger import StencilLogger
from stencil_core.types import (
    ExtensionType,
    FrameworkSyntax,
    LogLevel,
    StylingApproach,
    ValidationResult,
)

from .types import ActiveExtensions

logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(r"^[a-z]$|^[a-z][a-z0-9-]*[a-z0-9]$")
VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")

_KIND_LABELS = {
    ExtensionType.FRAMEWORK: "Framework",
    ExtensionType.STYLING: "Styling",
    ExtensionType.UTILITY: "Utility",
}


class ExtensionRegistry:
    """Stores extensions by kind and key.

    Every registration is validated first; a rejected registration leaves the
    registry unchanged. Registration is not synchronized: register everything
    before rendering concurrently.
    """

    def __init__(self, logger: StencilLogger | None = None):
        """Initialize an empty registry.

        Args:
            logger: Optional logger
        """
        self._extensions: dict[ExtensionType, dict[str, Any]] = {
            kind: {} for kind in ExtensionType
        }
        self._logger = logger

    def _log(self, level: LogLevel, message: str, context: dict[str, Any] | None = None) -> None:
        """Log message if logger available."""
        if self._logger:
            self._logger._log(level, "registry", message, context)

    # Registration

    def register_framework(self, extension: Any) -> ValidationResult:
        """Validate and register a framework extension."""
        return self._register(ExtensionType.FRAMEWORK, extension)

    def register_styling(self, extension: Any) -> ValidationResult:
        """Validate and register a styling extension."""
        return self._register(ExtensionType.STYLING, extension)

    def register_utility(self, extension: Any) -> ValidationResult:
        """Validate and register a utility extension."""
        return self._register(ExtensionType.UTILITY, extension)

    def register(self, extension: Any) -> ValidationResult:
        """Register an extension under the kind its metadata declares."""
        kind = _kind_of(extension)
        if kind is None:
            result = ValidationResult(is_valid=True)
            self._validate_metadata(extension, result)
            if result.is_valid:
                result.add_error("metadata.type", "Extension type is not recognized")
            return result
        return self._register(kind, extension)

    def _register(self, kind: ExtensionType, extension: Any) -> ValidationResult:
        result = self.validate(kind, extension)
        if not result.is_valid:
            self._log(
                LogLevel.WARN,
                "Rejected extension",
                {"kind": kind.value, "errors": result.error_messages},
            )
            return result

        key = extension.metadata.key
        if key in self._extensions[kind]:
            result.add_error(
                "metadata.key",
                f"{_KIND_LABELS[kind]} extension with key '{key}' already registered",
            )
            return result

        self._extensions[kind][key] = extension
        logger.debug(f"Registered {kind.value} extension: {key}")
        self._log(LogLevel.INFO, f"Registered {kind.value} extension '{key}'")
        return result

    # Validation

    def validate(self, kind: ExtensionType, extension: Any) -> ValidationResult:
        """Check an extension against the contract of one kind.

        Args:
            kind: Kind the extension is being registered as
            extension: Extension object

        Returns:
            ValidationResult; each missing operation is its own error
        """
        result = ValidationResult(is_valid=True)
        self._validate_metadata(extension, result)

        metadata = getattr(extension, "metadata", None)
        declared = getattr(metadata, "type", None)
        if metadata is not None and declared is not None and _as_kind(declared) not in (None, kind):
            result.add_error(
                "metadata.type",
                f"Extension declares type '{_value(declared)}' but is registered as "
                f"'{kind.value}'",
            )

        if kind == ExtensionType.FRAMEWORK:
            framework = getattr(extension, "framework", None)
            if not framework:
                result.add_error("framework", "Framework extension must declare a framework")
            elif _value(framework) not in {syntax.value for syntax in FrameworkSyntax}:
                result.add_error(
                    "framework",
                    f"Unknown framework '{_value(framework)}'; expected one of "
                    f"{', '.join(s.value for s in FrameworkSyntax)}",
                )
        elif kind == ExtensionType.STYLING:
            approach = getattr(extension, "styling", None)
            if approach and _value(approach) not in {a.value for a in StylingApproach}:
                result.add_warning(
                    "styling", f"Unknown styling approach '{_value(approach)}'"
                )

        for operation in REQUIRED_OPERATIONS[kind]:
            if not callable(getattr(extension, operation, None)):
                result.add_error(
                    operation,
                    f"{_KIND_LABELS[kind]} extension must implement {operation}",
                )

        return result

    def _validate_metadata(self, extension: Any, result: ValidationResult) -> None:
        metadata = getattr(extension, "metadata", None)
        if metadata is None:
            result.add_error("metadata", "Extension metadata is required")
            return

        key = getattr(metadata, "key", None)
        if not key:
            result.add_error("metadata.key", "Extension key is required")
        elif not isinstance(key, str) or not KEY_PATTERN.match(key):
            result.add_error(
                "metadata.key",
                "Extension key must be lowercase alphanumeric with internal hyphens",
            )

        name = getattr(metadata, "name", None)
        if not isinstance(name, str) or not name.strip():
            result.add_error("metadata.name", "Extension name is required")

        version = getattr(metadata, "version", None)
        if not version:
            result.add_error("metadata.version", "Extension version is required")
        elif not isinstance(version, str) or not VERSION_PATTERN.match(version):
            result.add_error(
                "metadata.version", "Extension version must follow semantic versioning (x.y.z)"
            )

        if _as_kind(getattr(metadata, "type", None)) is None:
            result.add_error(
                "metadata.type", "Extension type must be one of: framework, styling, utility"
            )

    # Queries

    def get_framework(self, key: str) -> Any | None:
        return self._extensions[ExtensionType.FRAMEWORK].get(key)

    def get_styling(self, key: str) -> Any | None:
        return self._extensions[ExtensionType.STYLING].get(key)

    def get_utility(self, key: str) -> Any | None:
        return self._extensions[ExtensionType.UTILITY].get(key)

    def has_framework(self, key: str) -> bool:
        return key in self._extensions[ExtensionType.FRAMEWORK]

    def has_styling(self, key: str) -> bool:
        return key in self._extensions[ExtensionType.STYLING]

    def has_utility(self, key: str) -> bool:
        return key in self._extensions[ExtensionType.UTILITY]

    def remove_framework(self, key: str) -> bool:
        return self._remove(ExtensionType.FRAMEWORK, key)

    def remove_styling(self, key: str) -> bool:
        return self._remove(ExtensionType.STYLING, key)

    def remove_utility(self, key: str) -> bool:
        return self._remove(ExtensionType.UTILITY, key)

    def _remove(self, kind: ExtensionType, key: str) -> bool:
        removed = self._extensions[kind].pop(key, None) is not None
        if removed:
            self._log(LogLevel.INFO, f"Removed {kind.value} extension '{key}'")
        return removed

    def clear(self) -> None:
        """Remove every extension of every kind."""
        for extensions in self._extensions.values():
            extensions.clear()

    def get_available_frameworks(self) -> list[str]:
        return list(self._extensions[ExtensionType.FRAMEWORK])

    def get_available_styling(self) -> list[str]:
        return list(self._extensions[ExtensionType.STYLING])

    def get_available_utilities(self) -> list[str]:
        return list(self._extensions[ExtensionType.UTILITY])

    def get_extension_count(self, kind: ExtensionType | str | None = None) -> int:
        """Number of registered extensions, overall or of one kind."""
        if kind is None:
            return sum(len(extensions) for extensions in self._extensions.values())
        return len(self._extensions[ExtensionType(kind)])

    def get_extensions_by_type(self, kind: ExtensionType | str) -> list[Any]:
        return list(self._extensions[ExtensionType(kind)].values())

    # Activation

    def activate(
        self,
        framework: str | None = None,
        styling: str | None = None,
        utilities: list[str] | None = None,
    ) -> tuple[ActiveExtensions, list[tuple[ExtensionType, str]]]:
        """Select extensions for one render.

        Args:
            framework: Framework key
            styling: Styling key
            utilities: Utility keys, in invocation order

        Returns:
            (active extensions, list of (kind, key) that were not found)
        """
        active = ActiveExtensions()
        missing: list[tuple[ExtensionType, str]] = []

        if framework:
            extension = self.get_framework(framework)
            if extension is None:
                missing.append((ExtensionType.FRAMEWORK, framework))
            else:
                active.activate_framework(extension)

        if styling:
            extension = self.get_styling(styling)
            if extension is None:
                missing.append((ExtensionType.STYLING, styling))
            else:
                active.styling = extension

        for key in utilities or []:
            extension = self.get_utility(key)
            if extension is None:
                missing.append((ExtensionType.UTILITY, key))
            else:
                active.utilities.append(extension)

        return active, missing


def _value(value: Any) -> Any:
    return value.value if hasattr(value, "value") else value


def _as_kind(value: Any) -> ExtensionType | None:
    try:
        return ExtensionType(_value(value))
    except ValueError:
        return None


def _kind_of(extension: Any) -> ExtensionType | None:
    return _as_kind(getattr(getattr(extension, "metadata", None), "type", None))
