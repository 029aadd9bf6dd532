"""Types for the extension registry."""

from dataclasses import dataclass, field
from typing import Any

from stencil_core.errors import create_error


@dataclass
class ActiveExtensions:
    """Extensions selected for one render.

    At most one framework extension may be active; activating a second one
    raises FRAMEWORK_ALREADY_ACTIVE.
    """

    framework: Any = None
    styling: Any = None
    utilities: list[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        framework, self.framework = self.framework, None
        if framework is not None:
            self.activate_framework(framework)

    def activate_framework(self, extension: Any) -> None:
        if self.framework is not None:
            raise create_error(
                "FRAMEWORK_ALREADY_ACTIVE",
                active_key=self.framework.metadata.key,
                extension_key=extension.metadata.key,
            )
        self.framework = extension

    @property
    def keys(self) -> list[str]:
        """Keys in invocation order: framework, styling, utilities."""
        keys = []
        if self.framework is not None:
            keys.append(self.framework.metadata.key)
        if self.styling is not None:
            keys.append(self.styling.metadata.key)
        keys.extend(utility.metadata.key for utility in self.utilities)
        return keys

    def all(self) -> list[Any]:
        """Active extension objects in invocation order."""
        active = [ext for ext in (self.framework, self.styling) if ext is not None]
        return active + list(self.utilities)
