"""Result wrapper for guarded extension calls."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class ExtensionFault:
    """An exception raised by one extension operation."""

    extension_key: str
    stage: str
    error: Exception

    @property
    def message(self) -> str:
        return f"Extension '{self.extension_key}' failed in {self.stage}: {self.error}"


@dataclass
class ExtensionOutcome(Generic[T]):
    """Either the value an extension produced or the fault it raised.

    Attributes:
        value: Produced value (None on fault)
        fault: Fault (None on success)
    """

    value: T | None = None
    fault: ExtensionFault | None = None

    @property
    def ok(self) -> bool:
        return self.fault is None

    @classmethod
    def success(cls, value: T) -> "ExtensionOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, fault: ExtensionFault) -> "ExtensionOutcome[T]":
        return cls(fault=fault)

    def value_or(self, default: T) -> T:
        return self.value if self.ok else default  # type: ignore[return-value]


def invoke(
    extension_key: str,
    stage: str,
    operation: Callable[..., T],
    *args: Any,
) -> ExtensionOutcome[T]:
    """Call an extension operation, capturing any exception as a fault."""
    try:
        return ExtensionOutcome.success(operation(*args))
    except Exception as e:
        return ExtensionOutcome.failure(ExtensionFault(extension_key, stage, e))


def fold_utilities(
    utilities: list[Any],
    concepts: T,
    on_fault: Callable[[ExtensionFault], None] | None = None,
    timer: Any = None,
) -> tuple[T, list[ExtensionFault]]:
    """Left fold of utility ``process`` calls.

    Each utility receives the previous utility's output; a faulting utility is
    skipped and the fold continues with the last good concepts.

    Returns:
        (final concepts, faults in invocation order)
    """
    faults: list[ExtensionFault] = []
    current = concepts
    for utility in utilities:
        key = utility.metadata.key
        if timer is not None:
            timer.start_extension(key)
        # Each utility works on its own copy, so a failure cannot leave
        # half-applied changes in the last good concepts
        snapshot = current.copy() if hasattr(current, "copy") else current
        outcome = invoke(key, "utility", utility.process, snapshot)
        if timer is not None:
            timer.end_extension(key)
        if outcome.ok and outcome.value is not None:
            current = outcome.value
        elif not outcome.ok:
            faults.append(outcome.fault)
            if on_fault is not None:
                on_fault(outcome.fault)
    return current, faults
