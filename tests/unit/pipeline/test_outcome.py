"""Tests for guarded extension calls and the utility fold."""

from stencil_core.concepts import ComponentConcept, Event
from stencil_core.pipeline import PerformanceTracker
from stencil_core.pipeline.outcome import ExtensionOutcome, fold_utilities, invoke


class Utility:
    def __init__(self, key, fn):
        self.metadata = type("Meta", (), {"key": key})()
        self._fn = fn

    def process(self, concepts):
        return self._fn(concepts)


def add_event(name):
    def apply(concepts):
        concepts.events.append(Event(name=name, handler="h"))
        return concepts

    return apply


def fail_after_mutation(concepts):
    concepts.events.clear()
    raise RuntimeError("half done")


class TestInvoke:
    def test_success(self):
        outcome = invoke("ext", "stage", lambda x: x * 2, 21)
        assert outcome.ok
        assert outcome.value == 42

    def test_failure_captured(self):
        outcome = invoke("ext", "process_slots", lambda: 1 / 0)
        assert not outcome.ok
        assert isinstance(outcome.fault.error, ZeroDivisionError)
        assert outcome.fault.message.startswith("Extension 'ext' failed in process_slots:")
        assert outcome.value_or([]) == []

    def test_value_or_on_success(self):
        assert ExtensionOutcome.success(3).value_or(0) == 3


class TestFoldUtilities:
    def test_left_fold_in_order(self):
        utilities = [Utility("a", add_event("first")), Utility("b", add_event("second"))]
        result, faults = fold_utilities(utilities, ComponentConcept())

        assert [e.name for e in result.events] == ["first", "second"]
        assert faults == []

    def test_fault_keeps_last_good_concepts(self):
        seen = []
        utilities = [
            Utility("a", add_event("kept")),
            Utility("bad", fail_after_mutation),
            Utility("c", add_event("after")),
        ]
        result, faults = fold_utilities(utilities, ComponentConcept(), on_fault=seen.append)

        assert [e.name for e in result.events] == ["kept", "after"]
        assert [f.extension_key for f in faults] == ["bad"]
        assert seen == faults

    def test_none_return_is_no_op(self):
        original = ComponentConcept(events=[Event(name="click", handler="h")])
        result, _ = fold_utilities([Utility("noop", lambda c: None)], original)

        assert [e.name for e in result.events] == ["click"]

    def test_input_not_mutated(self):
        original = ComponentConcept()
        fold_utilities([Utility("a", add_event("x"))], original)

        assert original.events == []

    def test_timer_records_each_utility(self):
        tracker = PerformanceTracker()
        tracker.start()
        fold_utilities([Utility("a", add_event("x"))], ComponentConcept(), timer=tracker)

        assert "a" in tracker.get_metrics().extension_times
