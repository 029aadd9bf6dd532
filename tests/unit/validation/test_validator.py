"""Unit tests for ConceptValidator."""

import pytest

from stencil_core.concepts import (
    Attribute,
    ComponentConcept,
    Conditional,
    Event,
    Iteration,
    Slot,
    StylingConcept,
)
from stencil_core.errors import ErrorCollector
from stencil_core.nodes import TextNode
from stencil_core.types import Severity
from stencil_core.validation import (
    ConceptValidator,
    ConceptWarning,
    ValidationOptions,
    is_valid_attribute_name,
    is_valid_class_name,
)


@pytest.fixture
def collector():
    return ErrorCollector()


@pytest.fixture
def validator(collector):
    return ConceptValidator(collector)


def messages(validation):
    return [warning.message for warning in validation.warnings]


class TestCleanComponent:
    def test_empty_concepts_score_full(self, validator, collector):
        validation = validator.validate_component(ComponentConcept())

        assert validation.is_valid
        assert validation.score == 1.0
        assert validation.warnings == []
        assert len(collector) == 0

    def test_well_formed_concepts(self, validator):
        concepts = ComponentConcept(
            events=[Event(name="click", handler="save", node_id="root.children[0]")],
            styling=StylingConcept(static_classes=["btn", "btn--primary"]),
            attributes=[Attribute(name="type", value="button", node_id="root.children[0]")],
        )

        validation = validator.validate_component(concepts, ValidationOptions(framework="react"))

        assert validation.is_valid
        assert validation.score == 1.0


class TestEvents:
    def test_empty_handler_is_error(self, validator, collector):
        concepts = ComponentConcept(events=[Event(name="click", handler=" ", node_id="n1")])

        validation = validator.validate_component(concepts)

        assert not validation.is_valid
        assert validation.score == 0.75
        error = collector.get_errors_by_severity(Severity.ERROR)[0]
        assert error.message == "Event has empty handler"
        assert error.node_id == "n1"
        assert error.extension == "concept-validator"

    def test_uncommon_event_name(self, validator):
        concepts = ComponentConcept(events=[Event(name="todo-added", handler="add")])

        validation = validator.validate_component(concepts)

        assert validation.is_valid
        assert messages(validation) == ["Invalid or uncommon event name: todo-added"]
        assert validation.score == 0.95

    @pytest.mark.parametrize(
        "framework,modifiers,unsupported",
        [
            ("react", ["prevent", "stop", "self"], []),
            ("react", ["once", "prevent"], ["once"]),
            ("vue", ["prevent", "once"], []),
            ("vue", ["debounce"], ["debounce"]),
            ("svelte", ["preventDefault", "prevent"], []),
            ("svelte", ["exact"], ["exact"]),
        ],
    )
    def test_framework_modifier_support(self, validator, framework, modifiers, unsupported):
        concepts = ComponentConcept(
            events=[Event(name="click", handler="go", modifiers=modifiers)]
        )

        validation = validator.validate_component(
            concepts, ValidationOptions(framework=framework)
        )

        assert messages(validation) == [
            f"{framework} does not support the '{modifier}' modifier on 'click'"
            for modifier in unsupported
        ]

    def test_vue_key_modifiers_allowed(self, validator):
        concepts = ComponentConcept(
            events=[Event(name="keyup", handler="submit", modifiers=["enter"])]
        )

        validation = validator.validate_component(concepts, ValidationOptions(framework="vue"))

        assert validation.warnings == []

    def test_modifiers_unchecked_without_framework(self, validator):
        concepts = ComponentConcept(
            events=[Event(name="click", handler="go", modifiers=["anything"])]
        )

        assert validator.validate_component(concepts).warnings == []


class TestStyling:
    @pytest.mark.parametrize(
        "name,valid",
        [
            ("btn", True),
            ("btn--primary", True),
            ("_private", True),
            ("-webkit-thing", True),
            ("2col", False),
            ("md:flex", False),
            ("a b", False),
        ],
    )
    def test_class_name_syntax(self, name, valid):
        assert is_valid_class_name(name) is valid

    def test_invalid_class_names_warn(self, validator, collector):
        concepts = ComponentConcept(styling=StylingConcept(static_classes=["ok", "2col", "w-1/2"]))

        validation = validator.validate_component(concepts)

        assert messages(validation) == [
            "Invalid CSS class name: 2col",
            "Invalid CSS class name: w-1/2",
        ]
        assert validation.score == 0.94
        assert collector.get_error_count(Severity.WARNING) == 2

    def test_inline_style_checks(self, validator):
        styling = StylingConcept(
            inline_styles={
                "color": "#ff0000",
                "backgroundColor": "12px",
                "margin": "",
                "Bad Prop": "1px",
                "--accent": "var(--blue)",
            }
        )

        validation = validator.validate_component(ComponentConcept(styling=styling))

        assert messages(validation) == [
            "Invalid color value: 12px",
            "Empty CSS value for property: margin",
            "Invalid CSS property: Bad Prop",
        ]
        assert not validation.is_valid


class TestStructure:
    def test_conditional_checks(self, validator):
        concepts = ComponentConcept(
            conditionals=[
                Conditional(condition="", then=[TextNode(content="x")], node_id="c1"),
                Conditional(condition="open", then=[], node_id="c2"),
                Conditional(
                    condition="user && user.admin", then=[TextNode(content="y")], node_id="c3"
                ),
            ]
        )

        validation = validator.validate_component(concepts)

        assert messages(validation) == [
            "Conditional missing condition expression",
            "Conditional has empty then branch",
        ]
        assert validation.suggestions[0].target == "c3"
        assert validation.score == 0.8

    def test_react_iteration_needs_key(self, validator):
        concepts = ComponentConcept(
            iterations=[Iteration(items="todos", item="todo", node_id="i1")]
        )

        react = validator.validate_component(concepts, ValidationOptions(framework="react"))
        vue = validator.validate_component(concepts, ValidationOptions(framework="vue"))

        assert messages(react) == [
            "React iterations should have a key expression for performance"
        ]
        assert react.score == 0.92
        assert vue.warnings == []

    def test_index_key_suggestion(self, validator):
        concepts = ComponentConcept(
            iterations=[Iteration(items="todos", item="todo", index="i", key="i")]
        )

        validation = validator.validate_component(concepts)

        assert [s.kind for s in validation.suggestions] == ["best-practice"]

    def test_missing_iteration_fields(self, validator):
        concepts = ComponentConcept(iterations=[Iteration(items="", item="")])

        validation = validator.validate_component(concepts)

        assert not validation.is_valid
        assert validation.score == 0.7

    def test_duplicate_slots(self, validator):
        concepts = ComponentConcept(
            slots=[Slot(name="header"), Slot(name="footer"), Slot(name="header", node_id="s3")]
        )

        validation = validator.validate_component(concepts)

        assert validation.warnings == [
            ConceptWarning(
                Severity.WARNING,
                "Duplicate slot name: header",
                "s3",
                "Use unique slot names within a component",
            )
        ]


class TestAttributes:
    @pytest.mark.parametrize(
        "name,valid",
        [("href", True), ("aria-label", True), ("xlink:href", True), ("1x", False), ("a b", False)],
    )
    def test_attribute_name_syntax(self, name, valid):
        assert is_valid_attribute_name(name) is valid

    def test_duplicates_only_within_one_node(self, validator):
        concepts = ComponentConcept(
            attributes=[
                Attribute(name="title", value="a", node_id="n1"),
                Attribute(name="title", value="b", node_id="n2"),
                Attribute(name="title", value="c", node_id="n2"),
            ]
        )

        validation = validator.validate_component(concepts)

        assert messages(validation) == ["Duplicate attribute: title"]
        assert validation.warnings[0].node_id == "n2"

    def test_missing_name_is_error(self, validator):
        concepts = ComponentConcept(attributes=[Attribute(name="", value="x")])

        validation = validator.validate_component(concepts)

        assert messages(validation) == ["Attribute missing name"]
        assert not validation.is_valid


class TestScoring:
    def test_score_is_lowest_category(self, validator):
        concepts = ComponentConcept(
            events=[Event(name="click", handler="")],
            styling=StylingConcept(static_classes=["2col"]),
        )

        validation = validator.validate_component(concepts)

        assert validation.score == 0.75

    def test_score_clamped_at_zero(self, validator):
        concepts = ComponentConcept(events=[Event(name="click", handler="")] * 5)

        validation = validator.validate_component(concepts)

        assert validation.score == 0.0
        assert not validation.is_valid

    def test_custom_rule_warnings_reported(self, validator, collector):
        def custom_rule(concepts, options):
            return [ConceptWarning(Severity.INFO, "Custom rule ran", "root")]

        validation = validator.validate_component(
            ComponentConcept(), ValidationOptions(custom_rules=[custom_rule])
        )

        assert messages(validation) == ["Custom rule ran"]
        assert validation.score == 1.0
        assert collector.get_errors_by_severity(Severity.INFO)[0].message == "Custom rule ran"


class TestSuggestions:
    def test_accessibility_and_cross_concept(self, validator):
        concepts = ComponentConcept(
            events=[Event(name="click", handler="cancelOrder", node_id="b")],
            styling=StylingConcept(static_classes=["btn-success"], inline_styles={"color": "red"}),
        )

        validation = validator.validate_component(
            concepts, ValidationOptions(check_accessibility=True)
        )

        assert [s.message for s in validation.suggestions] == [
            "Add keyboard support for click events",
            "Mixing inline styles and CSS classes can impact maintainability",
            "Interactive elements should have appropriate ARIA roles",
            "Potential semantic mismatch: cancel action with success styling",
        ]

    def test_cross_concept_can_be_disabled(self, validator):
        concepts = ComponentConcept(
            styling=StylingConcept(static_classes=["btn"], inline_styles={"color": "red"})
        )

        validation = validator.validate_component(concepts, ValidationOptions(cross_concept=False))

        assert validation.suggestions == []

    def test_to_dict(self, validator):
        concepts = ComponentConcept(events=[Event(name="click", handler="")])

        data = validator.validate_component(concepts).to_dict()

        assert data["is_valid"] is False
        assert data["score"] == 0.75
        assert data["warnings"][0]["severity"] == "error"


class TestOptions:
    def test_from_dict_accepts_camel_case(self):
        options = ValidationOptions.from_dict(
            {"framework": "vue", "checkAccessibility": True, "unknown": 1}
        )

        assert options.framework == "vue"
        assert options.check_accessibility is True
        assert options.cross_concept is True
