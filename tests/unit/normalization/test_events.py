"""Unit tests for event normalization."""

import pytest

from stencil_core.concepts import ComponentConcept, Event
from stencil_core.extensions.builtin import EventNormalizationUtility
from stencil_core.normalization import (
    CanonicalEvent,
    EventNormalizer,
    convert_event_attribute,
    parse_framework_attribute,
    to_framework_attribute,
)
from stencil_core.types import FrameworkSyntax


class TestFrameworkAttributes:
    """Tests for to_framework_attribute / parse_framework_attribute."""

    def test_react(self):
        attribute = to_framework_attribute(CanonicalEvent("click", ["prevent"]), "react")
        assert attribute.attribute_name == "onClick"
        assert attribute.modifiers == ["prevent"]

    def test_react_word_separators(self):
        assert to_framework_attribute(CanonicalEvent("item-selected"), "react").attribute_name == (
            "onItemSelected"
        )

    def test_vue(self):
        attribute = to_framework_attribute(CanonicalEvent("submit", ["prevent", "once"]), "vue")
        assert attribute.attribute_name == "@submit.prevent.once"

    def test_svelte(self):
        attribute = to_framework_attribute(CanonicalEvent("submit", ["preventDefault"]), "svelte")
        assert attribute.attribute_name == "on:submit|preventDefault"

    def test_unknown_target_raises(self):
        with pytest.raises(ValueError):
            to_framework_attribute(CanonicalEvent("click"), "angular")

    @pytest.mark.parametrize(
        "attribute,expected",
        [
            ("@submit.prevent", ("submit", ["prevent"])),
            ("v-on:input", ("input", [])),
            ("on:click|once", ("click", ["once"])),
            ("onKeyDown", ("keydown", [])),
        ],
    )
    def test_parse(self, attribute, expected):
        canonical = parse_framework_attribute(attribute)
        assert (canonical.name, canonical.modifiers) == expected

    @pytest.mark.parametrize("attribute", ["class", "online", "@", "on:"])
    def test_parse_non_events(self, attribute):
        assert parse_framework_attribute(attribute) is None

    def test_convert(self):
        assert convert_event_attribute("@click.stop", FrameworkSyntax.SVELTE) == "on:click|stop"
        assert convert_event_attribute("on:blur", "react") == "onBlur"
        assert convert_event_attribute("title", "vue") is None


class TestEventNormalizer:
    """Tests for EventNormalizer."""

    def test_extract_common_event_name(self):
        normalizer = EventNormalizer()
        assert normalizer.extract_common_event_name("@click.prevent") == "click"
        assert normalizer.extract_common_event_name("on:submit|preventDefault") == "submit"
        assert normalizer.extract_common_event_name("onMouseEnter") == "mouseenter"
        assert normalizer.extract_common_event_name("Scroll") == "scroll"

    def test_normalize_known_event(self):
        normalizer = EventNormalizer()
        result = normalizer.normalize_event(Event(name="click", handler="go"), "vue")
        assert result.was_normalized
        assert result.framework_attribute == "@click"
        assert len(normalizer.get_errors()) == 0

    @pytest.mark.parametrize(
        "framework,expected",
        [
            ("vue", "@click.prevent.stop"),
            ("svelte", "on:click|prevent|stop"),
            ("react", "onClick"),
        ],
    )
    def test_known_event_keeps_modifiers(self, framework, expected):
        event = Event(name="click", handler="go", modifiers=["prevent", "stop"])
        result = EventNormalizer().normalize_event(event, framework)

        assert result.framework_attribute == expected
        assert result.framework_attribute == to_framework_attribute(event, framework).attribute_name
        assert result.modifiers == ["prevent", "stop"]

    def test_custom_mapping_gets_modifiers(self):
        normalizer = EventNormalizer({"tap": {"vue": "@tap"}})
        result = normalizer.normalize_event(
            Event(name="tap", handler="go", modifiers=["once"]), "vue"
        )
        assert result.framework_attribute == "@tap.once"

    def test_unmapped_event_warns(self):
        normalizer = EventNormalizer()
        result = normalizer.normalize_event(
            Event(name="swipe", handler="go", node_id="root.children[0]"), "react"
        )
        assert not result.was_normalized
        assert result.framework_attribute == "onSwipe"
        (warning,) = normalizer.get_errors().get_errors()
        assert warning.message == "No normalization mapping found for event: swipe"
        assert warning.node_id == "root.children[0]"

    def test_unmapped_without_validation_is_silent(self):
        normalizer = EventNormalizer()
        normalizer.normalize_event(Event(name="swipe", handler="go"), "react", validate=False)
        assert len(normalizer.get_errors()) == 0

    def test_invalid_modifier_warns(self):
        normalizer = EventNormalizer()
        normalizer.normalize_event(Event(name="click", handler="go", modifiers=["bogus"]), "vue")
        (warning,) = normalizer.get_errors().get_errors()
        assert warning.message == "Unknown Vue event modifier: bogus"

    def test_svelte_accepts_vue_spellings(self):
        normalizer = EventNormalizer()
        assert normalizer.is_valid_modifier("prevent", "svelte")
        assert normalizer.is_valid_modifier("preventDefault", "svelte")
        assert not normalizer.is_valid_modifier("preventDefault", "vue")

    def test_custom_mapping_overrides(self):
        normalizer = EventNormalizer({"click": {"react": "onPress"}})
        assert normalizer.find_event_mapping("click") == {"react": "onPress"}
        assert normalizer.find_common_name_from_framework("onPress", "react") == "click"

    def test_add_and_remove_mapping(self):
        normalizer = EventNormalizer()
        normalizer.add_custom_mapping("swipe", {"vue": "@swipe"})
        assert "@swipe" in normalizer.get_supported_events("vue")
        normalizer.remove_mapping("swipe")
        assert "swipe" not in normalizer.get_common_event_names()

    def test_get_mappings_is_copy(self):
        normalizer = EventNormalizer()
        normalizer.get_mappings()["click"]["react"] = "changed"
        assert normalizer.find_event_mapping("click")["react"] == "onClick"


class TestEventNormalizationUtility:
    """Tests for the normalize-events utility extension."""

    def test_names_and_modifiers_canonicalized(self):
        concepts = ComponentConcept(
            events=[
                Event(name="@click", handler="go", modifiers=["preventDefault"]),
                Event(name="onSubmit", handler="send", modifiers=["stopPropagation", "once"]),
            ]
        )
        result = EventNormalizationUtility().process(concepts)
        assert [(e.name, e.modifiers) for e in result.events] == [
            ("click", ["prevent"]),
            ("submit", ["stop", "once"]),
        ]

    def test_metadata(self):
        utility = EventNormalizationUtility()
        assert utility.key == "normalize-events"
        assert utility.metadata.version == "1.0.0"
