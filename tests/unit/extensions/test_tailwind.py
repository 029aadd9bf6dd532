"""Tests for the Tailwind styling extension."""

import pytest

from stencil_core.concepts import StylingConcept
from stencil_core.extensions import StyleContext
from stencil_core.extensions.builtin import TailwindExtension
from stencil_core.extensions.builtin.tailwind import (
    CssGenerator,
    TailwindTokens,
    UtilityParser,
    class_selector,
    convert_css_to_tailwind,
    node_classes,
)
from stencil_core.nodes import parse_nodes
from stencil_core.pipeline import ProcessingPipeline
from stencil_core.types import StyleOutputFormat

from builders import element


class TestUtilityParser:
    def setup_method(self):
        self.parser = UtilityParser()

    def test_parse_responsive_and_variant(self):
        parsed = self.parser.parse_utility_class("md:hover:bg-blue-500")
        assert parsed.responsive == "md"
        assert parsed.variants == ["hover"]
        assert parsed.base == "bg-blue-500"
        assert parsed.original == "md:hover:bg-blue-500"

    def test_parse_utilities_string(self):
        parsed = self.parser.parse_utilities("  p-4   text-white ")
        assert [u.base for u in parsed] == ["p-4", "text-white"]

    def test_validate_known_utility(self):
        validation = self.parser.validate_utility("max-w-lg")
        assert validation.valid
        assert validation.properties == ["max-width"]

    def test_validate_unknown_prefix(self):
        validation = self.parser.validate_utility("wobble-3")
        assert not validation.valid
        assert validation.error == "Unknown utility prefix: wobble"

    def test_validate_unknown_variant(self):
        validation = self.parser.validate_utility("wiggle:p-4")
        assert not validation.valid
        assert validation.error == "Unknown variant: wiggle"

    def test_custom_breakpoints(self):
        tokens = TailwindTokens.from_config({"theme": {"screens": {"tablet": "640px"}}})
        parsed = UtilityParser(tokens).parse_utility_class("tablet:p-4")
        assert parsed.responsive == "tablet"


class TestCssGenerator:
    def setup_method(self):
        self.parser = UtilityParser()
        self.generator = CssGenerator()

    def test_class_selector_escapes(self):
        assert class_selector("md:hover:p-4") == ".md\\:hover\\:p-4"
        assert class_selector("w-1/2") == ".w-1\\/2"

    def test_css_scopes(self):
        utilities = self.parser.parse_utilities("p-4 hover:bg-blue-600 md:p-8")
        assert self.generator.generate(utilities) == (
            ".p-4 {\n  padding: 1rem;\n}\n"
            "\n"
            ".hover\\:bg-blue-600:hover {\n  background-color: #2563eb;\n}\n"
            "\n"
            "@media (min-width: 768px) {\n  .md\\:p-8 {\n    padding: 2rem;\n  }\n}"
        )

    def test_scss_apply(self):
        utilities = self.parser.parse_utilities("p-4 hover:bg-blue-600 md:p-8")
        assert self.generator.generate(utilities, "scss-apply") == (
            "@apply p-4;\n"
            "&:hover {\n  @apply hover:bg-blue-600;\n}\n"
            "@media (min-width: 768px) {\n  @apply md:p-8;\n}"
        )

    def test_pass_through(self):
        utilities = self.parser.parse_utilities("p-4 md:p-8")
        assert self.generator.generate(utilities, "pass-through") == "p-4 md:p-8"

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            self.generator.generate([], "less")

    @pytest.mark.parametrize(
        "utility,expected",
        [
            ("mx-auto", ["margin-left: auto", "margin-right: auto"]),
            ("w-1/2", ["width: 50%"]),
            ("h-screen", ["height: 100vh"]),
            ("flex-col", ["display: flex", "flex-direction: column"]),
            ("opacity-50", ["opacity: 0.5"]),
            ("text-lg", ["font-size: 1.125rem"]),
            ("border", ["border-width: 1px"]),
            ("relative", ["position: relative"]),
            ("grid-cols-2", []),
        ],
    )
    def test_declarations(self, utility, expected):
        parsed = self.parser.parse_utility_class(utility)
        assert self.generator.declarations(parsed) == expected

    def test_unmapped_utility_has_no_rule(self):
        utilities = self.parser.parse_utilities("grid-cols-2")
        assert self.generator.generate(utilities) == ""


class TestConversion:
    def test_exact_tokens_convert(self):
        classes, remaining = convert_css_to_tailwind(
            {"backgroundColor": "#3B82F6", "padding": "1rem", "border": "1px solid"}
        )
        assert classes == ["bg-blue-500", "p-4"]
        assert remaining == {"border": "1px solid"}

    def test_display(self):
        classes, remaining = convert_css_to_tailwind({"display": "none"})
        assert classes == ["hidden"]
        assert remaining == {}

    def test_node_classes(self):
        data = {"class": "p-4", "responsive": {"md": "p-8"}, "variants": {"hover": ["bg-blue-600"]}}
        assert node_classes(data) == ["p-4", "md:p-8", "hover:bg-blue-600"]


class TestTailwindExtension:
    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            TailwindExtension(output_strategy="less")
        with pytest.raises(ValueError):
            TailwindExtension(unknown_class_handling="explode")

    def test_unknown_class_policies(self):
        classes = ["p-4", "bogus", "p-4"]
        assert TailwindExtension().resolve_classes(classes) == {
            "p-4": "p-4",
            "bogus": "custom-bogus",
        }
        assert TailwindExtension(unknown_class_handling="ignore").resolve_classes(classes) == {
            "p-4": "p-4",
            "bogus": None,
        }
        assert TailwindExtension(output_strategy="pass-through").resolve_classes(classes) == {
            "p-4": "p-4",
            "bogus": "bogus",
        }
        with pytest.raises(ValueError, match="Unknown Tailwind class: bogus"):
            TailwindExtension(unknown_class_handling="error").resolve_classes(classes)

    def test_process_styles(self):
        nodes = parse_nodes(
            [
                element(
                    "button",
                    attributes={"class": "px-4"},
                    extensions={"tailwind": {"class": "rounded bogus", "responsive": {"md": "p-8"}}},
                )
            ]
        )
        styling = StylingConcept(static_classes=["px-4"])
        output = TailwindExtension().process_styles(styling, StyleContext(nodes=nodes))

        assert output.classes == {"root.children[0]": ["rounded", "custom-bogus", "md:p-8"]}
        assert output.format == StyleOutputFormat.CSS
        assert ".px-4 {\n  padding-left: 1rem;\n  padding-right: 1rem;\n}" in output.styles
        assert ".rounded {\n  border-radius: 0.25rem;\n}" in output.styles
        assert "@media (min-width: 768px)" in output.styles
        assert "bogus" not in output.styles

    def test_scss_apply_format(self):
        nodes = parse_nodes([element("div", attributes={"class": "p-4"})])
        output = TailwindExtension(output_strategy="scss-apply").process_styles(
            StylingConcept(static_classes=["p-4"]), StyleContext(nodes=nodes)
        )
        assert output.format == StyleOutputFormat.SCSS
        assert output.styles == "@apply p-4;"

    @pytest.mark.asyncio
    async def test_inline_style_converted(self, render):
        template = [element("div", attributes={"style": "background-color: #3b82f6; border: 1px solid"})]
        result = await render(template, framework="react", styling="tailwind")

        assert '<div className="bg-blue-500" style={{ border: "1px solid" }}></div>' in result.output
        assert ".bg-blue-500 {\n  background-color: #3b82f6;\n}" in result.styles

    @pytest.mark.asyncio
    async def test_fully_converted_style_dropped(self, render):
        template = [element("div", attributes={"style": {"padding": "1rem"}})]
        result = await render(template, framework="vue", styling="tailwind")
        assert '<div class="p-4"></div>' in result.output

    @pytest.mark.asyncio
    async def test_error_policy_is_extension_fault(self, registry):
        registry.remove_styling("tailwind")
        registry.register(TailwindExtension(unknown_class_handling="error"))
        template = [element("div", "x", attributes={"class": "bogus"})]

        result = await ProcessingPipeline(registry).process(
            template, {"framework": "react", "styling": "tailwind"}
        )

        error = result.errors.get_errors()[0]
        assert error.context["code"] == "EXTENSION_FAILED"
        assert error.context["stage"] == "process_styles"
        assert '<div className="bogus">x</div>' in result.output
