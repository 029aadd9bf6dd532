"""Vue framework extension: single-file components."""

from typing import Any

from stencil_core.concepts import ComponentConcept, Conditional, Event, Iteration, Slot
from stencil_core.nodes import bound_name
from stencil_core.normalization import to_framework_attribute
from stencil_core.types import ExtensionType, FrameworkSyntax, StyleOutputFormat

from ..framework import TemplateFrameworkExtension
from ..types import BlockSyntax, ExtensionMetadata, RenderContext, StylingOutput


def quote(value: Any) -> str:
    return str(value).replace('"', "&quot;")


def css_text(declarations: dict[str, str]) -> str:
    return "; ".join(f"{prop}: {value}" for prop, value in declarations.items())


def slot_tag(slot: Slot) -> tuple[str, str]:
    """Opening and closing ``<slot>`` tags (unnamed for ``default``)."""
    name = "" if slot.name == "default" else f' name="{quote(slot.name)}"'
    return f"<slot{name}>", "</slot>"


def style_section(styling: StylingOutput | None, *, scoped: bool) -> str:
    """``<style>`` section for the emitted styles ("" when there are none)."""
    if styling is None or not styling.styles.strip():
        return ""
    if styling.format == StyleOutputFormat.INLINE:
        # Inline output is already a complete <style> block
        return styling.styles.strip()
    attributes = " scoped" if scoped else ""
    if styling.format == StyleOutputFormat.SCSS:
        attributes += ' lang="scss"'
    return f"<style{attributes}>\n{styling.styles.strip()}\n</style>"


class VueExtension(TemplateFrameworkExtension):
    """Renders Vue single-file components."""

    metadata = ExtensionMetadata(
        key="vue",
        name="Vue Framework Extension",
        version="1.0.0",
        type=ExtensionType.FRAMEWORK,
        description="Vue single-file components",
    )
    framework = FrameworkSyntax.VUE.value
    file_extension = ".vue"

    def __init__(self, scoped: bool = True):
        self.scoped = scoped

    def event_syntax(self, event: Event) -> str:
        attribute = to_framework_attribute(event, self.framework).attribute_name
        return f'{attribute}="{quote(event.handler)}"'

    def attribute_syntax(self, name: str, value: Any, is_expression: bool) -> str:
        if is_expression:
            return f':{bound_name(name)}="{quote(value)}"'
        if value is True:
            return name
        if value is False or value is None or isinstance(value, dict):
            return ""
        return f'{name}="{quote(value)}"'

    def class_attributes(self, static: list[str], binding: str | None) -> list[str]:
        parts = []
        if static:
            parts.append(f'class="{" ".join(static)}"')
        if binding:
            parts.append(f':class="{quote(binding)}"')
        return parts

    def style_attributes(self, declarations: dict[str, str], binding: str | None) -> list[str]:
        parts = []
        if declarations:
            parts.append(f'style="{quote(css_text(declarations))}"')
        if binding:
            parts.append(f':style="{quote(binding)}"')
        return parts

    def conditional_block(self, conditional: Conditional) -> BlockSyntax:
        open_ = f'<template v-if="{quote(conditional.condition)}">'
        if conditional.else_ is None:
            return BlockSyntax(node_id=conditional.node_id, open=open_, close="</template>")
        return BlockSyntax(
            node_id=conditional.node_id,
            open=open_,
            separator="</template><template v-else>",
            close="</template>",
        )

    def iteration_block(self, iteration: Iteration) -> BlockSyntax:
        if iteration.index:
            source = f"({iteration.item}, {iteration.index}) in {iteration.items}"
        else:
            source = f"{iteration.item} in {iteration.items}"
        key = iteration.key or iteration.index
        key_attribute = f' :key="{quote(key)}"' if key else ""
        return BlockSyntax(
            node_id=iteration.node_id,
            open=f'<template v-for="{quote(source)}"{key_attribute}>',
            close="</template>",
        )

    def slot_block(self, slot: Slot) -> BlockSyntax:
        open_, close = slot_tag(slot)
        return BlockSyntax(node_id=slot.node_id, open=open_, close=close)

    def render_component(self, concepts: ComponentConcept, context: RenderContext) -> str:
        component = context.component
        name = component.name or "Component"
        language = getattr(context.options, "language", "javascript")
        typescript = component.typescript or language == "typescript"

        template = "".join(self.render_roots(context))
        sections = [f"<template>\n  {template}\n</template>"]

        script_lines = list(component.imports)
        if typescript:
            if component.props:
                if script_lines:
                    script_lines.append("")
                entries = "; ".join(f"{key}?: {value}" for key, value in component.props.items())
                script_lines.append(f"const props = defineProps<{{ {entries} }}>();")
            if component.script:
                script_lines.extend(["", component.script])
            script = "\n".join(script_lines).strip("\n")
            sections.append(f'<script setup lang="ts">\n{script}\n</script>')
        else:
            if component.script:
                if script_lines:
                    script_lines.append("")
                script_lines.append(component.script)
            if script_lines:
                script_lines.append("")
            script_lines.append("export default {")
            script_lines.append(f"  name: '{name}',")
            if component.props:
                keys = ", ".join(f"'{key}'" for key in component.props)
                script_lines.append(f"  props: [{keys}],")
            script_lines.append("};")
            sections.append("<script>\n" + "\n".join(script_lines) + "\n</script>")

        style = style_section(context.styling, scoped=self.scoped)
        if style:
            sections.append(style)

        return "\n\n".join(sections) + "\n"
