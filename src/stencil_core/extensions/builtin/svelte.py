"""Svelte framework extension."""

from typing import Any

from stencil_core.analyzer import handler_callee
from stencil_core.concepts import ComponentConcept, Conditional, Event, Iteration, Slot
from stencil_core.nodes import bound_name
from stencil_core.normalization import (
    SVELTE_MODIFIER_ALIASES,
    CanonicalEvent,
    to_framework_attribute,
)
from stencil_core.types import ExtensionType, FrameworkSyntax

from ..framework import TemplateFrameworkExtension
from ..types import BlockSyntax, ExtensionMetadata, RenderContext
from .vue import css_text, quote, slot_tag, style_section


class SvelteExtension(TemplateFrameworkExtension):
    """Renders Svelte components."""

    metadata = ExtensionMetadata(
        key="svelte",
        name="Svelte Framework Extension",
        version="1.0.0",
        type=ExtensionType.FRAMEWORK,
        description="Svelte components with export-let props",
    )
    framework = FrameworkSyntax.SVELTE.value
    file_extension = ".svelte"

    def event_syntax(self, event: Event) -> str:
        modifiers = [SVELTE_MODIFIER_ALIASES.get(m, m) for m in event.modifiers]
        attribute = to_framework_attribute(
            CanonicalEvent(name=event.name, modifiers=modifiers), self.framework
        ).attribute_name

        callee = handler_callee(event.handler)
        if not event.parameters or callee is None:
            return f"{attribute}={{{event.handler}}}"
        arguments = ", ".join("event" if p == "$event" else p for p in event.parameters)
        call = f"{callee}({arguments})"
        signature = "(event)" if "$event" in event.parameters else "()"
        return f"{attribute}={{{signature} => {call}}}"

    def attribute_syntax(self, name: str, value: Any, is_expression: bool) -> str:
        if is_expression:
            # Two-way bindings keep their directive
            target = name if name.startswith("bind:") else bound_name(name)
            return f"{target}={{{value}}}"
        if value is True:
            return name
        if value is False or value is None or isinstance(value, dict):
            return ""
        return f'{name}="{quote(value)}"'

    def class_attributes(self, static: list[str], binding: str | None) -> list[str]:
        if static and binding:
            return [f'class="{" ".join(static)} {{{binding}}}"']
        if binding:
            return [f"class={{{binding}}}"]
        if static:
            return [f'class="{" ".join(static)}"']
        return []

    def style_attributes(self, declarations: dict[str, str], binding: str | None) -> list[str]:
        if declarations and binding:
            return [f'style="{quote(css_text(declarations))}; {{{binding}}}"']
        if binding:
            return [f"style={{{binding}}}"]
        if declarations:
            return [f'style="{quote(css_text(declarations))}"']
        return []

    def conditional_block(self, conditional: Conditional) -> BlockSyntax:
        return BlockSyntax(
            node_id=conditional.node_id,
            open=f"{{#if {conditional.condition}}}",
            separator="{:else}" if conditional.else_ is not None else "",
            close="{/if}",
        )

    def iteration_block(self, iteration: Iteration) -> BlockSyntax:
        head = f"{{#each {iteration.items} as {iteration.item}"
        if iteration.index:
            head += f", {iteration.index}"
        if iteration.key:
            head += f" ({iteration.key})"
        return BlockSyntax(node_id=iteration.node_id, open=head + "}", close="{/each}")

    def slot_block(self, slot: Slot) -> BlockSyntax:
        open_, close = slot_tag(slot)
        return BlockSyntax(node_id=slot.node_id, open=open_, close=close)

    def render_component(self, concepts: ComponentConcept, context: RenderContext) -> str:
        component = context.component
        language = getattr(context.options, "language", "javascript")
        typescript = component.typescript or language == "typescript"

        script_parts = []
        if component.imports:
            script_parts.append("\n".join(component.imports))
        if component.props:
            if typescript:
                props = [f"export let {key}: {value};" for key, value in component.props.items()]
            else:
                props = [f"export let {key};" for key in component.props]
            script_parts.append("\n".join(props))
        if component.script:
            script_parts.append(component.script)

        sections = []
        if script_parts:
            lang = ' lang="ts"' if typescript else ""
            body = "\n\n".join(script_parts)
            indented = "\n".join(f"  {line}" if line else "" for line in body.splitlines())
            sections.append(f"<script{lang}>\n{indented}\n</script>")

        sections.append("".join(self.render_roots(context)))

        style = style_section(context.styling, scoped=False)
        if style:
            sections.append(style)

        return "\n\n".join(sections) + "\n"
