"""React framework extension: JSX function components."""

import json
import logging
import re
from typing import Any

from stencil_core.analyzer import handler_callee
from stencil_core.concepts import ComponentConcept, Conditional, Event, Iteration, Slot
from stencil_core.nodes import TemplateNode, bound_name
from stencil_core.normalization import to_framework_attribute
from stencil_core.types import ExtensionType, FrameworkSyntax

from ..framework import TemplateFrameworkExtension
from ..types import BlockSyntax, ExtensionMetadata, RenderContext

logger = logging.getLogger(__name__)

# HTML attribute -> React prop (lowercase keys)
REACT_ATTRIBUTE_NAMES = {
    "class": "className",
    "for": "htmlFor",
    "tabindex": "tabIndex",
    "contenteditable": "contentEditable",
    "spellcheck": "spellCheck",
    "readonly": "readOnly",
    "maxlength": "maxLength",
    "minlength": "minLength",
    "formaction": "formAction",
    "formenctype": "formEncType",
    "formmethod": "formMethod",
    "formnovalidate": "formNoValidate",
    "formtarget": "formTarget",
    "novalidate": "noValidate",
    "autofocus": "autoFocus",
    "autocomplete": "autoComplete",
    "autoplay": "autoPlay",
    "cellpadding": "cellPadding",
    "cellspacing": "cellSpacing",
    "rowspan": "rowSpan",
    "colspan": "colSpan",
    "crossorigin": "crossOrigin",
    "usemap": "useMap",
    "allowfullscreen": "allowFullScreen",
    "datetime": "dateTime",
    "frameborder": "frameBorder",
    "marginheight": "marginHeight",
    "marginwidth": "marginWidth",
    "mediagroup": "mediaGroup",
    "radiogroup": "radioGroup",
    "srcdoc": "srcDoc",
    "srclang": "srcLang",
    "srcset": "srcSet",
}

JS_RESERVED_WORDS = frozenset(
    {
        "break", "case", "catch", "class", "const", "continue", "debugger", "default",
        "delete", "do", "else", "export", "extends", "finally", "for", "function", "if",
        "import", "in", "instanceof", "new", "return", "super", "switch", "this", "throw",
        "try", "typeof", "var", "void", "while", "with", "yield",
    }
)

MODIFIER_CODE = {
    "prevent": "e.preventDefault();",
    "stop": "e.stopPropagation();",
    "self": "if (e.target !== e.currentTarget) return;",
}

_SEPARATOR_RUN = re.compile(r"[^a-zA-Z0-9]+(.)")
_KEBAB_PART = re.compile(r"-([a-z])")


def react_attribute_name(name: str) -> str:
    """HTML attribute name as a React prop name."""
    lowered = name.lower()
    if lowered in REACT_ATTRIBUTE_NAMES:
        return REACT_ATTRIBUTE_NAMES[lowered]
    if lowered.startswith(("aria-", "data-")):
        return lowered
    return name


def slot_prop_name(name: str) -> str:
    """Prop that carries a slot: ``default`` -> ``children``, else camelCase."""
    if name == "default":
        return "children"
    normalized = _SEPARATOR_RUN.sub(lambda m: m.group(1).upper(), name.lower())
    normalized = re.sub(r"[^a-zA-Z0-9_$]", "", normalized)
    if normalized and not re.match(r"^[a-zA-Z_$]", normalized):
        normalized = "_" + normalized
    if normalized in JS_RESERVED_WORDS:
        normalized += "Prop"
    return normalized or "slotProp"


def style_object(declarations: dict[str, str]) -> str:
    """CSS declarations as a JSX style object literal."""
    entries = []
    for prop, value in declarations.items():
        key = json.dumps(prop) if prop.startswith("--") else _KEBAB_PART.sub(
            lambda m: m.group(1).upper(), prop
        )
        entries.append(f"{key}: {json.dumps(value)}")
    return "{ " + ", ".join(entries) + " }"


def _branch(nodes: list[TemplateNode] | None) -> tuple[str, str]:
    # Several sibling nodes need a fragment to form one JSX expression
    if nodes and len(nodes) > 1:
        return "(<>", "</>)"
    return "(", ")"


class ReactExtension(TemplateFrameworkExtension):
    """Renders JSX function components."""

    metadata = ExtensionMetadata(
        key="react",
        name="React Framework Extension",
        version="1.0.0",
        type=ExtensionType.FRAMEWORK,
        description="JSX function components with props-based slots",
    )
    framework = FrameworkSyntax.REACT.value
    file_extension = ".jsx"

    def event_syntax(self, event: Event) -> str:
        attribute = to_framework_attribute(event, self.framework).attribute_name
        return f"{attribute}={{{self.format_handler(event)}}}"

    def format_handler(self, event: Event) -> str:
        """Handler expression; modifiers become statements of an arrow wrapper."""
        arguments = ", ".join("e" if param == "$event" else param for param in event.parameters)

        statements = []
        for modifier in event.modifiers:
            code = MODIFIER_CODE.get(modifier)
            if code is None:
                logger.warning(
                    f"Event modifier '{modifier}' on '{event.name}' ({event.node_id}) "
                    "has no React equivalent and is ignored"
                )
                continue
            statements.append(code)

        callee = handler_callee(event.handler)
        # Arrow functions and other inline code are passed through untouched
        call = f"{callee}({arguments})" if callee else f"({event.handler})(e)"
        if statements:
            body = " ".join([*statements, f"{call};"])
            return f"(e) => {{ {body} }}"
        if not event.parameters or callee is None:
            return event.handler
        signature = "(e)" if "$event" in event.parameters else "()"
        return f"{signature} => {call}"

    def attribute_syntax(self, name: str, value: Any, is_expression: bool) -> str:
        prop = react_attribute_name(bound_name(name))
        if is_expression:
            return f"{prop}={{{value}}}"
        if value is True:
            return prop
        if value is False or value is None or isinstance(value, dict):
            return ""
        if isinstance(value, (int, float)):
            return f"{prop}={{{value}}}"
        escaped = str(value).replace('"', "&quot;")
        return f'{prop}="{escaped}"'

    def class_attributes(self, static: list[str], binding: str | None) -> list[str]:
        if static and binding:
            return [f"className={{`{' '.join(static)} ${{{binding}}}`}}"]
        if binding:
            return [f"className={{{binding}}}"]
        if static:
            return [f'className="{" ".join(static)}"']
        return []

    def style_attributes(self, declarations: dict[str, str], binding: str | None) -> list[str]:
        if declarations and binding:
            literal = style_object(declarations)
            return [f"style={{{literal[:-2]}, ...{binding} }}}}"]
        if binding:
            return [f"style={{{binding}}}"]
        if declarations:
            return [f"style={{{style_object(declarations)}}}"]
        return []

    def render_comment(self, content: str) -> str:
        return f"{{/* {content} */}}"

    def wrap_fragment(self, content: str) -> str:
        return f"<React.Fragment>{content}</React.Fragment>"

    def conditional_block(self, conditional: Conditional) -> BlockSyntax:
        then_open, then_close = _branch(conditional.then)
        if conditional.else_ is None:
            return BlockSyntax(
                node_id=conditional.node_id,
                open=f"{{{conditional.condition} && {then_open}",
                close=f"{then_close}}}",
            )
        else_open, else_close = _branch(conditional.else_)
        return BlockSyntax(
            node_id=conditional.node_id,
            open=f"{{{conditional.condition} ? {then_open}",
            separator=f"{then_close} : {else_open}",
            close=f"{else_close}}}",
        )

    def iteration_block(self, iteration: Iteration) -> BlockSyntax:
        index = iteration.index or "index"
        key = iteration.key or index
        return BlockSyntax(
            node_id=iteration.node_id,
            open=(
                f"{{{iteration.items}.map(({iteration.item}, {index}) => "
                f"(<React.Fragment key={{{key}}}>"
            ),
            close="</React.Fragment>))}",
        )

    def slot_block(self, slot: Slot) -> BlockSyntax:
        prop = slot_prop_name(slot.name)
        if not slot.fallback:
            return BlockSyntax(node_id=slot.node_id, open=f"{{props.{prop}}}", close="")
        open_, close = _branch(slot.fallback)
        return BlockSyntax(
            node_id=slot.node_id,
            open=f"{{props.{prop} || {open_}",
            close=f"{close}}}",
        )

    def render_component(self, concepts: ComponentConcept, context: RenderContext) -> str:
        component = context.component
        name = component.name or "Component"
        language = getattr(context.options, "language", "javascript")
        typescript = component.typescript or language == "typescript"

        props: dict[str, Any] = dict(component.props)
        for slot in concepts.slots:
            props.setdefault(slot_prop_name(slot.name), "React.ReactNode")

        imports = ["import React from 'react';"]
        for statement in component.imports:
            if statement not in imports:
                imports.append(statement)

        roots = self.render_roots(context)
        if not roots:
            template = "null"
        elif len(roots) == 1:
            template = roots[0]
        else:
            template = "<>" + "".join(roots) + "</>"

        sections = ["\n".join(imports)]
        if typescript and props:
            entries = "\n".join(f"  {key}?: {value};" for key, value in props.items())
            sections.append(f"interface {name}Props {{\n{entries}\n}}")

        if typescript:
            signature = (
                f"const {name}: React.FC<{name}Props> = (props) => {{"
                if props
                else f"const {name}: React.FC = () => {{"
            )
        else:
            signature = f"const {name} = (props) => {{" if props else f"const {name} = () => {{"

        body = [signature]
        if component.script:
            body.extend(f"  {line}" if line else "" for line in component.script.splitlines())
            body.append("")
        body.extend(["  return (", f"    {template}", "  );", "};"])
        sections.append("\n".join(body))
        sections.append(f"export default {name};")

        return "\n\n".join(sections) + "\n"
