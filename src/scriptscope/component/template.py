"""Template analyzer.

Walks a materialized ``<template>`` element depth-first (explicit stack) and
classifies attributes by their text:

``:x`` / ``v-bind:x``
    binding
``@x`` / ``v-on:x``
    event, modifiers after ``.``
``#x`` / ``v-slot:x``
    ``slot`` directive; the slot name is also recorded in ``slots``
other ``v-*``
    directive with argument, modifiers and value

Tags outside the native HTML/SVG set and the framework built-ins are
reported as child components, once each, in encounter order.
"""

from __future__ import annotations

from scriptscope.component.models import BindingInfo, DirectiveInfo, EventInfo, TemplateInfo
from scriptscope.component.splitter import attributes, start_tag, tag_name
from scriptscope.parsing.materialize import SyntaxNode

DEFAULT_SLOT = "default"

HTML_TAGS = frozenset(
    """
    a abbr address area article aside audio b base bdi bdo blockquote body br button canvas caption
    cite code col colgroup data datalist dd del details dfn dialog div dl dt em embed fieldset
    figcaption figure footer form h1 h2 h3 h4 h5 h6 head header hgroup hr html i iframe img input
    ins kbd label legend li link main map mark menu meta meter nav noscript object ol optgroup
    option output p param picture pre progress q rp rt ruby s samp script search section select
    small source span strong style sub summary sup table tbody td textarea tfoot th thead time
    title tr track u ul var video wbr
    """.split()
)

SVG_TAGS = frozenset(
    """
    svg animate animateMotion animateTransform circle clipPath defs desc ellipse feBlend
    feColorMatrix feComponentTransfer feComposite feConvolveMatrix feDiffuseLighting
    feDisplacementMap feDistantLight feDropShadow feFlood feFuncA feFuncB feFuncG feFuncR
    feGaussianBlur feImage feMerge feMergeNode feMorphology feOffset fePointLight
    feSpecularLighting feSpotLight feTile feTurbulence filter foreignObject g image line
    linearGradient marker mask metadata mpath path pattern polygon polyline radialGradient rect
    set stop switch symbol text textPath tspan use view
    """.split()
)

# Compared after lower-casing and dropping hyphens: KeepAlive == keep-alive
BUILTIN_TAGS = frozenset(
    {"template", "slot", "component", "transition", "transitiongroup", "keepalive", "teleport", "suspense"}
)

ELEMENT_KINDS = frozenset({"element", "script_element", "style_element"})


def is_component_tag(name: str) -> bool:
    if not name or name in HTML_TAGS or name in SVG_TAGS:
        return False
    return name.lower().replace("-", "") not in BUILTIN_TAGS


def _split_modifiers(text: str) -> tuple[str, list[str]]:
    head, *modifiers = text.split(".")
    return head, modifiers


def _dynamic_argument(text: str) -> tuple[str, str]:
    """Split ``[key].mods`` style arguments so dots inside brackets survive."""
    if text.startswith("["):
        close = text.find("]")
        if close != -1:
            return text[: close + 1], text[close + 1 :]
    return text, ""


def _argument_and_modifiers(text: str) -> tuple[str, list[str]]:
    argument, rest = _dynamic_argument(text)
    if rest:
        return argument, [m for m in rest.split(".") if m]
    return _split_modifiers(argument)


def _classify(info: TemplateInfo, element: str, name: str, value: str | None, node: SyntaxNode) -> None:
    expression = value or ""
    pos = {"start": node.start, "end": node.end}
    if name.startswith(":") or name.startswith("v-bind:"):
        arg, modifiers = _argument_and_modifiers(name[1:] if name.startswith(":") else name[len("v-bind:") :])
        info.bindings.append(BindingInfo(name=arg, expression=expression, element=element, modifiers=modifiers, **pos))
    elif name.startswith("@") or name.startswith("v-on:"):
        arg, modifiers = _argument_and_modifiers(name[1:] if name.startswith("@") else name[len("v-on:") :])
        info.events.append(EventInfo(name=arg, handler=expression, modifiers=modifiers, element=element, **pos))
    elif name.startswith("#") or name == "v-slot" or name.startswith("v-slot:"):
        raw = name[1:] if name.startswith("#") else name[len("v-slot:") :]
        slot, modifiers = _argument_and_modifiers(raw) if raw else (DEFAULT_SLOT, [])
        info.directives.append(
            DirectiveInfo(name="slot", value=value, argument=slot, modifiers=modifiers, element=element, **pos)
        )
        if slot not in info.slots:
            info.slots.append(slot)
    elif name.startswith("v-"):
        directive, _, rest = name[2:].partition(":")
        if rest:
            argument, modifiers = _argument_and_modifiers(rest)
        else:
            directive, modifiers = _split_modifiers(directive)
            argument = None
        info.directives.append(
            DirectiveInfo(
                name=directive, value=value, argument=argument or None, modifiers=modifiers, element=element, **pos
            )
        )


def analyze_template(node: SyntaxNode, lang: str | None = None) -> TemplateInfo:
    """Directives, bindings, events, child components and slots of a template element."""
    info = TemplateInfo(lang=lang, start=node.start, end=node.end)
    # The root <template> tag's own attributes (lang, functional) are block metadata.
    stack = [child for child in reversed(node.children) if child.kind in ELEMENT_KINDS or child.kind == "ERROR"]
    while stack:
        element = stack.pop()
        if element.kind in ELEMENT_KINDS and start_tag(element) is not None:
            name = tag_name(element)
            if is_component_tag(name) and name not in info.components:
                info.components.append(name)
            if name == "slot":
                slot_name = next((v for n, v, _ in attributes(element) if n == "name" and v), DEFAULT_SLOT)
                if slot_name not in info.slots:
                    info.slots.append(slot_name)
            for attr_name, value, attr_node in attributes(element):
                _classify(info, name, attr_name, value, attr_node)
        stack.extend(reversed([c for c in element.children if c.kind in ELEMENT_KINDS or c.kind == "ERROR"]))
    return info
