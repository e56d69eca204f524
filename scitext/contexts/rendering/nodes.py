"""
Output node tree.

Rendering produces a small tree: Element nodes, plain strings for text and
Markup for trusted markup from a collaborator (MathML). to_html() serialises it.
"""

import html
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Union


@dataclass(frozen=True)
class Markup:
    """Already-serialised markup that is emitted without escaping."""

    html: str


@dataclass
class Element:
    """
    One element of the output tree.

    Attributes:
        tag: Element name (e.g., "p", "span", "ul")
        children: Child nodes in order
        attrs: Attribute name -> value
    """

    tag: str
    children: List["Node"] = field(default_factory=list)
    attrs: Dict[str, str] = field(default_factory=dict)


Node = Union[Element, Markup, str]

VOID_TAGS = frozenset({"br", "hr", "img"})


def merge_text(nodes: Iterable[Node]) -> List[Node]:
    """
    Join adjacent strings and drop empty ones.

    Keeps trees built from different splits of the same text comparable.

    Example:
        >>> merge_text(["a", "", "b", Element("br"), "c"])
        ['ab', Element(tag='br', children=[], attrs={}), 'c']
    """
    merged: List[Node] = []
    for node in nodes:
        if isinstance(node, str):
            if not node:
                continue
            if merged and isinstance(merged[-1], str):
                merged[-1] = merged[-1] + node
                continue
        merged.append(node)
    return merged


def text_content(node: Node) -> str:
    """Concatenate the text of a node and its descendants (Markup excluded)."""
    if isinstance(node, str):
        return node
    if isinstance(node, Markup):
        return ""
    return "".join(text_content(child) for child in node.children)


def iter_elements(node: Node):
    """Yield node and every Element below it, depth first."""
    if isinstance(node, Element):
        yield node
        for child in node.children:
            yield from iter_elements(child)


def find_all(node: Node, tag: str, class_name: str = None) -> List[Element]:
    """Return descendant elements with the given tag (and class, if given)."""
    return [
        element
        for element in iter_elements(node)
        if element.tag == tag
        and (class_name is None or class_name in element.attrs.get("class", "").split())
    ]


def to_html(node: Node) -> str:
    """
    Serialise a node tree to HTML.

    Example:
        >>> to_html(Element("p", ["a < b"], {"class": "x"}))
        '<p class="x">a &lt; b</p>'
    """
    if isinstance(node, str):
        return html.escape(node, quote=False)
    if isinstance(node, Markup):
        return node.html

    attrs = "".join(f' {name}="{html.escape(value)}"' for name, value in node.attrs.items())
    if node.tag in VOID_TAGS:
        return f"<{node.tag}{attrs} />"

    inner = "".join(to_html(child) for child in node.children)
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"
