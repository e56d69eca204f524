"""
Rendering collaborators.

The orchestrator never typesets math, draws molecules or parses Markdown
itself. It talks to three collaborators through the protocols below; the
default adapters wrap markdown-it-py and latex2mathml and emit a container
for client-side SMILES drawing.

Any object with the right methods can be passed to RichTextRenderer instead.
"""

from typing import Callable, List, Optional, Protocol, Sequence

from latex2mathml.converter import convert as latex_to_mathml
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from scitext.contexts.rendering.exceptions import MathRenderError, SmilesParseError
from scitext.contexts.rendering.nodes import Element, Markup, Node, merge_text
from scitext.contexts.segmentation.smiles import (
    DEFAULT_MAX_SMILES_LENGTH,
    sanitize_smiles_code,
    validate_smiles_code,
)

Substitute = Callable[[str], List[Node]]
ErrorCallback = Callable[[Exception], None]


class MarkdownEngine(Protocol):
    """Renders prose that carries placeholder tokens."""

    def render(self, text: str, substitute: Substitute) -> List[Node]:
        """Render block Markdown; substitute is applied to every text leaf."""
        ...

    def render_inline(self, text: str, substitute: Substitute) -> List[Node]:
        """Render inline Markdown only (no paragraphs, lists or headings)."""
        ...


class MathRenderer(Protocol):
    def render(self, body: str, display: bool) -> Node:
        """Typeset a math body (delimiters stripped). Raises on failure."""
        ...


class SmilesRenderer(Protocol):
    def render(self, code: str, on_error: ErrorCallback) -> Optional[Node]:
        """Render a SMILES code, or call on_error and return None."""
        ...


class MarkdownItEngine:
    """
    MarkdownEngine backed by markdown-it-py.

    Tokens are walked as a SyntaxTreeNode tree and turned into Element nodes.
    Raw HTML in the source is kept as text, never as markup.
    """

    def __init__(self, preset: str = "commonmark", extensions: Sequence[str] = ("table", "strikethrough")):
        self._md = MarkdownIt(preset)
        if extensions:
            self._md.enable(list(extensions))

    def render(self, text: str, substitute: Substitute) -> List[Node]:
        root = SyntaxTreeNode(self._md.parse(text))
        return self._convert_children(root, substitute)

    def render_inline(self, text: str, substitute: Substitute) -> List[Node]:
        root = SyntaxTreeNode(self._md.parseInline(text))
        return self._convert_children(root, substitute)

    def _convert_children(self, node: SyntaxTreeNode, substitute: Substitute) -> List[Node]:
        converted: List[Node] = []
        for child in node.children:
            converted.extend(self._convert(child, substitute))
        return merge_text(converted)

    def _convert(self, node: SyntaxTreeNode, substitute: Substitute) -> List[Node]:
        node_type = node.type

        if node_type == "text":
            return substitute(node.content)
        if node_type in ("html_inline", "html_block"):
            return substitute(node.content)
        if node_type == "softbreak":
            return ["\n"]
        if node_type == "hardbreak":
            return [Element("br")]
        if node_type == "hr":
            return [Element("hr")]
        if node_type == "inline":
            return self._convert_children(node, substitute)
        if node_type == "paragraph" and node.hidden:
            # Tight list items render their text without a <p>
            return self._convert_children(node, substitute)

        if node_type == "code_inline":
            return [Element("code", merge_text(substitute(node.content)))]

        if node_type in ("fence", "code_block"):
            language = node.info.split()[0] if node.info and node.info.strip() else ""
            attrs = {"class": f"language-{language}"} if language else {}
            code = Element("code", merge_text(substitute(node.content)), attrs)
            return [Element("pre", [code])]

        if node_type == "image":
            return [Element("img", [], {"src": str(node.attrs.get("src", "")), "alt": node.content})]

        attrs = {name: str(value) for name, value in node.attrs.items()}
        return [Element(node.tag, self._convert_children(node, substitute), attrs)]


class MathMLRenderer:
    """MathRenderer producing MathML via latex2mathml."""

    def render(self, body: str, display: bool) -> Node:
        try:
            mathml = latex_to_mathml(body, display="block" if display else "inline")
        except Exception as error:
            raise MathRenderError("latex2mathml could not convert fragment", latex=body, original_error=error) from error
        return Markup(mathml)


class SmilesMarkupRenderer:
    """
    SmilesRenderer that validates a code and emits a drawing container.

    The container carries the sanitised code in data-smiles for a client-side
    structure drawer. Invalid codes are reported through on_error.
    """

    def __init__(self, max_length: int = DEFAULT_MAX_SMILES_LENGTH):
        self.max_length = max_length

    def render(self, code: str, on_error: ErrorCallback) -> Optional[Node]:
        sanitized = sanitize_smiles_code(code)
        if not validate_smiles_code(sanitized, self.max_length):
            on_error(SmilesParseError(f"Invalid SMILES code: {code}", code=code))
            return None

        structure = Element(
            "div",
            [],
            {
                "class": "smiles-structure",
                "data-smiles": sanitized,
                "role": "img",
                "aria-label": f"Chemical structure: {sanitized}",
            },
        )
        return Element("div", [structure], {"class": "smiles-container"})
