"""
Rich Text Renderer

Turns one string of mixed scientific text into a node tree.

Pipeline selection (once per document):
- Full pipeline when the text has a LaTeX environment, a \\[ or $$ block
  delimiter, or when Markdown is off. The scanner's block-level spans
  (environments and block math, plus headings in plain mode) split the
  document; every stretch between them goes through the shared inline
  processor. Markdown headings stay inside the prose so the Markdown pass
  sees fences, HTML blocks and link definitions whole.
- Fast pipeline otherwise: the whole text goes through the inline processor
  and one Markdown pass.

Both pipelines produce equal trees for any text that qualifies for the fast one.

Examples:
    >>> renderer = RichTextRenderer()
    >>> html = renderer.render_to_html("Energy: $E = mc^2$")
"""

import re
from typing import Callable, Dict, List, Optional

from scitext.contexts.rendering.collaborators import (
    MarkdownEngine,
    MarkdownItEngine,
    MathMLRenderer,
    MathRenderer,
    SmilesMarkupRenderer,
    SmilesRenderer,
)
from scitext.contexts.rendering.config import RenderingSettings, load_rendering_settings
from scitext.contexts.rendering.exceptions import ContentValidationError
from scitext.contexts.rendering.inline import (
    InlineHole,
    fill_holes,
    process_inline_text,
    substitute_inline_content,
)
from scitext.contexts.rendering.logger import (
    log_fragment_failure,
    log_pipeline_choice,
    log_render_result,
    log_render_start,
    log_validation_failure,
)
from scitext.contexts.rendering.nodes import Element, Node, merge_text, to_html
from scitext.contexts.rendering.validation import validate_content
from scitext.contexts.segmentation.classifier import classify_fragment
from scitext.contexts.segmentation.data_structures import (
    FragmentCategory,
    ListExpansion,
    Span,
    SpanKind,
)
from scitext.contexts.segmentation.list_expander import expand_list_environment
from scitext.contexts.segmentation.patterns import HeadingPatterns
from scitext.contexts.segmentation.scanner import is_block_math_span, partition_text, scan_content
from scitext.contexts.segmentation.smiles import extract_smiles_code
from scitext.utils.latex_parsing_tools import find_top_level_environments, split_latex
from scitext.utils.text_processing import slugify

_HEADING_RE = re.compile(HeadingPatterns.HEADING)

UNSAFE_CONTENT_MESSAGE = "Invalid or potentially unsafe content"

LIST_TAGS = {
    "enumerate": ("ol", "list-decimal"),
    "itemize": ("ul", "list-disc"),
}

RenderItem = Callable[[str], List[Node]]


def has_complex_structures(content: str) -> bool:
    """True if content needs the full span pipeline (environments or block math)."""
    return bool(find_top_level_environments(content)) or "\\[" in content or "$$" in content


def is_block_level(span: Span, render_as_markdown: bool = True) -> bool:
    """Spans that split a document: environments and block math, and headings in plain mode."""
    if span.kind == SpanKind.HEADING:
        return not render_as_markdown
    return span.kind == SpanKind.ENVIRONMENT or is_block_math_span(span)


def render_list_environment(
    expansion: ListExpansion,
    content: str,
    render_item: RenderItem,
    list_environments=("itemize", "enumerate", "description"),
) -> Element:
    """
    Build the markup for an expanded list environment.

    Args:
        expansion: Items produced by expand_list_environment()
        content: Full environment text, shown verbatim when malformed
        render_item: Renders one item body; re-enters the scanner for nested content
        list_environments: Names with dedicated list markup

    Returns:
        ol/ul/dl for known lists, a labelled generic list for anything else,
        or a malformed-environment notice when there are no items
    """
    name = expansion.environment_name

    if expansion.is_malformed:
        return Element(
            "div",
            [
                Element("p", [f"Malformed LaTeX {name} environment:"]),
                Element("pre", [content], {"class": "whitespace-pre-wrap"}),
            ],
            {"class": "latex-malformed"},
        )

    if name not in list_environments:
        items = [Element("li", render_item(item.body)) for item in expansion.items]
        return Element(
            "div",
            [
                Element("p", [f"LaTeX {name} environment:"]),
                Element("div", [Element("ul", items, {"class": "list-none"})], {"class": "pl-4"}),
            ],
            {"class": "latex-environment"},
        )

    if name == "description":
        entries = []
        for item in expansion.items:
            children: List[Node] = []
            if item.term is not None:
                children.append(Element("dt", render_item(item.term)))
            children.append(Element("dd", render_item(item.body)))
            entries.append(Element("div", children, {"class": "description-item"}))
        return Element("dl", entries)

    tag, css_class = LIST_TAGS.get(name, ("ul", "list-disc"))
    return Element(tag, [Element("li", render_item(item.body)) for item in expansion.items], {"class": css_class})


class RichTextRenderer:
    """
    Orchestrates segmentation and collaborators for one document at a time.

    Instances hold only settings and collaborator references, so one renderer
    can be shared.

    Attributes:
        settings: RenderingSettings in effect
        markdown_engine: MarkdownEngine for prose
        math_renderer: MathRenderer for math bodies
        smiles_renderer: SmilesRenderer for <smiles> codes
        on_smiles_error: Called with the error for every SMILES failure
    """

    # Exhaustive dispatch over SpanKind, checked at import time below
    SPAN_RENDERERS: Dict[SpanKind, str] = {
        SpanKind.TEXT: "_render_text_span",
        SpanKind.HEADING: "_render_heading_span",
        SpanKind.MATH: "_render_math_span",
        SpanKind.ENVIRONMENT: "_render_environment_span",
        SpanKind.SMILES: "_render_smiles_span",
    }

    def __init__(
        self,
        settings: Optional[RenderingSettings] = None,
        markdown_engine: Optional[MarkdownEngine] = None,
        math_renderer: Optional[MathRenderer] = None,
        smiles_renderer: Optional[SmilesRenderer] = None,
        on_smiles_error: Optional[Callable[[Exception], None]] = None,
    ):
        self.settings = settings or load_rendering_settings()
        self.markdown_engine = markdown_engine or MarkdownItEngine(
            self.settings.markdown_preset, self.settings.markdown_extensions
        )
        self.math_renderer = math_renderer or MathMLRenderer()
        self.smiles_renderer = smiles_renderer or SmilesMarkupRenderer(self.settings.smiles_max_length)
        self.on_smiles_error = on_smiles_error or self._log_smiles_error

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def render(self, content: str, render_as_markdown: bool = True, inline: bool = False) -> Optional[Element]:
        """
        Render a document.

        Args:
            content: Mixed scientific text
            render_as_markdown: Treat prose as Markdown (otherwise plain text
                with preserved line breaks)
            inline: Wrap in an inline container instead of a block one

        Returns:
            Container element, an alert element when validation rejects the
            content, or None for empty content
        """
        if not content:
            return None

        log_render_start(len(content), render_as_markdown, inline)

        try:
            validate_content(content, self.settings.max_content_length)
        except ContentValidationError as error:
            log_validation_failure(error)
            return Element(
                "div",
                [Element("p", [UNSAFE_CONTENT_MESSAGE])],
                {"class": "error-message", "role": "alert", "aria-live": "polite"},
            )

        if has_complex_structures(content) or not render_as_markdown:
            log_pipeline_choice("full", "block structures present" if render_as_markdown else "plain text mode")
            children = self.render_with_complex_processing(content, render_as_markdown)
        else:
            log_pipeline_choice("fast", "inline content only")
            children = self.render_with_placeholders(content)

        log_render_result(len(children))

        if inline:
            return Element("span", children, {"class": "prose-inline", "role": "presentation"})
        return Element("div", children, {"class": "prose", "role": "article"})

    def render_to_html(self, content: str, render_as_markdown: bool = True, inline: bool = False) -> str:
        node = self.render(content, render_as_markdown=render_as_markdown, inline=inline)
        return to_html(node) if node is not None else ""

    def render_with_placeholders(self, content: str) -> List[Node]:
        """Fast pipeline: one inline-placeholder pass plus one Markdown pass."""
        return self._render_prose(content, render_as_markdown=True, inline=False)

    def render_with_complex_processing(self, content: str, render_as_markdown: bool = True) -> List[Node]:
        """Full pipeline: split on block-level spans, render each part."""
        return self._render_partitioned(content, render_as_markdown, inline=False)

    def render_fragment(self, text: str, render_as_markdown: bool = True) -> List[Node]:
        """
        Render a fragment nested in a larger structure (a list item body).

        Runs the full scanner again, so nested environments and block math
        inside items are expanded; prose uses inline Markdown parsing.
        """
        return self._render_partitioned(text, render_as_markdown, inline=True)

    def render_span(self, span: Span, render_as_markdown: bool = True, inline: bool = False) -> List[Node]:
        """Dispatch one span to the renderer for its kind."""
        handler = getattr(self, self.SPAN_RENDERERS[span.kind])
        return handler(span, render_as_markdown, inline)

    def render_environment(self, name: str, content: str, render_as_markdown: bool = True) -> Node:
        """
        Render a \\begin{name}...\\end{name} environment.

        Math environments go to the math renderer in display mode and fall back
        to the generic list when that fails. Everything else is list-expanded.
        """
        if name in self.settings.math_environments:
            try:
                return self._wrap_math(self.math_renderer.render(content, True), display=True)
            except Exception as error:
                log_fragment_failure(f"{name} environment", content, error)

        expansion = expand_list_environment(content, name, self.settings.environment_placeholder_prefix)

        def render_item(body: str) -> List[Node]:
            return self.render_fragment(body, render_as_markdown)

        return render_list_environment(expansion, content, render_item, self.settings.list_environments)

    def render_latex(self, latex: str, force_inline: bool = False, render_as_markdown: bool = True) -> List[Node]:
        """
        Render an arbitrary LaTeX fragment.

        Whole environments, block/inline/selective math and bare variables are
        rendered directly. Anything else is split around math delimiters and
        each part rendered on its own.
        """
        classification = classify_fragment(latex)
        category = classification.category

        if category == FragmentCategory.ENVIRONMENT:
            return [self.render_environment(classification.environment_name, latex, render_as_markdown)]
        if category == FragmentCategory.BLOCK_MATH:
            return [self._render_math(classification.body, not force_inline, latex)]
        if classification.is_math:
            return [self._render_math(classification.body, False, latex)]
        if classification.is_variable:
            return [self._render_variable(category, classification.body)]

        nodes: List[Node] = []
        for part in split_latex(latex):
            if not part:
                continue
            if classify_fragment(part).category == FragmentCategory.PLAIN_TEXT:
                nodes.append(Element("span", [part], {"class": "whitespace-pre-line"}))
            else:
                nodes.extend(self.render_latex(part, force_inline, render_as_markdown))
        return nodes

    # ------------------------------------------------------------------
    # Pipelines
    # ------------------------------------------------------------------

    def _render_partitioned(self, text: str, render_as_markdown: bool, inline: bool) -> List[Node]:
        block_spans = [span for span in scan_content(text) if is_block_level(span, render_as_markdown)]

        nodes: List[Node] = []
        for span in partition_text(text, block_spans):
            nodes.extend(self.render_span(span, render_as_markdown, inline))
        return merge_text(nodes)

    def _render_prose(self, text: str, render_as_markdown: bool, inline: bool) -> List[Node]:
        return process_inline_text(
            text,
            self.settings.placeholder_prefix,
            self._render_hole,
            markdown_engine=self.markdown_engine,
            render_as_markdown=render_as_markdown,
            inline=inline,
        )

    # ------------------------------------------------------------------
    # Span renderers
    # ------------------------------------------------------------------

    def _render_text_span(self, span: Span, render_as_markdown: bool, inline: bool) -> List[Node]:
        return self._render_prose(span.content, render_as_markdown, inline)

    def _render_heading_span(self, span: Span, render_as_markdown: bool, inline: bool) -> List[Node]:
        if render_as_markdown:
            # Same Markdown pass the fast pipeline would give this line
            return self._render_prose(span.content, render_as_markdown=True, inline=False)

        match = _HEADING_RE.match(span.content)
        level, text = len(match.group(1)), match.group(2)
        substituted, placeholders = substitute_inline_content(
            text, self.settings.placeholder_prefix, render_as_markdown=False
        )
        children = fill_holes(substituted, placeholders, self._render_hole)
        return [Element(f"h{level}", children, {"id": slugify(text)})]

    def _render_math_span(self, span: Span, render_as_markdown: bool, inline: bool) -> List[Node]:
        return self.render_latex(span.content, force_inline=False, render_as_markdown=render_as_markdown)

    def _render_environment_span(self, span: Span, render_as_markdown: bool, inline: bool) -> List[Node]:
        return [self.render_environment(span.environment_name, span.content, render_as_markdown)]

    def _render_smiles_span(self, span: Span, render_as_markdown: bool, inline: bool) -> List[Node]:
        return [self._render_smiles(extract_smiles_code(span.content) or "")]

    # ------------------------------------------------------------------
    # Fragments
    # ------------------------------------------------------------------

    def _render_hole(self, hole: InlineHole) -> Node:
        if hole.kind == SpanKind.SMILES:
            return self._render_smiles(hole.body)
        if hole.classification.is_variable:
            return self._render_variable(hole.classification.category, hole.body)
        return self._render_math(hole.body, False, hole.fragment)

    def _render_variable(self, category: FragmentCategory, name: str) -> Element:
        name = name.strip()
        if category == FragmentCategory.SMALL_VARIABLE:
            return Element("strong", [Element("em", [name])])
        return Element("strong", [name])

    def _wrap_math(self, node: Node, display: bool) -> Element:
        if display:
            return Element("div", [node], {"class": "math-display", "role": "math"})
        return Element("span", [node], {"class": "math-inline", "role": "math"})

    def _render_math(self, body: str, display: bool, fragment: str) -> Element:
        try:
            node = self.math_renderer.render(body, display)
        except Exception as error:
            log_fragment_failure("math", fragment, error)
            return Element("span", [fragment], {"class": "math-error", "title": "Could not render math"})
        return self._wrap_math(node, display)

    def _render_smiles(self, code: str) -> Node:
        errors: List[Exception] = []

        def on_error(error: Exception) -> None:
            errors.append(error)
            self.on_smiles_error(error)

        try:
            node = self.smiles_renderer.render(code, on_error)
        except Exception as error:
            on_error(error)
            node = None

        if node is None or errors:
            return Element(
                "div",
                [Element("p", [f"Error rendering chemical structure: {code}"])],
                {"class": "smiles-error"},
            )
        return node

    @staticmethod
    def _log_smiles_error(error: Exception) -> None:
        log_fragment_failure("SMILES", getattr(error, "code", None) or "", error)


_missing_kinds = set(SpanKind) - set(RichTextRenderer.SPAN_RENDERERS)
if _missing_kinds:
    raise RuntimeError(f"No span renderer for: {sorted(kind.value for kind in _missing_kinds)}")


def render_to_html(content: str, render_as_markdown: bool = True, inline: bool = False) -> str:
    """Render content with default settings and collaborators and return HTML."""
    return RichTextRenderer().render_to_html(content, render_as_markdown=render_as_markdown, inline=inline)
