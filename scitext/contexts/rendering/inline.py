"""
Inline placeholder processing.

Shared by both pipelines: every stretch of prose (the whole document on the
fast path, each gap between block-level spans on the full path, each list
item) goes through process_inline_text().

Steps:
1. <smiles> tags and inline math ($...$, \\(...\\)) that the classifier accepts
   are replaced by placeholder tokens. A math candidate that overlaps a
   <smiles> tag is left as text.
2. Bare variables become Markdown emphasis (**x**, ***x***) in Markdown mode,
   or holes of their own in plain mode.
3. The Markdown engine (or a plain whitespace-preserving span) renders the
   text, and every text leaf is split back into text and rendered holes.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from scitext.contexts.rendering.collaborators import MarkdownEngine
from scitext.contexts.rendering.nodes import Element, Node, merge_text
from scitext.contexts.segmentation.classifier import classify_fragment
from scitext.contexts.segmentation.data_structures import Classification, FragmentCategory, SpanKind
from scitext.contexts.segmentation.patterns import MathPatterns, SmilesPatterns
from scitext.utils.placeholders import PlaceholderMap

_SMILES_RE = re.compile(SmilesPatterns.TAG_WITH_CODE, re.DOTALL)
_INLINE_CANDIDATE_RE = re.compile(MathPatterns.INLINE_CANDIDATE, re.DOTALL)

_MARKDOWN_VARIABLE_FORMATS = {
    FragmentCategory.SIMPLE_VARIABLE: "**{}**",
    FragmentCategory.SMALL_VARIABLE: "***{}***",
}


@dataclass(frozen=True)
class InlineHole:
    """
    A region cut out of prose and rendered separately.

    Attributes:
        kind: SMILES or MATH (math also covers bare variables in plain mode)
        fragment: Original text, delimiters or tags included
        body: SMILES code or math body
        classification: Classifier verdict for MATH holes
    """

    kind: SpanKind
    fragment: str
    body: str
    classification: Optional[Classification] = None


HoleRenderer = Callable[[InlineHole], Node]


def substitute_inline_content(
    text: str, prefix: str, render_as_markdown: bool = True
) -> Tuple[str, PlaceholderMap]:
    """
    Replace SMILES tags, inline math and (in plain mode) variables with tokens.

    Args:
        text: Prose that may contain inline constructs
        prefix: Placeholder token prefix
        render_as_markdown: When True, variables become Markdown emphasis
            instead of holes

    Returns:
        (substituted text, map of token -> InlineHole)

    Example:
        >>> text, holes = substitute_inline_content("Mass $m$ and $E = mc^2$", "PH")
        >>> text
        'Mass **m** and PH0'
    """
    placeholders: PlaceholderMap = PlaceholderMap(prefix)

    def replace_smiles(match: re.Match) -> str:
        return placeholders.add(
            InlineHole(kind=SpanKind.SMILES, fragment=match.group(0), body=match.group(1))
        )

    def replace_candidate(match: re.Match) -> str:
        fragment = match.group(0)
        # A candidate overlapping a SMILES tag stays text; the tag wins
        if any(token in fragment for token in placeholders.tokens()):
            return fragment

        classification = classify_fragment(fragment)

        if classification.is_variable and render_as_markdown:
            return _MARKDOWN_VARIABLE_FORMATS[classification.category].format(classification.body.strip())

        if classification.is_math or classification.is_variable:
            return placeholders.add(
                InlineHole(
                    kind=SpanKind.MATH,
                    fragment=fragment,
                    body=classification.body,
                    classification=classification,
                )
            )

        return fragment

    substituted = _SMILES_RE.sub(replace_smiles, text)
    substituted = _INLINE_CANDIDATE_RE.sub(replace_candidate, substituted)
    return substituted, placeholders


def fill_holes(text: str, placeholders: PlaceholderMap, render_hole: HoleRenderer) -> List[Node]:
    """Split text on tokens and render each hole in place."""
    return merge_text(
        part if isinstance(part, str) else render_hole(part) for part in placeholders.split(text)
    )


def process_inline_text(
    text: str,
    prefix: str,
    render_hole: HoleRenderer,
    markdown_engine: Optional[MarkdownEngine] = None,
    render_as_markdown: bool = True,
    inline: bool = False,
) -> List[Node]:
    """
    Render one stretch of prose with its inline constructs.

    Args:
        text: Prose to render
        prefix: Placeholder token prefix
        render_hole: Renders an InlineHole to a node
        markdown_engine: Required when render_as_markdown is True
        render_as_markdown: Markdown mode, or plain whitespace-preserving text
        inline: Use inline Markdown parsing (no paragraphs/blocks)

    Returns:
        Rendered nodes; empty for whitespace-only text
    """
    if not text.strip():
        return []

    substituted, placeholders = substitute_inline_content(text, prefix, render_as_markdown)

    def substitute(leaf: str) -> List[Node]:
        return fill_holes(leaf, placeholders, render_hole)

    if not render_as_markdown:
        return [Element("span", substitute(substituted), {"class": "whitespace-pre-line"})]

    if inline:
        return markdown_engine.render_inline(substituted, substitute)
    return markdown_engine.render(substituted, substitute)
