"""
Content Scanner

Partitions a text block into typed, non-overlapping regions:
chemical-structure tags, Markdown headings, math and LaTeX environments.
Everything between regions is plain text and is only materialised on request
(partition_text).

Collection order matters. Spans are collected as Smiles, Heading, Math
(block first, then inline candidates), Environment, and that order breaks
ties when two candidates cover exactly the same range.
"""

import re
from typing import Iterable, List

from scitext.contexts.segmentation.classifier import classify_fragment
from scitext.contexts.segmentation.data_structures import FragmentCategory, Span, SpanKind
from scitext.contexts.segmentation.logger import log_rejected_candidate, log_scan_result
from scitext.contexts.segmentation.patterns import (
    HeadingPatterns,
    ListContextPatterns,
    MathPatterns,
    SmilesPatterns,
)
from scitext.utils.latex_parsing_tools import find_top_level_environments
from scitext.utils.text_processing import line_prefix

_SMILES_RE = re.compile(SmilesPatterns.TAG, re.DOTALL)
_HEADING_RE = re.compile(HeadingPatterns.HEADING, re.MULTILINE)
_BLOCK_MATH_RE = re.compile(MathPatterns.BLOCK, re.DOTALL)
_INLINE_CANDIDATE_RE = re.compile(MathPatterns.INLINE_CANDIDATE, re.DOTALL)
_BLOCK_PREFIX_RE = re.compile(MathPatterns.BLOCK_PREFIX)
_BARE_BULLET_RE = re.compile(ListContextPatterns.BARE_BULLET_PREFIX)


def _spans_from_matches(matches: Iterable[re.Match], kind: SpanKind) -> List[Span]:
    return [
        Span(start=match.start(), end=match.end(), content=match.group(0), kind=kind)
        for match in matches
        if match.end() > match.start()
    ]


def is_in_list_context(text: str, index: int) -> bool:
    """
    True if the line before index holds nothing but an indent and a bullet.

    Example:
        >>> is_in_list_context("- $x+1$", 2)
        True
        >>> is_in_list_context("a - $x+1$", 4)
        False
    """
    return bool(_BARE_BULLET_RE.match(line_prefix(text, index)))


def is_block_math_span(span: Span) -> bool:
    """True for MATH spans delimited by $$ or \\[."""
    return span.kind == SpanKind.MATH and bool(_BLOCK_PREFIX_RE.match(span.content))


def find_smiles_spans(text: str) -> List[Span]:
    return _spans_from_matches(_SMILES_RE.finditer(text), SpanKind.SMILES)


def find_heading_spans(text: str) -> List[Span]:
    return _spans_from_matches(_HEADING_RE.finditer(text), SpanKind.HEADING)


def _inline_rejection_reason(text: str, candidate: re.Match, recorded: List[Span]) -> str:
    """Return why an inline candidate is dropped, or an empty string to keep it."""
    start, end = candidate.start(), candidate.end()
    fragment = candidate.group(0)

    if any(start < span.end and span.start < end for span in recorded):
        return "overlaps an earlier span"

    if is_in_list_context(text, start):
        return "follows a list bullet"

    classification = classify_fragment(fragment)
    if classification.is_variable:
        return "bare variable"

    if fragment.startswith("$") and classification.category == FragmentCategory.PLAIN_TEXT:
        return "no math indicator"

    return ""


def find_math_spans(text: str, recorded: List[Span]) -> List[Span]:
    """
    Collect block math, then the inline candidates that survive filtering.

    Args:
        text: Text to scan
        recorded: Spans already collected (Smiles, Heading); inline candidates
            overlapping these or any block math are dropped

    Returns:
        Math spans in collection order
    """
    math_spans = _spans_from_matches(_BLOCK_MATH_RE.finditer(text), SpanKind.MATH)
    occupied = list(recorded) + math_spans

    for candidate in _INLINE_CANDIDATE_RE.finditer(text):
        reason = _inline_rejection_reason(text, candidate, occupied)
        if reason:
            log_rejected_candidate(candidate.group(0), reason)
            continue

        span = Span(
            start=candidate.start(),
            end=candidate.end(),
            content=candidate.group(0),
            kind=SpanKind.MATH,
        )
        math_spans.append(span)
        occupied.append(span)

    return math_spans


def find_environment_spans(text: str) -> List[Span]:
    return [
        Span(
            start=env.start,
            end=env.end,
            content=env.content,
            kind=SpanKind.ENVIRONMENT,
            environment_name=env.name,
        )
        for env in find_top_level_environments(text)
    ]


def resolve_overlaps(spans: List[Span]) -> List[Span]:
    """
    Reduce collected spans to a sorted, non-overlapping list.

    1. Stable sort by start, so collection order survives among equal starts.
    2. Drop spans contained in another span. For identical bounds the span
       collected first is kept.
    3. Drop spans that still partially overlap an earlier kept span.

    Args:
        spans: Spans in collection order

    Returns:
        Sorted, mutually non-overlapping spans
    """
    ordered = sorted(enumerate(spans), key=lambda pair: pair[1].start)

    def is_nested(index: int, span: Span) -> bool:
        for other_index, other in ordered:
            if other_index == index or not other.contains(span):
                continue
            if (other.start, other.end) != (span.start, span.end):
                return True
            if other_index < index:
                return True
        return False

    outermost = [span for index, span in ordered if not is_nested(index, span)]

    resolved: List[Span] = []
    for span in outermost:
        if resolved and span.start < resolved[-1].end:
            log_rejected_candidate(span.content, f"partially overlaps a {resolved[-1].kind.value} span")
            continue
        resolved.append(span)

    return resolved


def scan_content(text: str) -> List[Span]:
    """
    Find all typed regions of a text block.

    Never raises. Malformed constructs simply produce no span.

    Args:
        text: Text to scan

    Returns:
        Spans sorted by start, mutually non-overlapping, with
        span.content == text[span.start:span.end]

    Example:
        >>> [(s.kind.value, s.content) for s in scan_content("Area $A = \\\\pi r^2$ and $x$")]
        [('math', '$A = \\\\pi r^2$')]
    """
    collected = find_smiles_spans(text)
    collected += find_heading_spans(text)
    collected += find_math_spans(text, collected)
    collected += find_environment_spans(text)

    spans = resolve_overlaps(collected)
    log_scan_result(len(text), spans)
    return spans


def partition_text(text: str, spans: List[Span]) -> List[Span]:
    """
    Fill the gaps between spans with TEXT spans.

    Args:
        text: The scanned text
        spans: Sorted, non-overlapping spans over text

    Returns:
        Spans covering text exactly once, in order

    Example:
        >>> parts = partition_text("a $x+1$ b", scan_content("a $x+1$ b"))
        >>> [p.kind.value for p in parts]
        ['text', 'math', 'text']
    """
    parts: List[Span] = []
    position = 0

    for span in spans:
        if span.start > position:
            parts.append(
                Span(start=position, end=span.start, content=text[position : span.start], kind=SpanKind.TEXT)
            )
        parts.append(span)
        position = span.end

    if position < len(text):
        parts.append(Span(start=position, end=len(text), content=text[position:], kind=SpanKind.TEXT))

    return parts
