"""
Segmentation Context

Responsibilities:
- Pairs LaTeX \\begin/\\end tags into top-level environments
- Classifies delimited fragments as math, bare variables or prose
- Partitions text into non-overlapping typed spans
- Expands list environments into items

Owns: Span detection, overlap resolution, math-vs-prose decisions
Never: Produces output markup or calls a renderer
"""

from scitext.contexts.segmentation.classifier import (
    CLASSIFICATION_RULES,
    analyze_math_fragment,
    classify_fragment,
    is_simple_variable,
    is_small_variable,
    match_variable,
)
from scitext.contexts.segmentation.data_structures import (
    Classification,
    FragmentCategory,
    ListExpansion,
    ListItem,
    MathDelimiter,
    MathFragment,
    Span,
    SpanKind,
    VariableMatch,
)
from scitext.contexts.segmentation.list_expander import expand_list_environment
from scitext.contexts.segmentation.scanner import is_block_math_span, partition_text, scan_content

__all__ = [
    # Classification
    "CLASSIFICATION_RULES",
    "classify_fragment",
    "analyze_math_fragment",
    "match_variable",
    "is_simple_variable",
    "is_small_variable",
    # Scanning
    "scan_content",
    "partition_text",
    "is_block_math_span",
    # List expansion
    "expand_list_environment",
    # Data structures
    "Classification",
    "FragmentCategory",
    "ListExpansion",
    "ListItem",
    "MathDelimiter",
    "MathFragment",
    "Span",
    "SpanKind",
    "VariableMatch",
]
