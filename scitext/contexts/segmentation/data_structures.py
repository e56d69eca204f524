"""
Segmentation Data Structures

Defines the value types produced by segmentation: spans, classifier verdicts,
math fragments, variables and list items. All of them are built fresh per call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class SpanKind(Enum):
    """Closed set of region kinds a text is partitioned into."""

    SMILES = "smiles"
    ENVIRONMENT = "environment"
    MATH = "math"
    HEADING = "heading"
    TEXT = "text"


class FragmentCategory(Enum):
    """Classifier verdicts, listed in rule priority order."""

    ENVIRONMENT = "environment"
    BLOCK_MATH = "block_math"
    SMALL_VARIABLE = "small_variable"
    INLINE_MATH = "inline_math"
    SIMPLE_VARIABLE = "simple_variable"
    SELECTIVE_MATH = "selective_math"
    PLAIN_TEXT = "plain_text"


class MathDelimiter(Enum):
    """Delimiter style of a math fragment."""

    PAREN_INLINE = "paren_inline"  # \(...\)
    DOUBLE_DOLLAR_BLOCK = "double_dollar_block"  # $$...$$
    BRACKET_BLOCK = "bracket_block"  # \[...\]
    SINGLE_DOLLAR_SELECTIVE = "single_dollar_selective"  # $...$

    @property
    def is_block(self) -> bool:
        return self in (MathDelimiter.DOUBLE_DOLLAR_BLOCK, MathDelimiter.BRACKET_BLOCK)


@dataclass(frozen=True)
class Span:
    """
    One classified region of a text.

    Invariant: 0 <= start < end <= len(text) and content == text[start:end].

    Attributes:
        start: Start offset in the original text
        end: End offset (exclusive)
        content: The covered substring
        kind: Region kind
        environment_name: Environment name for ENVIRONMENT spans
    """

    start: int
    end: int
    content: str
    kind: SpanKind
    environment_name: Optional[str] = None

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, other: "Span") -> bool:
        """True if other lies within [start, end)."""
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class Classification:
    """
    Classifier verdict for one delimited fragment.

    Attributes:
        category: The first rule that matched
        body: Inner content with delimiters stripped (the fragment itself for PLAIN_TEXT)
        fragment: The classified fragment, delimiters included
        environment_name: Set for ENVIRONMENT verdicts
    """

    category: FragmentCategory
    body: str
    fragment: str
    environment_name: Optional[str] = None

    @property
    def is_math(self) -> bool:
        return self.category in (
            FragmentCategory.BLOCK_MATH,
            FragmentCategory.INLINE_MATH,
            FragmentCategory.SELECTIVE_MATH,
        )

    @property
    def is_variable(self) -> bool:
        return self.category in (FragmentCategory.SIMPLE_VARIABLE, FragmentCategory.SMALL_VARIABLE)


@dataclass(frozen=True)
class MathFragment:
    """
    A delimited math candidate with its delimiter style and verdict.

    Attributes:
        content: Fragment including delimiters
        delimiter: Delimiter style
        body: Inner content
        category: Classifier verdict
    """

    content: str
    delimiter: MathDelimiter
    body: str
    category: FragmentCategory

    @property
    def is_block(self) -> bool:
        return self.delimiter.is_block


@dataclass(frozen=True)
class VariableMatch:
    """
    A short bare identifier rendered as styled text instead of math.

    Attributes:
        fragment: The delimited fragment ($x$ or \\(x\\))
        content: The identifier (1-3 characters)
        category: SIMPLE_VARIABLE or SMALL_VARIABLE
    """

    fragment: str
    content: str
    category: FragmentCategory


@dataclass(frozen=True)
class ListItem:
    """
    One item of an expanded list environment.

    Attributes:
        body: Item text with nested environments restored verbatim
        term: Description term for description environments ([term] prefix), else None
    """

    body: str
    term: Optional[str] = None


@dataclass
class ListExpansion:
    """
    Result of expanding one list-style environment.

    Attributes:
        environment_name: Name of the expanded environment
        items: Items in document order
        placeholders: Placeholder token -> nested environment text used while splitting
    """

    environment_name: str
    items: List[ListItem] = field(default_factory=list)
    placeholders: Dict[str, str] = field(default_factory=dict)

    @property
    def is_malformed(self) -> bool:
        """An environment that produced no items is shown verbatim instead."""
        return not self.items
