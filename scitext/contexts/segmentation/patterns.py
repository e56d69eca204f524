"""
Segmentation Pattern Constants

Centralized regex strings used to find and classify content regions.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class SmilesPatterns:
    """
    Chemical-structure tag patterns.

    Used for <smiles>...</smiles> detection (non-greedy, spans newlines).
    """
    TAG: str = r'<smiles>.*?</smiles>'
    TAG_WITH_CODE: str = r'<smiles>(.*?)</smiles>'
    SPLIT: str = r'(<smiles>.*?</smiles>)'
    # Basic SMILES character set
    VALID_CODE: str = r'[a-zA-Z0-9\[\]()=#@+\-\\/:.%]+'


@dataclass(frozen=True)
class HeadingPatterns:
    """
    Markdown ATX heading patterns, matched per line.
    """
    HEADING: str = r'^(#{1,6})[ \t](.+)$'


@dataclass(frozen=True)
class MathPatterns:
    """
    Math delimiter patterns.

    BLOCK and INLINE_CANDIDATE are used by the scanner; the whole-fragment
    patterns are used by the classifier with fullmatch.
    """
    # Scanner: block math first, then inline/selective candidates
    BLOCK: str = r'\$\$.*?\$\$|\\\[.*?\\\]'
    INLINE_CANDIDATE: str = r'\\\(.*?\\\)|\$[^$\s][^$]*[^$\s]\$|\$[^$\s]+\$'

    # Classifier: whole-fragment shapes
    BRACKET_BLOCK: str = r'\\\[(.+?)\\\]'
    DOUBLE_DOLLAR_BLOCK: str = r'\$\$(.*?)\$\$'
    PAREN_INLINE: str = r'\\\((.+?)\\\)'
    SMALL_VARIABLE: str = r'\\\(\s*([a-zA-Z_0-9]{1,3})\s*\\\)'
    SINGLE_DOLLAR: str = r'\$(.+?)\$'
    SIMPLE_VARIABLE: str = r'\$([a-zA-Z][a-zA-Z0-9_]{0,2})\$'

    # Block-delimited fragment (prefix test)
    BLOCK_PREFIX: str = r'^(\$\$|\\\[)'


@dataclass(frozen=True)
class VariableExclusions:
    """
    Substrings that disqualify a short token from being a bare variable.
    """
    SMALL_VARIABLE: tuple = ('\\', '{', '}', '^', '_', 'frac')
    SIMPLE_VARIABLE: tuple = (
        '\\', '{', '}', '^', '_', 'frac', '+', '-', '*', '/', '=', '(', ')',
    )


@dataclass(frozen=True)
class SelectiveMathIndicators:
    """
    Indicators that a $...$ body is mathematics rather than prose.

    A body is math if ANY indicator matches somewhere inside it.
    """
    OPERATOR_OR_SYMBOL: str = r'[+\-*/=<>≤≥≠±∞∑∏∫∪∩∈∉⊆⊇∅∀∃∴∝]'
    KNOWN_FUNCTION: str = (
        r'\\(frac|sqrt|int|sum|prod|lim|sin|cos|tan|log|ln|exp|times|cup|cap'
        r'|subset|supset|in|notin|forall|exists|therefore|propto)'
    )
    PAREN_WITH_OPERATOR: str = r'\([^)]*[+\-*/=,][^)]*\)'  # (a+b), (x, y)
    SET_WITH_COMMA_OR_EQUALS: str = r'\{[^}]*[,=][^}]*\}'  # {a, b}, {x=1}
    SET_WITH_COORDINATE_PAIR: str = r'\{[^}]*\([^)]*,[^)]*\)[^}]*\}'  # {(a,c), (b,d)}
    SUB_OR_SUPERSCRIPT: str = r'[_^]'
    CHEMICAL_FORMULA: str = r'[A-Z][a-z]?_?\d+'  # H2O, C_6
    ANY_COMMAND: str = r'\\[a-zA-Z]+'  # \alpha, \beta
    DIGIT_ADJACENT_LETTER: str = r'\d[a-zA-Z]'  # 2x, 3y
    ASSIGNMENT: str = r'[a-zA-Z]\s*=\s*[^,}\s]'  # f=2, x = y

    @classmethod
    def all(cls) -> List[str]:
        """Return all indicator patterns in evaluation order."""
        return [
            cls.OPERATOR_OR_SYMBOL,
            cls.KNOWN_FUNCTION,
            cls.PAREN_WITH_OPERATOR,
            cls.SET_WITH_COMMA_OR_EQUALS,
            cls.SET_WITH_COORDINATE_PAIR,
            cls.SUB_OR_SUPERSCRIPT,
            cls.CHEMICAL_FORMULA,
            cls.ANY_COMMAND,
            cls.DIGIT_ADJACENT_LETTER,
            cls.ASSIGNMENT,
        ]


@dataclass(frozen=True)
class ListContextPatterns:
    """
    Markdown list-bullet context.

    Matches a line prefix that is only an optional indent and a bare bullet.
    """
    BARE_BULLET_PREFIX: str = r'^\s*[-*+]\s*$'
