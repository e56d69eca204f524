"""
Fragment Classifier

Decides whether a delimited candidate string is an environment, math, a bare
variable, or ordinary prose that merely contains dollar signs.

The decision is one ordered list of rules, CLASSIFICATION_RULES. Rules are
evaluated top to bottom and the first rule whose extractor returns a body wins;
when none does, the fragment is PLAIN_TEXT. Every other predicate in this module
is a view over that list, so there is exactly one place where math-vs-prose is
decided.

Rule order:
    1. ENVIRONMENT      \\begin{X}...\\end{X}
    2. BLOCK_MATH       \\[...\\] or $$...$$
    3. SMALL_VARIABLE   \\(x\\) with a 1-3 character identifier
    4. INLINE_MATH      any other \\(...\\)
    5. SIMPLE_VARIABLE  $x$ with a 1-3 character identifier
    6. SELECTIVE_MATH   $...$ whose body shows a math indicator

Examples:
    >>> classify_fragment("$x$").category
    <FragmentCategory.SIMPLE_VARIABLE: 'simple_variable'>
    >>> classify_fragment("$x+y$").body
    'x+y'
    >>> classify_fragment("$10 and x$").category
    <FragmentCategory.PLAIN_TEXT: 'plain_text'>
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from scitext.contexts.segmentation.data_structures import (
    Classification,
    FragmentCategory,
    MathDelimiter,
    MathFragment,
    VariableMatch,
)
from scitext.contexts.segmentation.patterns import (
    MathPatterns,
    SelectiveMathIndicators,
    VariableExclusions,
)
from scitext.utils.latex_parsing_tools import is_latex_environment

_BRACKET_BLOCK_RE = re.compile(MathPatterns.BRACKET_BLOCK, re.DOTALL)
_DOUBLE_DOLLAR_BLOCK_RE = re.compile(MathPatterns.DOUBLE_DOLLAR_BLOCK, re.DOTALL)
_PAREN_INLINE_RE = re.compile(MathPatterns.PAREN_INLINE, re.DOTALL)
_SMALL_VARIABLE_RE = re.compile(MathPatterns.SMALL_VARIABLE, re.DOTALL)
_SINGLE_DOLLAR_RE = re.compile(MathPatterns.SINGLE_DOLLAR, re.DOTALL)
_SIMPLE_VARIABLE_RE = re.compile(MathPatterns.SIMPLE_VARIABLE, re.DOTALL)
_INDICATOR_RES = [re.compile(pattern) for pattern in SelectiveMathIndicators.all()]


@dataclass(frozen=True)
class ClassificationRule:
    """
    One step of the ordered classification.

    Attributes:
        category: Verdict when this rule matches
        extract: fragment -> inner body, or None when the rule does not apply
    """

    category: FragmentCategory
    extract: Callable[[str], Optional[str]]


def _contains_any(text: str, needles) -> bool:
    return any(needle in text for needle in needles)


def _is_single_dollar(fragment: str) -> bool:
    return fragment.startswith("$") and not fragment.startswith("$$")


def _extract_environment(fragment: str) -> Optional[str]:
    match = is_latex_environment(fragment)
    return match.group(2) if match else None


def _extract_block_math(fragment: str) -> Optional[str]:
    match = _BRACKET_BLOCK_RE.fullmatch(fragment) or _DOUBLE_DOLLAR_BLOCK_RE.fullmatch(fragment)
    return match.group(1) if match else None


def _extract_small_variable(fragment: str) -> Optional[str]:
    match = _SMALL_VARIABLE_RE.fullmatch(fragment)
    if not match:
        return None

    content = match.group(1)
    if _contains_any(content, VariableExclusions.SMALL_VARIABLE):
        return None
    return content


def _extract_inline_math(fragment: str) -> Optional[str]:
    match = _PAREN_INLINE_RE.fullmatch(fragment)
    return match.group(1) if match else None


def _extract_simple_variable(fragment: str) -> Optional[str]:
    if not _is_single_dollar(fragment):
        return None

    match = _SIMPLE_VARIABLE_RE.fullmatch(fragment)
    if not match:
        return None

    content = match.group(1)
    if _contains_any(content, VariableExclusions.SIMPLE_VARIABLE) or len(content) > 3:
        return None
    return content


def has_math_indicator(body: str) -> bool:
    """
    True if a $...$ body shows at least one mathematical indicator.

    Example:
        >>> has_math_indicator("H_2O")
        True
        >>> has_math_indicator("10 and x")
        False
    """
    return any(indicator.search(body) for indicator in _INDICATOR_RES)


def _extract_selective_math(fragment: str) -> Optional[str]:
    if not _is_single_dollar(fragment):
        return None

    match = _SINGLE_DOLLAR_RE.fullmatch(fragment)
    if not match:
        return None

    content = match.group(1)
    return content if has_math_indicator(content) else None


# The authoritative ordering. Do not re-derive it elsewhere.
CLASSIFICATION_RULES: List[ClassificationRule] = [
    ClassificationRule(FragmentCategory.ENVIRONMENT, _extract_environment),
    ClassificationRule(FragmentCategory.BLOCK_MATH, _extract_block_math),
    ClassificationRule(FragmentCategory.SMALL_VARIABLE, _extract_small_variable),
    ClassificationRule(FragmentCategory.INLINE_MATH, _extract_inline_math),
    ClassificationRule(FragmentCategory.SIMPLE_VARIABLE, _extract_simple_variable),
    ClassificationRule(FragmentCategory.SELECTIVE_MATH, _extract_selective_math),
]


def classify_fragment(fragment: str) -> Classification:
    """
    Classify one delimited candidate string.

    Evaluates CLASSIFICATION_RULES in order and stops at the first match.
    Never raises; anything unrecognised is PLAIN_TEXT with the fragment as body.

    Args:
        fragment: Candidate including its delimiters (e.g. "$x^2$", "\\(a\\)")

    Returns:
        Classification with category, extracted body and the fragment
    """
    for rule in CLASSIFICATION_RULES:
        body = rule.extract(fragment)
        if body is None:
            continue

        environment_name = None
        if rule.category == FragmentCategory.ENVIRONMENT:
            environment_name = is_latex_environment(fragment).group(1)

        return Classification(
            category=rule.category,
            body=body,
            fragment=fragment,
            environment_name=environment_name,
        )

    return Classification(category=FragmentCategory.PLAIN_TEXT, body=fragment, fragment=fragment)


def _classified_as(fragment: str, category: FragmentCategory) -> Optional[Classification]:
    classification = classify_fragment(fragment)
    return classification if classification.category == category else None


def is_block_math(fragment: str) -> Optional[Classification]:
    """Return the verdict if fragment is \\[...\\] or $$...$$ math."""
    return _classified_as(fragment, FragmentCategory.BLOCK_MATH)


def is_inline_math(fragment: str) -> Optional[Classification]:
    """Return the verdict if fragment is \\(...\\) math that is not a small variable."""
    return _classified_as(fragment, FragmentCategory.INLINE_MATH)


def is_selective_math(fragment: str) -> Optional[Classification]:
    """Return the verdict if fragment is $...$ math that passed the indicator gate."""
    return _classified_as(fragment, FragmentCategory.SELECTIVE_MATH)


def match_variable(fragment: str) -> Optional[VariableMatch]:
    """
    Recognise a bare variable ($x$ or \\(x\\)).

    Example:
        >>> match_variable("\\\\(ab\\\\)").content
        'ab'
        >>> match_variable("$x^2$") is None
        True
    """
    classification = classify_fragment(fragment)
    if not classification.is_variable:
        return None
    return VariableMatch(
        fragment=fragment, content=classification.body, category=classification.category
    )


def is_simple_variable(fragment: str) -> Optional[VariableMatch]:
    """Return the variable if fragment is a $x$ simple variable."""
    variable = match_variable(fragment)
    if variable and variable.category == FragmentCategory.SIMPLE_VARIABLE:
        return variable
    return None


def is_small_variable(fragment: str) -> Optional[VariableMatch]:
    """Return the variable if fragment is a \\(x\\) small variable."""
    variable = match_variable(fragment)
    if variable and variable.category == FragmentCategory.SMALL_VARIABLE:
        return variable
    return None


def _delimiter_of(fragment: str) -> Optional[MathDelimiter]:
    if fragment.startswith("$$"):
        return MathDelimiter.DOUBLE_DOLLAR_BLOCK
    if fragment.startswith("\\["):
        return MathDelimiter.BRACKET_BLOCK
    if fragment.startswith("\\("):
        return MathDelimiter.PAREN_INLINE
    if fragment.startswith("$"):
        return MathDelimiter.SINGLE_DOLLAR_SELECTIVE
    return None


def analyze_math_fragment(fragment: str) -> Optional[MathFragment]:
    """
    Describe a math fragment: delimiter style, body and verdict.

    Returns None unless the classifier resolves the fragment to math
    (BLOCK_MATH, INLINE_MATH or SELECTIVE_MATH).

    Example:
        >>> analyze_math_fragment("\\\\[x^2\\\\]").delimiter
        <MathDelimiter.BRACKET_BLOCK: 'bracket_block'>
    """
    classification = classify_fragment(fragment)
    delimiter = _delimiter_of(fragment)
    if not classification.is_math or delimiter is None:
        return None

    return MathFragment(
        content=fragment,
        delimiter=delimiter,
        body=classification.body,
        category=classification.category,
    )
