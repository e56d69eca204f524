"""
LaTeX Parsing Tools

Fundamental parsing utilities for locating LaTeX structures in mixed text.

Self-contained module with no segmentation dependencies - designed for reusability.
All LaTeX patterns are defined as constants below for visibility and maintainability.

Every function here is total over string input: malformed LaTeX produces an
empty result, never an exception.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from scitext.utils.text_processing import extract_balanced_delimiters


@dataclass(frozen=True)
class LaTeXPatterns:
    """
    LaTeX pattern templates for parsing and manipulation.

    Templates accept an environment name via .format(env=name).
    """

    # Environment patterns (use with .format(env=name))
    BEGIN_ENV: str = r"\\begin\{{{env}\}}"  # Matches \begin{envname}
    END_ENV: str = r"\\end\{{{env}\}}"  # Matches \end{envname}

    # Any begin/end tag, captures 'begin'|'end' and the environment name
    ENV_TAG: str = r"\\(begin|end)\{([^}]+)\}"

    # Whole-fragment environment, backreference forces matching names
    WHOLE_ENVIRONMENT: str = r"\\begin\{([^}]+)\}(.*?)\\end\{\1\}"

    # Wrapper stripping (anchored at the ends of an environment's text)
    LEADING_BEGIN: str = r"^\\begin\{[^}]+\}"
    TRAILING_END: str = r"\\end\{[^}]+\}$"

    # List item marker, not followed by a letter (so \itemsep survives)
    ITEM_MARKER: str = r"\\item(?![A-Za-z])"

    # Delimiter splitting: \(..\), $$..$$, $..$ and \[..\].
    # Order matters, since $$...$$ also matches for $...$.
    MATH_DELIMITERS: str = r"(\\\(.+?\\\)|\$\$.*?\$\$|\$.*?\$|\\\[.*?\\\])"


_ENV_TAG_RE = re.compile(LaTeXPatterns.ENV_TAG)
_WHOLE_ENVIRONMENT_RE = re.compile(LaTeXPatterns.WHOLE_ENVIRONMENT, re.DOTALL)
_ITEM_MARKER_RE = re.compile(LaTeXPatterns.ITEM_MARKER)
_MATH_DELIMITERS_RE = re.compile(LaTeXPatterns.MATH_DELIMITERS, re.DOTALL)


@dataclass(frozen=True)
class EnvironmentTag:
    """
    One \\begin{name} or \\end{name} occurrence.

    Attributes:
        kind: 'begin' or 'end'
        name: Environment name (e.g., 'itemize', 'align*')
        start: Position of the backslash
        end: Position after the closing brace
    """

    kind: str
    name: str
    start: int
    end: int


@dataclass(frozen=True)
class LatexEnvironment:
    """
    A matched \\begin{name}...\\end{name} region.

    Attributes:
        name: Environment name
        start: Position of \\begin
        end: Position after \\end{name}
        content: text[start:end], nested environments included verbatim
        depth: Number of matched environments enclosing this one (0 = top-level)
    """

    name: str
    start: int
    end: int
    content: str
    depth: int = 0


def find_environment_tags(text: str) -> List[EnvironmentTag]:
    """
    Scan all \\begin{name} / \\end{name} tags left to right.

    Example:
        >>> [(t.kind, t.name) for t in find_environment_tags(r"\\begin{a}x\\end{a}")]
        [('begin', 'a'), ('end', 'a')]
    """
    return [
        EnvironmentTag(kind=match.group(1), name=match.group(2), start=match.start(), end=match.end())
        for match in _ENV_TAG_RE.finditer(text)
    ]


def find_matched_environments(text: str) -> List[LatexEnvironment]:
    """
    Pair begin/end tags with a stack and return every matched environment.

    Pairing policy:
    - begin tags are pushed
    - an end tag whose name equals the stack top pops it and emits an environment
    - an end tag whose name differs from the stack top is ignored
    - begin tags still open at end-of-text emit nothing

    Interleaved environments (begin A, begin B, end A, end B) therefore pair
    only B, and B never becomes top-level because A is still open.

    Args:
        text: Text to scan

    Returns:
        Matched environments sorted by start position. depth counts the begin
        tags still open around each one.
    """
    stack: List[EnvironmentTag] = []
    environments = []

    for tag in find_environment_tags(text):
        if tag.kind == "begin":
            stack.append(tag)
            continue

        if not stack or stack[-1].name != tag.name:
            continue

        begin_tag = stack.pop()
        environments.append(
            LatexEnvironment(
                name=begin_tag.name,
                start=begin_tag.start,
                end=tag.end,
                content=text[begin_tag.start : tag.end],
                depth=len(stack),
            )
        )

    return sorted(environments, key=lambda env: env.start)


def find_top_level_environments(text: str) -> List[LatexEnvironment]:
    """
    Find environments that are not contained in another matched environment.

    An environment is emitted only when its end tag empties the stack.

    Example:
        >>> text = r"\\begin{itemize}\\item \\begin{enumerate}\\item x\\end{enumerate}\\end{itemize}"
        >>> [env.name for env in find_top_level_environments(text)]
        ['itemize']
        >>> find_top_level_environments(r"\\begin{itemize}\\item one\\end{enumerate}")
        []
    """
    return [env for env in find_matched_environments(text) if env.depth == 0]


def is_latex_environment(fragment: str) -> Optional[re.Match]:
    """
    Check whether the whole fragment is one \\begin{X}...\\end{X} with matching X.

    Returns:
        Match with group(1) = name and group(2) = inner body, or None
    """
    return _WHOLE_ENVIRONMENT_RE.fullmatch(fragment)


def strip_environment_wrapper(content: str) -> str:
    """
    Remove the outer \\begin{name} and \\end{name} tags from an environment.

    A key=value optional argument directly after \\begin{name} is removed too,
    e.g. the [label=(a)] in \\begin{enumerate}[label=(a)]. Bracketed text
    without '=' is kept because it may be a description term.

    Args:
        content: Full environment text

    Returns:
        Trimmed inner body

    Example:
        >>> strip_environment_wrapper(r"\\begin{enumerate}[label=(a)] \\item A \\end{enumerate}")
        '\\\\item A'
    """
    inner = re.sub(LaTeXPatterns.LEADING_BEGIN, "", content, count=1, flags=re.DOTALL)
    inner = re.sub(LaTeXPatterns.TRAILING_END, "", inner, count=1, flags=re.DOTALL)

    if inner.startswith("["):
        try:
            option, end_pos = extract_balanced_delimiters(inner, 1, "[", "]")
        except ValueError:
            option, end_pos = "", 0
        if "=" in option:
            inner = inner[end_pos:]

    return inner.strip()


def split_item_entries(content: str) -> List[str]:
    """
    Split list content on \\item markers.

    Each returned string is the trimmed text between two markers (markers
    themselves removed). Empty segments are discarded; text before the first
    marker is kept as its own entry when non-empty.

    Example:
        >>> split_item_entries(r"\\item First\\item Second \\item  ")
        ['First', 'Second']
    """
    return [entry.strip() for entry in _ITEM_MARKER_RE.split(content) if entry.strip()]


def split_latex(text: str) -> List[str]:
    """
    Split text around math delimiters, keeping the delimited parts.

    Captures \\(...\\), $$...$$, $...$ and \\[...\\]. Joining the parts
    reproduces the input exactly.

    Example:
        >>> split_latex("text $x^2$ more $$y^2$$ text")
        ['text ', '$x^2$', ' more ', '$$y^2$$', ' text']
    """
    return _MATH_DELIMITERS_RE.split(text)


def has_item_marker(content: str) -> bool:
    """True if content contains at least one \\item marker."""
    return _ITEM_MARKER_RE.search(content) is not None
