"""
Text processing utilities for delimiter matching and display.

Note: environment matching lives in scitext.utils.latex_parsing_tools
"""

import re
from typing import Optional, Tuple


def extract_balanced_delimiters(
    text: str,
    start_pos: int,
    open_char: str = '{',
    close_char: str = '}',
    escape_char: str = '\\'
) -> Tuple[str, int]:
    """
    Extract content between balanced delimiters, handling escaped characters.

    Assumes start_pos is AFTER an opening delimiter. Counts nested delimiters
    to find the matching closing delimiter, skipping escaped characters.

    Args:
        text: Text containing delimited content
        start_pos: Position right after the opening delimiter
        open_char: Opening delimiter character (default: '{')
        close_char: Closing delimiter character (default: '}')
        escape_char: Character used for escaping (default: '\\')

    Returns:
        (content, end_pos) where:
        - content: Text between the delimiters (excluding delimiters themselves)
        - end_pos: Position after the closing delimiter

    Raises:
        ValueError: If delimiters are unmatched

    Example:
        >>> text = "[term [nested] more] definition"
        >>> content, end = extract_balanced_delimiters(text, 1, '[', ']')
        >>> content
        'term [nested] more'
    """
    depth = 1  # Start at 1 (already inside opening delimiter)
    pos = start_pos

    while pos < len(text) and depth > 0:
        if text[pos] == escape_char:
            # Skip escaped character
            pos += 2
            continue
        elif text[pos] == open_char:
            depth += 1
        elif text[pos] == close_char:
            depth -= 1
        pos += 1

    if depth != 0:
        raise ValueError(
            f"Unmatched {open_char}{close_char} delimiters starting at position {start_pos}"
        )

    # content is from start_pos to pos-1 (excluding closing delimiter)
    content = text[start_pos:pos - 1]
    return content, pos


def split_leading_bracket(text: str) -> Optional[Tuple[str, str]]:
    """
    Split a leading [bracketed] argument from the rest of the text.

    Leading whitespace is ignored. The bracket must be balanced and non-empty.

    Args:
        text: Text that may start with a [...] argument

    Returns:
        (bracket_content, remainder) with remainder left-stripped,
        or None if text does not start with a non-empty balanced bracket

    Example:
        >>> split_leading_bracket("[Mass] the amount of matter")
        ('Mass', 'the amount of matter')
        >>> split_leading_bracket("no bracket") is None
        True
    """
    stripped = text.lstrip()
    if not stripped.startswith('['):
        return None

    try:
        content, end_pos = extract_balanced_delimiters(stripped, 1, '[', ']')
    except ValueError:
        return None

    if not content:
        return None

    return content, stripped[end_pos:].lstrip()


def line_prefix(text: str, index: int) -> str:
    """
    Return the text between the start of the line containing index and index.

    Example:
        >>> line_prefix("first\\n  - $x+1$", 10)
        '  - '
    """
    line_start = text.rfind('\n', 0, index) + 1
    return text[line_start:index]


def slugify(text: str, max_len: int = 50) -> str:
    """
    Build a heading id from free text.

    Lowercases, drops everything except ASCII letters, digits and whitespace,
    then joins words with hyphens.

    Example:
        >>> slugify("Newton's 2nd Law: $F = ma$")
        'newtons-2nd-law-f-ma'
    """
    slug = re.sub(r'[^a-z0-9\s]', '', text.lower())
    slug = re.sub(r'\s+', '-', slug.strip())
    return slug[:max_len]


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Original text if within max_len, otherwise truncated with "..."

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."
