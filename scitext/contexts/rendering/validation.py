"""
Whole-input content validation.

Runs once per document, before any span processing. Rejection is signalled by
ContentValidationError so callers can tell it apart from rendering problems.
"""

import re
from typing import List, Optional

from scitext.contexts.rendering.exceptions import ContentValidationError

DEFAULT_MAX_CONTENT_LENGTH = 100000

# TeX primitives that read/write files or emit raw driver output
DANGEROUS_LATEX_PATTERNS: List[str] = [
    r"\\input\{",
    r"\\include\{",
    r"\\write",
    r"\\read",
    r"\\openin",
    r"\\openout",
    r"\\immediate",
    r"\\special",
    r"\\pdfliteral",
]

# Script-capable URL schemes and embedding tags
DANGEROUS_MARKDOWN_PATTERNS: List[str] = [
    r"javascript:",
    r"data:text/html",
    r"vbscript:",
    r"<script[^>]*>",
    r"<iframe[^>]*>",
    r"<object[^>]*>",
    r"<embed[^>]*>",
    r"<link[^>]*>",
    r"<meta[^>]*>",
]


def _first_match(content: str, patterns: List[str], flags: int = 0) -> Optional[str]:
    for pattern in patterns:
        if re.search(pattern, content, flags):
            return pattern
    return None


def validate_latex_input(content: str) -> bool:
    """
    True if content contains none of the disallowed TeX primitives.

    Example:
        >>> validate_latex_input("$x^2$")
        True
        >>> validate_latex_input("\\\\input{secrets}")
        False
    """
    return _first_match(content, DANGEROUS_LATEX_PATTERNS) is None


def validate_markdown_content(
    content: str, max_length: int = DEFAULT_MAX_CONTENT_LENGTH
) -> bool:
    """True if content is within max_length and has no dangerous HTML/URL patterns."""
    if len(content) > max_length:
        return False
    return _first_match(content, DANGEROUS_MARKDOWN_PATTERNS, re.IGNORECASE) is None


def validate_content(content: str, max_length: int = DEFAULT_MAX_CONTENT_LENGTH) -> None:
    """
    Validate a whole document before rendering.

    Args:
        content: Raw input
        max_length: Longest accepted input

    Raises:
        ContentValidationError: On over-long input, dangerous HTML/URL patterns
            or disallowed TeX primitives
    """
    if len(content) > max_length:
        raise ContentValidationError(
            f"Content exceeds maximum length ({len(content)} > {max_length})",
            reason="length",
        )

    pattern = _first_match(content, DANGEROUS_MARKDOWN_PATTERNS, re.IGNORECASE)
    if pattern:
        raise ContentValidationError(
            "Content contains a disallowed HTML or URL pattern",
            reason="markdown_pattern",
            offending_pattern=pattern,
            content_snippet=content,
        )

    pattern = _first_match(content, DANGEROUS_LATEX_PATTERNS)
    if pattern:
        raise ContentValidationError(
            "Content contains a disallowed LaTeX primitive",
            reason="latex_primitive",
            offending_pattern=pattern,
            content_snippet=content,
        )


def sanitize_latex_content(content: str) -> str:
    """Remove \\input, \\include, \\write and \\read commands with their arguments."""
    content = re.sub(r"\\input\{[^}]*\}", "", content)
    content = re.sub(r"\\include\{[^}]*\}", "", content)
    content = re.sub(r"\\write[^{]*\{[^}]*\}", "", content)
    return re.sub(r"\\read[^{]*\{[^}]*\}", "", content)


def sanitize_markdown_content(content: str) -> str:
    """Remove script/iframe blocks and script-capable URL schemes."""
    content = re.sub(r"<script[^>]*>.*?</script>", "", content, flags=re.IGNORECASE | re.DOTALL)
    content = re.sub(r"<iframe[^>]*>.*?</iframe>", "", content, flags=re.IGNORECASE | re.DOTALL)
    for scheme in (r"javascript:", r"data:text/html", r"vbscript:"):
        content = re.sub(scheme, "", content, flags=re.IGNORECASE)
    return content
