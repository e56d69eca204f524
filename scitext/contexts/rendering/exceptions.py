"""Custom exceptions for the rendering context."""

from typing import Optional


def _snippet(text: str, limit: int = 200) -> str:
    return text[:limit] + "..." if len(text) > limit else text


class ContentValidationError(ValueError):
    """
    Exception raised when input is rejected before any span processing.

    Attributes:
        message: Error description
        reason: Short machine-friendly reason ("latex_primitive", "markdown_pattern", "length")
        offending_pattern: The pattern that matched, if any
        content_snippet: Start of the rejected content
    """

    def __init__(
        self,
        message: str,
        reason: Optional[str] = None,
        offending_pattern: Optional[str] = None,
        content_snippet: Optional[str] = None,
    ):
        self.message = message
        self.reason = reason
        self.offending_pattern = offending_pattern
        self.content_snippet = content_snippet

        # Build enhanced error message
        parts = [message]

        if offending_pattern:
            parts.append(f"Matched pattern: {offending_pattern}")

        if content_snippet:
            parts.append(f"\nContent:\n{_snippet(content_snippet)}")

        super().__init__("\n".join(parts))


class SmilesParseError(Exception):
    """
    Exception passed to the SMILES error callback when a code cannot be drawn.

    Attributes:
        message: Error description
        code: The SMILES code as found in the tag
    """

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code
        super().__init__(message)


class MathRenderError(Exception):
    """
    Exception raised by a math collaborator for a fragment it cannot typeset.

    Attributes:
        message: Error description
        latex: The math body that failed
        original_error: The underlying library error
    """

    def __init__(
        self,
        message: str,
        latex: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.latex = latex
        self.original_error = original_error

        parts = [message]

        if latex:
            parts.append(f"\nLaTeX:\n{_snippet(latex)}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
