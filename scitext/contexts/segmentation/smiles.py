"""
Chemical-structure tag helpers.

Finds <smiles>...</smiles> tags, extracts their code and applies the basic
safety checks done before a code is handed to a structure renderer. None of
this checks chemical validity.
"""

import re
from typing import List, Optional

from scitext.contexts.segmentation.patterns import SmilesPatterns

DEFAULT_MAX_SMILES_LENGTH = 1000

_TAG_WITH_CODE_RE = re.compile(SmilesPatterns.TAG_WITH_CODE, re.DOTALL)
_SPLIT_RE = re.compile(SmilesPatterns.SPLIT, re.DOTALL)
_VALID_CODE_RE = re.compile(SmilesPatterns.VALID_CODE)

_HTML_TAG_RE = re.compile(r"<[^>]*>")
_JAVASCRIPT_RE = re.compile(r"javascript:", re.IGNORECASE)
_DATA_URI_RE = re.compile(r"data:", re.IGNORECASE)


def split_smiles(content: str) -> List[str]:
    """
    Split text around <smiles> tags, keeping the tags.

    Example:
        >>> split_smiles("Water: <smiles>O</smiles>.")
        ['Water: ', '<smiles>O</smiles>', '.']
    """
    return _SPLIT_RE.split(content)


def extract_smiles_code(fragment: str) -> Optional[str]:
    """
    Return the code inside the first <smiles> tag of fragment, or None.

    Example:
        >>> extract_smiles_code("<smiles>CCO</smiles>")
        'CCO'
    """
    match = _TAG_WITH_CODE_RE.search(fragment)
    return match.group(1) if match else None


def sanitize_smiles_code(code: str) -> str:
    """Strip markup tags and script/data URI schemes, then trim."""
    code = _HTML_TAG_RE.sub("", code)
    code = _JAVASCRIPT_RE.sub("", code)
    code = _DATA_URI_RE.sub("", code)
    return code.strip()


def _has_balanced_groups(code: str) -> bool:
    stack = []
    pairs = {")": "(", "]": "["}
    for char in code:
        if char in "([":
            stack.append(char)
        elif char in pairs:
            if not stack or stack.pop() != pairs[char]:
                return False
    return not stack


def validate_smiles_code(code: str, max_length: int = DEFAULT_MAX_SMILES_LENGTH) -> bool:
    """
    Basic safety check for a SMILES code.

    Accepts a non-empty code made only of SMILES characters, no longer than
    max_length, with balanced branch parentheses and atom brackets.

    Example:
        >>> validate_smiles_code("C1=CC=CC=C1")
        True
        >>> validate_smiles_code("CC(C")
        False
    """
    if not code or len(code) > max_length:
        return False
    if not _VALID_CODE_RE.fullmatch(code):
        return False
    return _has_balanced_groups(code)
