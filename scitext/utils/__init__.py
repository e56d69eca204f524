"""
Shared utilities for SciText.

Common functionality used across contexts:
- Balanced delimiter and line helpers
- LaTeX environment matching and delimiter splitting
- Placeholder substitution
- Logger setup
"""

from scitext.utils.latex_parsing_tools import find_top_level_environments, split_latex
from scitext.utils.placeholders import PlaceholderMap

__all__ = ["find_top_level_environments", "split_latex", "PlaceholderMap"]
