"""
SciText - segmentation and rendering of mixed scientific text

Turns one string of prose, Markdown, LaTeX math, LaTeX list environments and
<smiles> chemical-structure tags into typed regions, then into a small node tree.

Architecture:
- Segmentation Context: Environment matching, fragment classification, span scanning
- Rendering Context: Pipeline selection, per-span dispatch, collaborator adapters
"""

__version__ = "0.1.0"
