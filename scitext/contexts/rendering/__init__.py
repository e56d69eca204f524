"""
Rendering Context

Responsibilities:
- Validates whole documents before processing
- Chooses the full span pipeline or the fast inline pipeline
- Dispatches spans and inline fragments to Markdown, math and SMILES collaborators
- Serialises the resulting node tree to HTML

Owns: Output node tree, collaborator adapters, rendering settings
Never: Decides what counts as math (segmentation does)
"""

from scitext.contexts.rendering.collaborators import (
    MarkdownEngine,
    MarkdownItEngine,
    MathMLRenderer,
    MathRenderer,
    SmilesMarkupRenderer,
    SmilesRenderer,
)
from scitext.contexts.rendering.config import RenderingSettings, load_rendering_settings
from scitext.contexts.rendering.exceptions import (
    ContentValidationError,
    MathRenderError,
    SmilesParseError,
)
from scitext.contexts.rendering.nodes import Element, Markup, to_html
from scitext.contexts.rendering.renderer import RichTextRenderer, render_to_html
from scitext.contexts.rendering.validation import validate_content

__all__ = [
    # Orchestration
    "RichTextRenderer",
    "render_to_html",
    "validate_content",
    # Output tree
    "Element",
    "Markup",
    "to_html",
    # Collaborators
    "MarkdownEngine",
    "MarkdownItEngine",
    "MathRenderer",
    "MathMLRenderer",
    "SmilesRenderer",
    "SmilesMarkupRenderer",
    # Configuration
    "RenderingSettings",
    "load_rendering_settings",
    # Errors
    "ContentValidationError",
    "MathRenderError",
    "SmilesParseError",
]
