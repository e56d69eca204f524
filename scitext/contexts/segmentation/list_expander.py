"""
List Environment Expander

Splits the body of an itemize/enumerate/description (or any unknown)
environment into items. Nested environments are hidden behind placeholder
tokens while splitting so their own \\item markers are not split on, then
restored verbatim in each item body.

Rendering an item body is the caller's job: it goes back through the scanner,
which may find further environments and call back into this module.
"""

from typing import List, Optional

from scitext.contexts.segmentation.data_structures import ListExpansion, ListItem
from scitext.contexts.segmentation.logger import log_list_expansion
from scitext.utils.latex_parsing_tools import (
    find_top_level_environments,
    has_item_marker,
    split_item_entries,
    strip_environment_wrapper,
)
from scitext.utils.placeholders import PlaceholderMap
from scitext.utils.text_processing import split_leading_bracket

DEFAULT_ENVIRONMENT_PLACEHOLDER_PREFIX = "SCITEXTENVPLACEHOLDER"


def hide_nested_environments(body: str, placeholders: PlaceholderMap) -> str:
    """
    Replace each top-level environment in body with a placeholder token.

    Args:
        body: Environment body with its own wrapper already stripped
        placeholders: Map receiving token -> environment text

    Returns:
        body with nested environments substituted
    """
    pieces: List[str] = []
    position = 0

    for env in find_top_level_environments(body):
        pieces.append(body[position : env.start])
        pieces.append(placeholders.add(env.content))
        position = env.end

    pieces.append(body[position:])
    return "".join(pieces)


def _build_item(entry: str, environment_name: str, placeholders: PlaceholderMap) -> ListItem:
    term: Optional[str] = None
    body = entry

    if environment_name == "description":
        split = split_leading_bracket(entry)
        if split:
            term, body = split
            term = placeholders.restore(term).strip()

    return ListItem(body=placeholders.restore(body).strip(), term=term)


def expand_list_environment(
    content: str,
    environment_name: str,
    placeholder_prefix: str = DEFAULT_ENVIRONMENT_PLACEHOLDER_PREFIX,
) -> ListExpansion:
    """
    Expand one environment into its items.

    Args:
        content: Full environment text, \\begin{...} and \\end{...} included
        environment_name: The environment's name; "description" enables
            [term] splitting
        placeholder_prefix: Prefix for nested-environment tokens

    Returns:
        ListExpansion. items is empty when the body holds nothing but empty
        items, which the renderer reports as a malformed environment.

    Example:
        >>> expansion = expand_list_environment(
        ...     "\\\\begin{itemize}\\\\item A\\\\item B\\\\end{itemize}", "itemize")
        >>> [item.body for item in expansion.items]
        ['A', 'B']
    """
    body = strip_environment_wrapper(content)
    placeholders: PlaceholderMap[str] = PlaceholderMap(placeholder_prefix)
    substituted = hide_nested_environments(body, placeholders)

    entries = split_item_entries(substituted)
    if not entries and substituted.strip() and not has_item_marker(substituted):
        entries = [substituted.strip()]

    items = [_build_item(entry, environment_name, placeholders) for entry in entries]
    log_list_expansion(environment_name, len(items), len(placeholders))

    return ListExpansion(
        environment_name=environment_name,
        items=items,
        placeholders={token: placeholders.get(token) for token in placeholders.tokens()},
    )
