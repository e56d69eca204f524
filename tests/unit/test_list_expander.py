"""
Unit tests for list environment expansion.

Tests item splitting, description terms and nested-environment placeholders in
scitext.contexts.segmentation.list_expander.
"""

import pytest

from scitext.contexts.segmentation.list_expander import (
    expand_list_environment,
    hide_nested_environments,
)
from scitext.utils.placeholders import PlaceholderMap


@pytest.mark.unit
class TestExpandListEnvironment:
    """Tests for expand_list_environment function."""

    def test_two_items(self):
        """Test a simple itemize expands to its two items."""
        expansion = expand_list_environment(r"\begin{itemize}\item A\item B\end{itemize}", "itemize")

        assert [item.body for item in expansion.items] == ["A", "B"]
        assert all(item.term is None for item in expansion.items)
        assert not expansion.is_malformed

    def test_multiline_items(self):
        """Test items spread over lines are trimmed."""
        content = "\\begin{enumerate}\n  \\item First step\n  \\item Second step\n\\end{enumerate}"
        expansion = expand_list_environment(content, "enumerate")

        assert [item.body for item in expansion.items] == ["First step", "Second step"]

    def test_nested_environment_preserved_verbatim(self):
        """Test a nested list survives the placeholder round-trip unchanged."""
        nested = r"\begin{enumerate}\item x\item y\end{enumerate}"
        content = r"\begin{itemize}\item Outer " + nested + r"\item Second\end{itemize}"
        expansion = expand_list_environment(content, "itemize")

        assert len(expansion.items) == 2
        assert expansion.items[0].body == "Outer " + nested
        assert expansion.items[1].body == "Second"
        assert list(expansion.placeholders.values()) == [nested]

    def test_description_terms(self):
        """Test description items split their [term] from the definition."""
        content = r"\begin{description}\item[Mass] amount of matter\item[Force] push or pull\end{description}"
        expansion = expand_list_environment(content, "description")

        assert [(item.term, item.body) for item in expansion.items] == [
            ("Mass", "amount of matter"),
            ("Force", "push or pull"),
        ]

    def test_description_nested_brackets(self):
        """Test a term containing brackets is kept whole."""
        content = r"\begin{description}\item[$f[x]$] a functional\end{description}"
        expansion = expand_list_environment(content, "description")

        assert expansion.items[0].term == "$f[x]$"
        assert expansion.items[0].body == "a functional"

    def test_description_without_term(self):
        """Test a description item without a term keeps its body."""
        content = r"\begin{description}\item just text\end{description}"
        expansion = expand_list_environment(content, "description")

        assert expansion.items[0].term is None
        assert expansion.items[0].body == "just text"

    def test_brackets_ignored_outside_description(self):
        """Test [..] at an item start is body text for non-description lists."""
        expansion = expand_list_environment(r"\begin{itemize}\item[*] star\end{itemize}", "itemize")
        assert expansion.items[0].body == "[*] star"

    def test_body_without_items_is_one_item(self):
        """Test a non-empty body with no \\item is a single item."""
        expansion = expand_list_environment(r"\begin{center}Just text\end{center}", "center")
        assert [item.body for item in expansion.items] == ["Just text"]

    def test_enumerate_option_removed(self):
        """Test a [label=...] option is not part of the first item."""
        content = r"\begin{enumerate}[label=(a)]\item A\end{enumerate}"
        expansion = expand_list_environment(content, "enumerate")
        assert [item.body for item in expansion.items] == ["A"]

    @pytest.mark.parametrize(
        "content",
        [
            r"\begin{itemize}\end{itemize}",
            r"\begin{itemize}   \end{itemize}",
            r"\begin{itemize}\item \item \end{itemize}",
        ],
    )
    def test_malformed(self, content):
        """Test environments without item text expand to no items."""
        expansion = expand_list_environment(content, "itemize")
        assert expansion.items == []
        assert expansion.is_malformed

    def test_nested_item_markers_not_split(self):
        """Test \\item inside a nested environment does not split the outer list."""
        content = r"\begin{itemize}\item A \begin{itemize}\item B\item C\end{itemize}\end{itemize}"
        expansion = expand_list_environment(content, "itemize")
        assert len(expansion.items) == 1


@pytest.mark.unit
class TestHideNestedEnvironments:
    """Tests for hide_nested_environments function."""

    def test_tokens_replace_environments(self):
        """Test each top-level environment is replaced by one token."""
        placeholders = PlaceholderMap("ENV")
        body = r"a \begin{x}1\end{x} b \begin{y}2\end{y}"
        hidden = hide_nested_environments(body, placeholders)

        assert hidden == "a ENV0 b ENV1"
        assert placeholders.restore(hidden) == body
