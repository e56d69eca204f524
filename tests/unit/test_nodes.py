"""Unit tests for scitext.contexts.rendering.nodes."""

import pytest

from scitext.contexts.rendering.nodes import Element, Markup, find_all, merge_text, text_content, to_html


@pytest.mark.unit
class TestToHtml:
    """Tests for to_html function."""

    def test_escapes_text_and_attributes(self):
        """Test text and attribute values are escaped."""
        node = Element("p", ["a < b & c"], {"title": 'say "hi"'})
        assert to_html(node) == '<p title="say &quot;hi&quot;">a &lt; b &amp; c</p>'

    def test_markup_not_escaped(self):
        """Test Markup is emitted as-is."""
        node = Element("span", [Markup("<math><mi>x</mi></math>")])
        assert to_html(node) == "<span><math><mi>x</mi></math></span>"

    def test_void_tag(self):
        assert to_html(Element("br")) == "<br />"


@pytest.mark.unit
class TestTreeHelpers:
    """Tests for merge_text, text_content and find_all."""

    def test_merge_text(self):
        """Test adjacent strings join and empty strings vanish."""
        br = Element("br")
        assert merge_text(["a", "", "b", br, "c"]) == ["ab", br, "c"]

    def test_text_content(self):
        """Test text is collected depth first, Markup excluded."""
        node = Element("div", ["a", Element("b", ["c"]), Markup("<m/>")])
        assert text_content(node) == "ac"

    def test_find_all_by_class(self):
        """Test find_all filters on one class among several."""
        target = Element("span", ["x"], {"class": "math math-inline"})
        node = Element("div", [Element("span", ["y"]), target])

        assert find_all(node, "span", "math-inline") == [target]
        assert len(find_all(node, "span")) == 2
