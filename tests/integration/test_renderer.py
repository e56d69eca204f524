"""
Integration tests for the rich text renderer.

Runs whole documents through RichTextRenderer with the real Markdown engine.
Math goes to a recording stub so assertions do not depend on MathML output.
"""

import pytest

from scitext.contexts.rendering.exceptions import MathRenderError, SmilesParseError
from scitext.contexts.rendering.nodes import Element, Markup, find_all, text_content
from scitext.contexts.rendering.renderer import RichTextRenderer, render_to_html
from scitext.contexts.segmentation.data_structures import SpanKind


class RecordingMathRenderer:
    """Math renderer stub that records every call."""

    def __init__(self):
        self.calls = []

    def render(self, body, display):
        self.calls.append((body, display))
        return Markup(f"<math>{body}</math>")


class FailingMathRenderer:
    def render(self, body, display):
        raise MathRenderError("cannot typeset", latex=body)


@pytest.fixture
def math_renderer():
    return RecordingMathRenderer()


@pytest.fixture
def renderer(math_renderer):
    return RichTextRenderer(math_renderer=math_renderer)


def texts(elements):
    return [text_content(element) for element in elements]


@pytest.mark.integration
class TestDocumentLevel:
    """Tests for validation, containers and pipeline selection."""

    def test_empty_content(self, renderer):
        """Test empty input renders nothing."""
        assert renderer.render("") is None

    def test_unsafe_content_alert(self, renderer):
        """Test rejected input becomes an alert node instead of raising."""
        node = renderer.render(r"Intro \input{secrets} $x^2$")

        assert node.attrs["role"] == "alert"
        assert text_content(node) == "Invalid or potentially unsafe content"

    def test_block_container(self, renderer):
        node = renderer.render("Hello")
        assert node.tag == "div"
        assert node.attrs["class"] == "prose"

    def test_inline_container(self, renderer):
        node = renderer.render("Hello", inline=True)
        assert node.tag == "span"
        assert node.attrs["class"] == "prose-inline"

    def test_dispatch_covers_every_span_kind(self):
        """Test every SpanKind has a renderer."""
        assert set(RichTextRenderer.SPAN_RENDERERS) == set(SpanKind)


@pytest.mark.integration
class TestInlineContent:
    """Tests for prose with inline math, variables and SMILES."""

    def test_inline_math(self, renderer, math_renderer):
        """Test selective $...$ math goes to the math renderer inline."""
        node = renderer.render("Energy $E = mc^2$ here")

        assert len(find_all(node, "span", "math-inline")) == 1
        assert math_renderer.calls == [("E = mc^2", False)]

    def test_paren_math(self, renderer, math_renderer):
        renderer.render(r"Sum \(a + b\) here")
        assert math_renderer.calls == [("a + b", False)]

    def test_variables_are_emphasis(self, renderer, math_renderer):
        """Test bare variables render as bold text, not math."""
        node = renderer.render(r"Let $x$ and \(m\) vary")

        assert "x" in texts(find_all(node, "strong"))
        assert "m" in texts(find_all(node, "strong"))
        assert math_renderer.calls == []

    def test_prices_stay_text(self, renderer, math_renderer):
        """Test dollar amounts are not typeset."""
        node = renderer.render("Price is $10 and x$y")

        assert math_renderer.calls == []
        assert "Price is $10 and x$y" in text_content(node)

    def test_markdown_structure(self, renderer):
        """Test Markdown emphasis and lists survive placeholder substitution."""
        node = renderer.render("**Bold $a+b$**\n\n- one\n- two $c^2$")

        strong = find_all(node, "strong")[0]
        assert find_all(strong, "span", "math-inline")
        assert texts(find_all(node, "li"))[0] == "one"

    def test_math_failure_is_local(self, math_renderer):
        """Test a failing fragment shows an error marker and siblings still render."""
        renderer = RichTextRenderer(math_renderer=FailingMathRenderer())
        node = renderer.render("Sum $a+b$ and $c+d$ done")

        assert texts(find_all(node, "span", "math-error")) == ["$a+b$", "$c+d$"]
        assert text_content(node).endswith("done")

    def test_smiles(self, renderer):
        """Test a valid SMILES tag becomes a drawing container."""
        node = renderer.render("Ethanol <smiles>CCO</smiles>.")
        container = find_all(node, "div", "smiles-container")

        assert len(container) == 1
        assert container[0].children[0].attrs["data-smiles"] == "CCO"

    def test_invalid_smiles_reports_error(self, math_renderer):
        """Test an invalid SMILES code calls the error callback and shows an error."""
        errors = []
        renderer = RichTextRenderer(math_renderer=math_renderer, on_smiles_error=errors.append)
        node = renderer.render("Bad <smiles>C(C</smiles> then $x+1$")

        assert texts(find_all(node, "div", "smiles-error")) == ["Error rendering chemical structure: C(C"]
        assert len(errors) == 1
        assert isinstance(errors[0], SmilesParseError)
        assert math_renderer.calls == [("x+1", False)]

    def test_math_around_smiles_stays_text(self, renderer, math_renderer):
        """Test a $...$ candidate wrapping a SMILES tag does not swallow the tag."""
        node = renderer.render("mix $a <smiles>CC</smiles> + b$ end")

        assert len(find_all(node, "div", "smiles-container")) == 1
        assert find_all(node, "span", "math-inline") == []
        assert math_renderer.calls == []
        assert "SCITEXTPLACEHOLDER" not in text_content(node)


@pytest.mark.integration
class TestBlockContent:
    """Tests for block math, headings and environments."""

    def test_block_math_splits_document(self, renderer, math_renderer):
        """Test $$...$$ renders as display math between paragraphs."""
        node = renderer.render("Before\n$$x^2$$\nAfter")

        assert [child.tag for child in node.children] == ["p", "div", "p"]
        assert node.children[1].attrs["class"] == "math-display"
        assert math_renderer.calls == [("x^2", True)]

    def test_bracket_block_math(self, renderer, math_renderer):
        renderer.render(r"See \[a+b\] there")
        assert ("a+b", True) in math_renderer.calls

    def test_markdown_heading_with_math(self, renderer):
        """Test math inside a heading is typeset inside the h2."""
        node = renderer.render("## Energy $E = mc^2$\n\nBody")
        heading = find_all(node, "h2")[0]

        assert find_all(heading, "span", "math-inline")

    def test_itemize(self, renderer):
        """Test itemize becomes a bullet list of its items."""
        node = renderer.render(r"\begin{itemize}\item A\item B\end{itemize}")
        lists = find_all(node, "ul")

        assert len(lists) == 1
        assert texts(lists[0].children) == ["A", "B"]

    def test_enumerate_with_math(self, renderer, math_renderer):
        """Test math inside list items is typeset."""
        node = renderer.render(r"\begin{enumerate}\item $a+b$\item plain\end{enumerate}")
        ordered = find_all(node, "ol")[0]

        assert len(ordered.children) == 2
        assert find_all(ordered.children[0], "span", "math-inline")
        assert math_renderer.calls == [("a+b", False)]

    def test_nested_environment(self, renderer):
        """Test a nested enumerate inside an itemize item is rendered as a list."""
        content = r"\begin{itemize}\item Outer \begin{enumerate}\item x\end{enumerate}\item Second\end{itemize}"
        node = renderer.render(content)
        outer = find_all(node, "ul")[0]

        assert len(outer.children) == 2
        inner = find_all(outer.children[0], "ol")
        assert len(inner) == 1
        assert texts(inner[0].children) == ["x"]

    def test_block_math_inside_item(self, renderer, math_renderer):
        renderer.render(r"\begin{itemize}\item Area \[A = \pi r^2\]\end{itemize}")
        assert (r"A = \pi r^2", True) in math_renderer.calls

    def test_description(self, renderer):
        """Test description items become term/definition pairs."""
        node = renderer.render(r"\begin{description}\item[Mass] amount of matter\end{description}")

        assert texts(find_all(node, "dt")) == ["Mass"]
        assert texts(find_all(node, "dd")) == ["amount of matter"]

    def test_unknown_environment(self, renderer):
        """Test unknown environments render as a labelled generic list."""
        node = renderer.render(r"\begin{foo}\item a\end{foo}")
        wrapper = find_all(node, "div", "latex-environment")[0]

        assert text_content(wrapper.children[0]) == "LaTeX foo environment:"
        assert texts(find_all(wrapper, "li")) == ["a"]

    def test_malformed_environment(self, renderer):
        """Test an environment without items is shown verbatim."""
        content = r"\begin{itemize}\end{itemize}"
        node = renderer.render(content)
        notice = find_all(node, "div", "latex-malformed")[0]

        assert text_content(notice.children[0]) == "Malformed LaTeX itemize environment:"
        assert texts(find_all(notice, "pre")) == [content]

    def test_math_environment(self, renderer, math_renderer):
        """Test math environments go whole to the math renderer in display mode."""
        content = r"\begin{align}a &= b\end{align}"
        node = renderer.render(content)

        assert find_all(node, "div", "math-display")
        assert math_renderer.calls == [(content, True)]

    def test_math_environment_fallback(self):
        """Test a failing math environment falls back to the generic list."""
        renderer = RichTextRenderer(math_renderer=FailingMathRenderer())
        node = renderer.render(r"\begin{equation}E = mc^2\end{equation}")

        wrapper = find_all(node, "div", "latex-environment")
        assert len(wrapper) == 1
        assert texts(find_all(wrapper[0], "li")) == ["E = mc^2"]

    def test_heading_line_in_fence_before_environment(self, renderer):
        """Test a # line inside a code fence stays code when an environment follows."""
        node = renderer.render("```\n# comment\nx = 1\n```\n\n\\begin{itemize}\\item a\\end{itemize}")

        assert find_all(node, "h1") == []
        assert [text_content(code) for code in find_all(node, "code")] == ["# comment\nx = 1\n"]
        assert len(find_all(node, "ul")) == 1

    def test_mismatched_environment_is_text(self, renderer):
        """Test mismatched environments fall through as prose."""
        node = renderer.render(r"\begin{itemize}\item one\end{enumerate}")

        assert find_all(node, "ul") == []
        assert "one" in text_content(node)


@pytest.mark.integration
class TestPlainMode:
    """Tests for render_as_markdown=False."""

    def test_plain_text_keeps_lines(self, renderer, math_renderer):
        """Test prose is a whitespace-preserving span with variables and math filled in."""
        node = renderer.render("Line one\nLine $x$ and $y^2$", render_as_markdown=False)
        span = node.children[0]

        assert span.tag == "span"
        assert span.attrs["class"] == "whitespace-pre-line"
        assert span.children[0] == "Line one\nLine "
        assert span.children[1] == Element("strong", ["x"])
        assert math_renderer.calls == [("y^2", False)]

    def test_small_variable_plain(self, renderer):
        node = renderer.render(r"Mass \(m\)", render_as_markdown=False)
        assert find_all(node, "strong")[0] == Element("strong", [Element("em", ["m"])])

    def test_plain_heading(self, renderer):
        """Test headings get a slug id in plain mode."""
        node = renderer.render("# Title Here\nbody", render_as_markdown=False)
        heading = node.children[0]

        assert heading.tag == "h1"
        assert heading.attrs["id"] == "title-here"
        assert text_content(heading) == "Title Here"

    def test_markdown_is_not_parsed(self, renderer):
        node = renderer.render("**not bold**", render_as_markdown=False)
        assert find_all(node, "strong") == []
        assert text_content(node) == "**not bold**"


@pytest.mark.integration
class TestRenderLatex:
    """Tests for RichTextRenderer.render_latex."""

    def test_simple_variable(self, renderer):
        assert renderer.render_latex("$x$") == [Element("strong", ["x"])]

    def test_small_variable(self, renderer):
        assert renderer.render_latex(r"\(m\)") == [Element("strong", [Element("em", ["m"])])]

    def test_force_inline_block(self, renderer, math_renderer):
        """Test block math can be forced inline."""
        nodes = renderer.render_latex("$$y$$", force_inline=True)

        assert nodes[0].attrs["class"] == "math-inline"
        assert math_renderer.calls == [("y", False)]

    def test_mixed_string(self, renderer):
        """Test mixed strings are split around math delimiters."""
        nodes = renderer.render_latex("a $x^2$ b")

        assert [node.attrs["class"] for node in nodes] == [
            "whitespace-pre-line",
            "math-inline",
            "whitespace-pre-line",
        ]


@pytest.mark.integration
class TestHtmlOutput:
    """Tests for HTML serialisation with the real math renderer."""

    def test_escapes_text(self):
        assert "a &lt; b" in render_to_html("a < b")

    def test_mathml(self):
        """Test math is emitted as MathML."""
        html = RichTextRenderer().render_to_html("Area $A = r^2$")
        assert "<math" in html
        assert 'class="math-inline"' in html
