"""
Unit tests for inline run rendering.
"""

import unittest

from larkdown.models import TextPayload, TextRun
from larkdown.rendering.inline import render_inline, render_plain, unescape_url
from larkdown.sources.mock import run


class TestRenderInline(unittest.TestCase):
    """Test style merging of text runs."""

    def test_empty_sequence(self):
        """Test an empty run list renders as an empty string."""
        self.assertEqual(render_inline([]), "")

    def test_plain_runs(self):
        self.assertEqual(render_inline([run("Hello, "), run("world")]), "Hello, world")

    def test_uniform_style_has_single_delimiter_pair(self):
        """Test adjacent runs with the same style share one delimiter pair."""
        result = render_inline([run("a", bold=True), run("b", bold=True), run("c", bold=True)])
        self.assertEqual(result, "**abc**")
        self.assertEqual(result.count("**"), 2)

    def test_splitting_a_run_does_not_change_output(self):
        """Test splitting a run into same-style pieces is invisible."""
        whole = render_inline([run("x"), run("styled text", italic=True, strikethrough=True), run("y")])
        split = render_inline([run("x"), run("styled ", italic=True, strikethrough=True),
                               run("text", italic=True, strikethrough=True), run("y")])
        self.assertEqual(whole, split)

    def test_each_style_delimiter(self):
        self.assertEqual(render_inline([run("b", bold=True)]), "**b**")
        self.assertEqual(render_inline([run("i", italic=True)]), "*i*")
        self.assertEqual(render_inline([run("c", inline_code=True)]), "`c`")
        self.assertEqual(render_inline([run("s", strikethrough=True)]), "~~s~~")
        self.assertEqual(render_inline([run("u", underline=True)]), "<u>u</u>")

    def test_nested_delimiters_close_in_reverse_order(self):
        """Test combined styles stay balanced."""
        self.assertEqual(render_inline([run("x", bold=True, italic=True)]), "***x***")
        self.assertEqual(render_inline([run("x", bold=True, underline=True)]), "**<u>x</u>**")

    def test_style_change_closes_previous_span(self):
        result = render_inline([run("plain "), run("bold", bold=True), run(" tail")])
        self.assertEqual(result, "plain **bold** tail")

    def test_empty_content_run_without_style(self):
        """Test an empty unstyled run adds no delimiters."""
        self.assertEqual(render_inline([run(""), run("a"), run("")]), "a")

    def test_link_is_percent_decoded(self):
        result = render_inline([run("x", link="https%3A%2F%2Fa.com")])
        self.assertEqual(result, "[x](https://a.com)")

    def test_link_inside_strikethrough_span(self):
        """Test a link run with the surrounding style stays inside the span."""
        result = render_inline([
            run("删除线", strikethrough=True),
            run("链接", strikethrough=True, link="https%3A%2F%2Fgithub.com%2F"),
            run("删除线", strikethrough=True),
        ])
        self.assertEqual(result, "~~删除线[链接](https://github.com/)删除线~~")

    def test_unstyled_link_between_styled_runs(self):
        result = render_inline([
            run("a", strikethrough=True),
            run("link", link="url"),
            run("a", strikethrough=True),
        ])
        self.assertEqual(result, "~~a~~[link](url)~~a~~")

    def test_link_followed_by_other_style(self):
        result = render_inline([
            run("a", strikethrough=True),
            run("link", strikethrough=True, link="url"),
            run("b", bold=True),
        ])
        self.assertEqual(result, "~~a[link](url)~~**b**")


class TestRenderPlain(unittest.TestCase):
    """Test literal concatenation used by code blocks."""

    def test_styles_are_ignored(self):
        runs = [run("a", bold=True), run("*b*"), run("c", link="https%3A%2F%2Fx.org")]
        self.assertEqual(render_plain(runs), "a*b*c")

    def test_unescape_url(self):
        self.assertEqual(unescape_url("https%3A%2F%2Fexample.com%2Fa%20b"), "https://example.com/a b")


class TestLarkElements(unittest.TestCase):
    """Test parsing of Lark inline elements into runs."""

    def test_text_run_with_style(self):
        payload = TextPayload.from_lark({
            "elements": [
                {"text_run": {"content": "bold", "text_element_style": {"bold": True}}},
                {"text_run": {"content": " link", "text_element_style": {
                    "link": {"url": "https%3A%2F%2Fa.com"}}}},
            ],
            "style": {"align": 2},
        })

        self.assertEqual(len(payload.runs), 2)
        self.assertTrue(payload.runs[0].style.bold)
        self.assertEqual(payload.runs[1].style.link, "https%3A%2F%2Fa.com")
        self.assertEqual(payload.align, 2)
        self.assertEqual(render_inline(payload.runs), "**bold**[ link](https://a.com)")

    def test_mentions_and_equations(self):
        payload = TextPayload.from_lark({"elements": [
            {"mention_user": {"user_id": "ou_123"}},
            {"mention_doc": {"title": "Spec", "url": "https%3A%2F%2Fdoc"}},
            {"equation": {"content": "E=mc^2\n"}},
            {"unknown_element": {}},
        ]})

        self.assertEqual([r.content for r in payload.runs], ["@ou_123", "Spec", "$E=mc^2$"])
        self.assertEqual(render_inline(payload.runs), "@ou_123[Spec](https://doc)$E=mc^2$")

    def test_empty_equation_is_dropped(self):
        self.assertIsNone(TextRun.from_lark_element({"equation": {"content": "  "}}))


if __name__ == "__main__":
    unittest.main()
