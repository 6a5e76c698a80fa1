"""Tests for body extraction and the ordered fragment cleanup steps."""

import pytest

from rbridge.exceptions import FragmentExtractionError
from rbridge.rendering import fragment
from rbridge.rendering.fragment import CLEANUP_STEPS, clean, extract_body, extract_fragment

RMARKDOWN_PAGE = """<!DOCTYPE html>
<html>
<head>
<title>doc</title>
</head>
<body>
<div class="container-fluid main-container">
<pre><code>[1] 2</code></pre>
</div>
</body>
</html>
"""


class TestExtractBody:
    def test_strips_tags_and_boundary_newlines(self):
        body = extract_body("<html><body>\nhello\n</body></html>")
        assert body == "hello"

    def test_drops_exactly_one_character_each_side(self):
        assert extract_body("<body>  x  </body>") == " x "

    def test_missing_open_marker(self):
        with pytest.raises(FragmentExtractionError) as exc_info:
            extract_body("<html>no body</html>")
        assert exc_info.value.marker == "<body>"

    def test_missing_close_marker(self):
        with pytest.raises(FragmentExtractionError) as exc_info:
            extract_body("<body>\nunterminated")
        assert exc_info.value.marker == "</body>"


class TestCleanupSteps:
    def test_step_order(self):
        names = [step.__name__ for step in CLEANUP_STEPS]
        assert names == [
            "replace('<code>', '')",
            "replace('</code>', '')",
            "replace('\\n\\n', '')",
            "replace('\\n', '<br>')",
            "replace('<pre>', \"<p class='text'>\")",
            "replace('</pre>', '</p>')",
            "replace('<br>', '')",
            "replace('main-container', '')",
        ]

    def test_each_step_is_pure(self):
        text = "<pre><code>a\n\nb\nc</code></pre> main-container"
        for step in CLEANUP_STEPS:
            assert step(text) == step(text)
        assert text == "<pre><code>a\n\nb\nc</code></pre> main-container"

    def test_inline_code_tags_removed(self):
        assert clean("<code>x</code>") == "x"

    def test_blank_lines_collapse_before_line_breaks(self):
        # "\n\n" disappears entirely instead of turning into two <br>
        assert fragment.replace("\n\n")("a\n\nb") == "ab"
        assert clean("a\n\nb\nc") == "abc"

    def test_pre_blocks_become_text_paragraphs(self):
        assert clean("<pre>out</pre>") == "<p class='text'>out</p>"

    def test_line_breaks_from_source_html_are_removed(self):
        assert clean("one<br>two") == "onetwo"

    def test_layout_class_stripped(self):
        assert clean('<div class="container-fluid main-container">') == '<div class="container-fluid ">'


class TestExtractFragment:
    def test_rmarkdown_page(self):
        assert extract_fragment(RMARKDOWN_PAGE) == (
            '<div class="container-fluid "><p class=\'text\'>[1] 2</p></div>'
        )

    def test_result_never_contains_body_markers(self):
        result = extract_fragment(RMARKDOWN_PAGE)
        assert "<body>" not in result
        assert "</body>" not in result
