"""
Text content patcher tests.
"""

import pytest

from engine.jsx.errors import CloseTagNotFoundError
from engine.jsx.text import apply_text
from engine.jsx.tree import build_element_tree


def element_at(code, index):
    return build_element_tree(code)[index]


class TestApplyText:
    def test_replaces_children(self):
        code = "<div><h1>Hello World</h1></div>"
        assert apply_text(code, element_at(code, 1), "Updated Title") == "<div><h1>Updated Title</h1></div>"

    def test_replaces_nested_markup(self):
        code = "<p>Hello <b>there</b></p>"
        assert apply_text(code, element_at(code, 0), "Hi") == "<p>Hi</p>"

    def test_text_inserted_verbatim(self):
        code = "<p>old</p>"
        assert apply_text(code, element_at(code, 0), "a & b {x}") == "<p>a & b {x}</p>"

    def test_empty_text(self):
        code = "<p>old</p>"
        assert apply_text(code, element_at(code, 0), "") == "<p></p>"

    def test_close_tag_case_insensitive(self):
        code = "<Title>Old</Title>"
        assert apply_text(code, element_at(code, 0), "New") == "<Title>New</Title>"

    def test_open_tag_with_style_preserved(self):
        code = "<h1 style={{color: 'red'}}>Old</h1>"
        assert apply_text(code, element_at(code, 0), "New") == "<h1 style={{color: 'red'}}>New</h1>"

    def test_rest_of_source_untouched(self):
        code = "<div><p>A</p><p>B</p></div>"
        assert apply_text(code, element_at(code, 2), "Z") == "<div><p>A</p><p>Z</p></div>"


class TestApplyTextFailures:
    def test_self_closing(self):
        code = "<div><img src='a.png' /><p>x</p></div>"
        with pytest.raises(CloseTagNotFoundError):
            apply_text(code, element_at(code, 1), "text")

    def test_no_close_tag(self):
        code = "<div><p>dangling</div>"
        with pytest.raises(CloseTagNotFoundError) as exc:
            apply_text(code, element_at(code, 1), "text")
        assert exc.value.tag == "p"
