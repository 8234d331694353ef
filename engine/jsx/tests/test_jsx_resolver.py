"""
Path resolver tests.

Covers:
  - Tag-sequence filtering and the first-in-document-order tie-break
  - Leaf and ancestor ordinals (partition by tag-path prefix)
  - ElementNotFoundError for missing tag sequences and out-of-range ordinals
  - Degraded first-by-tag lookup
"""

import pytest

from engine.jsx.errors import ElementNotFoundError
from engine.jsx.resolver import find_first_by_tag, resolve_element
from engine.jsx.tree import build_element_tree
from engine.jsx.xpath import parse_path


def resolve(code, expression):
    return resolve_element(build_element_tree(code), parse_path(expression))


class TestResolveElement:
    def test_resolves_to_last_segment_tag(self, test_component):
        element = resolve(test_component, "//div/h1")
        assert element.tag == "h1"
        assert element.path == ("div", "h1")

    def test_default_ordinal_is_first(self, sibling_paragraphs):
        element = resolve(sibling_paragraphs, "//div/p")
        assert element.start == sibling_paragraphs.index("<p>A")

    def test_leaf_ordinal(self, sibling_paragraphs):
        element = resolve(sibling_paragraphs, "//div/p[2]")
        assert element.start == sibling_paragraphs.index("<p>B")
        assert element.index_in_parent == 1

    def test_ancestor_ordinal(self):
        code = "<div><section><p>1</p></section><section><p>2</p></section></div>"
        element = resolve(code, "//div/section[2]/p")
        assert element.start == code.index("<p>2")

    def test_ancestor_ordinal_on_section_itself(self):
        code = "<div><section>1</section><section>2</section></div>"
        element = resolve(code, "//div/section[2]")
        assert element.start == code.index("<section>2")

    def test_tie_takes_first_in_document_order(self):
        code = "<div><ul><li>a</li></ul><ul><li>b</li></ul></div>"
        element = resolve(code, "//div/ul/li")
        assert element.start == code.index("<li>a")

    def test_ordinal_counts_across_parents(self):
        code = "<div><ul><li>a</li></ul><ul><li>b</li></ul></div>"
        element = resolve(code, "//div/ul/li[2]")
        assert element.start == code.index("<li>b")

    def test_case_insensitive(self):
        code = "<Card><Title>x</Title></Card>"
        assert resolve(code, "//card/title").name == "Title"

    def test_depth_must_match_exactly(self):
        code = "<div><section><p>deep</p></section></div>"
        with pytest.raises(ElementNotFoundError):
            resolve(code, "//div/p")


class TestResolveFailures:
    def test_tag_sequence_absent(self, sibling_paragraphs):
        with pytest.raises(ElementNotFoundError):
            resolve(sibling_paragraphs, "//div/span")

    def test_ordinal_out_of_range(self, sibling_paragraphs):
        with pytest.raises(ElementNotFoundError) as exc:
            resolve(sibling_paragraphs, "//div/p[3]")
        assert exc.value.path == "//div/p[3]"

    def test_empty_source(self):
        with pytest.raises(ElementNotFoundError):
            resolve("", "//div")


class TestFindFirstByTag:
    def test_ignores_ancestry(self):
        code = "<main><article><h1>x</h1></article><h1>y</h1></main>"
        element = find_first_by_tag(build_element_tree(code), "H1")
        assert element.start == code.index("<h1>x")

    def test_missing(self):
        with pytest.raises(ElementNotFoundError):
            find_first_by_tag(build_element_tree("<div></div>"), "h1")
