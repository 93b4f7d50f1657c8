"""
Tests for html_translate.parser: tree construction from real-world HTML.

The parser's contract is "never fail": malformed input still produces a
tree, and only input with no content at all produces a ParseError.
"""

import pytest

from html_translate.exceptions import ParseError
from html_translate.parser import decode_entities, parse, parse_attributes
from html_translate.query import Document, children, full_text, text
from html_translate.tree import DOCUMENT_TAG


def tags(nodes):
    return [n.tag for n in nodes if n.is_element]


def test_parses_simple_document():
    doc = parse("<html><body><p>Hello, World!</p></body></html>")

    assert isinstance(doc, Document)
    assert doc.error is None
    assert doc.root.tag == DOCUMENT_TAG
    assert doc.root.parent is None
    assert doc.document_element.tag == "html"
    assert doc.document_element.parent is doc.root

    body = doc.find("body")
    p = body.find("p")
    assert body.tag == "body"
    assert p.tag == "p"
    assert p.text() == "Hello, World!"
    assert p.node.parent is body.node


def test_void_elements_take_no_children():
    doc = parse('<div>a<br>b<img src="x.png">c</div>')

    nodes = children(doc.document_element)
    assert len(nodes) == 5
    assert tags(nodes) == ["br", "img"]
    assert nodes[1].children == ()
    assert nodes[3].attrs["src"] == "x.png"
    assert text(doc.document_element) == "abc"


def test_self_closing_syntax_closes_any_element():
    doc = parse("<div><span/>x<custom-tag /></div>")

    span = doc.find("span")
    assert span.children() == ()
    assert doc.find("div").text() == "x"
    assert doc.find("custom-tag").ok


def test_stray_close_tag_is_ignored():
    doc = parse("<div><p>one</span>two</p><p>three</p></div>")

    paragraphs = doc.find_all("p")
    assert [p.full_text() for p in paragraphs] == ["onetwo", "three"]
    assert len(doc.document_element.children) == 2


def test_close_tag_pops_unclosed_children():
    doc = parse("<div><p><b>bold</div><p>next</p>")

    # </div> closes <b> and <p> too, so the second <p> is a sibling of <div>
    assert doc.root.tag == DOCUMENT_TAG
    assert tags(doc.root.children) == ["div", "p"]
    assert doc.find("div").full_text() == "bold"
    assert doc.find("div").find_next_sibling().full_text() == "next"


def test_unclosed_elements_are_closed_at_end_of_input():
    doc = parse("<ul><li>one<li>two")

    assert doc.error is None
    assert len(doc.find_all("li")) == 2
    assert doc.full_text() == "onetwo"


def test_entities_decoded_in_text_and_attributes():
    doc = parse(
        '<div><p title="a &amp; b">x &lt; y &gt; z &quot;q&quot; &#39;s&#39; &nbsp; &copy;</p></div>'
    )

    p = doc.find("p")
    assert p.text() == "x < y > z \"q\" 's' &nbsp; &copy;"
    assert p.attrs()["title"] == "a & b"


def test_unescaped_ampersand_passes_through():
    doc = parse("<div><p>Tom & Jerry &amp more</p></div>")

    assert doc.find("p").text() == "Tom & Jerry &amp more"


def test_tag_and_attribute_names_are_lowercased_values_kept():
    doc = parse('<body><DIV CLASS="Mixed Case" Data-ID="X1">x</DIV></body>')

    div = doc.find("div")
    assert div.tag == "div"
    assert dict(div.attrs()) == {"class": "Mixed Case", "data-id": "X1"}
    assert div.node.get("DATA-ID") == "X1"
    assert doc.find("DIV", ("CLASS", "Mixed Case")).ok


def test_comments_doctype_and_processing_instructions_are_skipped():
    doc = parse(
        "<!DOCTYPE html>\n<?xml version='1.0'?><!-- header -->"
        "<html><body><!-- <p>hidden</p> --><p>shown</p></body></html>\n"
    )

    assert doc.document_element.tag == "html"
    assert [p.full_text() for p in doc.find_all("p")] == ["shown"]


def test_script_content_is_raw_text():
    doc = parse(
        '<html><head><script>if (a < b) { x = "</div>"; }</script></head>'
        '<body><div class="t0">ok</div></body></html>'
    )

    script = doc.find("script")
    assert script.text() == 'if (a < b) { x = "</div>"; }'
    assert script.children()[0].is_text
    assert doc.find("div", ("class", "t0")).full_text() == "ok"


def test_unterminated_script_runs_to_end_of_input():
    doc = parse("<div><script>var a = 1;")

    assert doc.find("script").text() == "var a = 1;"


def test_literal_less_than_merges_into_one_text_node():
    doc = parse("<div><p>1 < 2 and 3 <4</p></div>")

    p = doc.find("p")
    assert len(p.children()) == 1
    assert p.text() == "1 < 2 and 3 <4"


def test_quoted_attribute_values_may_contain_gt():
    doc = parse('<div><a title="x>y" href=\'/u?a=1&amp;b=2\'>link</a></div>')

    a = doc.find("a")
    assert a.attrs()["title"] == "x>y"
    assert a.attrs()["href"] == "/u?a=1&b=2"
    assert a.text() == "link"


def test_attribute_forms():
    attrs = parse_attributes(' disabled value=plain data-x=\'single\' id="a" id="b"')

    assert attrs == {"disabled": "", "value": "plain", "data-x": "single", "id": "a"}


def test_decode_entities_table():
    assert decode_entities("&amp;&lt;&gt;&quot;&#39;") == "&<>\"'"
    assert decode_entities("&eacute; &#233;") == "&eacute; &#233;"
    assert decode_entities("plain") == "plain"


@pytest.mark.parametrize("html", ["", "   \n\t ", "<!-- only a comment -->", "<!DOCTYPE html>"])
def test_input_without_content_is_a_parse_error(html):
    doc = parse(html)

    assert isinstance(doc.error, ParseError)
    assert doc.root.tag == ""
    assert doc.root.children == ()
    # Queries on a failed document carry the ParseError forward
    assert doc.find("p").error is doc.error
    assert doc.full_text() == ""


def test_non_string_input_is_a_parse_error():
    doc = parse(b"<p>bytes</p>")

    assert isinstance(doc.error, ParseError)


def test_plain_text_gets_a_synthetic_root():
    doc = parse("just words")

    assert doc.error is None
    assert doc.root.tag == DOCUMENT_TAG
    assert doc.text() == "just words"


def test_whitespace_between_top_level_nodes_is_dropped():
    doc = parse("\n  <html><body><p>x</p></body></html>\n\n")

    assert doc.document_element.tag == "html"


def test_several_top_level_elements_share_a_synthetic_root():
    doc = parse("<p>First</p><p>Second</p>")

    assert doc.root.tag == DOCUMENT_TAG
    assert doc.root.parent is None
    assert [p.full_text() for p in doc.find_all("p")] == ["First", "Second"]
    assert all(p.node.parent is doc.root for p in doc.find_all("p"))


def test_tree_is_immutable_after_parse():
    doc = parse('<div id="x"><p>a</p></div>')

    div = doc.document_element
    assert isinstance(div.children, tuple)
    with pytest.raises(TypeError):
        div.attrs["id"] = "y"
    with pytest.raises(TypeError):
        div.append(doc.find("p").node)


def test_children_order_and_index_follow_source_order():
    doc = parse("<ol><li>a</li><li>b</li><li>c</li></ol>")

    items = doc.document_element.children
    assert [item.index for item in items] == [0, 1, 2]
    assert [full_text(item) for item in items] == ["a", "b", "c"]


def test_deep_nesting_does_not_hit_recursion_limit():
    depth = 5000
    doc = parse("<div>" * depth + "deep" + "</div>" * depth)

    assert doc.full_text() == "deep"
    assert len(doc.find_all("div")) == depth


def test_parsing_is_idempotent():
    html = '<html><body><div class="a"><p>x</p><p>y<b>z</b></p></div><br></body></html>'
    first, second = parse(html), parse(html)

    def observe(doc):
        return (
            [p.full_text() for p in doc.find_all("p")],
            doc.find("b").text(),
            dict(doc.find("div").attrs()),
            [n.tag for n in doc.find("body").children()],
            doc.find("p").find_next_sibling().full_text(),
        )

    assert observe(first) == observe(second)
