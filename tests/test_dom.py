"""Tests for the in-memory document, selectors and HTML round trip."""

import pytest

from portfolio.infrastructure.dom import Document, NotSupportedError
from portfolio.infrastructure.html_parser import parse_document


def test_parse_keeps_structure_and_doctype(page):
    assert page.doctype == "html"
    container = page.get_element_by_id("projects-list")
    assert container is not None
    assert container.parent.id == "projects"


def test_anchor_selector_matches_fragment_links_only(page):
    hrefs = [a.get_attribute("href") for a in page.query_selector_all('a[href^="#"]')]
    assert hrefs == ["#about", "#projects", "#missing", "#"]


def test_class_selector_and_groups(page):
    assert [el.id for el in page.query_selector_all(".reveal")] == ["about", "projects"]
    assert len(page.query_selector_all("nav, section")) == 3
    assert page.query_selector("section.reveal#projects").id == "projects"


def test_unsupported_selector_raises(page):
    with pytest.raises(ValueError):
        page.query_selector_all("nav a")


def test_class_list_add_remove():
    doc = Document()
    el = doc.create_element("div", classes=("card",))
    el.class_list.add("visible", "card")
    assert list(el.class_list) == ["card", "visible"]
    el.class_list.remove("card", "visible")
    assert not el.has_attribute("class")


def test_serialization_escapes_text_and_attributes():
    doc = Document()
    body = doc.append_child(doc.create_element("body"))
    body.append_child(doc.create_element("p", {"title": 'say "hi"'}, text="<b>&</b>"))
    body.append_child(doc.create_element("img", {"src": "x.png"}))
    assert doc.to_html() == (
        '<!DOCTYPE html>\n<body><p title="say &quot;hi&quot;">&lt;b&gt;&amp;&lt;/b&gt;</p><img src="x.png"></body>'
    )


def test_parse_void_and_bare_attributes():
    doc = parse_document('<div><img src="a.png" loading="lazy"><input disabled><p>after</p></div>')
    div = doc.query_selector("div")
    assert [c.tag for c in div.element_children] == ["img", "input", "p"]
    assert div.to_html() == '<div><img src="a.png" loading="lazy"><input disabled><p>after</p></div>'


def test_script_text_is_not_escaped():
    doc = parse_document("<script>if (a < b) { go(); }</script>")
    assert doc.to_html() == "<script>if (a < b) { go(); }</script>"


def test_append_child_reparents():
    doc = Document()
    first = doc.append_child(doc.create_element("div"))
    second = doc.append_child(doc.create_element("div"))
    child = first.append_child(doc.create_element("span"))
    second.append_child(child)
    assert first.children == []
    assert child.parent is second


def test_scroll_into_view_records_request(page):
    target = page.get_element_by_id("about")
    target.scroll_into_view(behavior="smooth")
    assert [(r.target, r.behavior) for r in page.scroll_requests] == [(target, "smooth")]


def test_observer_creation_requires_support(static_page):
    with pytest.raises(NotSupportedError):
        static_page.create_intersection_observer(lambda entries, observer: None)
