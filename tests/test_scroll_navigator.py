"""Tests for in-page anchor scrolling."""

from portfolio.application.scroll_navigator import ScrollNavigator
from portfolio.infrastructure.dom import Document


def _anchor(page, href):
    return next(a for a in page.query_selector_all("a") if a.get_attribute("href") == href)


def test_install_wires_only_fragment_anchors(page):
    assert ScrollNavigator(page).install() == 4


def test_click_with_target_prevents_default_and_scrolls(page):
    ScrollNavigator(page).install()

    event = _anchor(page, "#about").click()

    assert event.default_prevented
    assert len(page.scroll_requests) == 1
    request = page.scroll_requests[0]
    assert request.target is page.get_element_by_id("about")
    assert request.behavior == "smooth"


def test_bare_hash_is_left_alone(page):
    ScrollNavigator(page).install()

    event = _anchor(page, "#").click()

    assert not event.default_prevented
    assert page.scroll_requests == []


def test_missing_target_cancels_navigation_without_scrolling(page):
    ScrollNavigator(page).install()

    event = _anchor(page, "#missing").click()

    assert event.default_prevented
    assert page.scroll_requests == []


def test_external_link_has_no_listener(page):
    ScrollNavigator(page).install()

    event = _anchor(page, "https://example.com/cv.pdf").click()

    assert not event.default_prevented
    assert page.scroll_requests == []


def test_href_changed_after_install_is_read_at_click_time():
    doc = Document()
    body = doc.append_child(doc.create_element("body"))
    link = body.append_child(doc.create_element("a", {"href": "#later"}))
    target = body.append_child(doc.create_element("div", {"id": "other"}))
    ScrollNavigator(doc).install()

    link.set_attribute("href", "#other")
    link.click()

    assert [r.target for r in doc.scroll_requests] == [target]
