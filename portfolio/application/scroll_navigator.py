from __future__ import annotations
import logging
from functools import partial
from portfolio.infrastructure.dom import Document, Element, Event

log = logging.getLogger(__name__)

ANCHOR_SELECTOR = 'a[href^="#"]'
SCROLL_BEHAVIOR = "smooth"


class ScrollNavigator:
    """
    Turns in-page anchor clicks into smooth scroll requests.

    Anchors whose href is just "#" keep their default behaviour; every
    other fragment link has its navigation cancelled and, when the target
    element exists, the viewport is asked to scroll to it.
    """

    def __init__(self, document: Document, behavior: str = SCROLL_BEHAVIOR) -> None:
        self._document = document
        self._behavior = behavior

    def install(self) -> int:
        """Attach click listeners to every in-page anchor. Returns how many."""
        anchors = self._document.query_selector_all(ANCHOR_SELECTOR)
        for anchor in anchors:
            anchor.add_event_listener("click", partial(self._on_click, anchor))
        log.debug("ScrollNavigator wired %d anchors", len(anchors))
        return len(anchors)

    def _on_click(self, anchor: Element, event: Event) -> None:
        target_id = anchor.get_attribute("href")
        if not target_id or len(target_id) <= 1:
            return

        event.prevent_default()
        target = self._document.get_element_by_id(target_id[1:])
        if target is None:
            log.debug("No element for fragment %s", target_id)
            return
        target.scroll_into_view(behavior=self._behavior)
