from __future__ import annotations
import logging
from portfolio.infrastructure.dom import Document, Element
from portfolio.infrastructure.viewport import IntersectionEntry, ViewportObserver

log = logging.getLogger(__name__)

REVEAL_SELECTOR = ".reveal"
VISIBLE_CLASS = "visible"
REVEAL_THRESHOLD = 0.15


class VisibilityRevealer:
    """
    Adds the "visible" class to reveal-marked elements the first time
    they are at least REVEAL_THRESHOLD inside the viewport.

    Each element is revealed at most once: it is unobserved in the same
    callback that reveals it. Without intersection support every element
    is shown immediately.
    """

    def __init__(self, document: Document, threshold: float = REVEAL_THRESHOLD) -> None:
        self._document = document
        self._threshold = threshold
        self.observer: ViewportObserver | None = None

    def start(self) -> ViewportObserver | None:
        elements = self._document.query_selector_all(REVEAL_SELECTOR)

        if not self._document.supports_intersection:
            log.info("No intersection support, showing %d reveal elements", len(elements))
            for el in elements:
                el.class_list.add(VISIBLE_CLASS)
            return None

        self.observer = self._document.create_intersection_observer(self._on_intersect, threshold=self._threshold)
        for el in elements:
            self.observer.observe(el)
        log.debug("Observing %d reveal elements", len(elements))
        return self.observer

    def register(self, element: Element) -> None:
        """Add an element created after start(), e.g. a gallery card."""
        if self.observer is None:
            element.class_list.add(VISIBLE_CLASS)
        else:
            self.observer.observe(element)

    def _on_intersect(self, entries: list[IntersectionEntry], observer: ViewportObserver) -> None:
        for entry in entries:
            if entry.is_intersecting:
                entry.target.class_list.add(VISIBLE_CLASS)
                observer.unobserve(entry.target)
