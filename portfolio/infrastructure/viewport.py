from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Mapping

if TYPE_CHECKING:
    from .dom import Element

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntersectionEntry:
    """How much of one observed element is inside the viewport."""
    target:             Element
    intersection_ratio: float
    threshold:          float

    @property
    def is_intersecting(self) -> bool:
        return self.intersection_ratio > 0 and self.intersection_ratio >= self.threshold


IntersectionCallback = Callable[[list[IntersectionEntry], "ViewportObserver"], None]


class ViewportObserver:
    """
    Watches a set of elements and reports their visible ratio to a
    callback whenever the document reports a scroll.

    Only observed elements produce entries; once unobserved an element
    is never reported again.
    """

    def __init__(self, callback: IntersectionCallback, threshold: float = 0.0) -> None:
        self._callback = callback
        self.threshold = threshold
        self._targets: list[Element] = []

    def observe(self, element: Element) -> None:
        if element not in self._targets:
            self._targets.append(element)

    def unobserve(self, element: Element) -> None:
        if element in self._targets:
            self._targets.remove(element)

    def disconnect(self) -> None:
        self._targets.clear()

    @property
    def observed(self) -> tuple[Element, ...]:
        return tuple(self._targets)

    def report(self, ratios: Mapping[Element, float]) -> None:
        entries = [
            IntersectionEntry(target=el, intersection_ratio=ratios[el], threshold=self.threshold)
            for el in self._targets
            if el in ratios
        ]
        if entries:
            log.debug("Reporting %d intersection entries", len(entries))
            self._callback(entries, self)
