"""
Infrastructure: In-memory Document
------------------------------------
A small page model standing in for the browser DOM: elements with
attributes and class lists, text and comment nodes, event listeners,
CSS-style lookups, scroll requests and intersection observers.

Only the selector forms the page actually uses are supported: a tag,
#id, .class and [attr], [attr="v"], [attr^="v"] compounds, optionally
grouped with commas. Descendant combinators are not.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterator

from .viewport import IntersectionCallback, ViewportObserver

log = logging.getLogger(__name__)

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

Listener = Callable[["Event"], None]


class NotSupportedError(Exception):
    """Raised when a capability the runtime lacks is requested."""
    pass


@dataclass
class Event:
    """A dispatched event. Listeners may cancel the default action."""
    type:              str
    target:            Element | None = None
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True)
class ScrollRequest:
    """One request to bring an element into view."""
    target:   Element
    behavior: str


class Text:
    def __init__(self, data: str) -> None:
        self.data = data
        self.parent: Element | None = None

    def to_html(self) -> str:
        if self.parent is not None and self.parent.tag in RAW_TEXT_ELEMENTS:
            return self.data
        return html.escape(self.data, quote=False)


class Comment:
    def __init__(self, data: str) -> None:
        self.data = data
        self.parent: Element | None = None

    def to_html(self) -> str:
        return f"<!--{self.data}-->"


class ClassList:
    """Live view over an element's class attribute."""

    def __init__(self, element: Element) -> None:
        self._element = element

    def _names(self) -> list[str]:
        return (self._element.get_attribute("class") or "").split()

    def _store(self, names: list[str]) -> None:
        if names:
            self._element.set_attribute("class", " ".join(names))
        else:
            self._element.remove_attribute("class")

    def add(self, *names: str) -> None:
        current = self._names()
        for name in names:
            if name not in current:
                current.append(name)
        self._store(current)

    def remove(self, *names: str) -> None:
        self._store([n for n in self._names() if n not in names])

    def contains(self, name: str) -> bool:
        return name in self._names()

    def __contains__(self, name: object) -> bool:
        return name in self._names()

    def __iter__(self) -> Iterator[str]:
        return iter(self._names())

    def __len__(self) -> int:
        return len(self._names())

    def __repr__(self) -> str:
        return f"ClassList({self._names()!r})"


class Element:
    def __init__(self, tag: str, attributes: dict[str, str | None] | None = None) -> None:
        self.tag = tag.lower()
        self.attributes: dict[str, str | None] = dict(attributes or {})
        self.children: list = []
        self.parent: Element | None = None
        self._listeners: dict[str, list[Listener]] = {}

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<Element {self.tag}{ident}>"

    # Attributes
    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str | None) -> None:
        self.attributes[name] = value

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    @property
    def id(self) -> str | None:
        return self.attributes.get("id")

    @property
    def class_list(self) -> ClassList:
        return ClassList(self)

    # Tree
    @property
    def owner_document(self) -> Document | None:
        node = self
        while node.parent is not None:
            node = node.parent
        return node if isinstance(node, Document) else None

    def append_child(self, child):
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def append_text(self, data: str) -> Text:
        return self.append_child(Text(data))

    def replace_children(self, *nodes) -> None:
        for child in self.children:
            child.parent = None
        self.children = []
        for node in nodes:
            self.append_child(node)

    @property
    def element_children(self) -> list[Element]:
        return [c for c in self.children if isinstance(c, Element)]

    @property
    def text_content(self) -> str:
        parts = []
        for child in self.children:
            if isinstance(child, Text):
                parts.append(child.data)
            elif isinstance(child, Element):
                parts.append(child.text_content)
        return "".join(parts)

    def iter_descendants(self) -> Iterator[Element]:
        for child in self.children:
            if isinstance(child, Element):
                yield child
                yield from child.iter_descendants()

    def query_selector_all(self, selector: str) -> list[Element]:
        groups = parse_selector(selector)
        return [el for el in self.iter_descendants() if any(g.matches(el) for g in groups)]

    def query_selector(self, selector: str) -> Element | None:
        groups = parse_selector(selector)
        for el in self.iter_descendants():
            if any(g.matches(el) for g in groups):
                return el
        return None

    # Events
    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def dispatch_event(self, event: Event) -> bool:
        """
        Run this element's listeners for the event.
        Returns False when a listener prevented the default action.
        """
        if event.target is None:
            event.target = self
        for listener in list(self._listeners.get(event.type, [])):
            listener(event)
        return not event.default_prevented

    def click(self) -> Event:
        event = Event("click", target=self)
        self.dispatch_event(event)
        return event

    def scroll_into_view(self, behavior: str = "auto") -> None:
        document = self.owner_document
        if document is None:
            log.debug("Ignoring scroll request for detached %r", self)
            return
        document.scroll_requests.append(ScrollRequest(target=self, behavior=behavior))

    # Serialization
    def _start_tag(self) -> str:
        parts = [self.tag]
        for name, value in self.attributes.items():
            if value is None:
                parts.append(name)
            else:
                parts.append(f'{name}="{html.escape(value, quote=True)}"')
        return "<" + " ".join(parts) + ">"

    def to_html(self) -> str:
        if self.tag in VOID_ELEMENTS:
            return self._start_tag()
        inner = "".join(child.to_html() for child in self.children)
        return f"{self._start_tag()}{inner}</{self.tag}>"

    @property
    def inner_html(self) -> str:
        return "".join(child.to_html() for child in self.children)


class Document(Element):
    """
    Root of a page. Owns the scroll log and the intersection observers,
    and fires DOMContentLoaded through ready().
    """

    def __init__(self, supports_intersection: bool = True, doctype: str | None = "html") -> None:
        super().__init__("#document")
        self.doctype = doctype
        self.supports_intersection = supports_intersection
        self.scroll_requests: list[ScrollRequest] = []
        self._observers: list[ViewportObserver] = []

    def __repr__(self) -> str:
        return f"<Document children={len(self.children)}>"

    def create_element(self, tag: str, attributes: dict[str, str | None] | None = None, classes: tuple[str, ...] = (), text: str | None = None) -> Element:
        element = Element(tag, attributes)
        if classes:
            element.class_list.add(*classes)
        if text is not None:
            element.append_text(text)
        return element

    def get_element_by_id(self, element_id: str) -> Element | None:
        for el in self.iter_descendants():
            if el.id == element_id:
                return el
        return None

    def create_intersection_observer(self, callback: IntersectionCallback, threshold: float = 0.0) -> ViewportObserver:
        if not self.supports_intersection:
            raise NotSupportedError("This document has no viewport intersection support")
        observer = ViewportObserver(callback, threshold=threshold)
        self._observers.append(observer)
        return observer

    def report_intersections(self, ratios: dict[Element, float]) -> None:
        """Feed visible ratios (0.0 to 1.0) to every observer, as a scroll would."""
        for observer in list(self._observers):
            observer.report(ratios)

    def ready(self) -> None:
        self.dispatch_event(Event("DOMContentLoaded", target=self))

    def to_html(self) -> str:
        prefix = f"<!DOCTYPE {self.doctype}>\n" if self.doctype else ""
        return prefix + self.inner_html


# Selectors
_SELECTOR_PART = re.compile(
    r"""
    \#(?P<id>[\w-]+)
    | \.(?P<cls>[\w-]+)
    | \[\s*(?P<attr>[\w-]+)\s*
        (?:(?P<op>\^?=)\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[\w-]+)))?
      \s*\]
    """,
    re.VERBOSE,
)
_SELECTOR_TAG = re.compile(r"[a-zA-Z][\w-]*|\*")


@dataclass(frozen=True)
class CompoundSelector:
    tag:     str | None
    ids:     tuple[str, ...]
    classes: tuple[str, ...]
    attrs:   tuple[tuple[str, str | None, str | None], ...]

    def matches(self, element: Element) -> bool:
        if self.tag is not None and element.tag != self.tag:
            return False
        if any(element.id != i for i in self.ids):
            return False
        names = (element.get_attribute("class") or "").split()
        if any(c not in names for c in self.classes):
            return False
        for name, op, expected in self.attrs:
            if not element.has_attribute(name):
                return False
            actual = element.get_attribute(name) or ""
            if op == "=" and actual != expected:
                return False
            if op == "^=" and (not expected or not actual.startswith(expected)):
                return False
        return True


def _parse_compound(text: str, selector: str) -> CompoundSelector:
    tag = None
    pos = 0
    tag_match = _SELECTOR_TAG.match(text)
    if tag_match:
        tag = None if tag_match.group() == "*" else tag_match.group().lower()
        pos = tag_match.end()

    ids, classes, attrs = [], [], []
    while pos < len(text):
        m = _SELECTOR_PART.match(text, pos)
        if m is None:
            raise ValueError(f"Unsupported selector: {selector!r}")
        if m.group("id"):
            ids.append(m.group("id"))
        elif m.group("cls"):
            classes.append(m.group("cls"))
        else:
            value = next((v for v in (m.group("dq"), m.group("sq"), m.group("bare")) if v is not None), None)
            attrs.append((m.group("attr"), m.group("op"), value))
        pos = m.end()

    return CompoundSelector(tag, tuple(ids), tuple(classes), tuple(attrs))


def parse_selector(selector: str) -> list[CompoundSelector]:
    groups = [part.strip() for part in selector.split(",")]
    if not all(groups):
        raise ValueError(f"Unsupported selector: {selector!r}")
    return [_parse_compound(group, selector) for group in groups]
