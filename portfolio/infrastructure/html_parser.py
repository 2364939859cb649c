from __future__ import annotations

import logging
from html.parser import HTMLParser
from pathlib import Path

from .dom import VOID_ELEMENTS, Comment, Document, Element, Text

log = logging.getLogger(__name__)


class DocumentBuilder(HTMLParser):
    """
    Builds a Document from page markup.

    Keeps an explicit stack of open elements; an end tag closes back to
    the nearest matching open element, and stray end tags are dropped.
    """

    def __init__(self, supports_intersection: bool = True) -> None:
        super().__init__(convert_charrefs=True)
        self.document = Document(supports_intersection=supports_intersection, doctype=None)
        self._stack: list[Element] = [self.document]

    @property
    def _current(self) -> Element:
        return self._stack[-1]

    def handle_decl(self, decl: str) -> None:
        if decl.lower().startswith("doctype"):
            self.document.doctype = decl[len("doctype"):].strip() or "html"

    def handle_starttag(self, tag, attrs):
        element = Element(tag, dict(attrs))
        self._current.append_child(element)
        if element.tag not in VOID_ELEMENTS:
            self._stack.append(element)

    def handle_startendtag(self, tag, attrs):
        self._current.append_child(Element(tag, dict(attrs)))

    def handle_endtag(self, tag):
        tag_lower = tag.lower()
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].tag == tag_lower:
                del self._stack[depth:]
                return
        log.debug("Dropping stray end tag </%s>", tag_lower)

    def handle_data(self, data):
        if data:
            self._current.append_child(Text(data))

    def handle_comment(self, data):
        self._current.append_child(Comment(data))


def parse_document(markup: str, supports_intersection: bool = True) -> Document:
    builder = DocumentBuilder(supports_intersection=supports_intersection)
    builder.feed(markup)
    builder.close()
    return builder.document


def load_document(path: Path, supports_intersection: bool = True) -> Document:
    """Read and parse an HTML file."""
    log.info("Parsing page %s", path)
    return parse_document(path.read_text(encoding="utf-8"), supports_intersection=supports_intersection)
