"""
Card markup for the project gallery: skeleton placeholders, one card per
repository, and the empty and error messages. Everything is built as
elements, so repository text is escaped on output.
"""

from __future__ import annotations
from portfolio.domain.entities import DEFAULT_DESCRIPTION, RepoSummary
from portfolio.infrastructure.dom import Document, Element
from .formatting import MAX_LANGUAGES, format_updated_label, preview_image_url

EMPTY_MESSAGE = "No projects to show right now."
ERROR_TITLE = "Could not load recent projects"
ERROR_MESSAGE = "Please check your connection or GitHub rate limits and try again."
FALLBACK_TAG = "Multi-lang"


def create_skeleton_card(document: Document) -> Element:
    card = document.create_element("div", classes=("project-card", "skeleton"))
    card.append_child(document.create_element("div", classes=("project-media",)))
    content = card.append_child(document.create_element("div", classes=("project-content",)))
    for line_classes in (("line", "title"), ("line",), ("line", "short")):
        content.append_child(document.create_element("div", classes=line_classes))
    return card


def render_skeletons(document: Document, container: Element, count: int) -> None:
    container.replace_children(*(create_skeleton_card(document) for _ in range(count)))


def render_empty(document: Document, container: Element) -> None:
    container.replace_children(document.create_element("p", classes=("muted",), text=EMPTY_MESSAGE))


def render_error(document: Document, container: Element) -> None:
    card = document.create_element("div", classes=("project-card", "error-card"))
    card.append_child(document.create_element("h3", text=ERROR_TITLE))
    card.append_child(document.create_element("p", classes=("muted",), text=ERROR_MESSAGE))
    container.replace_children(card)


def _external_link(document: Document, href: str, label: str, style: str) -> Element:
    return document.create_element(
        "a",
        {"href": href, "target": "_blank", "rel": "noreferrer"},
        classes=("btn", style),
        text=label,
    )


def create_project_card(document: Document, repo: RepoSummary) -> Element:
    card = document.create_element("div", classes=("project-card", "reveal"))

    live_link = repo.homepage if repo.homepage and repo.homepage.strip() else None
    image = repo.image or preview_image_url(repo.owner, repo.name)
    tags = list(repo.languages) or [repo.language or FALLBACK_TAG]

    media = card.append_child(document.create_element("div", classes=("project-media",)))
    media.append_child(document.create_element(
        "img", {"src": image, "alt": f"{repo.name} preview", "loading": "lazy"},
    ))

    content = card.append_child(document.create_element("div", classes=("project-content",)))

    header = content.append_child(document.create_element("div", classes=("project-header",)))
    header.append_child(document.create_element("h3", text=repo.name))
    header.append_child(document.create_element(
        "span", classes=("project-updated",), text=f"Updated {format_updated_label(repo.updated_at)}",
    ))

    content.append_child(document.create_element(
        "p", classes=("project-desc",), text=repo.description or DEFAULT_DESCRIPTION,
    ))

    tag_row = content.append_child(document.create_element("div", classes=("project-tags",)))
    for tag in tags[:MAX_LANGUAGES]:
        tag_row.append_child(document.create_element("span", classes=("tag-chip",), text=tag))

    actions = content.append_child(document.create_element("div", classes=("project-actions",)))
    actions.append_child(_external_link(document, repo.html_url, "View repo", "ghost"))
    if live_link:
        actions.append_child(_external_link(document, live_link, "Live link", "primary"))

    return card
