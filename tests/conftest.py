"""Shared test fixtures."""

from __future__ import annotations

import pytest

from portfolio.domain.entities import GalleryConfig, RepoRecord
from portfolio.domain.interfaces import IRepoFetcher, RepoFetchError
from portfolio.infrastructure.html_parser import parse_document

PAGE_MARKUP = """<!DOCTYPE html>
<html lang="en">
<head><title>Portfolio</title></head>
<body>
  <nav>
    <a href="#about">About</a>
    <a href="#projects">Projects</a>
    <a href="#missing">Nowhere</a>
    <a href="#">Top</a>
    <a href="https://example.com/cv.pdf">CV</a>
  </nav>
  <section id="about" class="reveal">About me</section>
  <section id="projects" class="reveal">
    <div id="projects-list"></div>
  </section>
</body>
</html>
"""


def make_record(name: str, **overrides) -> RepoRecord:
    fields = dict(
        name          = name,
        owner_login   = "octo",
        description   = f"{name} description",
        language      = "Python",
        updated_at    = "2024-03-15T10:00:00Z",
        pushed_at     = None,
        html_url      = f"https://github.com/octo/{name}",
        homepage      = None,
        archived      = False,
        fork          = False,
        languages_url = f"https://api.github.com/repos/octo/{name}/languages",
    )
    fields.update(overrides)
    return RepoRecord(**fields)


def repo_item(name: str, **overrides) -> dict:
    """A raw listing item shaped like the GitHub REST response."""
    item = {
        "name": name,
        "owner": {"login": "octo"},
        "description": f"{name} description",
        "language": "Python",
        "updated_at": "2024-03-15T10:00:00Z",
        "pushed_at": "2024-03-14T10:00:00Z",
        "html_url": f"https://github.com/octo/{name}",
        "homepage": "",
        "archived": False,
        "fork": False,
        "languages_url": f"https://api.github.com/repos/octo/{name}/languages",
    }
    item.update(overrides)
    return item


class FakeRepoFetcher(IRepoFetcher):
    """Returns canned records; records every call it receives."""

    def __init__(self, repos=None, languages=None, error: Exception | None = None) -> None:
        self.repos = list(repos or [])
        self.languages = dict(languages or {})
        self.error = error
        self.repo_calls: list[tuple[str, int]] = []
        self.language_calls: list[str | None] = []

    async def fetch_repos(self, username: str, per_page: int) -> list[RepoRecord]:
        self.repo_calls.append((username, per_page))
        if self.error is not None:
            raise self.error
        return list(self.repos)

    async def fetch_languages(self, languages_url: str | None) -> list[str]:
        self.language_calls.append(languages_url)
        result = self.languages.get(languages_url, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


@pytest.fixture
def page():
    """A parsed portfolio page with intersection support."""
    return parse_document(PAGE_MARKUP)


@pytest.fixture
def static_page():
    """The same page in a runtime with no intersection support."""
    return parse_document(PAGE_MARKUP, supports_intersection=False)


@pytest.fixture
def config():
    return GalleryConfig(username="octo")


@pytest.fixture
def failing_fetcher():
    return FakeRepoFetcher(error=RepoFetchError("Unable to fetch repos for octo: HTTP 403"))
