from __future__ import annotations

import asyncio
import logging

from portfolio.domain.entities import DEFAULT_DESCRIPTION, GalleryConfig, GalleryResult, RepoRecord, RepoSummary
from portfolio.domain.interfaces import IRepoFetcher
from portfolio.infrastructure.dom import Document
from .cards import create_project_card, render_empty, render_error, render_skeletons
from .formatting import build_language_list, preview_image_url
from .revealer import VISIBLE_CLASS, VisibilityRevealer
from .selection import active_candidates, select_repos

log = logging.getLogger(__name__)


class ProjectGalleryLoader:
    """
    Fills the gallery container with project cards.

    One load walks loading -> populated | empty | error. Dependencies are
    injected: the fetcher decides where repositories come from, and the
    optional revealer animates the cards once they are rendered.
    """

    def __init__(self, fetcher: IRepoFetcher, document: Document, config: GalleryConfig, revealer: VisibilityRevealer | None = None) -> None:
        self._fetcher  = fetcher
        self._document = document
        self._config   = config
        self._revealer = revealer
        self.state: str | None = None

    async def _languages_for(self, record: RepoRecord) -> list[str]:
        try:
            return await self._fetcher.fetch_languages(record.languages_url)
        except Exception as exc:
            log.warning("Language enrichment failed for %s: %s", record.name, exc)
            return []

    async def enrich(self, record: RepoRecord) -> RepoSummary:
        """Attach languages, preview image and defaults to one record."""
        languages = await self._languages_for(record)
        owner = record.owner_login or self._config.username
        return RepoSummary(
            name        = record.name,
            owner       = owner,
            description = record.description or DEFAULT_DESCRIPTION,
            language    = record.language,
            updated_at  = record.updated_at or record.pushed_at,
            html_url    = record.html_url,
            homepage    = record.homepage,
            image       = preview_image_url(owner, record.name),
            languages   = tuple(build_language_list(record.language, languages)),
        )

    async def load(self) -> GalleryResult:
        """
        Run one gallery load and report how it ended.
        Failures after the skeleton is shown become the error card.
        """
        config = self._config
        container = self._document.get_element_by_id(config.container_id)
        if container is None:
            log.info("No #%s container on this page, skipping gallery", config.container_id)
            return GalleryResult(status="skipped")

        self.state = "loading"
        render_skeletons(self._document, container, config.skeleton_count)
        log.info("Loading projects for %s", config.username)

        try:
            raw = await self._fetcher.fetch_repos(config.username, config.per_page)
            candidates = active_candidates(raw)
            selected = select_repos(candidates, config.featured, config.card_limit)
            log.info("Selected %d of %d candidates (%d listed)", len(selected), len(candidates), len(raw))

            # Fan out language lookups; each one degrades to [] on its own
            repos = await asyncio.gather(*[self.enrich(record) for record in selected])

            if not repos:
                self.state = "empty"
                render_empty(self._document, container)
                return GalleryResult(status="empty")

            container.replace_children()
            for repo in repos:
                card = container.append_child(create_project_card(self._document, repo))
                if self._revealer is not None:
                    self._revealer.register(card)
                else:
                    card.class_list.add(VISIBLE_CLASS)

            self.state = "populated"
            log.info("Rendered %d project cards", len(repos))
            return GalleryResult(status="populated", repos=tuple(repos))

        except Exception as exc:
            self.state = "error"
            log.error("Gallery load failed: %s", exc, exc_info=True)
            render_error(self._document, container)
            return GalleryResult(status="error", error_message=str(exc))
