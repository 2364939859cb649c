from __future__ import annotations

import asyncio
import logging

from portfolio.domain.entities import GalleryConfig, GalleryResult
from portfolio.domain.interfaces import IRepoFetcher
from portfolio.infrastructure.dom import Document, Event
from .gallery_loader import ProjectGalleryLoader
from .revealer import VisibilityRevealer
from .scroll_navigator import ScrollNavigator

log = logging.getLogger(__name__)


class PortfolioPage:
    """
    Page-ready wiring for the portfolio.

    On DOMContentLoaded the scroll navigator and the revealer are set up
    synchronously, then the gallery load is scheduled as its own task so
    clicks and intersection callbacks never wait on the network.
    """

    def __init__(self, document: Document, fetcher: IRepoFetcher, config: GalleryConfig) -> None:
        self._document = document
        self._fetcher  = fetcher
        self._config   = config
        self.navigator = ScrollNavigator(document)
        self.revealer  = VisibilityRevealer(document)
        self.gallery: ProjectGalleryLoader | None = None
        self.gallery_task: asyncio.Task[GalleryResult] | None = None

    def attach(self) -> None:
        """Subscribe to the document's ready event."""
        self._document.add_event_listener("DOMContentLoaded", self._on_ready)

    def _on_ready(self, event: Event) -> None:
        self.navigator.install()
        observer = self.revealer.start()
        self.gallery = ProjectGalleryLoader(
            fetcher  = self._fetcher,
            document = self._document,
            config   = self._config,
            revealer = self.revealer if observer is not None else None,
        )
        self.gallery_task = asyncio.get_running_loop().create_task(self.gallery.load())

    async def initialize(self) -> GalleryResult:
        """Attach, fire the ready event and wait for the gallery to settle."""
        self.attach()
        self._document.ready()
        if self.gallery_task is None:
            raise RuntimeError("Ready handler did not schedule the gallery load")
        return await self.gallery_task
