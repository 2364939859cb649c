"""
Domain Layer: Interfaces (Abstract Contracts)
-----------------------------------------------
What the gallery needs from the outside world, stated as abstractions.

The application layer (gallery loader) depends on these, never on the
concrete GitHub client, so tests can hand it a FakeRepoFetcher that
returns canned records without touching the network.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from .entities import RepoRecord


class RepoFetchError(Exception):
    """Raised when the repository listing cannot be retrieved."""
    pass


class IRepoFetcher(ABC):
    """Contract that any repository source must fulfil."""

    @abstractmethod
    async def fetch_repos(self, username: str, per_page: int) -> list[RepoRecord]:
        """
        List the account's own repositories, most recently updated first.

        Raises RepoFetchError on a non-success response or transport failure.
        """
        ...

    @abstractmethod
    async def fetch_languages(self, languages_url: str | None) -> list[str]:
        """
        Return language names ordered by descending byte count.

        Never raises: a missing URL or any failure yields an empty list.
        """
        ...
