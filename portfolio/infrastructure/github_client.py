from __future__ import annotations

import logging

import httpx

from portfolio.domain.entities import RepoRecord
from portfolio.domain.interfaces import IRepoFetcher, RepoFetchError

log = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
ACCEPT_HEADER = "application/vnd.github+json"


class GitHubClient(IRepoFetcher):
    """
    Concrete implementation of IRepoFetcher for GitHub's REST API.

    The constructor receives an httpx.AsyncClient (injected) rather than
    creating one internally, so the caller owns the client lifecycle and
    tests can route requests through respx.
    """

    def __init__(self, client: httpx.AsyncClient, token: str | None = None, base_url: str = GITHUB_API_URL) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers = {"Accept": ACCEPT_HEADER}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    # Anti-Corruption Layer
    @staticmethod
    def _parse_repo(item: dict) -> RepoRecord | None:
        """
        Translate one raw listing item into a RepoRecord.

        GitHub sends:          We store as:
          "owner.login"     →  owner_login
          "languages_url"   →  languages_url

        Items without a name or URL are skipped.
        """
        try:
            owner = item.get("owner") or {}
            return RepoRecord(
                name          = item["name"],
                owner_login   = owner.get("login"),
                description   = item.get("description"),
                language      = item.get("language"),
                updated_at    = item.get("updated_at"),
                pushed_at     = item.get("pushed_at"),
                html_url      = item["html_url"],
                homepage      = item.get("homepage"),
                archived      = bool(item.get("archived", False)),
                fork          = bool(item.get("fork", False)),
                languages_url = item.get("languages_url"),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            log.debug("Skipping malformed repo item %r: %s", item, exc)
            return None

    # IRepoFetcher implementation
    async def fetch_repos(self, username: str, per_page: int) -> list[RepoRecord]:
        """
        Fetch one page of the user's own repositories sorted by last update.

        Over-fetching is the caller's job: pass a per_page larger than the
        number of cards so archived and forked repos can be filtered out.
        """
        url = f"{self._base_url}/users/{username}/repos"
        params = {"sort": "updated", "per_page": per_page, "type": "owner"}

        try:
            response = await self._client.get(url, headers=self._headers, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise RepoFetchError(f"Unable to fetch repos for {username}: HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            raise RepoFetchError(f"Unable to fetch repos for {username}: {exc}") from exc
        except ValueError as exc:
            raise RepoFetchError(f"Unable to decode repo listing for {username}") from exc

        if not isinstance(payload, list):
            raise RepoFetchError(f"Unexpected repo listing shape for {username}: {type(payload).__name__}")

        repos = [parsed for item in payload if isinstance(item, dict) and (parsed := self._parse_repo(item)) is not None]
        log.debug("Fetched %d repos for %s", len(repos), username)
        return repos

    async def fetch_languages(self, languages_url: str | None) -> list[str]:
        """Language names sorted by descending byte count, or [] on any failure."""
        if not languages_url:
            return []

        try:
            response = await self._client.get(languages_url, headers=self._headers)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPStatusError, httpx.RequestError) as exc:
            log.warning("Language lookup failed for %s: %s", languages_url, exc)
            return []
        except ValueError as exc:
            log.warning("Language payload for %s is not JSON: %s", languages_url, exc)
            return []

        if not isinstance(data, dict):
            return []
        byte_counts = {lang: size for lang, size in data.items() if isinstance(size, (int, float))}
        return sorted(byte_counts, key=lambda lang: byte_counts[lang], reverse=True)
