"""
main.py: Dependency Wiring (Composition Root)
------------------------------------------------
This file has ONE job: wire the pieces together and render the page.

It does NOT contain any gallery logic. It just:
  1. Reads configuration from flags and the environment
  2. Parses the page markup into a Document
  3. Creates the GitHub client and injects it into the page
  4. Fires the page-ready sequence and waits for the gallery to settle
  5. Writes the rendered page and exits non-zero if the gallery failed

Dependency graph (what depends on what):
                         main.py  (wires everything)
                            │
              ┌─────────────┼──────────────┐
              ▼             ▼              ▼
        PortfolioPage   GitHubClient   html_parser
              │
    ┌─────────┼──────────────┐
    ▼         ▼              ▼
ScrollNavigator  VisibilityRevealer  ProjectGalleryLoader
                                      (IRepoFetcher)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

import httpx

from portfolio.application.page import PortfolioPage
from portfolio.domain.entities import GalleryConfig, GalleryResult
from portfolio.infrastructure.github_client import GitHubClient
from portfolio.infrastructure.html_parser import load_document

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_PAGE = Path("index.html")
DEFAULT_OUTPUT = Path("dist/index.html")


def _read_env() -> str | None:
    """
    Read the optional GitHub token.
    Without one, requests are unauthenticated and share the low anonymous rate limit.
    """
    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        log.info("GITHUB_TOKEN not set, using unauthenticated requests")
    return token or None


def build_config(args: argparse.Namespace) -> GalleryConfig:
    return GalleryConfig(
        username   = args.user,
        featured   = tuple(args.featured or ()),
        per_page   = args.per_page,
        card_limit = args.limit,
    )


# ---------------------------------------------------------------------------
# Dependency wiring
# ---------------------------------------------------------------------------

async def build_and_run(page_path: Path, output_path: Path, config: GalleryConfig, token: str | None, client: httpx.AsyncClient | None = None) -> GalleryResult:
    """
    Parse the page, run the ready sequence and write the result.

    A static render has no viewport, so reveal elements are shown up front.
    Pass `client` to reuse (or mock) an existing httpx.AsyncClient.
    """
    document = load_document(page_path, supports_intersection=False)
    owns_client = client is None
    client = client or httpx.AsyncClient()

    try:
        github_client = GitHubClient(
            client = client,    # injected, GitHubClient doesn't create this
            token  = token,
        )
        page = PortfolioPage(
            document = document,
            fetcher  = github_client,
            config   = config,
        )
        result = await page.initialize()
    finally:
        if owns_client:
            await client.aclose()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document.to_html(), encoding="utf-8")
    log.info("Wrote %s | gallery=%s | cards=%d", output_path, result.status, len(result.repos))
    return result


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render the portfolio page with the latest GitHub projects"
    )
    parser.add_argument("--user", required=True, help="GitHub account whose repositories are shown")
    parser.add_argument(
        "--featured",
        action  = "append",
        metavar = "REPO",
        help    = "Repository to feature, in display order (repeatable)",
    )
    parser.add_argument("--per-page", type=int, default=50, help="Repositories to request before filtering (default: 50)")
    parser.add_argument("--limit", type=int, default=4, help="Maximum number of project cards (default: 4)")
    parser.add_argument("--page", type=Path, default=DEFAULT_PAGE, help=f"Page markup to render (default: {DEFAULT_PAGE})")
    parser.add_argument("--out", type=Path, default=DEFAULT_OUTPUT, help=f"Where to write the rendered page (default: {DEFAULT_OUTPUT})")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if not args.page.is_file():
        log.error("Page file %s does not exist", args.page)
        return 1

    token = _read_env()
    result = asyncio.run(build_and_run(args.page, args.out, build_config(args), token))

    if result.status == "error":
        log.error("❌ Gallery failed: %s", result.error_message)
        return 1
    log.info("✅ Gallery %s", result.status)
    return 0


if __name__ == "__main__":
    sys.exit(main())
