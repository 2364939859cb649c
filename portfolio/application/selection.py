from __future__ import annotations
import logging
from typing import Sequence
from portfolio.domain.entities import RepoRecord

log = logging.getLogger(__name__)


def active_candidates(records: Sequence[RepoRecord]) -> list[RepoRecord]:
    """Drop archived and forked repositories, keeping listing order."""
    return [r for r in records if not r.archived and not r.fork]


def select_repos(candidates: Sequence[RepoRecord], featured: Sequence[str], limit: int) -> list[RepoRecord]:
    """
    Pick the repositories to show.

    With a featured list, names are matched case-insensitively and the
    featured order wins; names with no match are dropped. Without one,
    the first candidates (most recently updated) are taken. Either way
    the result is capped at limit.
    """
    if featured:
        by_name = {r.name.lower(): r for r in reversed(candidates)}
        selected = []
        for name in featured:
            repo = by_name.get(str(name).lower())
            if repo is None:
                log.info("Featured repo %r not found among %d candidates", name, len(candidates))
                continue
            selected.append(repo)
    else:
        selected = list(candidates[:limit])

    return selected[:limit]
