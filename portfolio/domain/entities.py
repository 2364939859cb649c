from __future__ import annotations
from dataclasses import dataclass, field

DEFAULT_DESCRIPTION = "No description available yet."


@dataclass(frozen=True)
class RepoRecord:
    """
    Immutable entity for one repository exactly as the listing endpoint
    describes it, after translation to our field names.

    Timestamps stay as the raw ISO strings GitHub sends; turning them into
    labels is a presentation concern handled in the application layer.
    """
    name:          str
    owner_login:   str | None
    description:   str | None
    language:      str | None
    updated_at:    str | None
    pushed_at:     str | None
    html_url:      str
    homepage:      str | None
    archived:      bool
    fork:          bool
    languages_url: str | None


@dataclass(frozen=True)
class RepoSummary:
    """
    A repository enriched for display on a project card.

    Built fresh on every page load and never persisted.
    """
    name:        str
    owner:       str
    description: str
    language:    str | None
    updated_at:  str | None
    html_url:    str
    homepage:    str | None
    image:       str
    languages:   tuple[str, ...] = ()


@dataclass(frozen=True)
class GalleryConfig:
    """Which account to show and how many cards to render."""
    username:       str
    featured:       tuple[str, ...] = ()
    per_page:       int = 50
    card_limit:     int = 4
    skeleton_count: int = 4
    container_id:   str = "projects-list"


@dataclass(frozen=True)
class GalleryResult:
    """
    Immutable value object describing how a gallery load ended.
    status is one of: populated, empty, error, skipped.
    """
    status:        str
    repos:         tuple[RepoSummary, ...] = field(default_factory=tuple)
    error_message: str | None = None
