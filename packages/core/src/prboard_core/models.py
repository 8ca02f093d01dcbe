"""Pull request data models.

Raw fields come from the fetch layer; derived fields (status, is_stale,
is_pinned, is_requested_reviewer) are stamped later by the classifier, the
reviewer marker and the pin store. Every model is frozen so a derived copy
is always produced with dataclasses.replace and never by mutation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from prboard_core.utils.dates import parse_timestamp

logger = logging.getLogger(__name__)

APPROVED = "APPROVED"
CHANGES_REQUESTED = "CHANGES_REQUESTED"
NEEDS_REVIEW = "NEEDS_REVIEW"
DRAFT = "DRAFT"
UNKNOWN = "UNKNOWN"

# Display order of the dashboard tabs.
STATUSES = (APPROVED, CHANGES_REQUESTED, NEEDS_REVIEW, DRAFT, UNKNOWN)

SORT_OPTIONS = ("newest", "oldest", "updated", "title")


@dataclass(frozen=True)
class Review:
    """A single reviewer's verdict on a pull request."""

    id: str
    state: str  # "APPROVED" | "CHANGES_REQUESTED" | "COMMENTED" | "DISMISSED" | "PENDING"
    author: str
    submitted_at: datetime | None = None

    @classmethod
    def from_dict(cls, raw: dict) -> Review:
        user = raw.get("user") or {}
        submitted = raw.get("submitted_at")
        return cls(
            id=str(raw.get("id", "")),
            state=raw.get("state") or "",
            author=user.get("login") or "unknown",
            submitted_at=parse_timestamp(submitted) if submitted else None,
        )


@dataclass(frozen=True)
class Repository:
    name: str
    full_name: str
    url: str = ""

    @classmethod
    def from_full_name(cls, full_name: str) -> Repository:
        """Build a Repository from an ``owner/name`` slug."""
        return cls(
            name=full_name.rsplit("/", 1)[-1],
            full_name=full_name,
            url=f"https://github.com/{full_name}",
        )


@dataclass(frozen=True)
class PullRequest:
    """An open pull request plus the fields the dashboard derives from it.

    The derived fields are computed, not authoritative: they must be
    recomputed whenever the reviews, the draft flag or the stale threshold
    change.
    """

    id: str
    number: int
    title: str
    url: str
    is_draft: bool
    created_at: datetime
    updated_at: datetime
    author: str
    repository: Repository
    requested_reviewers: tuple[str, ...] = ()
    reviews: tuple[Review, ...] = ()
    review_decision: str | None = None

    status: str = UNKNOWN
    is_stale: bool = False
    is_pinned: bool = False
    is_requested_reviewer: bool = False

    @classmethod
    def from_dict(cls, raw: dict) -> PullRequest:
        """Build a PullRequest from a GitHub REST ``pulls`` payload.

        Absent reviews and reviewer logins are treated as empty rather than
        as errors, so a pull request whose reviews could not be fetched is
        still classifiable.
        """
        repo = raw.get("repository") or {}
        full_name = repo.get("full_name") or ""
        user = raw.get("user") or {}
        return cls(
            id=str(raw["id"]),
            number=int(raw.get("number", 0)),
            title=raw.get("title") or "",
            url=raw.get("html_url") or "",
            is_draft=bool(raw.get("draft", False)),
            created_at=parse_timestamp(raw["created_at"]),
            updated_at=parse_timestamp(raw["updated_at"]),
            author=user.get("login") or "unknown",
            repository=Repository(
                name=repo.get("name") or full_name.rsplit("/", 1)[-1],
                full_name=full_name,
                url=repo.get("html_url") or "",
            ),
            requested_reviewers=tuple(
                r["login"] for r in raw.get("requested_reviewers") or [] if r and r.get("login")
            ),
            reviews=tuple(Review.from_dict(r) for r in raw.get("reviews") or []),
            review_decision=raw.get("reviewDecision") or raw.get("review_decision"),
        )


@dataclass(frozen=True)
class FilterOptions:
    """What the viewer asked to see and in which order.

    Defaults match the dashboard's "reset filters" action.
    """

    search_query: str = ""
    repositories: frozenset[str] = field(default_factory=frozenset)
    authors: frozenset[str] = field(default_factory=frozenset)
    hide_stale: bool = True
    sort_by: str = "updated"
    prioritize_my_reviews: bool = True

    @property
    def active_filter_count(self) -> int:
        """Number of narrowing filters in effect (search counts once)."""
        return (1 if self.search_query else 0) + len(self.repositories) + len(self.authors)

    def to_dict(self) -> dict:
        return {
            "search_query": self.search_query,
            "repositories": sorted(self.repositories),
            "authors": sorted(self.authors),
            "hide_stale": self.hide_stale,
            "sort_by": self.sort_by,
            "prioritize_my_reviews": self.prioritize_my_reviews,
        }

    @classmethod
    def from_dict(cls, data: dict) -> FilterOptions:
        """Rebuild options from a persisted dict, falling back per field.

        Unknown keys are ignored and values of the wrong type are replaced
        by the default for that field, so a partially corrupt record still
        yields usable options.
        """
        defaults = cls()
        if not isinstance(data, dict):
            return defaults

        def _str_set(key: str) -> frozenset[str]:
            value = data.get(key)
            if not isinstance(value, (list, tuple, set, frozenset)):
                return frozenset()
            return frozenset(v for v in value if isinstance(v, str))

        def _bool(key: str, default: bool) -> bool:
            value = data.get(key)
            return value if isinstance(value, bool) else default

        search = data.get("search_query")
        sort_by = data.get("sort_by")
        if sort_by is not None and sort_by not in SORT_OPTIONS:
            logger.warning("Ignoring unknown sort option %r in saved filters.", sort_by)
        return cls(
            search_query=search if isinstance(search, str) else defaults.search_query,
            repositories=_str_set("repositories"),
            authors=_str_set("authors"),
            hide_stale=_bool("hide_stale", defaults.hide_stale),
            sort_by=sort_by if sort_by in SORT_OPTIONS else defaults.sort_by,
            prioritize_my_reviews=_bool("prioritize_my_reviews", defaults.prioritize_my_reviews),
        )
