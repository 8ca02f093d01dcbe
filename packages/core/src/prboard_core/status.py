"""Review-status classification for pull requests.

The status is decided by an ordered list of (predicate, status) rules where
the first matching rule wins. The order is part of the contract:
``needs_review`` must be checked before ``is_approved`` because "every
review is approved or commented" is vacuously true for a pull request with
no reviews at all, and such a pull request needs review.

Staleness is computed separately and never influences the status.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable

from prboard_core.models import APPROVED, CHANGES_REQUESTED, DRAFT, NEEDS_REVIEW, UNKNOWN, PullRequest

DEFAULT_STALE_THRESHOLD_DAYS = 7


def is_draft(pr: PullRequest) -> bool:
    return pr.is_draft


def has_changes_requested(pr: PullRequest) -> bool:
    """True when any reviewer requested changes, or the aggregate says so."""
    return (
        any(review.state == CHANGES_REQUESTED for review in pr.reviews)
        or pr.review_decision == CHANGES_REQUESTED
    )


def needs_review(pr: PullRequest) -> bool:
    """True when nobody has approved yet, or the aggregate still requires review."""
    return not any(review.state == APPROVED for review in pr.reviews) or pr.review_decision == "REVIEW_REQUIRED"


def is_approved(pr: PullRequest) -> bool:
    """True when every review is an approval or a comment, or the aggregate is APPROVED.

    COMMENTED reviews count as resolved here. A set of comment-only reviews
    never reaches this rule in practice (needs_review fires first when there
    is no approval), but the leniency is kept as-is pending product input.
    """
    return all(review.state in (APPROVED, "COMMENTED") for review in pr.reviews) or pr.review_decision == APPROVED


STATUS_RULES: tuple[tuple[Callable[[PullRequest], bool], str], ...] = (
    (is_draft, DRAFT),
    (has_changes_requested, CHANGES_REQUESTED),
    (needs_review, NEEDS_REVIEW),
    (is_approved, APPROVED),
)


def get_status(pr: PullRequest) -> str:
    for predicate, status in STATUS_RULES:
        if predicate(pr):
            return status
    return UNKNOWN


def is_stale(pr: PullRequest, stale_threshold_days: int, now: datetime | None = None) -> bool:
    """True when the pull request was last updated more than the threshold ago."""
    now = now or datetime.now(timezone.utc)
    return now - pr.updated_at > timedelta(days=stale_threshold_days)


def classify(
    pr: PullRequest,
    stale_threshold_days: int = DEFAULT_STALE_THRESHOLD_DAYS,
    now: datetime | None = None,
) -> PullRequest:
    """Return a copy of ``pr`` with ``status`` and ``is_stale`` filled in."""
    return replace(pr, status=get_status(pr), is_stale=is_stale(pr, stale_threshold_days, now))


def classify_all(
    prs: Iterable[PullRequest],
    stale_threshold_days: int = DEFAULT_STALE_THRESHOLD_DAYS,
    now: datetime | None = None,
) -> list[PullRequest]:
    """Classify a batch against one clock reading so a refresh is self-consistent."""
    now = now or datetime.now(timezone.utc)
    return [classify(pr, stale_threshold_days, now) for pr in prs]
