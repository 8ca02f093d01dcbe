"""Filter, sort and group classified pull requests for display."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from prboard_core.models import STATUSES, UNKNOWN, FilterOptions, PullRequest


def mark_requested_reviewer(prs: Iterable[PullRequest], viewer_login: str | None) -> list[PullRequest]:
    """Stamp ``is_requested_reviewer`` for the authenticated viewer.

    With no known viewer every pull request is marked False.
    """
    return [
        replace(pr, is_requested_reviewer=viewer_login is not None and viewer_login in pr.requested_reviewers)
        for pr in prs
    ]


def _matches(pr: PullRequest, options: FilterOptions, query: str, show_drafts: bool) -> bool:
    if pr.is_draft and not show_drafts:
        return False
    if options.repositories and pr.repository.name not in options.repositories:
        return False
    if options.authors and pr.author not in options.authors:
        return False
    if options.hide_stale and pr.is_stale:
        return False
    if query:
        return (
            query in pr.title.casefold()
            or query in pr.author.casefold()
            or query in pr.repository.name.casefold()
        )
    return True


def _sort_by(prs: list[PullRequest], sort_by: str) -> None:
    if sort_by == "newest":
        prs.sort(key=lambda pr: pr.created_at, reverse=True)
    elif sort_by == "oldest":
        prs.sort(key=lambda pr: pr.created_at)
    elif sort_by == "updated":
        prs.sort(key=lambda pr: pr.updated_at, reverse=True)
    elif sort_by == "title":
        prs.sort(key=lambda pr: (pr.title.casefold(), pr.title))


def filter_and_sort(
    prs: Iterable[PullRequest],
    options: FilterOptions,
    show_drafts: bool = False,
    surface_pins: bool = True,
) -> list[PullRequest]:
    """Return the visible pull requests in display order.

    Every active filter must pass. Ordering is done in stable passes from
    the weakest key to the strongest, so the final precedence is:
    pinned first, then review requests for the viewer, then ``sort_by``.
    Ties at every level keep the input order.
    """
    query = options.search_query.strip().casefold()
    visible = [pr for pr in prs if _matches(pr, options, query, show_drafts)]

    _sort_by(visible, options.sort_by)
    if options.prioritize_my_reviews:
        visible.sort(key=lambda pr: not pr.is_requested_reviewer)
    if surface_pins:
        visible.sort(key=lambda pr: not pr.is_pinned)
    return visible


def group_by_status(prs: Iterable[PullRequest]) -> dict[str, list[PullRequest]]:
    """Bucket pull requests by status without reordering them.

    All five buckets are always present.
    """
    groups: dict[str, list[PullRequest]] = {status: [] for status in STATUSES}
    for pr in prs:
        groups[pr.status if pr.status in groups else UNKNOWN].append(pr)
    return groups


def unique_repositories(prs: Iterable[PullRequest]) -> list[str]:
    return sorted({pr.repository.name for pr in prs})


def unique_authors(prs: Iterable[PullRequest]) -> list[str]:
    return sorted({pr.author for pr in prs})
