"""Fetch open pull requests and their reviews from GitHub.

Repositories are fetched concurrently, and within each repository the
reviews of every pull request are fetched concurrently too. Each of those
fetches is independent: a repository that fails contributes no pull
requests, and a pull request whose reviews fail is kept with an empty
review list (which classifies as NEEDS_REVIEW). Nothing here raises for an
upstream failure other than building the client itself.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Iterable

from github import Github, GithubException

from prboard_core.models import PullRequest, Repository, Review
from prboard_core.utils.dates import parse_timestamp

logger = logging.getLogger(__name__)


def get_client(token: str) -> Github:
    return Github(token)


def get_viewer_login(gh: Github) -> str | None:
    """Return the login of the authenticated user, or None if it cannot be resolved."""
    try:
        return gh.get_user().login
    except GithubException as e:
        logger.warning("Could not resolve the authenticated user: %s", e)
        return None


def list_organization_repos(gh: Github, org: str) -> list[Repository]:
    """Return an organization's repositories, most recently updated first."""
    return [
        Repository(name=r.name, full_name=r.full_name, url=r.html_url)
        for r in gh.get_organization(org).get_repos(sort="updated")
    ]


def fetch_reviews(pull) -> tuple[Review, ...]:
    try:
        return tuple(
            Review(
                id=str(r.id),
                state=r.state or "",
                author=r.user.login if r.user else "unknown",
                submitted_at=parse_timestamp(r.submitted_at) if r.submitted_at else None,
            )
            for r in pull.get_reviews()
        )
    except Exception as e:
        logger.warning("Could not fetch reviews for PR #%s: %s", pull.number, e)
        return ()


def pull_to_model(pull, repository: Repository, reviews: Iterable[Review] = ()) -> PullRequest:
    return PullRequest(
        id=str(pull.id),
        number=pull.number,
        title=pull.title or "",
        url=pull.html_url,
        is_draft=bool(pull.draft),
        created_at=parse_timestamp(pull.created_at),
        updated_at=parse_timestamp(pull.updated_at),
        author=pull.user.login if pull.user else "unknown",
        repository=repository,
        requested_reviewers=tuple(u.login for u in pull.requested_reviewers or [] if u is not None),
        reviews=tuple(reviews),
    )


def fetch_repository_prs(gh: Github, full_name: str, executor: Executor | None = None) -> list[PullRequest]:
    """Return the open pull requests of one repository, reviews included.

    ``executor`` fans the per-PR review fetches out; without one they run
    sequentially. Returns an empty list if the repository cannot be read.
    """
    try:
        repo = gh.get_repo(full_name)
        pulls = list(repo.get_pulls(state="open"))
    except Exception as e:
        logger.warning("Could not fetch pull requests for %s: %s", full_name, e)
        return []

    repository = Repository(name=repo.name, full_name=repo.full_name, url=repo.html_url)
    if executor is not None:
        all_reviews = list(executor.map(fetch_reviews, pulls))
    else:
        all_reviews = [fetch_reviews(p) for p in pulls]
    return [pull_to_model(p, repository, reviews) for p, reviews in zip(pulls, all_reviews)]


def fetch_all_prs(gh: Github, full_names: Iterable[str], max_workers: int = 8) -> list[PullRequest]:
    """Fetch every configured repository concurrently and join the results.

    Output keeps the configured repository order. Review fetches use their
    own pool so a repository task never waits on a slot held by itself.
    """
    full_names = list(full_names)
    if not full_names:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as review_pool, ThreadPoolExecutor(
        max_workers=min(max_workers, len(full_names))
    ) as repo_pool:
        per_repo = list(repo_pool.map(lambda name: fetch_repository_prs(gh, name, review_pool), full_names))

    prs = [pr for batch in per_repo for pr in batch]
    logger.debug("Fetched %d pull request(s) from %d repositories.", len(prs), len(full_names))
    return prs
