"""Tests for the GitHub fetch helpers."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from unittest.mock import MagicMock

from github import GithubException

from prboard_core.gh.pull_request import (
    fetch_all_prs,
    fetch_repository_prs,
    fetch_reviews,
    get_viewer_login,
    list_organization_repos,
    pull_to_model,
)
from prboard_core.models import Repository

CREATED = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
UPDATED = datetime(2024, 5, 2, 10, 0, tzinfo=timezone.utc)


def _user(login):
    u = MagicMock()
    u.login = login
    return u


def _review(review_id, state, login="bob"):
    r = MagicMock()
    r.id = review_id
    r.state = state
    r.user = _user(login)
    r.submitted_at = UPDATED
    return r


def _pull(number, reviews=(), draft=False, reviewers=()):
    p = MagicMock()
    p.id = 1000 + number
    p.number = number
    p.title = f"PR {number}"
    p.html_url = f"https://github.com/acme/api/pull/{number}"
    p.draft = draft
    p.created_at = CREATED
    p.updated_at = UPDATED
    p.user = _user("alice")
    p.requested_reviewers = [_user(r) for r in reviewers]
    p.get_reviews.return_value = list(reviews)
    return p


def _repo(full_name, pulls):
    repo = MagicMock()
    repo.name = full_name.split("/")[1]
    repo.full_name = full_name
    repo.html_url = f"https://github.com/{full_name}"
    repo.get_pulls.return_value = pulls
    return repo


def _gh(repos):
    gh = MagicMock()

    def get_repo(name):
        if isinstance(repos[name], Exception):
            raise repos[name]
        return repos[name]

    gh.get_repo.side_effect = get_repo
    return gh


class TestFetchReviews:
    def test_maps_reviews_in_api_order(self):
        pull = _pull(1, reviews=[_review(1, "COMMENTED"), _review(2, "APPROVED", "carol")])
        reviews = fetch_reviews(pull)
        assert [(r.id, r.state, r.author) for r in reviews] == [("1", "COMMENTED", "bob"), ("2", "APPROVED", "carol")]

    def test_failure_returns_empty(self):
        pull = _pull(1)
        pull.get_reviews.side_effect = GithubException(500, {"message": "boom"})
        assert fetch_reviews(pull) == ()

    def test_missing_user_is_unknown(self):
        review = _review(1, "APPROVED")
        review.user = None
        assert fetch_reviews(_pull(1, reviews=[review]))[0].author == "unknown"


class TestPullToModel:
    def test_maps_fields(self):
        repository = Repository.from_full_name("acme/api")
        pr = pull_to_model(_pull(7, draft=True, reviewers=["bob"]), repository)
        assert pr.id == "1007"
        assert pr.number == 7
        assert pr.is_draft is True
        assert pr.author == "alice"
        assert pr.requested_reviewers == ("bob",)
        assert pr.repository is repository
        assert pr.created_at == CREATED
        assert pr.reviews == ()

    def test_none_draft_is_false(self):
        pull = _pull(1)
        pull.draft = None
        assert pull_to_model(pull, Repository.from_full_name("acme/api")).is_draft is False


class TestFetchRepositoryPrs:
    def test_returns_prs_with_reviews(self):
        gh = _gh({"acme/api": _repo("acme/api", [_pull(1, reviews=[_review(1, "APPROVED")]), _pull(2)])})
        prs = fetch_repository_prs(gh, "acme/api")
        assert [pr.number for pr in prs] == [1, 2]
        assert prs[0].reviews[0].state == "APPROVED"
        assert prs[1].reviews == ()
        assert prs[0].repository.full_name == "acme/api"

    def test_with_executor(self):
        gh = _gh({"acme/api": _repo("acme/api", [_pull(n, reviews=[_review(n, "APPROVED")]) for n in range(1, 6)])})
        with ThreadPoolExecutor(max_workers=3) as pool:
            prs = fetch_repository_prs(gh, "acme/api", pool)
        assert [pr.number for pr in prs] == [1, 2, 3, 4, 5]
        assert all(len(pr.reviews) == 1 for pr in prs)

    def test_repo_failure_returns_empty(self):
        gh = _gh({"acme/api": GithubException(404, {"message": "Not Found"})})
        assert fetch_repository_prs(gh, "acme/api") == []

    def test_requests_open_pulls(self):
        repo = _repo("acme/api", [])
        fetch_repository_prs(_gh({"acme/api": repo}), "acme/api")
        repo.get_pulls.assert_called_once_with(state="open")


class TestFetchAllPrs:
    def test_joins_in_configured_order(self):
        gh = _gh(
            {
                "acme/api": _repo("acme/api", [_pull(1), _pull(2)]),
                "acme/web": _repo("acme/web", [_pull(3)]),
            }
        )
        prs = fetch_all_prs(gh, ["acme/web", "acme/api"], max_workers=2)
        assert [(pr.repository.name, pr.number) for pr in prs] == [("web", 3), ("api", 1), ("api", 2)]

    def test_partial_failure_keeps_other_repos(self):
        gh = _gh(
            {
                "acme/api": GithubException(500, {"message": "boom"}),
                "acme/web": _repo("acme/web", [_pull(3)]),
            }
        )
        prs = fetch_all_prs(gh, ["acme/api", "acme/web"])
        assert [pr.number for pr in prs] == [3]

    def test_failed_reviews_keep_pr(self):
        broken = _pull(1)
        broken.get_reviews.side_effect = GithubException(500, {"message": "boom"})
        gh = _gh({"acme/api": _repo("acme/api", [broken, _pull(2, reviews=[_review(1, "APPROVED")])])})
        prs = fetch_all_prs(gh, ["acme/api"])
        assert [(pr.number, len(pr.reviews)) for pr in prs] == [(1, 0), (2, 1)]

    def test_no_repositories(self):
        assert fetch_all_prs(MagicMock(), []) == []


class TestViewerAndRepos:
    def test_viewer_login(self):
        gh = MagicMock()
        gh.get_user.return_value.login = "octocat"
        assert get_viewer_login(gh) == "octocat"

    def test_viewer_login_failure_returns_none(self):
        gh = MagicMock()
        gh.get_user.side_effect = GithubException(401, {"message": "Bad credentials"})
        assert get_viewer_login(gh) is None

    def test_list_organization_repos(self):
        gh = MagicMock()
        gh.get_organization.return_value.get_repos.return_value = [_repo("acme/api", []), _repo("acme/web", [])]
        repos = list_organization_repos(gh, "acme")
        assert [r.full_name for r in repos] == ["acme/api", "acme/web"]
        gh.get_organization.assert_called_once_with("acme")
        gh.get_organization.return_value.get_repos.assert_called_once_with(sort="updated")
