"""
tests/test_github_service.py — GitHub Commit Count Tests
=========================================================
The GitHub API is replaced with ``httpx.MockTransport``.
"""

from __future__ import annotations

import httpx
import pytest

from conftest import run_async
from pridebot.errors import NetworkError
from pridebot.services import github_service
from pridebot.services.github_service import fetch_total_commits, format_commit_index


class TestFormatCommitIndex:

    @pytest.mark.parametrize("repo, total, expected", [
        ("Pridebot", 137, "237"),
        ("Pridebot", 1205, "205"),
        ("Pridebot", 7, "207"),
        ("Pridebot-Website", 5, "05"),
        ("Pridebot-Website", 48, "48"),
        ("Other", 0, "00"),
    ])
    def test_cases(self, repo, total, expected):
        assert format_commit_index(repo, total) == expected


class TestFetchTotalCommits:

    def test_reads_last_page_from_link_header(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=[{"sha": "abc"}],
                headers={
                    "Link": (
                        '<https://api.github.com/repositories/1/commits?per_page=1&page=2>; rel="next", '
                        '<https://api.github.com/repositories/1/commits?per_page=1&page=412>; rel="last"'
                    ),
                },
            )

        total = run_async(fetch_total_commits(
            "Sdriver1", "Pridebot", "ghp_test", transport=httpx.MockTransport(handler),
        ))

        assert total == 412
        (request,) = seen
        assert request.url.path == "/repos/Sdriver1/Pridebot/commits"
        assert request.url.params["per_page"] == "1"
        assert request.headers["Authorization"] == "Bearer ghp_test"

    def test_single_page_counts_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[{"sha": "abc"}]))

        total = run_async(fetch_total_commits("Sdriver1", "Pridebot", transport=transport))

        assert total == 1

    def test_no_token_sends_no_authorization(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        run_async(fetch_total_commits("Sdriver1", "Pridebot", transport=httpx.MockTransport(handler)))

        assert "Authorization" not in seen[0].headers

    def test_error_status_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(404, json={"message": "Not Found"}))

        with pytest.raises(NetworkError):
            run_async(fetch_total_commits("Sdriver1", "missing", transport=transport))

    def test_connection_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(NetworkError):
            run_async(fetch_total_commits(
                "Sdriver1", "Pridebot", transport=httpx.MockTransport(handler),
            ))


class TestTotalCommitsForRepo:

    def test_untracked_repository_is_zero(self, monkeypatch):
        async def fail(*args, **kwargs):
            raise AssertionError("GitHub must not be called")

        monkeypatch.setattr(github_service, "fetch_total_commits", fail)

        assert run_async(github_service.total_commits_for_repo("dotfiles", "Sdriver1")) == 0

    def test_tracked_repository_is_fetched(self, monkeypatch):
        calls = []

        async def fake_fetch(owner, repo, token=None):
            calls.append((owner, repo, token))
            return 99

        monkeypatch.setattr(github_service, "fetch_total_commits", fake_fetch)

        total = run_async(github_service.total_commits_for_repo("Pridebot-Website", "Sdriver1", "t"))

        assert total == 99
        assert calls == [("Sdriver1", "Pridebot-Website", "t")]
