"""
pridebot.services.github_service — Commit Counts from the GitHub API
=====================================================================

Push notifications carry a running commit number (``# 214``).  GitHub
doesn't include the repository's total commit count in the webhook, so it
is derived from the REST API: request one commit per page and read the
page number of the ``last`` link.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlparse

import httpx

from pridebot.constants import COMMIT_INDEX_PREFIX, TRACKED_REPOSITORIES
from pridebot.errors import NetworkError

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"


async def fetch_total_commits(
    owner: str,
    repo: str,
    token: str | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Return the number of commits on the default branch of *owner/repo*.

    Raises
    ------
    NetworkError
        If GitHub can't be reached or answers with an error status.
    """
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"

    url = f"{GITHUB_API}/repos/{owner}/{repo}/commits"
    try:
        async with httpx.AsyncClient(timeout=10, transport=transport) as client:
            resp = await client.get(url, params={"per_page": 1}, headers=headers)
            resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise NetworkError(f"GitHub commit count failed for {owner}/{repo}") from exc

    last = resp.links.get("last", {}).get("url")
    if last:
        page = parse_qs(urlparse(last).query).get("page", ["0"])[0]
        return int(page)

    # No "last" link: everything fits on one page
    return len(resp.json())


async def total_commits_for_repo(
    repo_name: str,
    owner: str,
    token: str | None = None,
) -> int:
    """Commit count for a tracked repository; 0 for anything else."""
    tracked = TRACKED_REPOSITORIES.get(repo_name)
    if tracked is None:
        logger.info("Repository %s is not tracked — commit count 0", repo_name)
        return 0
    return await fetch_total_commits(owner, tracked, token)


def format_commit_index(repo_name: str, total_commits: int) -> str:
    """Render the display index for a push notification.

    The last two digits of the commit count, zero-padded, behind the
    repository's prefix digit (if it has one)::

        format_commit_index("Pridebot", 137)          -> "237"
        format_commit_index("Pridebot-Website", 5)    -> "05"
    """
    digits = str(total_commits)
    tens = digits[-2:-1] or "0"
    ones = digits[-1]
    return f"{COMMIT_INDEX_PREFIX.get(repo_name, '')}{tens}{ones}"
