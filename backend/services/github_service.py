"""GitHub API integration service."""

import logging
import re
from typing import Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)

_REPO_URL_RE = re.compile(r"github\.com/([^/]+)/([^/?#]+)")


def parse_repo_url(url: Optional[str]) -> Optional[tuple[str, str]]:
    """Extract (owner, repo) from a GitHub URL, or None if it is not one."""
    if not url:
        return None
    match = _REPO_URL_RE.search(url)
    if not match:
        return None
    owner, repo = match.group(1), match.group(2)
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return owner, repo


class GitHubService:
    """
    Reads public repository activity used as a team momentum signal.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "HackArena",
        }
        if settings.github_token:
            headers["Authorization"] = f"Bearer {settings.github_token}"

        self.client = httpx.AsyncClient(
            base_url=settings.github_api_url,
            timeout=15.0,
            headers=headers,
            transport=transport,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def get_commit_count(self, repo_url: str) -> int:
        """
        Count recent commits on a repository (first page, at most 100).
        Unreachable or unknown repositories count as 0.
        """
        parsed = parse_repo_url(repo_url)
        if not parsed:
            logger.warning(f"Not a GitHub repository URL: {repo_url}")
            return 0

        owner, repo = parsed
        try:
            response = await self.client.get(
                f"/repos/{owner}/{repo}/commits",
                params={"per_page": 100, "page": 1},
            )
            response.raise_for_status()
            commits = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Error fetching commits for {owner}/{repo}: {e}")
            return 0
        except ValueError as e:
            # Rate-limit and proxy pages come back as HTML
            logger.error(f"Invalid commits response for {owner}/{repo}: {e}")
            return 0

        if not isinstance(commits, list):
            return 0

        logger.info(f"{owner}/{repo}: fetched {len(commits)} commits")
        return len(commits)
