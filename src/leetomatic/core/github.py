"""
██╗     ███████╗███████╗████████╗ ██████╗
██║     ██╔════╝██╔════╝╚══██╔══╝██╔═══██╗
██║     █████╗  █████╗     ██║   ██║   ██║
██║     ██╔══╝  ██╔══╝     ██║   ██║   ██║
███████╗███████╗███████╗   ██║   ╚██████╔╝
╚══════╝╚══════╝╚══════╝   ╚═╝    ╚═════╝

███╗   ███╗ █████╗ ████████╗██╗ ██████╗
████╗ ████║██╔══██╗╚══██╔══╝██║██╔════╝
██╔████╔██║███████║   ██║   ██║██║
██║╚██╔╝██║██╔══██║   ██║   ██║██║
██║ ╚═╝ ██║██║  ██║   ██║   ██║╚██████╗
╚═╝     ╚═╝╚═╝  ╚═╝   ╚═╝   ╚═╝ ╚═════╝
src/leetomatic/core/github.py
Solution lookup through GitHub code search and raw file downloads.
"""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlparse, urlunparse

import aiohttp

from ..config import Settings
from ..errors import NoMatchingSolution, RemoteQueryError
from ..problem import ProblemRef, SourceLocation
from ..utils.logger import debug_detail, logger, progress, success

GITHUB_HOST = "github.com"
RAW_HOST = "raw.githubusercontent.com"


def build_search_query(name: str, extension: str, owner: str, repo: str) -> str:
    return f"filename:{name}.{extension} repo:{owner}/{repo}"


def to_raw_url(html_url: str) -> str:
    """Rewrite a github.com ``/blob/`` page URL to its raw-content form."""
    parts = urlparse(html_url)
    netloc = RAW_HOST if parts.netloc.lower() == GITHUB_HOST else parts.netloc
    path = parts.path.replace("/blob/", "/", 1)
    return urlunparse((parts.scheme, netloc, path, parts.params, parts.query, parts.fragment))


def pick_solution_file(items: Iterable[Mapping[str, Any]], name: str) -> Optional[Mapping[str, Any]]:
    """Return the first search hit whose path contains ``name`` (case-insensitive)."""
    needle = name.lower()
    for item in items:
        path = str(item.get("path") or "")
        if needle in path.lower():
            return item
    return None


class GitHubClient:
    """Find and download reference solutions from one repository."""

    def __init__(self, http: aiohttp.ClientSession, settings: Settings) -> None:
        self._http = http
        self._settings = settings
        self._api_url = settings.github_api_url.rstrip("/")

    async def search_solution(self, problem: ProblemRef) -> SourceLocation:
        """Locate the solution file for ``problem``.

        Raises:
            RemoteQueryError: the search API failed.
            NoMatchingSolution: no result, or no result with a matching path.
        """
        settings = self._settings
        name = problem.search_name
        query = build_search_query(name, settings.file_extension, settings.repo_owner, settings.repo_name)
        url = f"{self._api_url}/search/code"
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "Authorization": f"Bearer {settings.github_token}",
        }
        progress(f"Searching {settings.repo} for {name}.{settings.file_extension}…")
        debug_detail(f"GET {url} q={query}")
        try:
            async with self._http.get(url, params={"q": query}, headers=headers) as response:
                debug_detail(f"GitHub search status: {response.status}")
                if response.status != 200:
                    body = await response.text()
                    logger.error("GitHub API error data: %s", body[:500])
                    raise RemoteQueryError(f"GitHub API error: HTTP {response.status} {response.reason or ''}".rstrip())
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise RemoteQueryError(f"GitHub search request failed: {exc}") from exc

        if not isinstance(data, dict) or not data.get("total_count"):
            raise NoMatchingSolution(f"No solution found for problem: {problem.title}")

        item = pick_solution_file(data.get("items") or [], name)
        if item is None:
            raise NoMatchingSolution(f"No relevant solution file found for problem: {problem.title}")

        html_url = str(item.get("html_url") or "")
        if not html_url:
            raise RemoteQueryError(f"Search result for {item.get('path')} has no html_url.")
        location = SourceLocation(path=str(item["path"]), html_url=html_url, raw_url=to_raw_url(html_url))
        success(f"Solution file found: {location.raw_url}")
        return location

    async def fetch_raw(self, location: SourceLocation) -> str:
        progress(f"Fetching raw content from: {location.raw_url}")
        try:
            async with self._http.get(location.raw_url) as response:
                if response.status < 200 or response.status >= 300:
                    raise RemoteQueryError(
                        f"Failed to fetch raw content: HTTP {response.status} {response.reason or ''}".rstrip()
                    )
                return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise RemoteQueryError(f"Raw content request failed: {exc}") from exc


__all__ = [
    "GitHubClient",
    "build_search_query",
    "pick_solution_file",
    "to_raw_url",
]
