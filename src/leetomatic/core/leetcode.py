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
src/leetomatic/core/leetcode.py
LeetCode session check and problem lookups.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp

from ..config import Settings
from ..errors import InvalidSession, RemoteQueryError
from ..problem import ProblemRef
from ..utils.logger import debug_detail, logger, progress, success

DAILY_PROBLEM_QUERY = """
query questionOfTheDay {
  activeDailyCodingChallengeQuestion {
    date
    question {
      title
      titleSlug
    }
  }
}
"""

PROBLEM_BY_SLUG_QUERY = """
query questionTitle($titleSlug: String!) {
  question(titleSlug: $titleSlug) {
    title
    titleSlug
  }
}
"""


def session_cookie_header(cookie: str) -> Dict[str, str]:
    return {"Cookie": f"LEETCODE_SESSION={cookie}"}


def _question_to_problem(question: Any, date: Optional[str] = None) -> ProblemRef:
    if not isinstance(question, dict):
        raise RemoteQueryError("No problem found.")
    title = question.get("title")
    slug = question.get("titleSlug")
    if not title or not slug:
        raise RemoteQueryError(f"Problem payload is missing title or slug: {question!r}")
    return ProblemRef(title=str(title), slug=str(slug), date=date)


def parse_daily_problem(payload: Any) -> ProblemRef:
    """Turn a GraphQL daily-challenge response into a :class:`ProblemRef`."""
    if not isinstance(payload, dict):
        raise RemoteQueryError("Unexpected GraphQL response.")
    if payload.get("errors"):
        raise RemoteQueryError(json.dumps(payload["errors"]))
    challenge = (payload.get("data") or {}).get("activeDailyCodingChallengeQuestion")
    if not challenge:
        raise RemoteQueryError("No problem found.")
    return _question_to_problem(challenge.get("question"), challenge.get("date"))


def parse_problem(payload: Any) -> ProblemRef:
    """Turn a GraphQL ``question(titleSlug:)`` response into a :class:`ProblemRef`."""
    if not isinstance(payload, dict):
        raise RemoteQueryError("Unexpected GraphQL response.")
    if payload.get("errors"):
        raise RemoteQueryError(json.dumps(payload["errors"]))
    return _question_to_problem((payload.get("data") or {}).get("question"))


class LeetCodeClient:
    """Talk to LeetCode's REST and GraphQL endpoints over a shared session."""

    def __init__(self, http: aiohttp.ClientSession, settings: Settings) -> None:
        self._http = http
        self._settings = settings
        self._base_url = settings.leetcode_url.rstrip("/")

    async def check_session(self) -> str:
        """Return the user name behind the session cookie.

        Raises:
            InvalidSession: non-200 status or no ``user_name`` in the response.
        """
        url = f"{self._base_url}/api/problems/all/"
        progress("Checking LeetCode session…")
        try:
            async with self._http.get(url, headers=session_cookie_header(self._settings.session_cookie)) as response:
                if response.status != 200:
                    raise InvalidSession(f"Session check returned HTTP {response.status}.")
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise InvalidSession(f"Session check failed: {exc}") from exc

        user_name = data.get("user_name") if isinstance(data, dict) else None
        if not user_name:
            raise InvalidSession("Session is invalid. Please update SESSION_COOKIE.")
        return str(user_name)

    async def fetch_daily_problem(self) -> ProblemRef:
        progress("Fetching LeetCode Problem of the Day…")
        payload = await self._graphql(DAILY_PROBLEM_QUERY)
        problem = parse_daily_problem(payload)
        success(f"Problem fetched: {problem.title} - {problem.url(self._base_url)}")
        return problem

    async def fetch_problem(self, slug: str) -> ProblemRef:
        progress(f"Looking up problem '{slug}'…")
        payload = await self._graphql(PROBLEM_BY_SLUG_QUERY, {"titleSlug": slug})
        problem = parse_problem(payload)
        success(f"Problem fetched: {problem.title} - {problem.url(self._base_url)}")
        return problem

    async def _graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self._base_url}/graphql"
        body: Dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables
        headers = {"Referer": self._base_url}
        debug_detail(f"POST {url}")
        try:
            async with self._http.post(url, json=body, headers=headers) as response:
                if response.status != 200:
                    text = await response.text()
                    logger.debug("GraphQL error body: %s", text[:500])
                    raise RemoteQueryError(f"LeetCode GraphQL returned HTTP {response.status}.")
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise RemoteQueryError(f"LeetCode GraphQL request failed: {exc}") from exc


__all__ = [
    "LeetCodeClient",
    "parse_daily_problem",
    "parse_problem",
    "session_cookie_header",
]
