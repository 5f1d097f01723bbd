"""Run configuration assembled once from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import MissingCredential
from .extract import DEFAULT_START_MARKER
from .problem import DEFAULT_LEETCODE_URL

DEFAULT_REPO = "kamyu104/LeetCode-Solutions"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


def getenv_bool(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    """Return True for 1/true/yes/on (case-insensitive), else default."""
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        return max(int(env.get(name, str(default))), 0)
    except ValueError:
        return default


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    try:
        return max(float(env.get(name, str(default))), 0.0)
    except ValueError:
        return default


def split_repo(value: str) -> tuple[str, str]:
    """Split ``owner/name`` into its parts."""
    owner, sep, name = value.strip().strip("/").partition("/")
    if not sep or not owner or not name or "/" in name:
        raise ValueError(f"Repository must look like 'owner/name', got {value!r}")
    return owner, name


@dataclass(frozen=True)
class Settings:
    # Credentials
    session_cookie: str
    github_token: str
    # Solutions source
    repo_owner: str = "kamyu104"
    repo_name: str = "LeetCode-Solutions"
    file_extension: str = "cpp"
    start_marker: str = DEFAULT_START_MARKER
    # Endpoints
    leetcode_url: str = DEFAULT_LEETCODE_URL
    github_api_url: str = DEFAULT_GITHUB_API_URL
    http_timeout: float = 30.0
    # Browser
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    editor_timeout_ms: int = 60_000
    submit_settle_ms: int = 5_000
    # Run
    problem_slug: Optional[str] = None
    dry_run: bool = False

    @property
    def repo(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Raises:
            MissingCredential: ``SESSION_COOKIE`` or ``GT_TOKEN`` is unset or blank.
        """
        env = os.environ if environ is None else environ

        session_cookie = (env.get("SESSION_COOKIE") or "").strip()
        if not session_cookie:
            raise MissingCredential(
                "SESSION_COOKIE is not set; copy the LEETCODE_SESSION cookie from a logged-in browser."
            )
        github_token = (env.get("GT_TOKEN") or "").strip()
        if not github_token:
            raise MissingCredential(
                "GT_TOKEN is not set; create a GitHub token that can use the code search API."
            )

        owner, name = split_repo(env.get("SOLUTIONS_REPO") or DEFAULT_REPO)
        return cls(
            session_cookie=session_cookie,
            github_token=github_token,
            repo_owner=owner,
            repo_name=name,
            file_extension=(env.get("SOLUTION_EXTENSION") or "cpp").lstrip("."),
            start_marker=env.get("SOLUTION_MARKER") or DEFAULT_START_MARKER,
            leetcode_url=(env.get("LEETCODE_URL") or DEFAULT_LEETCODE_URL).rstrip("/"),
            github_api_url=(env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL).rstrip("/"),
            http_timeout=_env_float(env, "HTTP_TIMEOUT", 30.0),
            headless=getenv_bool(env, "HEADLESS", True),
            user_agent=env.get("USER_AGENT") or DEFAULT_USER_AGENT,
            editor_timeout_ms=_env_int(env, "EDITOR_TIMEOUT_MS", 60_000),
            submit_settle_ms=_env_int(env, "SUBMIT_SETTLE_MS", 5_000),
            dry_run=getenv_bool(env, "DRY_RUN", False),
        )


__all__ = ["Settings", "getenv_bool", "split_repo"]
