"""Value objects passed between the stages of a run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

DEFAULT_LEETCODE_URL = "https://leetcode.com"


@dataclass(frozen=True)
class ProblemRef:
    """A LeetCode problem identified by its title and URL slug."""

    title: str
    slug: str
    date: Optional[str] = None

    @property
    def search_name(self) -> str:
        """File name stem used to look the problem up in the solutions repo."""
        return self.slug.replace(" ", "-")

    def url(self, base_url: str = DEFAULT_LEETCODE_URL) -> str:
        return f"{base_url.rstrip('/')}/problems/{quote(self.slug, safe='')}/"


@dataclass(frozen=True)
class SourceLocation:
    """A solution file found by code search."""

    path: str
    html_url: str
    raw_url: str
