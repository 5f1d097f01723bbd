"""Terminal rendering of the extracted solution."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

__all__ = ["render_solution", "lexer_for_extension"]

_LEXERS = {
    "cpp": "cpp",
    "cc": "cpp",
    "py": "python",
    "java": "java",
    "js": "javascript",
    "ts": "typescript",
    "go": "go",
    "rs": "rust",
    "kt": "kotlin",
    "cs": "csharp",
}


def lexer_for_extension(extension: str) -> str:
    ext = extension.lower().lstrip(".")
    return _LEXERS.get(ext, ext or "text")


def render_solution(code: str, title: str, extension: str = "cpp", console: Optional[Console] = None) -> None:
    """Print ``code`` in a highlighted panel headed by ``title``."""
    console = console or Console()
    syntax = Syntax(code, lexer_for_extension(extension), line_numbers=False, word_wrap=True)
    console.print(Panel(syntax, title=title, border_style="blue", expand=False))
