"""Cut the solution class out of a reference source file.

The scanner is purely lexical: it counts ``{`` and ``}`` characters and knows
nothing about string or character literals. A literal holding an unbalanced
brace will throw the depth count off. The same goes for the comment stripper,
which treats ``//`` inside a string as the start of a comment.
"""

from __future__ import annotations

import re

from .errors import (
    EmptySolutionError,
    MarkerNotFoundError,
    MissingTerminatorError,
    UnbalancedBracesError,
)

DEFAULT_START_MARKER = "class Solution"
DEFAULT_TERMINATOR = ";"

_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_BLANK_LINE = re.compile(r"^\s*[\r\n]", re.MULTILINE)


def _find_body_end(text: str, start: int) -> int:
    depth = 0
    opened = False
    for index in range(start, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
            opened = True
        elif char == "}":
            depth -= 1
            if opened and depth == 0:
                return index
    raise UnbalancedBracesError("Unbalanced braces in the solution block.")


def _find_terminator(text: str, body_end: int, terminator: str) -> int:
    for index in range(body_end + 1, len(text)):
        char = text[index]
        if char == terminator:
            return index
        if not char.isspace():
            raise MissingTerminatorError(
                f"Expected '{terminator}' after the closing brace, found {char!r}."
            )
    raise MissingTerminatorError(f"'{terminator}' not found after the closing brace.")


def extract_block(
    text: str,
    start_marker: str = DEFAULT_START_MARKER,
    terminator: str = DEFAULT_TERMINATOR,
) -> str:
    """Return the first ``<marker> { ... }<terminator>`` construct in ``text``.

    Only the first occurrence of ``start_marker`` is considered. The returned
    text runs from the marker through the terminator and is stripped.

    Raises:
        MarkerNotFoundError: ``start_marker`` does not occur in ``text``.
        UnbalancedBracesError: the text ends before the braces balance.
        MissingTerminatorError: the closing brace is not followed by the
            terminator (whitespace aside).
    """
    start = text.find(start_marker)
    if start == -1:
        raise MarkerNotFoundError(f"'{start_marker}' not found in the file.")
    body_end = _find_body_end(text, start)
    end = _find_terminator(text, body_end, terminator)
    return text[start:end + 1].strip()


def normalize_code(code: str) -> str:
    """Strip comments and blank lines from ``code``."""
    code = _LINE_COMMENT.sub("", code)
    code = _BLOCK_COMMENT.sub("", code)
    code = _BLANK_LINE.sub("", code)
    return code.strip()


def extract_solution(
    text: str,
    start_marker: str = DEFAULT_START_MARKER,
    terminator: str = DEFAULT_TERMINATOR,
) -> str:
    """Extract and normalize the solution block, refusing an empty result."""
    code = normalize_code(extract_block(text, start_marker, terminator))
    if not code:
        raise EmptySolutionError("Solution block is empty after removing comments.")
    return code


__all__ = [
    "DEFAULT_START_MARKER",
    "DEFAULT_TERMINATOR",
    "extract_block",
    "normalize_code",
    "extract_solution",
]
