"""Submit a reference solution for LeetCode's daily problem."""

from .extract import extract_block, extract_solution, normalize_code
from .problem import ProblemRef, SourceLocation
from .runner import DailySolutionRunner, RunOutcome, Stage

__all__ = [
    "DailySolutionRunner",
    "ProblemRef",
    "RunOutcome",
    "SourceLocation",
    "Stage",
    "extract_block",
    "extract_solution",
    "normalize_code",
]
