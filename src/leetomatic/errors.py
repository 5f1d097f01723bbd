"""Exception hierarchy shared by every stage of a Leetomatic run."""

from __future__ import annotations


class LeetomaticError(RuntimeError):
    """Base class for failures the runner knows how to report."""


class MissingCredential(LeetomaticError):
    """A required credential was not provided in the environment."""


class InvalidSession(LeetomaticError):
    """LeetCode did not recognise the session cookie."""


class RemoteQueryError(LeetomaticError):
    """A remote API call failed, returned an error payload or no data."""


class NoMatchingSolution(LeetomaticError):
    """The solutions repository has no file for the problem."""


class ExtractionError(LeetomaticError):
    """The solution block could not be cut out of the source file."""


class MarkerNotFoundError(ExtractionError):
    pass


class UnbalancedBracesError(ExtractionError):
    pass


class MissingTerminatorError(ExtractionError):
    pass


class EmptySolutionError(ExtractionError):
    """Nothing but comments and whitespace was left after normalization."""


class SubmissionError(LeetomaticError):
    """The browser could not paste or submit the solution."""


__all__ = [
    "LeetomaticError",
    "MissingCredential",
    "InvalidSession",
    "RemoteQueryError",
    "NoMatchingSolution",
    "ExtractionError",
    "MarkerNotFoundError",
    "UnbalancedBracesError",
    "MissingTerminatorError",
    "EmptySolutionError",
    "SubmissionError",
]
