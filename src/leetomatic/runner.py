"""Workflow orchestration for the daily solution run."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Callable, Optional, Protocol

from .errors import LeetomaticError
from .extract import DEFAULT_START_MARKER, extract_solution
from .problem import ProblemRef, SourceLocation
from .utils.logger import get_logger, step, success


class SessionChecker(Protocol):
    async def check_session(self) -> str:
        """Return the user name behind the session, or raise InvalidSession."""


class ProblemSource(Protocol):
    async def fetch_daily_problem(self) -> ProblemRef:
        """Return today's problem."""

    async def fetch_problem(self, slug: str) -> ProblemRef:
        """Return the problem with the given slug."""


class SolutionSource(Protocol):
    async def search_solution(self, problem: ProblemRef) -> SourceLocation:
        """Find the reference solution file for ``problem``."""

    async def fetch_raw(self, location: SourceLocation) -> str:
        """Download the file at ``location``."""


class Submitter(Protocol):
    async def submit(self, problem: ProblemRef, code: str) -> None:
        """Paste and submit ``code``, or raise SubmissionError."""


class Stage(enum.Enum):
    VALIDATE_SESSION = "validate session"
    FETCH_PROBLEM = "fetch problem"
    SEARCH_SOLUTION = "search solution"
    FETCH_RAW = "fetch raw content"
    EXTRACT = "extract solution"
    SUBMIT = "submit"


@dataclass(frozen=True)
class RunOutcome:
    """Capture how far a run got and why it stopped."""

    stage: Stage
    error: Optional[BaseException] = None
    problem: Optional[ProblemRef] = None
    code: Optional[str] = None
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class DailySolutionRunner:
    """Coordinate the lookup, extraction and submission of one solution."""

    def __init__(
        self,
        session_checker: SessionChecker,
        problem_source: ProblemSource,
        solution_source: SolutionSource,
        submitter: Submitter,
        *,
        start_marker: str = DEFAULT_START_MARKER,
        problem_slug: Optional[str] = None,
        dry_run: bool = False,
        on_extracted: Optional[Callable[[ProblemRef, str], None]] = None,
        logger: Optional[logging.LoggerAdapter] = None,
        timer: Callable[[], float] = perf_counter,
    ) -> None:
        self._session_checker = session_checker
        self._problem_source = problem_source
        self._solution_source = solution_source
        self._submitter = submitter
        self._start_marker = start_marker
        self._problem_slug = problem_slug
        self._dry_run = dry_run
        self._on_extracted = on_extracted
        self._logger = logger or get_logger("runner")
        self._timer = timer

    async def run(self) -> RunOutcome:
        start = self._timer()
        stage = Stage.VALIDATE_SESSION
        problem: Optional[ProblemRef] = None
        code: Optional[str] = None

        def finish(error: Optional[BaseException] = None) -> RunOutcome:
            return RunOutcome(
                stage=stage,
                error=error,
                problem=problem,
                code=code,
                elapsed_seconds=self._timer() - start,
            )

        try:
            step("Checking session validity")
            user_name = await self._session_checker.check_session()
            success(f"Session valid for {user_name}")

            stage = Stage.FETCH_PROBLEM
            if self._problem_slug:
                problem = await self._problem_source.fetch_problem(self._problem_slug)
            else:
                problem = await self._problem_source.fetch_daily_problem()

            stage = Stage.SEARCH_SOLUTION
            step(f"Searching for solution to problem: {problem.title}")
            location = await self._solution_source.search_solution(problem)

            stage = Stage.FETCH_RAW
            raw = await self._solution_source.fetch_raw(location)

            stage = Stage.EXTRACT
            code = extract_solution(raw, self._start_marker)
            success(f"Extracted solution from {location.path}")
            if self._on_extracted is not None:
                self._on_extracted(problem, code)

            if self._dry_run:
                self._logger.info("Dry run: skipping browser submission")
                return finish()

            stage = Stage.SUBMIT
            await self._submitter.submit(problem, code)
        except LeetomaticError as exc:
            self._logger.error("Failed to %s: %s", stage.value, exc)
            return finish(exc)
        except Exception as exc:
            self._logger.exception("Unexpected error during %s: %s", stage.value, exc)
            return finish(exc)

        outcome = finish()
        self._logger.info(
            "Submitted %s successfully (elapsed %.2fs)",
            problem.slug,
            outcome.elapsed_seconds,
        )
        return outcome
