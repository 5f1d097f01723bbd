import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from leetomatic.errors import (
    InvalidSession,
    MarkerNotFoundError,
    NoMatchingSolution,
    RemoteQueryError,
    SubmissionError,
)
from leetomatic.problem import ProblemRef, SourceLocation
from leetomatic.runner import DailySolutionRunner, Stage

PROBLEM = ProblemRef(title="Two Sum", slug="two-sum")
LOCATION = SourceLocation(
    path="C++/two-sum.cpp",
    html_url="https://github.com/kamyu104/LeetCode-Solutions/blob/master/C++/two-sum.cpp",
    raw_url="https://raw.githubusercontent.com/kamyu104/LeetCode-Solutions/master/C++/two-sum.cpp",
)
RAW = "// Time: O(n)\nclass Solution {\npublic:\n    int f() { return 1; } // one\n};\n"
EXPECTED = "class Solution {\npublic:\n    int f() { return 1; } \n};"


def make_collaborators():
    session = MagicMock()
    session.check_session = AsyncMock(return_value="alice")
    problems = MagicMock()
    problems.fetch_daily_problem = AsyncMock(return_value=PROBLEM)
    problems.fetch_problem = AsyncMock(return_value=PROBLEM)
    solutions = MagicMock()
    solutions.search_solution = AsyncMock(return_value=LOCATION)
    solutions.fetch_raw = AsyncMock(return_value=RAW)
    submitter = MagicMock()
    submitter.submit = AsyncMock(return_value=None)
    return session, problems, solutions, submitter


def make_runner(session, problems, solutions, submitter, **kwargs):
    ticks = iter([10.0, 12.5])
    return DailySolutionRunner(
        session,
        problems,
        solutions,
        submitter,
        timer=lambda: next(ticks),
        logger=MagicMock(),
        **kwargs,
    )


def test_runner_submits_extracted_code():
    session, problems, solutions, submitter = make_collaborators()

    outcome = asyncio.run(make_runner(session, problems, solutions, submitter).run())

    assert outcome.ok
    assert outcome.exit_code == 0
    assert outcome.stage is Stage.SUBMIT
    assert outcome.code == EXPECTED
    assert outcome.elapsed_seconds == pytest.approx(2.5)
    solutions.fetch_raw.assert_awaited_once_with(LOCATION)
    submitter.submit.assert_awaited_once_with(PROBLEM, EXPECTED)


def test_runner_uses_slug_override():
    session, problems, solutions, submitter = make_collaborators()

    asyncio.run(make_runner(session, problems, solutions, submitter, problem_slug="two-sum").run())

    problems.fetch_problem.assert_awaited_once_with("two-sum")
    problems.fetch_daily_problem.assert_not_awaited()


def test_runner_dry_run_skips_submission_and_reports_code():
    session, problems, solutions, submitter = make_collaborators()
    shown = []

    outcome = asyncio.run(
        make_runner(
            session,
            problems,
            solutions,
            submitter,
            dry_run=True,
            on_extracted=lambda problem, code: shown.append((problem.slug, code)),
        ).run()
    )

    assert outcome.ok
    assert shown == [("two-sum", EXPECTED)]
    submitter.submit.assert_not_awaited()


@pytest.mark.parametrize(
    "attribute,owner_index,error,stage",
    [
        ("check_session", 0, InvalidSession("bad cookie"), Stage.VALIDATE_SESSION),
        ("fetch_daily_problem", 1, RemoteQueryError("No problem found."), Stage.FETCH_PROBLEM),
        ("search_solution", 2, NoMatchingSolution("nothing"), Stage.SEARCH_SOLUTION),
        ("fetch_raw", 2, RemoteQueryError("HTTP 404"), Stage.FETCH_RAW),
        ("submit", 3, SubmissionError("editor never loaded"), Stage.SUBMIT),
    ],
)
def test_runner_stops_at_failing_stage(attribute, owner_index, error, stage):
    collaborators = make_collaborators()
    getattr(collaborators[owner_index], attribute).side_effect = error
    logger = MagicMock()

    runner = DailySolutionRunner(*collaborators, logger=logger)
    outcome = asyncio.run(runner.run())

    assert not outcome.ok
    assert outcome.exit_code == 1
    assert outcome.stage is stage
    assert outcome.error is error
    logger.error.assert_called_once()


def test_runner_halts_before_search_when_session_invalid():
    session, problems, solutions, submitter = make_collaborators()
    session.check_session.side_effect = InvalidSession("Session is invalid.")

    asyncio.run(make_runner(session, problems, solutions, submitter).run())

    problems.fetch_daily_problem.assert_not_awaited()
    solutions.search_solution.assert_not_awaited()
    submitter.submit.assert_not_awaited()


def test_runner_reports_extraction_failure():
    session, problems, solutions, submitter = make_collaborators()
    solutions.fetch_raw.return_value = "struct Solution { };"

    outcome = asyncio.run(make_runner(session, problems, solutions, submitter).run())

    assert outcome.stage is Stage.EXTRACT
    assert isinstance(outcome.error, MarkerNotFoundError)
    submitter.submit.assert_not_awaited()


def test_runner_outer_catch_handles_unexpected_errors():
    session, problems, solutions, submitter = make_collaborators()
    solutions.search_solution.side_effect = KeyError("items")
    logger = MagicMock()

    outcome = asyncio.run(DailySolutionRunner(session, problems, solutions, submitter, logger=logger).run())

    assert outcome.exit_code == 1
    assert outcome.stage is Stage.SEARCH_SOLUTION
    logger.exception.assert_called_once()
