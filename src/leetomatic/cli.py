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
src/leetomatic/cli.py
Command line entry point: solve and submit today's LeetCode problem.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import os
from typing import Optional, Sequence

import aiohttp
from dotenv import load_dotenv

from .config import Settings, split_repo
from .core.github import GitHubClient
from .core.leetcode import LeetCodeClient
from .core.submit import PlaywrightSubmitter
from .errors import MissingCredential
from .runner import DailySolutionRunner, RunOutcome
from .utils.console import render_solution
from .utils.logger import configure_logging, logger, set_log_profile, step, success


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="leetomatic",
        description="Find a reference solution for LeetCode's daily problem and submit it",
    )
    parser.add_argument("--dry-run", action="store_true", help="Extract and print the solution, skip the browser")
    parser.add_argument("--headed", action="store_true", help="Run with browser UI (sets HEADLESS=0)")
    parser.add_argument("--slug", help="Solve this problem slug instead of the daily problem")
    parser.add_argument("--repo", help="Solutions repository as OWNER/NAME")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging")
    return parser


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Layer command line flags over the environment settings."""
    overrides = {}
    if args.dry_run:
        overrides["dry_run"] = True
    if args.headed:
        overrides["headless"] = False
    if args.slug:
        overrides["problem_slug"] = args.slug.strip()
    if args.repo:
        overrides["repo_owner"], overrides["repo_name"] = split_repo(args.repo)
    return dataclasses.replace(settings, **overrides) if overrides else settings


async def run_daily(settings: Settings) -> RunOutcome:
    """Open the HTTP session, wire the collaborators and run once."""
    timeout = aiohttp.ClientTimeout(total=settings.http_timeout)
    async with aiohttp.ClientSession(timeout=timeout) as http:
        leetcode = LeetCodeClient(http, settings)
        runner = DailySolutionRunner(
            session_checker=leetcode,
            problem_source=leetcode,
            solution_source=GitHubClient(http, settings),
            submitter=PlaywrightSubmitter(settings),
            start_marker=settings.start_marker,
            problem_slug=settings.problem_slug,
            dry_run=settings.dry_run,
            on_extracted=lambda problem, code: render_solution(
                code, f"{problem.title} ({settings.file_extension})", settings.file_extension
            ),
        )
        return await runner.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(os.getenv("ENV_FILE", ".env"), override=False)
    configure_logging()
    args = build_parser().parse_args(argv)
    if args.debug:
        set_log_profile("debug")

    try:
        settings = apply_args(Settings.from_env(), args)
    except MissingCredential as exc:
        logger.error(str(exc))
        return 1
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    step(f"Solutions repository: {settings.repo}")
    outcome = asyncio.run(run_daily(settings))
    if outcome.ok:
        success("Workflow completed")
    else:
        logger.error("Run stopped at stage '%s'", outcome.stage.value)
    return outcome.exit_code
