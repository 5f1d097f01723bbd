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
src/leetomatic/core/submit.py
Browser-driven submission of a solution through LeetCode's editor.
"""

from __future__ import annotations

import random
from typing import Any, Callable, Optional
from urllib.parse import urlparse

from playwright.async_api import Browser, Page, async_playwright

from ..config import Settings
from ..errors import SubmissionError
from ..problem import ProblemRef
from ..utils.logger import debug_detail, logger, progress, step, success
from ..utils.retry import retry

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
    "--disable-blink-features=AutomationControlled",
]

EDITOR_SELECTOR = ".monaco-editor"
SUBMIT_BUTTON_SELECTOR = '[data-e2e-locator="console-submit-button"]'
RESULT_SELECTOR = '[data-e2e-locator="submission-result"]'

SET_EDITOR_VALUE_JS = """
(code) => {
    const model = monaco.editor.getModels()[0];
    model.setValue(code);
}
"""


def validate_problem_url(url: str, leetcode_url: str) -> None:
    """Refuse anything but an https URL on the configured LeetCode host."""
    expected = urlparse(leetcode_url)
    actual = urlparse(url or "")
    if actual.scheme != "https" or actual.netloc != expected.netloc:
        raise SubmissionError(f"Invalid LeetCode URL: {url}")


def human_delay_ms(rng: Optional[random.Random] = None) -> int:
    """Random pause between 1 and 4 seconds, in milliseconds."""
    return (rng or random).randint(1000, 3999)


class PlaywrightSubmitter:
    """Paste code into the problem's Monaco editor and press Submit."""

    def __init__(
        self,
        settings: Settings,
        *,
        playwright_factory: Callable[[], Any] = async_playwright,
        rng: Optional[random.Random] = None,
        retry_delay: float = 5.0,
    ) -> None:
        self._settings = settings
        self._playwright_factory = playwright_factory
        self._rng = rng
        self._retry_delay = retry_delay

    async def submit(self, problem: ProblemRef, code: str) -> None:
        """Submit ``code`` for ``problem``; the browser is always closed afterwards.

        Raises:
            SubmissionError: anything went wrong while driving the browser.
        """
        settings = self._settings
        url = problem.url(settings.leetcode_url)
        validate_problem_url(url, settings.leetcode_url)
        step("Submitting code to LeetCode…")

        async with self._playwright_factory() as p:
            browser: Optional[Browser] = None
            page: Optional[Page] = None
            try:
                debug_detail(f"Launching Chromium (headless={settings.headless})")
                browser = await p.chromium.launch(headless=settings.headless, args=CHROMIUM_ARGS)
                context = await browser.new_context(user_agent=settings.user_agent)
                await context.add_cookies([
                    {
                        "name": "LEETCODE_SESSION",
                        "value": settings.session_cookie,
                        "domain": urlparse(settings.leetcode_url).hostname or "leetcode.com",
                        "path": "/",
                    }
                ])
                page = await context.new_page()
                await self._perform_submission(page, url, code)
            except SubmissionError:
                raise
            except Exception as exc:
                if page is not None:
                    debug_detail(f"Page URL at failure: {page.url}")
                raise SubmissionError(f"Error submitting code to LeetCode: {exc}") from exc
            finally:
                if browser is not None:
                    await browser.close()

    async def _perform_submission(self, page: Page, url: str, code: str) -> None:
        settings = self._settings
        progress(f"Navigating to: {url}")
        await page.goto(url, wait_until="networkidle")

        if "accounts" in page.url:
            logger.warning("Redirected to login page. Check your session cookie.")
            raise SubmissionError("Session cookie is invalid or expired.")

        async def wait_for_editor() -> None:
            progress("Waiting for editor to load…")
            await page.wait_for_selector(EDITOR_SELECTOR, timeout=settings.editor_timeout_ms)

        await retry(wait_for_editor, delay=self._retry_delay)
        success("Editor loaded")

        await page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")

        delay = human_delay_ms(self._rng)
        await page.wait_for_timeout(delay)
        await page.evaluate(SET_EDITOR_VALUE_JS, code)
        progress("Code injected into editor")
        await page.wait_for_timeout(delay)

        progress("Clicking the submit button…")
        await page.click(SUBMIT_BUTTON_SELECTOR)
        await page.wait_for_timeout(settings.submit_settle_ms)

        verdict = await self._read_verdict(page)
        if verdict:
            success(f"Code submitted: {verdict}")
        else:
            success("Code submitted")

    async def _read_verdict(self, page: Page) -> Optional[str]:
        try:
            text = await page.text_content(RESULT_SELECTOR, timeout=1_000)
        except Exception as exc:
            debug_detail(f"No submission verdict visible: {exc}")
            return None
        return text.strip() if text else None


__all__ = ["PlaywrightSubmitter", "validate_problem_url", "human_delay_ms"]
