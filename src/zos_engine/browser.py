"""
Interactive browser view of a diff.

Uses Playwright to open a headed Chromium page with a side-by-side diff.
"""

import difflib
import logging

from playwright.async_api import Error as PlaywrightError

from .errors import ZosClientError

logger = logging.getLogger(__name__)


class BrowserLaunchError(ZosClientError):
    """Exception raised when the browser view cannot be opened."""

    pass


def build_html_diff(a: str, b: str, from_label: str = "a", to_label: str = "b") -> str:
    """Build a standalone side-by-side HTML page showing the diff of a and b."""
    return difflib.HtmlDiff(wrapcolumn=100).make_file(
        a.split("\n"), b.split("\n"), fromdesc=from_label, todesc=to_label
    )


class BrowserDiffViewer:
    """
    Opens a diff in a visible browser window.

    The call returns once the user closes the page.
    """

    def __init__(self, headless: bool = False):
        """
        Initialize the viewer.

        Args:
            headless: Run without a visible window (only useful for automation)
        """
        self.headless = headless

    async def open(self, a: str, b: str, from_label: str = "a", to_label: str = "b") -> None:
        """
        Show the diff of a and b in the browser.

        Args:
            a: Original text
            b: Changed text
            from_label: Caption of the left column
            to_label: Caption of the right column

        Raises:
            BrowserLaunchError: If the browser cannot be started
        """
        from playwright.async_api import async_playwright

        html = build_html_diff(a, b, from_label, to_label)

        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=self.headless)
                try:
                    page = await browser.new_page()
                    await page.set_content(html)
                    logger.info("Diff opened in browser, waiting for the page to close")
                    if not self.headless:
                        await page.wait_for_event("close", timeout=0)
                finally:
                    await browser.close()
        except PlaywrightError as e:
            raise BrowserLaunchError(f"Browser initialization error: {str(e)}")
