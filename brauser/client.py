"""HTTP client that fetches pages and retries while they are still loading."""

from __future__ import annotations

import logging
import time
from typing import Callable

import requests

from brauser.content_detector import ContentAnalysis, ContentDetector
from brauser.site_handlers import SiteHandlerManager

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.114 Safari/537.36"
)

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


class Client:
    """Fetches web pages, consulting site handlers and a content detector.

    Timeouts and wait times are in seconds.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_retries: int = 3,
        max_wait_time: float = 10.0,
        content_detector: ContentDetector | None = None,
        site_handlers: SiteHandlerManager | None = None,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.max_retries = max_retries
        self.max_wait_time = max_wait_time
        self.content_detector = content_detector or ContentDetector()
        self.site_handlers = site_handlers or SiteHandlerManager()
        self._session = session or requests.Session()
        self._sleep = sleep

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self._session.close()

    def fetch_page(self, url: str) -> str:
        """Fetch a page, retrying while its content looks incomplete."""
        return self.fetch_page_with_retry(url, True)

    def fetch_page_with_retry(self, url: str, enable_retry: bool) -> str:
        """Fetch a page; with ``enable_retry`` re-fetch while it seems unloaded.

        Network failures propagate as ``requests.RequestException``.
        """
        handler = self.site_handlers.get_handler(url)
        content = ""

        for attempt in range(self.max_retries + 1):
            content = self._fetch_once(url)
            if handler is not None:
                content = handler.process_content(content, url)

            if not enable_retry:
                return content

            analysis = self.content_detector.analyze_content(content)
            if attempt == 0:
                self._log_analysis(url, analysis)

            site_needs_retry = handler is not None and handler.requires_retry(content)

            if (analysis.is_loaded and not site_needs_retry) or attempt == self.max_retries:
                return content
            if not (analysis.requires_retry or site_needs_retry):
                return content

            wait = analysis.suggested_wait_time
            if handler is not None:
                wait = max(wait, handler.wait_time)
            wait = min(wait, self.max_wait_time)

            logger.info(
                "Content not fully loaded, waiting %ss before retry %d/%d",
                wait,
                attempt + 1,
                self.max_retries,
            )
            self._sleep(wait)

        return content

    def fetch_page_with_enhanced_detection(self, url: str) -> tuple[str, ContentAnalysis]:
        """Fetch with retries and return the content with its final analysis."""
        content = self.fetch_page_with_retry(url, True)
        return content, self.content_detector.analyze_content(content)

    def _fetch_once(self, url: str) -> str:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": _ACCEPT,
            "Accept-Language": "en-US,en;q=0.5",
            "Accept-Encoding": "gzip, deflate",
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
        }
        response = self._session.get(url, headers=headers, timeout=self.timeout)
        try:
            return response.content.decode("utf-8", errors="replace")
        finally:
            response.close()

    @staticmethod
    def _log_analysis(url: str, analysis: ContentAnalysis) -> None:
        logger.info("Content Analysis for %s:", url)
        logger.info("  - Content Length: %d", analysis.content_length)
        logger.info("  - Is Loaded: %s", analysis.is_loaded)
        logger.info("  - Is Loading Page: %s", analysis.is_loading_page)
        logger.info("  - Is Cookie Banner: %s", analysis.is_cookie_banner)
        logger.info("  - Is AdBlock Banner: %s", analysis.is_ad_block_banner)
        logger.info("  - Is Interstitial: %s", analysis.is_interstitial)
        logger.info("  - Requires Retry: %s", analysis.requires_retry)
        if analysis.loading_indicators:
            logger.info("  - Loading Indicators: %s", analysis.loading_indicators)
        if analysis.suggested_wait_time > 0:
            logger.info("  - Suggested Wait Time: %ss", analysis.suggested_wait_time)