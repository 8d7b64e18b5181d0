"""Heuristics that decide whether a fetched page holds its real content."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

DEFAULT_MIN_CONTENT_LENGTH = 500

DEFAULT_LOADING_INDICATORS = (
    "just a moment",
    "loading",
    "please wait",
    "redirecting",
    "checking your browser",
    "verifying you are human",
    "one moment please",
    "loading content",
    "initializing",
    "preparing",
)

DEFAULT_LOADING_PATTERNS = (
    r"loading[\s\.]{0,3}",
    r"please\s+wait",
    r"just\s+a\s+moment",
    r"checking\s+your\s+browser",
    r"verifying\s+you\s+are\s+human",
    r"cloudflare",
    r"ddos\s+protection",
    r"security\s+check",
)

COOKIE_PATTERNS = (
    "accept cookies",
    "cookie policy",
    "we use cookies",
    "cookies help us",
    "cookie consent",
    "privacy policy",
    "accept all",
    "manage cookies",
)

COOKIE_SELECTORS = (
    "#cookie-banner",
    ".cookie-banner",
    "#cookie-consent",
    ".cookie-consent",
    "#gdpr-banner",
    ".gdpr-banner",
    "[data-cookie]",
)

ADBLOCK_PATTERNS = (
    "disable adblock",
    "turn off adblock",
    "ad blocker detected",
    "please disable",
    "whitelist this site",
    "support us by disabling",
    "ads help us",
)


@dataclass
class ContentAnalysis:
    """Outcome of analysing one page; wait times are in seconds."""

    is_loaded: bool = False
    is_loading_page: bool = False
    is_cookie_banner: bool = False
    is_ad_block_banner: bool = False
    is_interstitial: bool = False
    content_length: int = 0
    loading_indicators: list[str] = field(default_factory=list)
    suggested_wait_time: float = 0.0
    requires_retry: bool = False


def _visible_text(soup: BeautifulSoup) -> str:
    for tag in soup.find_all(["script", "style", "noscript"]):
        tag.decompose()
    body = soup.body
    if body is None:
        for tag in soup.find_all(["head", "title", "meta", "link"]):
            tag.decompose()
        return soup.get_text().strip()
    return body.get_text().strip()


class ContentDetector:
    """Detects loading screens, consent banners and other interstitials."""

    def __init__(self, min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH) -> None:
        self.loading_indicators: list[str] = list(DEFAULT_LOADING_INDICATORS)
        self.loading_patterns: list[re.Pattern[str]] = [
            re.compile(pattern, re.IGNORECASE) for pattern in DEFAULT_LOADING_PATTERNS
        ]
        self.min_content_length = min_content_length

    def analyze_content(self, html_content: str) -> ContentAnalysis:
        """Analyse an HTML document and report its loading state."""
        soup = BeautifulSoup(html_content, "html.parser")
        visible = _visible_text(soup)

        analysis = ContentAnalysis(content_length=len(visible))
        analysis.loading_indicators = self._find_loading_indicators(visible)
        analysis.is_loading_page = bool(analysis.loading_indicators)
        analysis.is_cookie_banner = self._detect_cookie_banner(soup, visible)
        analysis.is_ad_block_banner = self._detect_adblock_banner(visible)
        analysis.is_interstitial = (
            analysis.is_cookie_banner
            or analysis.is_ad_block_banner
            or analysis.is_loading_page
        )
        analysis.is_loaded = self._is_content_loaded(analysis)
        # Evaluated while requires_retry is still unset, so it yields 0 here.
        analysis.suggested_wait_time = self._wait_time(analysis)
        analysis.requires_retry = not analysis.is_loaded and (
            analysis.is_loading_page
            or analysis.content_length < self.min_content_length
        )
        return analysis

    def add_loading_indicator(self, indicator: str) -> None:
        """Add a plain-text loading indicator, matched case-insensitively."""
        self.loading_indicators.append(indicator.lower())

    def add_loading_pattern(self, pattern: str) -> None:
        """Add a regular expression; raises re.error if it does not compile."""
        self.loading_patterns.append(re.compile(pattern))

    def _find_loading_indicators(self, text: str) -> list[str]:
        lower = text.lower()
        found = [ind for ind in self.loading_indicators if ind in lower]
        for pattern in self.loading_patterns:
            match = pattern.search(text)
            if match:
                found.append(match.group(0))
        return found

    @staticmethod
    def _detect_cookie_banner(soup: BeautifulSoup, text: str) -> bool:
        lower = text.lower()
        if any(pattern in lower for pattern in COOKIE_PATTERNS):
            return True
        return any(soup.select_one(selector) is not None for selector in COOKIE_SELECTORS)

    @staticmethod
    def _detect_adblock_banner(text: str) -> bool:
        lower = text.lower()
        return any(pattern in lower for pattern in ADBLOCK_PATTERNS)

    def _is_content_loaded(self, analysis: ContentAnalysis) -> bool:
        if analysis.is_loading_page:
            return False
        if analysis.content_length < self.min_content_length:
            return False
        return not analysis.is_interstitial

    @staticmethod
    def _wait_time(analysis: ContentAnalysis) -> float:
        if not analysis.requires_retry:
            return 0.0
        wait = 2.0
        if analysis.is_loading_page:
            wait = 3.0
        if analysis.is_cookie_banner or analysis.is_ad_block_banner:
            wait = 1.0
        if analysis.content_length < 100:
            wait = 5.0
        return wait