"""Site-specific content processing and retry hints."""

from __future__ import annotations

from abc import ABC, abstractmethod
from urllib.parse import urlparse

from bs4 import BeautifulSoup


def _soup(content: str) -> BeautifulSoup:
    return BeautifulSoup(content, "html.parser")


def _text(soup: BeautifulSoup, selector: str) -> str:
    return "".join(el.get_text() for el in soup.select(selector))


def _first_text(soup: BeautifulSoup, selector: str) -> str:
    element = soup.select_one(selector)
    return element.get_text() if element is not None else ""


class SiteHandler(ABC):
    """Custom handling for a family of sites."""

    wait_time: float = 0.0

    @abstractmethod
    def can_handle(self, url: str) -> bool:
        """Whether this handler applies to the URL."""

    @abstractmethod
    def process_content(self, content: str, base_url: str) -> str:
        """Return the page content, possibly replaced by a summary."""

    @abstractmethod
    def requires_retry(self, content: str) -> bool:
        """Whether the content looks incomplete for this site."""


class CodePenHandler(SiteHandler):
    """Extracts pen details and code from CodePen pages."""

    wait_time = 3.0

    def can_handle(self, url: str) -> bool:
        return "codepen.io" in url

    def process_content(self, content: str, base_url: str) -> str:
        soup = _soup(content)
        title = _first_text(soup, "h1.pen-title, .pen-title h1, [data-slug-hash] h1")
        description = _first_text(soup, ".pen-description, .pen-details .description")
        author = _first_text(soup, ".pen-author, .profile-name")
        html_code = _text(soup, "#html-editor .ace_content, .code-wrap.html-wrap pre")
        css_code = _text(soup, "#css-editor .ace_content, .code-wrap.css-wrap pre")
        js_code = _text(soup, "#js-editor .ace_content, .code-wrap.js-wrap pre")

        if not (title or html_code or css_code or js_code):
            return content

        parts = ["=== CodePen ===\n"]
        if title:
            parts.append(f"Title: {title.strip()}\n")
        if author:
            parts.append(f"Author: {author.strip()}\n")
        if description:
            parts.append(f"Description: {description.strip()}\n")
        for heading, code in (
            ("HTML Code", html_code),
            ("CSS Code", css_code),
            ("JavaScript Code", js_code),
        ):
            if code:
                parts.append(f"\n--- {heading} ---\n{code.strip()}\n")
        return "".join(parts)

    def requires_retry(self, content: str) -> bool:
        return "pen-title" not in content and "code-wrap" not in content


class DerStandardHandler(SiteHandler):
    """Handles adblock banners and articles on derstandard.at."""

    wait_time = 2.0

    def can_handle(self, url: str) -> bool:
        return "derstandard.at" in url

    def process_content(self, content: str, base_url: str) -> str:
        soup = _soup(content)
        banner = _text(soup, ".adblock-banner, #adblock-message, .adblocker-message")
        if banner:
            return (
                "=== DerStandard.at ===\n"
                f"AdBlock Banner Detected: {banner.strip()}\n"
                "Note: This site requires disabling ad blockers to view full content.\n"
            )

        title = _first_text(soup, "h1, .article-title, .headline")
        if not title:
            return content
        body = _text(soup, ".article-content, .article-body, .content")
        return f"=== DerStandard.at ===\nTitle: {title.strip()}\n\n{body.strip()}"

    def requires_retry(self, content: str) -> bool:
        return "adblock" in content.lower() and len(content) < 1000


SPA_HOST_INDICATORS = ("app.", "dashboard.", "admin.", "portal.")


class GenericSPAHandler(SiteHandler):
    """Recognises single-page applications by host name."""

    wait_time = 5.0

    def can_handle(self, url: str) -> bool:
        try:
            netloc = urlparse(url).netloc
        except ValueError:
            return False
        host = netloc.rpartition("@")[2]
        return any(indicator in host for indicator in SPA_HOST_INDICATORS)

    def process_content(self, content: str, base_url: str) -> str:
        soup = _soup(content)
        if soup.select_one(".loading, .spinner, .loader, [data-loading], #loading"):
            return (
                "=== Single Page Application ===\n"
                "Content is still loading. This appears to be a dynamic web application.\n"
                "Note: Terminal browsers have limited support for dynamic content.\n"
            )

        root = soup.body if soup.body is not None else soup
        if len(root.get_text().strip()) < 200:
            return (
                "=== Single Page Application ===\n"
                "This appears to be a single-page application with minimal initial content.\n"
                "The main content is likely loaded via JavaScript after page load.\n"
            )
        return content

    def requires_retry(self, content: str) -> bool:
        lower = content.lower()
        return "loading" in lower or "spinner" in lower or len(content.strip()) < 500


class SiteHandlerManager:
    """Ordered registry of site handlers; the first match wins."""

    def __init__(self) -> None:
        self.handlers: list[SiteHandler] = [
            CodePenHandler(),
            DerStandardHandler(),
            GenericSPAHandler(),
        ]

    def register_handler(self, handler: SiteHandler) -> None:
        """Append a handler after those already registered."""
        self.handlers.append(handler)

    def get_handler(self, url: str) -> SiteHandler | None:
        """Return the first handler that accepts the URL, or None."""
        return next((h for h in self.handlers if h.can_handle(url)), None)