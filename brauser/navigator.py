"""Numbered links, browsing history and the interactive command prompt."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import TextIO
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

MAX_HISTORY = 50
MAX_LINK_NUMBER = 50

_WHITESPACE = re.compile(r"[\t\n\f\r ]+")
_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass
class Link:
    """A link the user can follow by its number."""

    number: int
    text: str
    url: str
    kind: str  # "nav", "content" or "story"


@dataclass
class HistoryEntry:
    """A visited page together with the HTML it was shown with."""

    url: str
    title: str
    content: str


def _clean_link_text(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _resolve(href: str, base_url: str | None) -> str:
    if base_url is None:
        return href
    try:
        return urljoin(base_url, href)
    except ValueError:
        return href


class Navigator:
    """Keeps history and links and talks to the user through text streams."""

    def __init__(self, input_stream: TextIO | None = None, output: TextIO | None = None) -> None:
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output if output is not None else sys.stdout
        self.history: list[HistoryEntry] = []
        self.links: list[Link] = []
        self._index = -1

    def _print(self, *args: object, end: str = "\n") -> None:
        print(*args, end=end, file=self._output)

    # History

    def add_to_history(self, url: str, title: str, content: str) -> None:
        """Record a page, dropping any forward history."""
        del self.history[self._index + 1:]
        self.history.append(HistoryEntry(url, title, content))
        self._index = len(self.history) - 1
        if len(self.history) > MAX_HISTORY:
            del self.history[0]
            self._index -= 1

    def can_go_back(self) -> bool:
        return self._index > 0

    def can_go_forward(self) -> bool:
        return self._index < len(self.history) - 1

    def go_back(self) -> HistoryEntry | None:
        """Step back in history; None if there is nothing before."""
        if not self.can_go_back():
            return None
        self._index -= 1
        return self.history[self._index]

    def go_forward(self) -> HistoryEntry | None:
        """Step forward in history; None if there is nothing after."""
        if not self.can_go_forward():
            return None
        self._index += 1
        return self.history[self._index]

    def current_page(self) -> HistoryEntry | None:
        if 0 <= self._index < len(self.history):
            return self.history[self._index]
        return None

    # Links

    def extract_links(self, doc: BeautifulSoup, base_url: str) -> None:
        """Collect navigation, content and story links and number them."""
        self.links = []
        try:
            urlparse(base_url)
            base: str | None = base_url
        except ValueError:
            base = None

        def add(text: str, href: str, kind: str) -> None:
            self.links.append(Link(len(self.links) + 1, text, _resolve(href, base), kind))

        for anchor in doc.select("nav a, .nav a, .menu a"):
            text = _clean_link_text(anchor.get_text())
            href = anchor.get("href")
            if href is not None and text:
                add(text, href, "nav")

        for anchor in doc.find_all("a"):
            text = _clean_link_text(anchor.get_text())
            href = anchor.get("href")
            if href is None or len(text) <= 3 or len(self.links) + 1 > MAX_LINK_NUMBER:
                continue
            # Compared against resolved URLs, so only absolute hrefs dedupe.
            if any(link.url == href for link in self.links):
                continue
            add(text, href, "content")

        for story in doc.select(".athing"):
            anchors = story.select(".titleline > a")
            title = _clean_link_text("".join(a.get_text() for a in anchors))
            href = anchors[0].get("href", "") if anchors else ""
            if title and href and len(self.links) + 1 <= MAX_LINK_NUMBER:
                add(title, href, "story")

    def get_link_by_number(self, number: int) -> Link | None:
        return next((link for link in self.links if link.number == number), None)

    def display_links(self) -> None:
        """Print the numbered links grouped by kind."""
        if not self.links:
            self._print("\n❌ No clickable links found on this page.")
            return

        self._print(f"\n🔗 CLICKABLE LINKS ({len(self.links)} total):")
        self._print("-" * 50)

        nav = [link for link in self.links if link.kind == "nav"]
        stories = [link for link in self.links if link.kind == "story"]
        content = [link for link in self.links if link.kind not in ("nav", "story")]

        for heading, group in (
            ("\n🧭 Navigation:", nav),
            ("\n📰 Stories:", stories),
            ("\n📄 Content Links:", content),
        ):
            if group:
                self._print(heading)
                for link in group:
                    self._print(f"  [{link.number}] {link.text}")

    # Interaction

    def show_navigation_menu(self) -> None:
        self._print("\n" + "=" * 60)
        self._print("           BRAUSER NAVIGATION MENU")
        self._print("=" * 60)

        current = self.current_page()
        if current is not None:
            self._print(f"📍 Current: {current.url}")
            if current.title:
                self._print(f"📄 Title: {current.title}")

        self._print("\n🎯 Navigation Options:")
        self._print("  • Type a number [1-50] to follow a link")
        self._print("  • Type 'b' or 'back' to go back")
        self._print("  • Type 'f' or 'forward' to go forward")
        self._print("  • Type 'h' or 'history' to view history")
        self._print("  • Type 'l' or 'links' to show links again")
        self._print("  • Type 'u' or 'url' to enter a new URL")
        self._print("  • Type 'r' or 'refresh' to reload current page")
        self._print("  • Type 'q' or 'quit' to exit")

        if self.can_go_back():
            self._print("  ⬅️  Back available")
        if self.can_go_forward():
            self._print("  ➡️  Forward available")
        self._print("-" * 60)

    def _read_line(self) -> str:
        line = self._input.readline()
        if not line.endswith("\n"):
            raise EOFError("end of input")
        return line.strip()

    def get_user_input(self) -> str:
        """Prompt for a command; raises EOFError when input ends."""
        self._print("\n🌐 brauser> ", end="")
        self._output.flush()
        return self._read_line()

    def process_user_input(self, text: str) -> tuple[str, str | None]:
        """Map a command to an (action, data) pair.

        Actions are navigate, back, forward, history, links, url, refresh,
        quit and error; navigate carries a URL and error a message.
        """
        command = text.strip().lower()

        if _INTEGER.fullmatch(command):
            number = int(command)
            link = self.get_link_by_number(number)
            if link is not None:
                return "navigate", link.url
            return "error", (
                f"Link number {number} not found. "
                f"Please choose a number between 1 and {len(self.links)}."
            )

        if command in ("b", "back"):
            if self.can_go_back():
                return "back", None
            return "error", "No previous page in history."
        if command in ("f", "forward"):
            if self.can_go_forward():
                return "forward", None
            return "error", "No next page in history."

        simple = {
            "h": "history", "history": "history",
            "l": "links", "links": "links",
            "u": "url", "url": "url",
            "r": "refresh", "refresh": "refresh",
            "q": "quit", "quit": "quit",
        }
        if command in simple:
            return simple[command], None
        return "error", f"Unknown command: {command}. Type 'h' for help."

    def show_history(self) -> None:
        if not self.history:
            self._print("\n📚 History is empty.")
            return

        self._print(f"\n📚 BROWSER HISTORY ({len(self.history)} pages):")
        self._print("-" * 50)
        for position, entry in enumerate(self.history):
            marker = "👉" if position == self._index else "  "
            title = entry.title or "(No title)"
            self._print(f"{marker} {position + 1}. {title}")
            self._print(f"     {entry.url}")

    def prompt_for_url(self) -> str:
        """Ask for a URL, adding https:// when no scheme is given.

        Raises ValueError for an empty answer and EOFError when input ends.
        """
        self._print("\n🌐 Enter URL: ", end="")
        self._output.flush()
        url = self._read_line()
        if not url:
            raise ValueError("empty URL")
        if not url.startswith(("http://", "https://")):
            url = "https://" + url
        return url