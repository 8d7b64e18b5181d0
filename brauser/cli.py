"""Interactive terminal browsing session."""

from __future__ import annotations

import logging
import sys

import requests

from brauser.client import Client
from brauser.content_detector import ContentAnalysis
from brauser.html_renderer import HTMLRenderer
from brauser.navigator import HistoryEntry, Navigator


def format_content_analysis(analysis: ContentAnalysis | None) -> str:
    """Describe a content analysis for the user; empty for None."""
    if analysis is None:
        return ""

    lines = ["\n=== Content Analysis ==="]
    if analysis.is_loaded:
        lines.append("✅ Content appears to be fully loaded")
    else:
        lines.append("⚠️  Content may not be fully loaded")

    if analysis.is_loading_page:
        lines.append("🔄 Loading page detected")
        if analysis.loading_indicators:
            lines.append(f"   Indicators: [{' '.join(analysis.loading_indicators)}]")
    if analysis.is_cookie_banner:
        lines.append("🍪 Cookie consent banner detected")
    if analysis.is_ad_block_banner:
        lines.append("🚫 AdBlock detection banner found")
    if analysis.is_interstitial:
        lines.append("📄 Interstitial page detected (banner/loading screen)")

    lines.append(f"📊 Content length: {analysis.content_length} characters")
    if analysis.requires_retry:
        lines.append(f"🔁 Retry recommended (wait time: {analysis.suggested_wait_time:g}s)")
    lines.append("========================\n")
    return "\n".join(lines)


def load_and_display_page(
    client: Client,
    renderer: HTMLRenderer,
    navigator: Navigator,
    url: str,
    enable_retry: bool,
) -> None:
    """Fetch, render and record a page; network errors propagate."""
    if enable_retry:
        content, analysis = client.fetch_page_with_enhanced_detection(url)
        print(format_content_analysis(analysis))
    else:
        content = client.fetch_page_with_retry(url, False)

    doc = renderer.render_html(content, url)
    title = "".join(tag.get_text() for tag in doc.find_all("title"))
    navigator.extract_links(doc, url)
    navigator.add_to_history(url, title, content)


def display_cached_page(entry: HistoryEntry, renderer: HTMLRenderer, navigator: Navigator) -> None:
    """Show a page from history without fetching it again."""
    doc = renderer.render_html(entry.content, entry.url)
    navigator.extract_links(doc, entry.url)
    print("\n💾 (Displaying cached content - use 'r' to refresh)")


def _show_cached(entry: HistoryEntry, renderer: HTMLRenderer, navigator: Navigator) -> None:
    display_cached_page(entry, renderer, navigator)
    navigator.show_navigation_menu()
    navigator.display_links()


def run_session(
    client: Client,
    renderer: HTMLRenderer,
    navigator: Navigator,
    initial_url: str,
    enable_retry: bool,
) -> None:
    """Browse interactively until the user quits or input ends."""
    current_url = initial_url

    while True:
        try:
            load_and_display_page(client, renderer, navigator, current_url, enable_retry)
        except requests.RequestException as exc:
            print(f"❌ Error loading page: failed to fetch page: {exc}")
            continue

        navigator.show_navigation_menu()
        navigator.display_links()

        while True:
            try:
                command = navigator.get_user_input()
            except EOFError as exc:
                print(f"❌ Error reading input: {exc}")
                return

            action, data = navigator.process_user_input(command)

            if action == "navigate":
                current_url = data
                print(f"🌐 Navigating to: {current_url}")
                break
            if action == "back":
                entry = navigator.go_back()
                if entry is not None:
                    current_url = entry.url
                    print(f"⬅️  Going back to: {current_url}")
                    _show_cached(entry, renderer, navigator)
            elif action == "forward":
                entry = navigator.go_forward()
                if entry is not None:
                    current_url = entry.url
                    print(f"➡️  Going forward to: {current_url}")
                    _show_cached(entry, renderer, navigator)
            elif action == "history":
                navigator.show_history()
            elif action == "links":
                navigator.display_links()
            elif action == "url":
                try:
                    current_url = navigator.prompt_for_url()
                except (ValueError, EOFError) as exc:
                    print(f"❌ Error: {exc}")
                else:
                    print(f"🌐 Navigating to: {current_url}")
                    break
            elif action == "refresh":
                print(f"🔄 Refreshing: {current_url}")
                break
            elif action == "quit":
                print("👋 Thanks for using Brauser!")
                return
            elif action == "error":
                print(f"❌ {data}")


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    args = sys.argv[1:] if argv is None else argv
    print("Brauser: Minimalistic Terminal Web Browser with Interactive Navigation")
    if not args:
        print("Usage: brauser <url> [--no-retry]")
        print("  --no-retry: Disable content detection and retry logic")
        print("  Interactive features: numbered links, back/forward, URL bar")
        return 0

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    initial_url = args[0]
    enable_retry = not (len(args) > 1 and args[1] == "--no-retry")
    if not enable_retry:
        print("Content detection and retry logic disabled")

    with Client() as client:
        run_session(client, HTMLRenderer(), Navigator(), initial_url, enable_retry)
    return 0


if __name__ == "__main__":
    sys.exit(main())