import io

import responses

from brauser.cli import (
    display_cached_page,
    format_content_analysis,
    load_and_display_page,
    main,
    run_session,
)
from brauser.client import Client
from brauser.content_detector import ContentAnalysis
from brauser.html_renderer import HTMLRenderer
from brauser.navigator import HistoryEntry, Navigator

PAGE_A = (
    "<html><head><title>Page A</title></head>"
    "<body><a href='/b'>Go to B</a></body></html>"
)
PAGE_B = (
    "<html><head><title>Page B</title></head>"
    "<body><a href='/a'>Back to A</a></body></html>"
)
URL_A = "https://example.com/a"
URL_B = "https://example.com/b"


def _session_parts(commands):
    navigator = Navigator(io.StringIO(commands), io.StringIO())
    renderer = HTMLRenderer(output=io.StringIO())
    client = Client(sleep=lambda seconds: None)
    return client, renderer, navigator


def test_format_none_is_empty():
    assert format_content_analysis(None) == ""


def test_format_loaded_page():
    text = format_content_analysis(ContentAnalysis(is_loaded=True, content_length=42))
    assert "✅ Content appears to be fully loaded" in text
    assert "📊 Content length: 42 characters" in text
    assert text.startswith("\n=== Content Analysis ===")
    assert "Retry recommended" not in text


def test_format_loading_page():
    analysis = ContentAnalysis(
        is_loading_page=True,
        is_interstitial=True,
        loading_indicators=["loading", "please wait"],
        requires_retry=True,
        suggested_wait_time=3.0,
    )
    text = format_content_analysis(analysis)
    assert "⚠️  Content may not be fully loaded" in text
    assert "🔄 Loading page detected" in text
    assert "   Indicators: [loading please wait]" in text
    assert "📄 Interstitial page detected (banner/loading screen)" in text
    assert "🔁 Retry recommended (wait time: 3s)" in text


def test_format_banners():
    text = format_content_analysis(ContentAnalysis(is_cookie_banner=True, is_ad_block_banner=True))
    assert "🍪 Cookie consent banner detected" in text
    assert "🚫 AdBlock detection banner found" in text


def test_load_and_display_page_records_history_and_links():
    client, renderer, navigator = _session_parts("")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL_A, body=PAGE_A)
        load_and_display_page(client, renderer, navigator, URL_A, False)
    current = navigator.current_page()
    assert current.url == URL_A
    assert current.title == "Page A"
    assert current.content == PAGE_A
    assert navigator.get_link_by_number(1).url == URL_B


def test_load_and_display_page_with_detection(capsys):
    page = "<html><head><title>Long</title></head><body><p>" + "word " * 200 + "</p></body></html>"
    sleeps = []
    navigator = Navigator(io.StringIO(), io.StringIO())
    renderer = HTMLRenderer(output=io.StringIO())
    client = Client(sleep=sleeps.append)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL_A, body=page)
        load_and_display_page(client, renderer, navigator, URL_A, True)
    out = capsys.readouterr().out
    assert "=== Content Analysis ===" in out
    assert "✅ Content appears to be fully loaded" in out
    assert sleeps == []
    assert navigator.current_page().title == "Long"


def test_display_cached_page_extracts_links(capsys):
    navigator = Navigator(io.StringIO(), io.StringIO())
    renderer_output = io.StringIO()
    display_cached_page(HistoryEntry(URL_B, "Page B", PAGE_B), HTMLRenderer(output=renderer_output), navigator)
    assert navigator.get_link_by_number(1).url == URL_A
    assert "💾 (Displaying cached content - use 'r' to refresh)" in capsys.readouterr().out
    assert "📄 TITLE: Page B" in renderer_output.getvalue()


def test_run_session_navigates_back_and_forward(capsys):
    client, renderer, navigator = _session_parts("1\nb\nf\nh\nq\n")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL_A, body=PAGE_A)
        rsps.add(responses.GET, URL_B, body=PAGE_B)
        run_session(client, renderer, navigator, URL_A, False)
    out = capsys.readouterr().out
    assert f"🌐 Navigating to: {URL_B}" in out
    assert f"⬅️  Going back to: {URL_A}" in out
    assert f"➡️  Going forward to: {URL_B}" in out
    assert "👋 Thanks for using Brauser!" in out
    assert [entry.url for entry in navigator.history] == [URL_A, URL_B]
    assert navigator.current_page().url == URL_B


def test_run_session_reports_unknown_command(capsys):
    client, renderer, navigator = _session_parts("zzz\nq\n")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL_A, body=PAGE_A)
        run_session(client, renderer, navigator, URL_A, False)
    out = capsys.readouterr().out
    assert "❌ Unknown command: zzz. Type 'h' for help." in out


def test_run_session_empty_url(capsys):
    client, renderer, navigator = _session_parts("u\n\nq\n")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL_A, body=PAGE_A)
        run_session(client, renderer, navigator, URL_A, False)
    out = capsys.readouterr().out
    assert "❌ Error: empty URL" in out
    assert "👋 Thanks for using Brauser!" in out


def test_run_session_refresh_reloads(capsys):
    client, renderer, navigator = _session_parts("r\nq\n")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL_A, body=PAGE_A)
        run_session(client, renderer, navigator, URL_A, False)
        assert len(rsps.calls) == 2
    assert f"🔄 Refreshing: {URL_A}" in capsys.readouterr().out
    assert [entry.url for entry in navigator.history] == [URL_A, URL_A]


def test_run_session_ends_at_end_of_input(capsys):
    client, renderer, navigator = _session_parts("")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL_A, body=PAGE_A)
        run_session(client, renderer, navigator, URL_A, False)
    assert "❌ Error reading input" in capsys.readouterr().out


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Usage: brauser <url> [--no-retry]" in out


def test_main_runs_session(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL_A, body=PAGE_A)
        assert main([URL_A, "--no-retry"]) == 0
    out = capsys.readouterr().out
    assert "Content detection and retry logic disabled" in out
    assert "👋 Thanks for using Brauser!" in out