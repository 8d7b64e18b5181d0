import io

import pytest
from bs4 import BeautifulSoup

from brauser.navigator import HistoryEntry, Link, Navigator


def make_navigator(text=""):
    out = io.StringIO()
    return Navigator(io.StringIO(text), out), out


def soup(html):
    return BeautifulSoup(html, "html.parser")


def test_history_back_and_forward():
    nav, _ = make_navigator()
    nav.add_to_history("https://example.com/a", "A", "<p>a</p>")
    nav.add_to_history("https://example.com/b", "B", "<p>b</p>")
    assert nav.can_go_back()
    assert not nav.can_go_forward()
    entry = nav.go_back()
    assert entry == HistoryEntry("https://example.com/a", "A", "<p>a</p>")
    assert nav.go_back() is None
    assert nav.go_forward().url == "https://example.com/b"
    assert nav.go_forward() is None


def test_add_after_back_drops_forward_history():
    nav, _ = make_navigator()
    for name in ("a", "b", "c"):
        nav.add_to_history(name, name, "")
    nav.go_back()
    nav.go_back()
    nav.add_to_history("d", "d", "")
    assert [e.url for e in nav.history] == ["a", "d"]
    assert nav.current_page().url == "d"
    assert not nav.can_go_forward()


def test_history_is_limited_to_fifty_entries():
    nav, _ = make_navigator()
    for number in range(55):
        nav.add_to_history(f"u{number}", "", "")
    assert len(nav.history) == 50
    assert nav.history[0].url == "u5"
    assert nav.current_page().url == "u54"


def test_current_page_empty():
    nav, _ = make_navigator()
    assert nav.current_page() is None
    assert not nav.can_go_back()


def test_extract_links_resolves_and_numbers():
    html = """
    <nav><a href="/about">About</a></nav>
    <a href="https://example.com/docs">Documentation</a>
    <a href="/x">abc</a>
    <a>No href here</a>
    """
    nav, _ = make_navigator()
    nav.extract_links(soup(html), "https://example.com/index.html")
    assert nav.links[0] == Link(1, "About", "https://example.com/about", "nav")
    urls = [link.url for link in nav.links]
    assert "https://example.com/docs" in urls
    assert all(link.text != "abc" for link in nav.links)
    assert [link.number for link in nav.links] == list(range(1, len(nav.links) + 1))


def test_absolute_nav_link_not_repeated_as_content():
    html = '<nav><a href="https://example.com/home">Home page</a></nav>'
    nav, _ = make_navigator()
    nav.extract_links(soup(html), "https://example.com/")
    assert [(l.kind, l.url) for l in nav.links] == [("nav", "https://example.com/home")]


def test_link_text_whitespace_collapsed():
    html = '<a href="https://example.com/p">  Some\n\n   long   text </a>'
    nav, _ = make_navigator()
    nav.extract_links(soup(html), "https://example.com/")
    assert nav.links[0].text == "Some long text"


def test_story_links_extracted():
    html = """
    <table><tr class="athing"><td>
      <span class="titleline"><a href="https://example.com/story">A story title</a></span>
    </td></tr></table>
    """
    nav, _ = make_navigator()
    nav.extract_links(soup(html), "https://example.com/")
    stories = [link for link in nav.links if link.kind == "story"]
    assert len(stories) == 1
    assert stories[0].text == "A story title"


def test_content_links_limited_to_fifty():
    html = "".join(f'<a href="https://example.com/{n}">Link {n}</a>' for n in range(70))
    nav, _ = make_navigator()
    nav.extract_links(soup(html), "https://example.com/")
    assert len(nav.links) == 50
    assert nav.links[-1].number == 50


def test_get_link_by_number():
    nav, _ = make_navigator()
    nav.extract_links(soup('<a href="https://example.com/z">Zeta link</a>'), "https://example.com/")
    assert nav.get_link_by_number(1).url == "https://example.com/z"
    assert nav.get_link_by_number(2) is None


def test_process_numeric_input():
    nav, _ = make_navigator()
    nav.extract_links(soup('<a href="https://example.com/z">Zeta link</a>'), "https://example.com/")
    assert nav.process_user_input(" 1 ") == ("navigate", "https://example.com/z")
    action, message = nav.process_user_input("7")
    assert action == "error"
    assert message == "Link number 7 not found. Please choose a number between 1 and 1."


@pytest.mark.parametrize(
    "text, action",
    [
        ("h", "history"), ("HISTORY", "history"), ("l", "links"), ("links", "links"),
        ("u", "url"), ("url", "url"), ("r", "refresh"), ("refresh", "refresh"),
        ("q", "quit"), ("Quit", "quit"),
    ],
)
def test_process_commands(text, action):
    nav, _ = make_navigator()
    assert nav.process_user_input(text) == (action, None)


def test_back_forward_commands_depend_on_history():
    nav, _ = make_navigator()
    assert nav.process_user_input("b") == ("error", "No previous page in history.")
    assert nav.process_user_input("forward") == ("error", "No next page in history.")
    nav.add_to_history("a", "", "")
    nav.add_to_history("b", "", "")
    assert nav.process_user_input("back") == ("back", None)
    nav.go_back()
    assert nav.process_user_input("f") == ("forward", None)


def test_unknown_command():
    nav, _ = make_navigator()
    assert nav.process_user_input("XyZ") == ("error", "Unknown command: xyz. Type 'h' for help.")


def test_get_user_input_reads_line_and_eof():
    nav, out = make_navigator("  back \n")
    assert nav.get_user_input() == "back"
    assert "brauser>" in out.getvalue()
    with pytest.raises(EOFError):
        nav.get_user_input()


def test_prompt_for_url_adds_scheme():
    nav, _ = make_navigator("example.com\nhttp://example.com/x\n\n")
    assert nav.prompt_for_url() == "https://example.com"
    assert nav.prompt_for_url() == "http://example.com/x"
    with pytest.raises(ValueError):
        nav.prompt_for_url()


def test_display_links_groups_by_kind():
    html = '<nav><a href="https://example.com/n">Nav</a></nav><a href="https://example.com/c">Content</a>'
    nav, out = make_navigator()
    nav.extract_links(soup(html), "https://example.com/")
    nav.display_links()
    text = out.getvalue()
    assert "🧭 Navigation:" in text
    assert "📄 Content Links:" in text
    assert text.index("[1] Nav") < text.index("[2] Content")


def test_display_links_empty():
    nav, out = make_navigator()
    nav.display_links()
    assert "No clickable links found on this page." in out.getvalue()


def test_show_history_marks_current():
    nav, out = make_navigator()
    nav.add_to_history("https://example.com/a", "", "")
    nav.add_to_history("https://example.com/b", "Bee", "")
    nav.go_back()
    nav.show_history()
    text = out.getvalue()
    assert "👉 1. (No title)" in text
    assert "   2. Bee" in text


def test_menu_shows_current_page():
    nav, out = make_navigator()
    nav.add_to_history("https://example.com/a", "Title A", "")
    nav.add_to_history("https://example.com/b", "Title B", "")
    nav.show_navigation_menu()
    text = out.getvalue()
    assert "📍 Current: https://example.com/b" in text
    assert "Back available" in text
    assert "Forward available" not in text