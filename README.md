# brauser

A minimalistic web browser for the terminal. It fetches a page, prints its
title, headings, paragraphs, main content, list items and up to five images
(as ASCII art), then gives you a prompt where you follow numbered links,
move back and forward through history, or open a new URL.

## Installation

```
pip install .
```

## Usage

```
brauser <url> [--no-retry]
```

Run without a URL, `brauser` prints its usage and exits.

`--no-retry` turns off content detection and the retry logic. Without it,
brauser checks each page for loading screens, cookie banners and adblock
notices, waits and fetches again (up to three retries) when the page looks
unfinished, and prints a short content analysis. Progress of the analysis
is logged to standard error.

At the `brauser>` prompt:

| Input            | Action                         |
|------------------|--------------------------------|
| a number         | follow that link               |
| `b`, `back`      | go back                        |
| `f`, `forward`   | go forward                     |
| `h`, `history`   | show history                   |
| `l`, `links`     | list links again               |
| `u`, `url`       | enter a new URL                |
| `r`, `refresh`   | reload the current page        |
| `q`, `quit`      | exit                           |

A URL entered without `http://` or `https://` gets `https://` in front.
Pages reached with back and forward are shown from the cached copy; use
`r` to fetch them again. History keeps the last 50 pages, and at most 50
links are numbered per page. The session also ends when input ends.

## Using it as a library

```python
from brauser.client import Client
from brauser.content_detector import ContentDetector

with Client(timeout=5.0, max_retries=1) as client:
    html, analysis = client.fetch_page_with_enhanced_detection("https://example.com")
    print(analysis.is_loaded, analysis.content_length)

detector = ContentDetector()
detector.add_loading_indicator("spinning up")
print(detector.analyze_content(html).loading_indicators)
```

The main pieces:

- `brauser.client.Client` – fetches pages (`fetch_page`,
  `fetch_page_with_retry`, `fetch_page_with_enhanced_detection`); network
  errors are raised as `requests.RequestException`.
- `brauser.content_detector.ContentDetector` – returns a `ContentAnalysis`
  describing loading screens, cookie and adblock banners, visible text
  length and a suggested wait time in seconds.
- `brauser.site_handlers` – handlers for CodePen, derStandard.at and
  single-page applications are registered by default in
  `SiteHandlerManager`; further `SiteHandler` subclasses can be added with
  `register_handler`.
- `brauser.html_renderer.HTMLRenderer` – `render_html` prints a page to a
  text stream and returns the parsed document; `compress_empty_lines`
  collapses runs of blank lines.
- `brauser.image` – `image_to_ascii` turns a Pillow image into ASCII art
  (optionally with 24-bit ANSI colour); `ImageRenderer` downloads an image
  and renders it.
- `brauser.navigator.Navigator` – history, numbered links and the command
  prompt, reading from and writing to any text streams.
- `brauser.cli` – the interactive session (`run_session`) and `main`.

JavaScript compatibility settings are read from a JSON file with
`brauser.config.load_js_config(path)`, which raises `ConfigError` on a
missing or malformed file; `load_default_js_config()` gives the built-in
defaults.

## What it does not do

brauser does not run the JavaScript on a page. The settings in
`brauser.config` can be loaded and inspected, but nothing in the package
executes scripts with them; dynamic pages are shown as their HTML arrives,
with site handlers and the content detector only pointing out when content
seems to be missing.

## Running the tests

```
pip install .[test]
pytest
```