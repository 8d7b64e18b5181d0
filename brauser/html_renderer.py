"""Rendering of HTML pages as structured terminal text."""

from __future__ import annotations

import re
import sys
from typing import Iterator, TextIO

import requests
from bs4 import BeautifulSoup

from brauser.image import ImageRenderer

MAX_STORIES = 30
MAX_LIST_ITEMS = 10
MAX_IMAGES = 5
CONTAINER_PREVIEW = 300
MAIN_CONTENT_PREVIEW = 500

_RULE = "=" * 60
_BLANK_RUN = re.compile(r"\n[\t\n\f\r ]*\n[\t\n\f\r ]*\n+")

_CONTAINER_SELECTOR = ".content, .main, .post, .entry, .article-content, .story-content"
_MAIN_SELECTOR = "main, article, .content, .main-content, #content"


def compress_empty_lines(text: str) -> str:
    """Collapse runs of blank lines into a single blank line."""
    return _BLANK_RUN.sub("\n\n", text)


def _skip_image(src: str) -> bool:
    lower = src.lower()
    return lower.endswith(".svg") or "1x1" in lower or "pixel" in lower


class HTMLRenderer:
    """Prints titles, headings, paragraphs, lists and images of a page."""

    def __init__(
        self,
        image_renderer: ImageRenderer | None = None,
        output: TextIO | None = None,
    ) -> None:
        self.image_renderer = image_renderer or ImageRenderer()
        self._output = output if output is not None else sys.stdout

    def render_html(self, html_content: str, base_url: str) -> BeautifulSoup:
        """Parse and print the page; return the parsed document."""
        doc = BeautifulSoup(html_content, "html.parser")
        parts: list[str] = []
        emit = parts.append

        emit(f"\n{_RULE}\n")
        emit("           BRAUSER - TERMINAL WEB CONTENT\n")
        emit(f"{_RULE}\n")

        title = "".join(tag.get_text() for tag in doc.find_all("title"))
        if title:
            emit(f"\n📄 TITLE: {title}\n")
            emit("-" * (len(title) + 10) + "\n")

        heading_count = 0
        for heading in doc.select("h1, h2, h3, h4, h5, h6"):
            heading_count += 1
            text = heading.get_text().strip()
            if not text:
                continue
            if heading.name == "h1":
                emit(f"\n🔸 {text}\n{'=' * len(text)}\n")
            elif heading.name == "h2":
                emit(f"\n▸ {text}\n{'-' * len(text)}\n")
            else:
                emit(f"\n• {text}\n")

        for story in doc.select(".athing")[:MAX_STORIES]:
            heading_count += 1
            link = story.select_one(".titleline > a")
            text = link.get_text().strip() if link is not None else ""
            if text:
                emit(f"\n📰 {text}\n")

        paragraph_count = 0
        for paragraph in doc.find_all("p"):
            text = paragraph.get_text().strip()
            if len(text) > 10:
                paragraph_count += 1
                emit(f"\n{text}\n")

        if paragraph_count == 0:
            for block in doc.select(_CONTAINER_SELECTOR):
                text = block.get_text().strip()
                if len(text) > 50:
                    paragraph_count += 1
                    emit(f"\n📝 CONTENT:\n{text[:CONTAINER_PREVIEW]}\n")
                    if len(text) > CONTAINER_PREVIEW:
                        emit("... (content truncated)\n")

        for block in doc.select(_MAIN_SELECTOR):
            text = block.get_text().strip()
            if len(text) > 50:
                emit(f"\n📝 MAIN CONTENT:\n{text[:MAIN_CONTENT_PREVIEW]}\n")
                if len(text) > MAIN_CONTENT_PREVIEW:
                    emit("... (content truncated)\n")

        items = [
            text
            for item in doc.select("ul li, ol li")
            if len(text := item.get_text().strip()) > 5
        ][:MAX_LIST_ITEMS]
        if items:
            emit("\n📋 LIST ITEMS:\n")
            parts.extend(f"  • {text}\n" for text in items)

        parts.extend(self._render_images(doc, base_url))

        emit(f"\n{_RULE}")
        emit(f"\n📊 CONTENT SUMMARY: {heading_count} headings, {paragraph_count} paragraphs\n")
        emit("💡 Use navigation menu to interact with links\n")
        emit(f"{_RULE}\n")

        self._output.write(compress_empty_lines("".join(parts)))
        self._output.flush()
        return doc

    def _render_images(self, doc: BeautifulSoup, base_url: str) -> Iterator[str]:
        count = 0
        for image in doc.find_all("img"):
            src = image.get("src")
            if src is None or count >= MAX_IMAGES or _skip_image(src):
                continue
            alt = image.get("alt", "")
            count += 1
            if count == 1:
                yield "\n🖼️  IMAGES:\n"
            line = f"  Image {count}: {src}"
            if alt:
                line += f" (alt: {alt})"
            yield line + "\n"

            try:
                art = self.image_renderer.render_image_as_ascii(src, base_url)
            except (requests.RequestException, OSError, ValueError):
                if alt:
                    yield f"    [Image: {alt}]\n"
                else:
                    yield "    [Image conversion failed: unsupported format]\n"
            else:
                yield "    ASCII Art:\n"
                yield art + "\n"