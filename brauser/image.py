"""Conversion of web images to ASCII art."""

from __future__ import annotations

import io
from itertools import islice
from urllib.parse import urljoin, urlparse

import requests
from PIL import Image

ASCII_RAMP = " .:-=+*#%@"


def image_to_ascii(image: Image.Image, width: int, height: int, colored: bool) -> str:
    """Render an image as ``height`` lines of ``width`` characters.

    With ``colored`` each character carries a 24-bit ANSI colour.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")

    rgb = image.convert("RGB").resize((width, height))
    channels = iter(rgb.tobytes())
    pixels = zip(channels, channels, channels)
    steps = len(ASCII_RAMP) - 1

    lines = []
    for _ in range(height):
        chars = []
        for r, g, b in islice(pixels, width):
            luminance = (299 * r + 587 * g + 114 * b) // 1000
            char = ASCII_RAMP[luminance * steps // 255]
            if colored:
                char = f"\x1b[38;2;{r};{g};{b}m{char}\x1b[0m"
            chars.append(char)
        lines.append("".join(chars))
    return "\n".join(lines)


class ImageRenderer:
    """Downloads images and turns them into ASCII art."""

    def __init__(
        self,
        width: int = 80,
        height: int = 40,
        colored: bool = True,
        timeout: float | None = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.colored = colored
        self.timeout = timeout
        self._session = session or requests.Session()

    def render_image_as_ascii(self, src: str, base_url: str) -> str:
        """Fetch ``src`` (relative to ``base_url`` if needed) and render it.

        Raises requests.RequestException on network failure and
        PIL.UnidentifiedImageError when the data is not an image.
        """
        if not urlparse(src).scheme:
            src = urljoin(base_url, src)
        response = self._session.get(src, timeout=self.timeout)
        try:
            data = response.content
        finally:
            response.close()
        with Image.open(io.BytesIO(data)) as picture:
            return image_to_ascii(picture, self.width, self.height, self.colored)