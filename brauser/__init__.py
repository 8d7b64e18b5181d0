"""A minimalistic terminal web browser: fetching, content detection, rendering and navigation."""

__version__ = "0.1.0"