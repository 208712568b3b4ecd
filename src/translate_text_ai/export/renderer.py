"""
Render translated text to a raster image.

Text is laid out as HTML on a scratch PyMuPDF page, which picks fallback
fonts for scripts the base fonts lack, and the used region is captured as
pixels. Placing pixels in the PDF avoids embedding fonts for every script.
"""

from __future__ import annotations

import html
import logging
import math
import re

import fitz  # PyMuPDF

from translate_text_ai.config import ExportConfig
from translate_text_ai.exceptions import ExportFailed
from translate_text_ai.export.raster import RasterImage

logger = logging.getLogger(__name__)

OUTPUT_CSS = """
* {{
    font-family: sans-serif;
    font-size: {font_size}pt;
    line-height: 1.6;
    color: #1f2937;
}}
p {{
    margin: 0;
}}
"""


_WHITESPACE_RE = re.compile(r"(\s+)")


def _line_to_html(line: str, max_token_chars: int | None) -> str:
    parts = []
    for part in _WHITESPACE_RE.split(line):
        if not part:
            continue
        if part.isspace():
            parts.append(html.escape(part).replace("  ", "&nbsp; "))
        elif max_token_chars and len(part) > max_token_chars:
            # A token wider than the line never wraps on its own
            chunks = (part[i : i + max_token_chars] for i in range(0, len(part), max_token_chars))
            parts.append("<br>".join(html.escape(chunk) for chunk in chunks))
        else:
            parts.append(html.escape(part))
    return "".join(parts)


def text_to_html(text: str, max_token_chars: int | None = None) -> str:
    """
    Escape text and keep its line breaks and runs of spaces.

    Tokens longer than max_token_chars (URLs, hashes) are hard-wrapped
    every max_token_chars characters.
    """
    lines = []
    for line in text.splitlines():
        lines.append(_line_to_html(line, max_token_chars) or "&nbsp;")
    return "<p>" + "<br>".join(lines) + "</p>"


class TextRenderer:
    """Lays out text at a fixed logical width and captures it as pixels."""

    # Each retry doubles the scratch page height
    MAX_LAYOUT_ATTEMPTS = 12

    def __init__(
        self,
        width: float = 640,
        *,
        scale: float = 2.0,
        font_size: float = 14.0,
        padding: float = 24.0,
    ):
        """
        Initialize the renderer.

        Args:
            width: Logical width of the output region.
            scale: Capture resolution multiplier (at least 2).
            font_size: Body font size in points.
            padding: Inner padding around the text.
        """
        if scale < 2:
            raise ValueError("Capture scale must be at least 2")
        if width <= 2 * padding:
            raise ValueError("Render width must exceed the padding")
        self.width = width
        self.scale = scale
        self.font_size = font_size
        self.padding = padding
        self._css = OUTPUT_CSS.format(font_size=font_size)

    @classmethod
    def from_config(cls, config: ExportConfig) -> TextRenderer:
        return cls(
            width=config.render_width,
            scale=config.render_scale,
            font_size=config.font_size,
        )

    @property
    def max_token_chars(self) -> int:
        """Characters that fit on one line even when every glyph is 1.2em wide."""
        return max(1, int((self.width - 2 * self.padding) / (self.font_size * 1.2)))

    def estimate_height(self, text: str) -> float:
        """Rough first guess of the laid-out height."""
        usable = self.width - 2 * self.padding
        chars_per_line = max(1, int(usable / (self.font_size * 0.6)))
        lines = sum(max(1, math.ceil(len(line) / chars_per_line)) for line in text.splitlines())
        return max(200.0, lines * self.font_size * 1.6 + 2 * self.padding)

    def capture(self, text: str) -> RasterImage:
        """
        Render text and capture the used region.

        Raises:
            ExportFailed: If there is nothing to render or the layout never fits.
        """
        if not text.strip():
            raise ExportFailed("Nothing to render")

        body = text_to_html(text, self.max_token_chars)
        height = self.estimate_height(text)

        for _ in range(self.MAX_LAYOUT_ATTEMPTS):
            with fitz.open() as doc:
                page = doc.new_page(width=self.width, height=height)
                box = fitz.Rect(self.padding, self.padding, self.width - self.padding, height - self.padding)
                # scale_low=1 forbids shrinking; spare_height is -1 when it overflows
                spare_height, _ = page.insert_htmlbox(box, body, css=self._css, scale_low=1)
                if spare_height >= 0:
                    bottom = min(height, box.y1 - spare_height + self.padding)
                    pix = page.get_pixmap(
                        matrix=fitz.Matrix(self.scale, self.scale),
                        clip=fitz.Rect(0, 0, self.width, bottom),
                        alpha=False,
                    )
                    logger.debug(
                        "Captured %dx%d raster (%.0f logical px tall)", pix.width, pix.height, bottom
                    )
                    return RasterImage.from_pixmap(pix, scale=self.scale)
            height *= 2

        raise ExportFailed("Output is too long to render", details={"chars": len(text)})
