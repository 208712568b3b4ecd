"""
Captured raster images.

A RasterImage is a point-in-time copy of rendered pixels. It keeps packed
samples (no row padding), so a horizontal band is a plain byte slice.
"""

from __future__ import annotations

from dataclasses import dataclass

import fitz  # PyMuPDF


@dataclass(frozen=True)
class RasterImage:
    """Pixel snapshot: width x height pixels, `components` bytes per pixel."""

    width: int
    height: int
    samples: bytes
    components: int = 3
    # Device pixels per logical pixel at capture time
    scale: float = 1.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid raster size {self.width}x{self.height}")
        if self.components not in (1, 3):
            raise ValueError(f"Unsupported component count: {self.components}")
        expected = self.width * self.height * self.components
        if len(self.samples) != expected:
            raise ValueError(f"Expected {expected} sample bytes, got {len(self.samples)}")

    @property
    def row_bytes(self) -> int:
        return self.width * self.components

    def rows(self, top: int, bottom: int) -> RasterImage:
        """Copy of the horizontal band [top, bottom)."""
        if not 0 <= top < bottom <= self.height:
            raise ValueError(f"Invalid band [{top}, {bottom}) for height {self.height}")
        return RasterImage(
            width=self.width,
            height=bottom - top,
            samples=self.samples[top * self.row_bytes : bottom * self.row_bytes],
            components=self.components,
            scale=self.scale,
        )

    @classmethod
    def from_pixmap(cls, pix: fitz.Pixmap, scale: float = 1.0) -> RasterImage:
        """Snapshot a PyMuPDF pixmap (must not have an alpha channel)."""
        if pix.alpha:
            raise ValueError("Pixmaps with alpha are not supported")

        row = pix.width * pix.n
        raw = bytes(pix.samples)
        if pix.stride != row:
            raw = b"".join(raw[y * pix.stride : y * pix.stride + row] for y in range(pix.height))

        return cls(
            width=pix.width,
            height=pix.height,
            samples=raw,
            components=pix.n,
            scale=scale,
        )

    def to_pixmap(self) -> fitz.Pixmap:
        colorspace = fitz.csRGB if self.components == 3 else fitz.csGRAY
        return fitz.Pixmap(colorspace, self.width, self.height, self.samples, False)

    def to_png(self) -> bytes:
        return self.to_pixmap().tobytes("png")
