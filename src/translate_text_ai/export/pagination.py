"""
Page layout and raster pagination.

All page measures are PDF points; raster measures are pixels. The raster
is placed at the full content width, so one page holds a band of
floor(content_height * image_width / content_width) pixel rows.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from translate_text_ai.config import ExportConfig, OverflowPolicy, PageFormat

MM_TO_PT = 72 / 25.4

PAGE_SIZES: dict[PageFormat, tuple[float, float]] = {
    PageFormat.A4: (595.28, 841.89),
    PageFormat.LETTER: (612.0, 792.0),
}


@dataclass(frozen=True)
class PageLayout:
    """Page geometry: side margins, a header band on top, a bottom margin."""

    page_width: float
    page_height: float
    margin: float
    header_height: float
    bottom_margin: float

    def __post_init__(self) -> None:
        if self.content_width <= 0 or self.content_height <= 0:
            raise ValueError("Margins leave no room for content")

    @classmethod
    def from_config(cls, config: ExportConfig) -> PageLayout:
        width, height = PAGE_SIZES[config.page_format]
        return cls(
            page_width=width,
            page_height=height,
            margin=config.margin_mm * MM_TO_PT,
            header_height=config.header_height_mm * MM_TO_PT,
            bottom_margin=config.bottom_margin_mm * MM_TO_PT,
        )

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def content_height(self) -> float:
        return self.page_height - self.header_height - self.bottom_margin


@dataclass(frozen=True)
class Placement:
    """Where an image lands on its page, in points."""

    x: float
    y: float
    width: float
    height: float

    @property
    def rect(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class RasterSegment:
    """Rows [top, bottom) of the captured raster and their page placement."""

    index: int
    top: int
    bottom: int
    placement: Placement

    @property
    def height(self) -> int:
        return self.bottom - self.top


def band_rows(image_width: int, layout: PageLayout) -> int:
    """Pixel rows that fill one page's content area at full content width."""
    return max(1, math.floor(layout.content_height * image_width / layout.content_width))


def paginate(
    image_width: int,
    image_height: int,
    layout: PageLayout,
    policy: OverflowPolicy = OverflowPolicy.SLICE,
) -> list[RasterSegment]:
    """
    Split a raster of the given size into page segments.

    A raster that fits yields one segment. Otherwise SLICE yields one
    segment per band of band_rows() rows (the last one may be shorter) and
    SHRINK yields one uniformly downscaled segment.
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Invalid raster size {image_width}x{image_height}")

    points_per_pixel = layout.content_width / image_width
    full_height = image_height * points_per_pixel

    if full_height <= layout.content_height:
        placement = Placement(layout.margin, layout.header_height, layout.content_width, full_height)
        return [RasterSegment(0, 0, image_height, placement)]

    if policy is OverflowPolicy.SHRINK:
        ratio = layout.content_height / full_height
        placement = Placement(
            layout.margin,
            layout.header_height,
            layout.content_width * ratio,
            layout.content_height,
        )
        return [RasterSegment(0, 0, image_height, placement)]

    rows = band_rows(image_width, layout)
    segments = []
    for index, top in enumerate(range(0, image_height, rows)):
        bottom = min(top + rows, image_height)
        placement = Placement(
            layout.margin,
            layout.header_height,
            layout.content_width,
            (bottom - top) * points_per_pixel,
        )
        segments.append(RasterSegment(index, top, bottom, placement))
    return segments
