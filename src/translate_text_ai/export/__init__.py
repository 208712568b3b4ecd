"""
Export module for translate-text-ai.

Renders the translation output to pixels and assembles a paginated PDF.
"""

from translate_text_ai.export.pagination import PageLayout, Placement, RasterSegment, paginate
from translate_text_ai.export.pdf import ExportDocument, PDFExporter, PDFExportResult
from translate_text_ai.export.raster import RasterImage
from translate_text_ai.export.renderer import TextRenderer

__all__ = [
    "ExportDocument",
    "PDFExporter",
    "PDFExportResult",
    "PageLayout",
    "Placement",
    "RasterImage",
    "RasterSegment",
    "TextRenderer",
    "paginate",
]
