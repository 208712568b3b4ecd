"""
PDF exporter for translated text.

The rendered translation is captured as a raster and placed on A4 (or
Letter) pages below a short header, one horizontal band per page. Glyphs
never go through the PDF text layer, so any script exports correctly.
"""

from __future__ import annotations

import asyncio
import html
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import fitz  # PyMuPDF

from translate_text_ai.config import ExportConfig
from translate_text_ai.exceptions import ExportFailed
from translate_text_ai.export.pagination import PageLayout, RasterSegment, paginate
from translate_text_ai.export.raster import RasterImage
from translate_text_ai.export.renderer import TextRenderer

if TYPE_CHECKING:
    from translate_text_ai.translation.session import TranslationSession

logger = logging.getLogger(__name__)

HEADER_CSS = """
h1 {
    font-family: sans-serif;
    font-size: 18pt;
    color: #111827;
    margin: 0;
}
p {
    font-family: sans-serif;
    font-size: 10pt;
    color: #646464;
    margin: 4pt 0 0 0;
}
"""


@dataclass
class ExportDocument:
    """Everything needed to assemble one PDF, captured at export time."""

    raster: RasterImage
    pages: list[RasterSegment]
    source_label: str
    target_label: str
    title: str
    layout: PageLayout

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def caption(self) -> str:
        return f"{self.source_label} → {self.target_label}"


@dataclass
class PDFExportResult:
    """Result of a PDF export operation."""

    output_path: Path
    pages_exported: int
    source_label: str
    target_label: str
    size_bytes: int


class PDFExporter:
    """
    Exports the current translation output to a PDF file.

    Each export captures its own raster and builds its own document; nothing
    is shared between exports, so they may run concurrently.
    """

    def __init__(self, config: ExportConfig, renderer: TextRenderer | None = None) -> None:
        """
        Initialize the PDF exporter.

        Args:
            config: Export settings (page format, margins, filename, policy).
            renderer: Text renderer (built from config when omitted).
        """
        self.config = config
        self.layout = PageLayout.from_config(config)
        self.renderer = renderer or TextRenderer.from_config(config)

    def default_path(self) -> Path:
        return self.config.output_dir / self.config.filename

    def build_document(self, session: TranslationSession) -> ExportDocument | None:
        """Capture the session output and lay it out. None when there is no output."""
        if not session.has_output:
            return None

        raster = self.renderer.capture(session.output_text)
        pages = paginate(raster.width, raster.height, self.layout, self.config.overflow_policy)
        return ExportDocument(
            raster=raster,
            pages=pages,
            source_label=session.source_language.label,
            target_label=session.target_language.label,
            title=self.config.title,
            layout=self.layout,
        )

    def _header_html(self, document: ExportDocument, segment: RasterSegment) -> str:
        caption = html.escape(document.caption)
        if document.page_count > 1:
            caption += f" · Page {segment.index + 1} of {document.page_count}"
        if segment.index == 0:
            return f"<h1>{html.escape(document.title)}</h1><p>{caption}</p>"
        return f"<p>{html.escape(document.title)} (continued) · {caption}</p>"

    def render_pdf(self, document: ExportDocument) -> bytes:
        """Assemble the pages, in order, into PDF bytes."""
        layout = document.layout
        with fitz.open() as pdf:
            for segment in document.pages:
                page = pdf.new_page(width=layout.page_width, height=layout.page_height)
                header_box = fitz.Rect(
                    layout.margin,
                    min(layout.margin, layout.header_height / 3),
                    layout.page_width - layout.margin,
                    layout.header_height - 4,
                )
                page.insert_htmlbox(header_box, self._header_html(document, segment), css=HEADER_CSS)

                band = document.raster.rows(segment.top, segment.bottom)
                page.insert_image(
                    fitz.Rect(*segment.placement.rect),
                    pixmap=band.to_pixmap(),
                    keep_proportion=False,
                )

            pdf.set_metadata(
                {
                    "title": document.title,
                    "subject": document.caption,
                    "creator": "translate-text-ai",
                }
            )
            return pdf.tobytes(garbage=3, deflate=True)

    def export_sync(
        self,
        session: TranslationSession,
        output_path: Path | str | None = None,
    ) -> PDFExportResult | None:
        """
        Export the session output to a PDF file.

        Returns None (and writes nothing) when the session has no output.

        Raises:
            ExportFailed: If capture, assembly or writing fails. The session is
                never modified.
        """
        if not session.has_output:
            logger.info("Nothing to export")
            return None

        path = Path(output_path) if output_path else self.default_path()
        try:
            document = self.build_document(session)
            if document is None:
                return None
            data = self.render_pdf(document)
            path.parent.mkdir(parents=True, exist_ok=True)
            _write_atomic(path, data)
        except ExportFailed:
            logger.error("PDF export failed", exc_info=True)
            raise
        except Exception as e:
            logger.error("PDF export failed", exc_info=True)
            raise ExportFailed(details={"error": str(e), "error_type": type(e).__name__}) from e

        logger.info("Exported %d page(s) to %s", document.page_count, path)
        return PDFExportResult(
            output_path=path,
            pages_exported=document.page_count,
            source_label=document.source_label,
            target_label=document.target_label,
            size_bytes=len(data),
        )

    async def export(
        self,
        session: TranslationSession,
        output_path: Path | str | None = None,
    ) -> PDFExportResult | None:
        """Async export; the PyMuPDF work runs in a worker thread."""
        return await asyncio.to_thread(self.export_sync, session, output_path)


def _write_atomic(path: Path, data: bytes) -> None:
    """Write to a sibling file and rename it over the target."""
    partial = path.with_name(f".{path.name}.part")
    try:
        partial.write_bytes(data)
        partial.replace(path)
    except OSError:
        partial.unlink(missing_ok=True)
        raise
