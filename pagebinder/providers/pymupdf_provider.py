"""PDF decode/encode provider backed by PyMuPDF."""

import logging
from typing import Iterable, List, Tuple

import pymupdf

from ..assembly.models import OutputPage, SourceDocument, SourcePage
from ..errors import DecodeError, SerializationError

logger = logging.getLogger(__name__)


class PyMuPDFProvider:
    """Loads source PDFs and writes planned output pages with PyMuPDF."""

    def load(self, data: bytes, name: str = "") -> SourceDocument:
        """
        Open PDF bytes and record the size of every page.

        Raises:
            DecodeError: If the bytes are not a readable PDF
        """
        try:
            doc = pymupdf.open(stream=data, filetype="pdf")
        except Exception as e:
            raise DecodeError(f"Invalid or corrupted PDF file: {name or 'document'}") from e

        if not doc.is_pdf or doc.page_count == 0:
            doc.close()
            raise DecodeError(f"Not a PDF document with pages: {name or 'document'}")

        pages = tuple(
            SourcePage(number=i, width=page.rect.width, height=page.rect.height)
            for i, page in enumerate(doc)
        )
        logger.debug(f"Loaded {name or 'document'}: {len(pages)} pages")

        return SourceDocument(name=name, pages=pages, handle=doc)

    def load_all(self, items: Iterable[Tuple[str, bytes]]) -> List[SourceDocument]:
        """Load several documents; if one fails, the ones already open are closed."""
        documents = []
        try:
            for name, data in items:
                documents.append(self.load(data, name))
        except Exception:
            self.close(documents)
            raise
        return documents

    def page_count(self, document: SourceDocument) -> int:
        return document.page_count

    def page_geometry(self, document: SourceDocument, index: int) -> Tuple[float, float]:
        page = document.pages[index]
        return page.width, page.height

    def serialize(self, output_pages: Iterable[OutputPage]) -> bytes:
        """
        Write output pages into a new PDF.

        Placed pages get a fresh canvas with the source page drawn into the
        placement rectangle. Verbatim pages are copied as they are.

        Raises:
            SerializationError: If the output document cannot be built
        """
        out = pymupdf.open()
        try:
            for output_page in output_pages:
                src = output_page.document.handle
                pno = output_page.page.number

                if output_page.is_verbatim:
                    out.insert_pdf(src, from_page=pno, to_page=pno)
                    continue

                canvas = output_page.canvas
                placement = output_page.placement
                page = out.new_page(width=canvas.width, height=canvas.height)

                # Blank source pages have nothing to draw
                if not src[pno].get_contents():
                    continue

                rect = pymupdf.Rect(
                    placement.x,
                    placement.y,
                    placement.x + placement.width,
                    placement.y + placement.height,
                )
                page.show_pdf_page(rect, src, pno)

            return out.tobytes(garbage=3, deflate=True)
        except Exception as e:
            raise SerializationError(f"Failed to write output PDF: {e}") from e
        finally:
            out.close()

    def close(self, documents: Iterable[SourceDocument]) -> None:
        for document in documents:
            if document.handle is not None:
                document.handle.close()
