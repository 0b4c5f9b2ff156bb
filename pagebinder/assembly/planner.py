"""Plans the ordered output page list for merge and split."""

import logging
from typing import List, Sequence

from .geometry import fit_to_canvas
from .models import Canvas, OutputPage, SourceDocument
from ..errors import GeometryError

logger = logging.getLogger(__name__)


class PageAssembler:
    """Turns loaded documents into the ordered list of pages to write."""

    def merge(
        self,
        documents: Sequence[SourceDocument],
        canvas: Canvas,
    ) -> List[OutputPage]:
        """
        Place every page of every document onto its own canvas.

        Documents are taken in the given order and pages in their original
        order. No page is skipped or reordered.

        Raises:
            ValueError: If no documents are given
            GeometryError: If any page has no usable size
        """
        if not documents:
            raise ValueError("At least one document is required to merge")

        output = []
        for document in documents:
            for page in document.pages:
                try:
                    placement = fit_to_canvas(page.width, page.height, canvas)
                except GeometryError as e:
                    raise GeometryError(
                        f"{document.name or 'document'} page {page.number + 1}: {e}"
                    ) from e

                output.append(OutputPage(
                    document=document,
                    page=page,
                    canvas=canvas,
                    placement=placement,
                ))

        logger.debug(
            f"Planned merge of {len(documents)} documents into {len(output)} pages"
        )
        return output

    def split(
        self,
        document: SourceDocument,
        selection: Sequence[int],
    ) -> List[OutputPage]:
        """
        Copy the selected pages of one document without any transform.

        ``selection`` holds validated 1-based page numbers in ascending
        order; they are used as given.
        """
        output = []
        for page_num in selection:
            if page_num < 1 or page_num > document.page_count:
                raise IndexError(
                    f"Page {page_num} is outside {document.name or 'document'} "
                    f"({document.page_count} pages)"
                )
            output.append(OutputPage(
                document=document,
                page=document.pages[page_num - 1],
            ))

        logger.debug(f"Planned split of {len(output)} pages")
        return output
