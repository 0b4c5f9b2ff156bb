"""Merge backend: all pages of several PDFs on uniform canvases."""

import logging
from typing import Any, Dict, List, Tuple

import pymupdf

from .base import Backend
from ..assembly.models import Canvas
from ..assembly.planner import PageAssembler
from ..config import get_config
from ..providers.pymupdf_provider import PyMuPDFProvider

logger = logging.getLogger(__name__)


class MergeBackend(Backend):
    """Backend that merges up to the configured number of PDFs."""

    SUPPORTED_OPERATIONS = ["merge"]

    def __init__(self, provider: PyMuPDFProvider = None):
        self.provider = provider or PyMuPDFProvider()
        self.assembler = PageAssembler()

    def supports(self, operation: str, format: str = "") -> bool:
        return operation in self.SUPPORTED_OPERATIONS

    def process(
        self,
        documents: List[Tuple[str, bytes]],
        operation: str,
        options: Dict[str, str]
    ) -> Tuple[bytes, str, Dict[str, Any]]:
        if not self.supports(operation):
            raise ValueError(f"Operation '{operation}' not supported")

        config = get_config()
        self._require_count(documents, 1, config.assembly.max_merge_files)

        paper_size = options.get("paper_size", config.assembly.paper_size)
        canvas = self.resolve_canvas(paper_size)

        sources = self.provider.load_all(documents)
        try:
            output_pages = self.assembler.merge(sources, canvas)
            output_data = self.provider.serialize(output_pages)
        finally:
            self.provider.close(sources)

        logger.info(
            f"Merged {len(sources)} documents into {len(output_pages)} pages "
            f"on {paper_size} ({canvas.width:g}x{canvas.height:g})"
        )

        metadata = {
            "documents": str(len(sources)),
            "pages_merged": str(len(output_pages)),
            "canvas": f"{canvas.width:g}x{canvas.height:g}",
            "filename": config.assembly.merge_filename,
        }

        return output_data, "pdf", metadata

    @staticmethod
    def resolve_canvas(paper_size: str) -> Canvas:
        """Look up a paper size name such as "a4" or "letter-l"."""
        width, height = pymupdf.paper_size(paper_size)
        if width <= 0 or height <= 0:
            raise ValueError(f"Unknown paper size '{paper_size}'")
        return Canvas(width=float(width), height=float(height))
