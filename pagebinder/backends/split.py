"""Split backend: copy a chosen subset of pages from one PDF."""

import logging
from typing import Any, Dict, List, Tuple

from .base import Backend
from ..assembly.planner import PageAssembler
from ..config import get_config
from ..providers.pymupdf_provider import PyMuPDFProvider
from ..utils.page_selection import format_page_input, select_pages

logger = logging.getLogger(__name__)


class SplitBackend(Backend):
    """Backend that extracts selected pages from a single PDF."""

    SUPPORTED_OPERATIONS = ["split"]

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

        self._require_count(documents, 1, 1)
        name, data = documents[0]

        source = self.provider.load(data, name)
        try:
            selection = select_pages(options.get("pages", ""), source.page_count)
            output_pages = self.assembler.split(source, selection)
            output_data = self.provider.serialize(output_pages)
        finally:
            self.provider.close([source])

        logger.info(
            f"Split {len(output_pages)} of {source.page_count} pages "
            f"from {name or 'document'}"
        )

        metadata = {
            "total_pages": str(source.page_count),
            "pages_selected": str(len(output_pages)),
            "selection": format_page_input(selection),
            "filename": get_config().assembly.split_filename,
        }

        return output_data, "pdf", metadata
