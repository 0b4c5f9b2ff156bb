"""Inspection backend: page count, page sizes, and selection checks."""

import json
import logging
from typing import Any, Dict, List, Tuple

from .base import Backend
from ..providers.pymupdf_provider import PyMuPDFProvider
from ..utils.page_selection import parse_page_input, validate_page_input

logger = logging.getLogger(__name__)


class InspectBackend(Backend):
    """Backend for reporting how many pages a PDF has and their sizes."""

    SUPPORTED_OPERATIONS = ["inspect"]

    def __init__(self, provider: PyMuPDFProvider = None):
        self.provider = provider or PyMuPDFProvider()

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
            total_pages = self.provider.page_count(source)
            pages = []
            for index in range(total_pages):
                width, height = self.provider.page_geometry(source, index)
                pages.append({
                    "page": index + 1,
                    "width": round(width, 2),
                    "height": round(height, 2),
                })
        finally:
            self.provider.close([source])

        result = {
            "total_pages": total_pages,
            "pages": pages,
        }

        metadata = {"total_pages": str(total_pages)}

        if "pages" in options:
            error = validate_page_input(options["pages"], total_pages)
            result["selection"] = {
                "valid": error is None,
                "error": error,
                "selected_pages": [] if error else parse_page_input(options["pages"]),
            }
            metadata["selection_valid"] = str(error is None).lower()

        output_data = json.dumps(result, indent=2).encode("utf-8")
        return output_data, "json", metadata
