"""Base backend interface for PDF assembly operations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple


class Backend(ABC):
    """Abstract base class for PDF assembly backends."""

    @abstractmethod
    def supports(self, operation: str, format: str = "") -> bool:
        """
        Check if this backend can handle the specified operation.

        Args:
            operation: The operation name (e.g., "merge", "split")
            format: Optional format hint (e.g., "pdf")

        Returns:
            True if this backend supports the operation, False otherwise
        """
        pass

    @abstractmethod
    def process(
        self,
        documents: List[Tuple[str, bytes]],
        operation: str,
        options: Dict[str, str]
    ) -> Tuple[bytes, str, Dict[str, Any]]:
        """
        Run the operation over the given documents.

        Args:
            documents: (filename, raw PDF bytes) pairs, in the order given
            operation: Operation to perform
            options: Operation-specific options

        Returns:
            Tuple of (output_data, format, metadata)
            - output_data: Processed output bytes
            - format: Output format (e.g., "pdf", "json")
            - metadata: Additional information about the processing

        Raises:
            ValueError: If operation is not supported or invalid options
            PageSelectionError: If a page selection is rejected
            AssemblyError: If a document cannot be read or written
        """
        pass

    @staticmethod
    def _require_count(documents: List, minimum: int, maximum: int) -> None:
        if not minimum <= len(documents) <= maximum:
            if minimum == maximum:
                expected = f"exactly {minimum}"
            else:
                expected = f"between {minimum} and {maximum}"
            raise ValueError(f"Expected {expected} PDF files, got {len(documents)}")
