"""Assembly service: dispatches operations to backends and drives the workspace."""

import json
import time
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .backends.base import Backend
from .backends.inspection import InspectBackend
from .backends.merge import MergeBackend
from .backends.split import SplitBackend
from .errors import PageSelectionError
from .state import (
    FAILURE_NOTICES,
    SPLIT,
    WorkspaceState,
    begin_processing,
    finish_processing,
    set_total_pages,
)
from .utils.page_selection import validate_page_input

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Processing failed. Please try again."


@dataclass
class ProcessResult:
    """Outcome of one operation."""
    success: bool
    output_data: bytes = b""
    format: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    processing_time_ms: int = 0
    error_message: str = ""
    error_code: str = ""


class AssemblyService:
    """Runs merge, split and inspect operations."""

    VERSION = "0.1.0"

    def __init__(self, backends: Optional[List[Backend]] = None):
        self.backends: List[Backend] = backends or [
            MergeBackend(),
            SplitBackend(),
            InspectBackend(),
        ]

        logger.info(f"Assembly Service v{self.VERSION} initialized")
        logger.info(f"Registered {len(self.backends)} backends")

    def supports_operation(self, operation: str, format_hint: str = "") -> bool:
        return any(b.supports(operation, format_hint) for b in self.backends)

    def process_document(
        self,
        operation: str,
        documents: List[Tuple[str, bytes]],
        options: Optional[Dict[str, str]] = None,
    ) -> ProcessResult:
        """
        Run one operation and report the outcome instead of raising.

        Rejected page selections come back with their exact message. Every
        other failure is logged in full and reported with a generic message,
        and no output is returned.
        """
        options = options or {}
        total_size = sum(len(data) for _, data in documents)

        logger.info(
            f"Processing: operation={operation}, files={len(documents)}, "
            f"size={total_size} bytes"
        )

        start_time = time.time()

        backend = self._find_backend(operation)
        if backend is None:
            error_msg = f"No backend found for operation '{operation}'"
            logger.error(error_msg)
            return ProcessResult(
                success=False,
                error_message=error_msg,
                error_code="INVALID_OPERATION",
                processing_time_ms=int((time.time() - start_time) * 1000)
            )

        try:
            output_data, output_format, metadata = backend.process(
                documents, operation, options
            )

            processing_time_ms = int((time.time() - start_time) * 1000)

            logger.info(
                f"Completed in {processing_time_ms}ms: "
                f"output_size={len(output_data)} bytes, format={output_format}"
            )

            return ProcessResult(
                success=True,
                output_data=output_data,
                format=output_format,
                metadata=metadata,
                processing_time_ms=processing_time_ms,
            )

        except PageSelectionError as e:
            logger.info(f"Rejected page selection: {e.message}")
            return ProcessResult(
                success=False,
                error_message=e.message,
                error_code="INVALID_SELECTION",
                processing_time_ms=int((time.time() - start_time) * 1000)
            )

        except ValueError as e:
            logger.warning(f"Invalid request for {operation}: {e}")
            return ProcessResult(
                success=False,
                error_message=str(e),
                error_code="VALIDATION_ERROR",
                processing_time_ms=int((time.time() - start_time) * 1000)
            )

        except Exception as e:
            processing_time_ms = int((time.time() - start_time) * 1000)
            logger.error(f"Processing failed: {e}", exc_info=True)

            return ProcessResult(
                success=False,
                error_message=FAILURE_NOTICES.get(operation, GENERIC_FAILURE),
                error_code=getattr(e, "code", "PROCESSING_FAILED"),
                processing_time_ms=processing_time_ms
            )

    def health_check(self) -> Dict[str, Any]:
        supported_ops = set()
        for backend in self.backends:
            if hasattr(backend, 'SUPPORTED_OPERATIONS'):
                supported_ops.update(backend.SUPPORTED_OPERATIONS)

        return {
            "healthy": True,
            "version": self.VERSION,
            "supported_operations": sorted(list(supported_ops)),
        }

    def load_split_info(self, state: WorkspaceState) -> WorkspaceState:
        """Look up the page count of the file chosen for splitting."""
        if state.active_tab != SPLIT or not state.files:
            return set_total_pages(state, 0)

        upload = state.files[0]
        result = self.process_document("inspect", [(upload.name, upload.data)])
        if not result.success:
            logger.warning(f"Could not read page count of {upload.name}")
            return set_total_pages(state, 0)

        info = json.loads(result.output_data.decode("utf-8"))
        return set_total_pages(state, info["total_pages"])

    def submit(self, state: WorkspaceState) -> Tuple[WorkspaceState, ProcessResult]:
        """
        Run the operation for the active tab against the current state.

        A split whose selection does not validate never starts; the message
        is stored on the state for display and the inputs are kept.
        """
        if state.is_processing:
            return state, ProcessResult(
                success=False,
                error_message="An operation is already in progress.",
                error_code="BUSY",
            )
        if not state.files:
            return state, ProcessResult(
                success=False,
                error_message="Please add at least one PDF file.",
                error_code="NO_FILES",
            )

        documents = [(f.name, f.data) for f in state.files]
        options: Dict[str, str] = {}

        if state.active_tab == SPLIT:
            if state.total_pages <= 0:
                state = self.load_split_info(state)
                if state.total_pages <= 0:
                    notice = FAILURE_NOTICES[SPLIT]
                    return replace(state, notice=notice), ProcessResult(
                        success=False,
                        error_message=notice,
                        error_code="DECODE_FAILED",
                    )
            error = validate_page_input(state.split_range, state.total_pages)
            if error:
                return replace(state, split_error=error), ProcessResult(
                    success=False,
                    error_message=error,
                    error_code="INVALID_SELECTION",
                )
            options["pages"] = state.split_range

        state = begin_processing(state)
        result = self.process_document(state.active_tab, documents, options)
        return finish_processing(state, result.success), result

    def _find_backend(self, operation: str) -> Optional[Backend]:
        for backend in self.backends:
            if backend.supports(operation):
                return backend
        return None
