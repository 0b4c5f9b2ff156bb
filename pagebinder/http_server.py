"""HTTP server for the PDF merge/split service using FastAPI."""

import asyncio
import base64
import json
import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from fastapi import FastAPI, File, Form, HTTPException, Response, UploadFile
from pydantic import BaseModel, Field

from .config import get_config
from .service import AssemblyService, ProcessResult
from .utils.page_selection import parse_page_input, validate_page_input

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "INVALID_SELECTION": 400,
    "INVALID_OPERATION": 400,
    "VALIDATION_ERROR": 400,
    "DECODE_FAILED": 400,
    "INVALID_GEOMETRY": 422,
}


# Pydantic models
class ProcessRequest(BaseModel):
    """Request body for POST /process (base64 mode)."""
    operation: str = Field(..., description="Operation: merge, split, inspect")
    documents: List[str] = Field(..., description="Base64-encoded PDF files, in order")
    options: Dict[str, str] = Field(default_factory=dict)


class ValidatePagesRequest(BaseModel):
    """Request body for POST /api/validate-pages."""
    pages: str = Field("", description="Selection such as '1, 3-5, 10'")
    total_pages: int = Field(..., ge=0)


class ValidatePagesResponse(BaseModel):
    """Response body for POST /api/validate-pages."""
    valid: bool
    error: Optional[str] = None
    pages: List[int] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response body for GET /health."""
    status: str = "ok"
    operations: List[str]
    version: str = "0.1.0"


def create_app(service: Optional[AssemblyService] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="PDF Merge & Split Service",
        description="Merge PDFs onto uniform pages or extract selected pages, using PyMuPDF",
        version="0.1.0",
    )

    service = service or AssemblyService()
    supported_operations = service.health_check()["supported_operations"]

    async def read_uploads(uploads: List[UploadFile], maximum: int) -> List[Tuple[str, bytes]]:
        """Read uploaded PDFs after checking count, type, and size."""
        if not 1 <= len(uploads) <= maximum:
            raise HTTPException(
                status_code=400,
                detail={"success": False, "error": f"Upload between 1 and {maximum} PDF files"},
            )

        config = get_config()
        max_bytes = config.assembly.max_file_size_mb * 1024 * 1024
        documents = []
        for upload in uploads:
            name = upload.filename or "document.pdf"
            if upload.content_type != "application/pdf" and not name.lower().endswith(".pdf"):
                raise HTTPException(
                    status_code=400,
                    detail={"success": False, "error": f"{name} is not a PDF file"},
                )
            data = await upload.read()
            if len(data) > max_bytes:
                raise HTTPException(
                    status_code=400,
                    detail={"success": False, "error": f"File exceeds {config.assembly.max_file_size_mb}MB limit"},
                )
            documents.append((name, data))
        return documents

    def raise_for_failure(result: ProcessResult) -> None:
        if result.success:
            return
        status_code = ERROR_STATUS.get(result.error_code, 500)
        raise HTTPException(
            status_code=status_code,
            detail={"success": False, "error": result.error_message, "code": result.error_code},
        )

    def pdf_response(result: ProcessResult) -> Response:
        filename = result.metadata.get("filename", "output.pdf")
        return Response(
            content=result.output_data,
            media_type="application/pdf",
            headers={
                "Content-Disposition": f'attachment; filename="{filename}"',
                "X-Processing-Time-Ms": str(result.processing_time_ms),
                "X-Page-Count": result.metadata.get(
                    "pages_merged", result.metadata.get("pages_selected", "")
                ),
            },
        )

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="ok",
            operations=supported_operations,
            version="0.1.0",
        )

    @app.get("/ready")
    async def readiness_check():
        return {"status": "ready"}

    @app.post("/api/merge")
    async def merge(
        files: List[UploadFile] = File(...),
        paper_size: str = Form(""),
    ):
        """Merge every page of up to three PDFs onto uniform pages."""
        config = get_config()
        documents = await read_uploads(files, config.assembly.max_merge_files)

        logger.info(f"Merge request: files={len(documents)}")

        options = {"paper_size": paper_size} if paper_size else {}
        result = await asyncio.to_thread(
            service.process_document, "merge", documents, options
        )
        raise_for_failure(result)
        return pdf_response(result)

    @app.post("/api/split")
    async def split(
        file: UploadFile = File(...),
        pages: str = Form(""),
    ):
        """Extract the selected pages of one PDF."""
        documents = await read_uploads([file], 1)

        logger.info(f"Split request: size={len(documents[0][1])} bytes, pages={pages!r}")

        result = await asyncio.to_thread(
            service.process_document, "split", documents, {"pages": pages}
        )
        raise_for_failure(result)
        return pdf_response(result)

    @app.post("/api/inspect")
    async def inspect_document(
        file: UploadFile = File(...),
        pages: Optional[str] = Form(None),
    ):
        """Report the page count and page sizes of a PDF."""
        start_time = time.time()
        documents = await read_uploads([file], 1)

        options = {"pages": pages} if pages is not None else {}
        result = await asyncio.to_thread(
            service.process_document, "inspect", documents, options
        )
        raise_for_failure(result)

        return {
            "success": True,
            "result": json.loads(result.output_data.decode("utf-8")),
            "metadata": result.metadata,
            "processing_time_ms": int((time.time() - start_time) * 1000),
        }

    @app.post("/api/validate-pages", response_model=ValidatePagesResponse)
    async def validate_pages(request: ValidatePagesRequest) -> ValidatePagesResponse:
        """Check a selection against a page count without touching any file."""
        error = await asyncio.to_thread(
            validate_page_input, request.pages, request.total_pages
        )
        if error:
            return ValidatePagesResponse(valid=False, error=error)
        pages = await asyncio.to_thread(parse_page_input, request.pages)
        return ValidatePagesResponse(valid=True, pages=pages)

    @app.post("/process")
    async def process_document(request: ProcessRequest) -> Dict[str, Any]:
        """Process PDFs sent as base64-encoded payloads."""
        documents = []
        for index, encoded in enumerate(request.documents):
            try:
                data = base64.b64decode(encoded, validate=True)
            except Exception as e:
                raise HTTPException(
                    status_code=400,
                    detail={"success": False, "error": {"code": "INVALID_BASE64", "message": str(e)}}
                )
            documents.append((f"document-{index + 1}.pdf", data))

        config = get_config()
        max_bytes = config.assembly.max_file_size_mb * 1024 * 1024
        if any(len(data) > max_bytes for _, data in documents):
            raise HTTPException(
                status_code=400,
                detail={
                    "success": False,
                    "error": {
                        "code": "FILE_TOO_LARGE",
                        "message": f"File exceeds {config.assembly.max_file_size_mb}MB limit",
                    }
                }
            )

        if not service.supports_operation(request.operation):
            raise HTTPException(
                status_code=400,
                detail={
                    "success": False,
                    "error": {
                        "code": "INVALID_OPERATION",
                        "message": f"Operation '{request.operation}' is not supported",
                        "details": {"supported_operations": supported_operations},
                    }
                }
            )

        result = await asyncio.to_thread(
            service.process_document, request.operation, documents, request.options
        )

        if not result.success:
            status_code = ERROR_STATUS.get(result.error_code, 500)
            raise HTTPException(
                status_code=status_code,
                detail={
                    "success": False,
                    "error": {"code": result.error_code, "message": result.error_message},
                }
            )

        metadata = {str(k): str(v) for k, v in result.metadata.items()}
        if result.format == "json":
            return {
                "success": True,
                "result": json.loads(result.output_data.decode("utf-8")),
                "format": "application/json",
                "metadata": metadata,
                "processing_time_ms": result.processing_time_ms,
            }
        return {
            "success": True,
            "result": base64.b64encode(result.output_data).decode("utf-8"),
            "format": f"application/{result.format}",
            "metadata": metadata,
            "processing_time_ms": result.processing_time_ms,
        }

    return app


# Create app instance for uvicorn
app = create_app()


def run_server():
    """Run the HTTP server."""
    import uvicorn
    config = get_config()
    logger.info(f"Starting HTTP server on {config.server.host}:{config.server.port}")
    uvicorn.run(
        "pagebinder.http_server:app",
        host=config.server.host,
        port=config.server.port,
        log_level="info",
    )


if __name__ == "__main__":
    run_server()
