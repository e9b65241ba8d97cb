"""
Router for PDF file endpoints.

Handles:
- PDF upload into the blob store
- Streaming a stored PDF for preview
- Deleting a stored PDF
"""

import logging
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import StreamingResponse

from ..config import Settings, get_app_settings
from ..database import get_blob_store
from ..models import FileUploadData, FileUploadResponse, MessageResponse
from ..services.blob_store import PDF_CONTENT_TYPE, BlobStore
from ..services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files", tags=["files"])


def inline_disposition(filename: str) -> str:
    """Build an inline Content-Disposition header safe for non-ASCII names."""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")
    return f"inline; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.post("/upload", response_model=FileUploadResponse)
async def upload_file(
    pdf: Annotated[UploadFile | None, File(description="PDF file to store")] = None,
    blob_store: BlobStore = Depends(get_blob_store),
    settings: Settings = Depends(get_app_settings),
) -> FileUploadResponse:
    """
    Store an uploaded PDF.

    The content type and size are checked before anything is written.
    """
    if pdf is None or not pdf.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No PDF file provided",
        )

    try:
        if pdf.content_type != PDF_CONTENT_TYPE:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Only PDF files are allowed",
            )

        # Read one byte past the limit to detect oversized uploads
        file_bytes = await pdf.read(settings.max_upload_bytes + 1)

        if not file_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Empty file provided",
            )

        if len(file_bytes) > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    "File size must be less than "
                    f"{settings.max_upload_bytes // (1024 * 1024)}MB"
                ),
            )

        logger.info("Uploading PDF: %s (%d bytes)", pdf.filename, len(file_bytes))
        file_id = await blob_store.upload(pdf.filename, file_bytes)

        return FileUploadResponse(
            data=FileUploadData(
                file_id=file_id,
                file_name=pdf.filename,
                size=len(file_bytes),
            )
        )

    except HTTPException:
        raise
    except Exception:
        logger.exception("File upload failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload file",
        )
    finally:
        await pdf.close()


@router.get("/{file_id}")
async def get_file(
    file_id: str,
    blob_store: BlobStore = Depends(get_blob_store),
) -> StreamingResponse:
    """
    Stream a stored PDF.

    Used by the web client's preview pane.
    """
    try:
        stored = await blob_store.download(file_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not found",
        )
    except Exception:
        logger.exception("Failed to open file %s", file_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )

    return StreamingResponse(
        stored.chunks,
        media_type=PDF_CONTENT_TYPE,
        headers={
            "Content-Length": str(stored.length),
            "Content-Disposition": inline_disposition(stored.filename),
        },
    )


@router.delete("/{file_id}", response_model=MessageResponse)
async def delete_file(
    file_id: str,
    blob_store: BlobStore = Depends(get_blob_store),
) -> MessageResponse:
    """Delete a stored PDF."""
    try:
        await blob_store.delete(file_id)
    except Exception:
        logger.exception("Failed to delete file %s", file_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete file",
        )

    return MessageResponse(message="File deleted successfully")
