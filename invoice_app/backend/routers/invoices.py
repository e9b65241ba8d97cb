"""
Router for invoice endpoints.

Handles:
- Search and paginated listing
- Invoice CRUD
- AI extraction of invoice fields
"""

import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Query, status
from starlette.concurrency import run_in_threadpool

from ..database import get_blob_store, get_invoice_store
from ..models import (
    ExtractRequest,
    ExtractResponse,
    InvoiceCreate,
    InvoiceListData,
    InvoiceListResponse,
    InvoiceResponse,
    InvoiceUpdate,
    MessageResponse,
    Pagination,
    utc_now_iso,
)
from ..services.blob_store import BlobStore
from ..services.extraction import ExtractionGateway, get_extraction_gateway
from ..services.invoice_store import InvoiceStore, build_search_filter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invoices", tags=["invoices"])

# Stored PDFs are not converted to text; extraction runs on this sample.
SAMPLE_INVOICE_TEXT = (
    "ACME Corporation Invoice #INV-2024-001 Date: 2024-01-15 Total: $1,085.00"
)


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


def _invoice_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Invoice not found",
    )


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    q: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    store: InvoiceStore = Depends(get_invoice_store),
) -> InvoiceListResponse:
    """
    Search invoices, newest first.

    Args:
        q: Case-insensitive text matched against vendor name, invoice
            number and filename.
        page: 1-based page number.
        limit: Page size.
    """
    try:
        invoices, total = await store.find(
            build_search_filter(q),
            skip=(page - 1) * limit,
            limit=limit,
        )
    except Exception:
        logger.exception("Failed to list invoices")
        raise _internal_error()

    return InvoiceListResponse(
        data=InvoiceListData(
            invoices=invoices,
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                pages=math.ceil(total / limit),
            ),
        )
    )


@router.post(
    "/extract",
    response_model=ExtractResponse,
    response_model_exclude_none=True,
)
async def extract_invoice(
    payload: ExtractRequest,
    gateway: ExtractionGateway = Depends(get_extraction_gateway),
) -> ExtractResponse:
    """
    Extract invoice fields with the requested AI provider.

    The provider reads a fixed sample text, not the stored PDF.
    """
    if not payload.file_id or not payload.model:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="fileId and model are required",
        )

    try:
        logger.info("Extracting invoice data for file %s with %s", payload.file_id, payload.model)
        return await run_in_threadpool(gateway.extract, payload.model, SAMPLE_INVOICE_TEXT)
    except Exception:
        logger.exception("AI extraction failed")
        raise _internal_error()


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: str,
    store: InvoiceStore = Depends(get_invoice_store),
) -> InvoiceResponse:
    """Fetch a single invoice."""
    try:
        invoice = await store.find_by_id(invoice_id)
    except Exception:
        logger.exception("Failed to load invoice %s", invoice_id)
        raise _internal_error()

    if invoice is None:
        raise _invoice_not_found()

    return InvoiceResponse(data=invoice)


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    payload: InvoiceCreate,
    store: InvoiceStore = Depends(get_invoice_store),
) -> InvoiceResponse:
    """Create an invoice record for an uploaded file."""
    record = payload.to_document()
    record["createdAt"] = utc_now_iso()

    try:
        invoice_id = await store.insert(record)
    except Exception:
        logger.exception("Failed to create invoice")
        raise _internal_error()

    logger.info("Created invoice %s for file %s", invoice_id, payload.file_id)
    return InvoiceResponse(data={"_id": invoice_id, **record})


@router.put("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: str,
    payload: InvoiceUpdate,
    store: InvoiceStore = Depends(get_invoice_store),
) -> InvoiceResponse:
    """
    Update an invoice.

    Top-level fields present in the body replace the stored ones; the rest
    are left as they are. Concurrent edits are last-write-wins.
    """
    fields = payload.to_document()
    fields["updatedAt"] = utc_now_iso()

    try:
        invoice = await store.update(invoice_id, fields)
    except Exception:
        logger.exception("Failed to update invoice %s", invoice_id)
        raise _internal_error()

    if invoice is None:
        raise _invoice_not_found()

    logger.info("Updated invoice %s: %s", invoice_id, sorted(fields))
    return InvoiceResponse(data=invoice)


@router.delete("/{invoice_id}", response_model=MessageResponse)
async def delete_invoice(
    invoice_id: str,
    store: InvoiceStore = Depends(get_invoice_store),
    blob_store: BlobStore = Depends(get_blob_store),
) -> MessageResponse:
    """
    Delete an invoice and then its PDF.

    The PDF delete is best-effort: a failure is logged and the invoice
    delete still succeeds, possibly leaving an orphaned file.
    """
    try:
        invoice = await store.find_by_id(invoice_id)
        if invoice is None:
            raise _invoice_not_found()

        await store.delete(invoice_id)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to delete invoice %s", invoice_id)
        raise _internal_error()

    file_id = invoice.get("fileId")
    if file_id:
        try:
            await blob_store.delete(file_id)
        except Exception:
            logger.exception(
                "Error deleting file %s of invoice %s", file_id, invoice_id
            )

    logger.info("Deleted invoice %s", invoice_id)
    return MessageResponse(message="Invoice deleted successfully")
