"""
Pydantic models for the invoice API.

Field names are snake_case in Python and camelCase on the wire and in
MongoDB, matching the documents the web client reads and writes.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_document(self) -> dict[str, Any]:
        """Dump to a storable document, leaving absent and null fields out."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


# =============================================================================
# Invoice Document
# =============================================================================


class Vendor(CamelModel):
    """Issuer of the invoice."""

    name: str
    address: str | None = None
    tax_id: str | None = None


class LineItem(CamelModel):
    """
    A single billed line.

    ``total`` is expected to equal ``unit_price * quantity``; the web editor
    keeps it in sync, the API stores whatever it is given.
    """

    description: str
    unit_price: float
    quantity: float
    total: float


class InvoiceDetails(CamelModel):
    """Header and amounts of an invoice."""

    number: str
    date: str
    currency: str | None = None
    subtotal: float | None = None
    tax_percent: float | None = None
    total: float | None = None
    po_number: str | None = None
    po_date: str | None = None
    line_items: list[LineItem] = Field(default_factory=list)


class InvoiceCreate(CamelModel):
    """Request body for POST /api/invoices."""

    file_id: str = Field(..., min_length=1)
    file_name: str
    vendor: Vendor
    invoice: InvoiceDetails


class InvoiceUpdate(CamelModel):
    """Request body for PUT /api/invoices/{id}; only sent fields are set."""

    file_id: str | None = None
    file_name: str | None = None
    vendor: Vendor | None = None
    invoice: InvoiceDetails | None = None


class ExtractedInvoice(CamelModel):
    """Structured fields produced by an extraction provider."""

    vendor: Vendor
    invoice: InvoiceDetails

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Request / Response Envelopes
# =============================================================================


class ExtractRequest(CamelModel):
    """Request body for POST /api/invoices/extract."""

    file_id: str | None = None
    model: str | None = None


class ExtractResponse(BaseModel):
    """Result of an extraction run."""

    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None


class FileUploadData(CamelModel):
    file_id: str
    file_name: str
    size: int


class FileUploadResponse(BaseModel):
    success: bool = True
    data: FileUploadData


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class InvoiceListData(BaseModel):
    invoices: list[dict[str, Any]]
    pagination: Pagination


class InvoiceListResponse(BaseModel):
    success: bool = True
    data: InvoiceListData


class InvoiceResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    """Liveness probe response."""

    status: str = "OK"
    timestamp: str


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
