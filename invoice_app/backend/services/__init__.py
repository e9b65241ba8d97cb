"""
Services package for the invoice application.

Contains:
- blob_store: GridFS storage for uploaded PDFs
- invoice_store: MongoDB storage for invoice records
- extraction: AI providers for invoice field extraction
- maintenance: orphaned file reconciliation
"""

from .blob_store import BlobStore, GridFSBlobStore, StoredFile
from .exceptions import NotFoundError, StoreError
from .invoice_store import InvoiceStore, MongoInvoiceStore, build_search_filter

__all__ = [
    "BlobStore",
    "GridFSBlobStore",
    "InvoiceStore",
    "MongoInvoiceStore",
    "NotFoundError",
    "StoreError",
    "StoredFile",
    "build_search_filter",
]
