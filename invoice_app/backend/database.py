"""
Database connection and store dependencies.

The connection is an explicitly constructed handle owned by the application
lifespan; request handlers receive the store adapters through FastAPI
dependencies that read them from ``app.state``.
"""

import logging

from fastapi import Request
from gridfs import AsyncGridFSBucket
from pymongo import AsyncMongoClient

from .services.blob_store import BlobStore, GridFSBlobStore
from .services.invoice_store import InvoiceStore, MongoInvoiceStore

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "invoice-manager"
INVOICES_COLLECTION = "invoices"
PDF_BUCKET = "pdfs"


class Database:
    """
    MongoDB connection handle.

    Usage:
        database = Database(settings.mongodb_uri)
        await database.connect()
        blob_store = database.blob_store()
        ...
        await database.close()
    """

    def __init__(self, uri: str, database_name: str | None = None):
        self.client = AsyncMongoClient(uri)
        if database_name:
            self.db = self.client[database_name]
        else:
            self.db = self.client.get_default_database(default=DEFAULT_DATABASE)

    async def connect(self) -> None:
        """Verify the server is reachable."""
        try:
            await self.db.command("ping")
        except Exception:
            logger.error("MongoDB connection failed")
            raise
        logger.info("Connected to MongoDB database '%s'", self.db.name)

    async def close(self) -> None:
        await self.client.close()
        logger.info("Disconnected from MongoDB")

    def blob_store(self) -> GridFSBlobStore:
        return GridFSBlobStore(
            AsyncGridFSBucket(self.db, bucket_name=PDF_BUCKET),
            self.db[f"{PDF_BUCKET}.files"],
        )

    def invoice_store(self) -> MongoInvoiceStore:
        return MongoInvoiceStore(self.db[INVOICES_COLLECTION])


def get_blob_store(request: Request) -> BlobStore:
    """Dependency returning the application's blob store."""
    return request.app.state.blob_store


def get_invoice_store(request: Request) -> InvoiceStore:
    """Dependency returning the application's invoice store."""
    return request.app.state.invoice_store
