"""
Invoice persistence on top of a MongoDB collection.
"""

import asyncio
import logging
import re
from typing import Any, Protocol

from pymongo import ReturnDocument

from .blob_store import parse_object_id

logger = logging.getLogger(__name__)

# Newest first
DEFAULT_SORT: list[tuple[str, int]] = [("createdAt", -1)]

SEARCH_FIELDS = ("vendor.name", "invoice.number", "fileName")


class InvoiceStore(Protocol):
    """Operations the API needs from the invoice collection."""

    async def find(
        self,
        filter: dict[str, Any],
        skip: int = 0,
        limit: int = 10,
        sort: list[tuple[str, int]] = DEFAULT_SORT,
    ) -> tuple[list[dict[str, Any]], int]: ...

    async def find_by_id(self, invoice_id: str) -> dict[str, Any] | None: ...

    async def insert(self, record: dict[str, Any]) -> str: ...

    async def update(
        self, invoice_id: str, fields: dict[str, Any]
    ) -> dict[str, Any] | None: ...

    async def delete(self, invoice_id: str) -> bool: ...

    async def referenced_file_ids(self) -> set[str]: ...


def build_search_filter(query: str | None) -> dict[str, Any]:
    """
    Build the listing filter for a free-text search term.

    The term is matched literally and case-insensitively as a substring of
    the vendor name, invoice number or filename. An empty term matches all.
    """
    if not query:
        return {}
    pattern = re.escape(query)
    return {
        "$or": [
            {field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS
        ]
    }


def serialize_document(doc: dict[str, Any]) -> dict[str, Any]:
    """Convert a MongoDB document into its JSON form (string ``_id``)."""
    result = dict(doc)
    if "_id" in result:
        result["_id"] = str(result["_id"])
    return result


class MongoInvoiceStore:
    """Invoice records stored as documents in a MongoDB collection."""

    def __init__(self, collection: Any):
        self.collection = collection

    async def find(
        self,
        filter: dict[str, Any],
        skip: int = 0,
        limit: int = 10,
        sort: list[tuple[str, int]] = DEFAULT_SORT,
    ) -> tuple[list[dict[str, Any]], int]:
        cursor = self.collection.find(filter).sort(sort).skip(skip).limit(limit)
        docs, total = await asyncio.gather(
            cursor.to_list(),
            self.collection.count_documents(filter),
        )
        return [serialize_document(doc) for doc in docs], total

    async def find_by_id(self, invoice_id: str) -> dict[str, Any] | None:
        oid = parse_object_id(invoice_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid})
        return serialize_document(doc) if doc else None

    async def insert(self, record: dict[str, Any]) -> str:
        result = await self.collection.insert_one(dict(record))
        return str(result.inserted_id)

    async def update(
        self, invoice_id: str, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        oid = parse_object_id(invoice_id)
        if oid is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return serialize_document(doc) if doc else None

    async def delete(self, invoice_id: str) -> bool:
        oid = parse_object_id(invoice_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def referenced_file_ids(self) -> set[str]:
        file_ids = await self.collection.distinct("fileId")
        return {str(file_id) for file_id in file_ids if file_id}
