"""In-memory stand-ins for the MongoDB store adapters, and test settings."""

import re
from typing import Any

from bson import ObjectId

from invoice_app.backend.config import Settings
from invoice_app.backend.services.blob_store import StoredFile
from invoice_app.backend.services.exceptions import NotFoundError, StoreError
from invoice_app.backend.services.invoice_store import DEFAULT_SORT


def _get_path(doc: Any, path: str) -> Any:
    for part in path.split("."):
        if not isinstance(doc, dict):
            return None
        doc = doc.get(part)
    return doc


def _matches(doc: dict[str, Any], filter: dict[str, Any]) -> bool:
    """Evaluate the subset of MongoDB filters the API builds."""
    if not filter:
        return True
    for clause in filter.get("$or", []):
        for path, condition in clause.items():
            value = _get_path(doc, path)
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            if isinstance(value, str) and re.search(condition["$regex"], value, flags):
                return True
    return False


class FakeBlobStore:
    def __init__(self, chunk_size: int = 4):
        self.files: dict[str, tuple[str, bytes]] = {}
        self.chunk_size = chunk_size
        self.fail_uploads = False
        self.fail_deletes = False

    async def upload(self, filename: str, data: bytes) -> str:
        if self.fail_uploads:
            raise StoreError("upload failed")
        file_id = str(ObjectId())
        self.files[file_id] = (filename, data)
        return file_id

    async def download(self, file_id: str) -> StoredFile:
        if file_id not in self.files:
            raise NotFoundError(f"File {file_id} not found")
        filename, data = self.files[file_id]

        async def chunks():
            for start in range(0, len(data), self.chunk_size):
                yield data[start:start + self.chunk_size]

        return StoredFile(file_id=file_id, filename=filename, length=len(data), chunks=chunks())

    async def delete(self, file_id: str) -> None:
        if self.fail_deletes:
            raise StoreError("delete failed")
        self.files.pop(file_id, None)

    async def list_file_ids(self) -> list[str]:
        return list(self.files)


class FakeInvoiceStore:
    def __init__(self):
        self.docs: dict[str, dict[str, Any]] = {}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StoreError("database unavailable")

    async def find(
        self,
        filter: dict[str, Any],
        skip: int = 0,
        limit: int = 10,
        sort: list[tuple[str, int]] = DEFAULT_SORT,
    ) -> tuple[list[dict[str, Any]], int]:
        self._check()
        matching = [doc for doc in self.docs.values() if _matches(doc, filter)]
        for field, direction in reversed(sort):
            matching.sort(key=lambda doc: doc.get(field) or "", reverse=direction < 0)
        return [dict(doc) for doc in matching[skip:skip + limit]], len(matching)

    async def find_by_id(self, invoice_id: str) -> dict[str, Any] | None:
        self._check()
        doc = self.docs.get(invoice_id)
        return dict(doc) if doc else None

    async def insert(self, record: dict[str, Any]) -> str:
        self._check()
        invoice_id = str(ObjectId())
        self.docs[invoice_id] = {"_id": invoice_id, **record}
        return invoice_id

    async def update(self, invoice_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        self._check()
        if invoice_id not in self.docs:
            return None
        self.docs[invoice_id].update(fields)
        return dict(self.docs[invoice_id])

    async def delete(self, invoice_id: str) -> bool:
        self._check()
        return self.docs.pop(invoice_id, None) is not None

    async def referenced_file_ids(self) -> set[str]:
        return {doc["fileId"] for doc in self.docs.values() if doc.get("fileId")}


def make_settings(**overrides: Any) -> Settings:
    """Settings independent of the environment: no API keys, production mode."""
    values: dict[str, Any] = {
        "gemini_api_key": None,
        "groq_api_key": None,
        "NODE_ENV": "production",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)
