"""
PDF blob storage on top of a GridFS bucket.
"""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol

from bson import ObjectId
from gridfs.errors import NoFile

from .exceptions import NotFoundError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


@dataclass
class StoredFile:
    """An opened download: file metadata plus its content stream."""

    file_id: str
    filename: str
    length: int
    chunks: AsyncIterator[bytes]


class BlobStore(Protocol):
    """Operations the API needs from a blob store."""

    async def upload(self, filename: str, data: bytes) -> str: ...

    async def download(self, file_id: str) -> StoredFile: ...

    async def delete(self, file_id: str) -> None: ...

    async def list_file_ids(self) -> list[str]: ...


def parse_object_id(value: str) -> ObjectId | None:
    """Return the ObjectId for ``value``, or None if it is not a valid id."""
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


class GridFSBlobStore:
    """
    Stores PDFs as GridFS files.

    Each file carries ``contentType``, ``originalName``, ``size`` and
    ``uploadDate`` in its metadata. Ids are exposed as ObjectId hex strings.
    """

    def __init__(self, bucket: Any, files_collection: Any):
        self.bucket = bucket
        self.files = files_collection

    async def upload(self, filename: str, data: bytes) -> str:
        file_id = await self.bucket.upload_from_stream(
            filename,
            data,
            metadata={
                "contentType": PDF_CONTENT_TYPE,
                "originalName": filename,
                "size": len(data),
                "uploadDate": datetime.now(timezone.utc),
            },
        )
        logger.info("Stored file %s (%s, %d bytes)", file_id, filename, len(data))
        return str(file_id)

    async def download(self, file_id: str) -> StoredFile:
        """
        Open a stored file for streaming.

        Raises:
            NotFoundError: If the id is malformed or no file matches.
        """
        oid = parse_object_id(file_id)
        if oid is None:
            raise NotFoundError(f"File {file_id} not found")
        try:
            grid_out = await self.bucket.open_download_stream(oid)
        except NoFile as e:
            raise NotFoundError(f"File {file_id} not found") from e

        return StoredFile(
            file_id=file_id,
            filename=grid_out.filename,
            length=grid_out.length,
            chunks=_iter_chunks(grid_out),
        )

    async def delete(self, file_id: str) -> None:
        """Delete a file; unknown ids are logged and ignored."""
        oid = parse_object_id(file_id)
        if oid is None:
            logger.warning("Ignoring delete of malformed file id %r", file_id)
            return
        try:
            await self.bucket.delete(oid)
        except NoFile:
            logger.warning("File %s already absent, nothing to delete", file_id)
            return
        logger.info("Deleted file %s", file_id)

    async def list_file_ids(self) -> list[str]:
        return [str(doc["_id"]) async for doc in self.files.find({}, {"_id": 1})]


async def _iter_chunks(grid_out: Any) -> AsyncIterator[bytes]:
    # Closed also when the consumer stops early, e.g. on client disconnect
    try:
        while True:
            chunk = await grid_out.readchunk()
            if not chunk:
                break
            yield chunk
    finally:
        await grid_out.close()
