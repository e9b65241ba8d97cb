"""
Orphaned file reconciliation.

Deleting an invoice removes its record first and its PDF second without any
atomicity, so a failure in between leaves a stored file that no invoice
references. ``reconcile_orphaned_files`` finds such files and optionally
deletes them. It only runs when invoked explicitly.

Usage:
    invoice-app-reconcile           # report orphans
    invoice-app-reconcile --apply   # delete them
"""

import argparse
import asyncio
import logging

from ..config import get_settings
from ..database import Database
from .blob_store import BlobStore
from .invoice_store import InvoiceStore

logger = logging.getLogger(__name__)


async def reconcile_orphaned_files(
    blob_store: BlobStore,
    invoice_store: InvoiceStore,
    dry_run: bool = True,
) -> list[str]:
    """
    Find stored files that no invoice references.

    Args:
        blob_store: Store holding the PDF files.
        invoice_store: Store holding the invoice records.
        dry_run: If False, delete the orphaned files.

    Returns:
        Ids of the orphaned files, sorted.
    """
    referenced = await invoice_store.referenced_file_ids()
    orphans = sorted(
        file_id for file_id in await blob_store.list_file_ids() if file_id not in referenced
    )

    logger.info(
        "Found %d orphaned files (%d referenced by invoices)",
        len(orphans),
        len(referenced),
    )

    if not dry_run:
        for file_id in orphans:
            await blob_store.delete(file_id)

    return orphans


async def _run(apply: bool) -> list[str]:
    settings = get_settings()
    database = Database(settings.mongodb_uri, settings.mongodb_db)
    await database.connect()
    try:
        return await reconcile_orphaned_files(
            database.blob_store(),
            database.invoice_store(),
            dry_run=not apply,
        )
    finally:
        await database.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Report or delete stored PDFs that no invoice references."
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="delete the orphaned files instead of only listing them",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    orphans = asyncio.run(_run(args.apply))
    for file_id in orphans:
        print(file_id)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
