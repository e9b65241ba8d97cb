"""
Client-side upload checks and the initial invoice record for a new upload.
"""

from datetime import date
from typing import Any

from .config import MAX_UPLOAD_BYTES

PDF_CONTENT_TYPE = "application/pdf"


def check_pdf_upload(
    content_type: str | None,
    size: int,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> str | None:
    """
    Pre-check a selected file the same way the API does.

    Returns:
        An error message for the user, or None if the file is acceptable.
    """
    if content_type != PDF_CONTENT_TYPE:
        return "Please select a PDF file"
    if size == 0:
        return "The selected file is empty"
    if size > max_bytes:
        return f"File size must be less than {max_bytes // (1024 * 1024)}MB"
    return None


def new_invoice_record(upload: dict[str, Any], today: date | None = None) -> dict[str, Any]:
    """Build the placeholder invoice created right after an upload."""
    today = today or date.today()
    return {
        "fileId": upload["fileId"],
        "fileName": upload["fileName"],
        "vendor": {"name": "Unknown Vendor"},
        "invoice": {
            "number": "",
            "date": today.isoformat(),
            "lineItems": [],
        },
    }


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.2f} MB"
