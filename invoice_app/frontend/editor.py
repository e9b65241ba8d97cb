"""
Edit buffer for the invoice detail page.

``InvoiceEditor`` holds a local copy of one invoice. Form widgets write into
it, AI extraction overwrites its vendor and invoice sections, and nothing
reaches the API until the page saves it explicitly.
"""

import copy
from typing import Any

# Fields sent back on save; _id and the timestamps are owned by the server
UPDATE_FIELDS = ("fileId", "fileName", "vendor", "invoice")

RECOMPUTING_FIELDS = ("unitPrice", "quantity")


def new_line_item() -> dict[str, Any]:
    return {"description": "", "unitPrice": 0.0, "quantity": 1.0, "total": 0.0}


def line_item_total(item: dict[str, Any]) -> float:
    """Total of a line item: unit price times quantity."""
    return float(item.get("unitPrice") or 0) * float(item.get("quantity") or 0)


def _set_optional(target: dict[str, Any], field: str, value: Any) -> None:
    # Cleared inputs remove the field instead of storing an empty value
    if value is None or value == "":
        target.pop(field, None)
    else:
        target[field] = value


class InvoiceEditor:
    """
    View model of an invoice being edited.

    Attributes:
        invoice_id: Id of the invoice record.
        data: The edited invoice document.
        dirty: Whether there are unsaved changes.
        revision: Bumped whenever the form layout or all of its values
            change at once, so the page can rebuild its widgets.
    """

    def __init__(self, invoice: dict[str, Any]):
        self.invoice_id: str = invoice["_id"]
        self.data = copy.deepcopy(invoice)
        self.data.setdefault("vendor", {"name": ""})
        details = self.data.setdefault("invoice", {"number": "", "date": ""})
        details.setdefault("lineItems", [])
        self.dirty = False
        self.revision = 0

    @property
    def file_id(self) -> str:
        return self.data.get("fileId", "")

    @property
    def vendor(self) -> dict[str, Any]:
        return self.data["vendor"]

    @property
    def details(self) -> dict[str, Any]:
        return self.data["invoice"]

    @property
    def line_items(self) -> list[dict[str, Any]]:
        return self.details["lineItems"]

    def set_vendor_field(self, field: str, value: Any) -> None:
        if field == "name":
            self.vendor["name"] = value or ""
        else:
            _set_optional(self.vendor, field, value)
        self.dirty = True

    def set_invoice_field(self, field: str, value: Any) -> None:
        if field in ("number", "date"):
            self.details[field] = value or ""
        else:
            _set_optional(self.details, field, value)
        self.dirty = True

    def add_line_item(self) -> None:
        self.line_items.append(new_line_item())
        self.dirty = True
        self.revision += 1

    def remove_line_item(self, index: int) -> None:
        del self.line_items[index]
        self.dirty = True
        self.revision += 1

    def update_line_item(self, index: int, field: str, value: Any) -> None:
        """
        Set one field of a line item.

        Changing the unit price or quantity recomputes the item's total.
        """
        item = self.line_items[index]
        item[field] = value
        if field in RECOMPUTING_FIELDS:
            item["total"] = line_item_total(item)
        self.dirty = True

    def apply_extraction(self, extracted: dict[str, Any]) -> None:
        """Replace the vendor and invoice sections with extracted fields."""
        self.data["vendor"] = copy.deepcopy(extracted["vendor"])
        self.data["invoice"] = copy.deepcopy(extracted["invoice"])
        self.details.setdefault("lineItems", [])
        self.dirty = True
        self.revision += 1

    def to_update_payload(self) -> dict[str, Any]:
        return {
            field: copy.deepcopy(self.data[field])
            for field in UPDATE_FIELDS
            if field in self.data
        }

    def mark_saved(self, invoice: dict[str, Any]) -> None:
        """Adopt the server's copy after a successful save."""
        self.data = copy.deepcopy(invoice)
        self.details.setdefault("lineItems", [])
        self.dirty = False
