"""
Invoice detail page: PDF preview beside the invoice form.

Form widgets write into the page's ``InvoiceEditor`` through on_change
callbacks; Save sends the editor's buffer to the API.
"""

import logging
from typing import Any

import streamlit as st
import streamlit.components.v1 as components

from ..api_client import ApiClient, ApiClientError
from ..editor import InvoiceEditor
from ..navigation import INVOICES, current_invoice_id, go_to

logger = logging.getLogger(__name__)

PROVIDERS = {"gemini": "Gemini", "groq": "Groq"}
PDF_PREVIEW_HEIGHT = 900


# =============================================================================
# Widget Callbacks
# =============================================================================


def _on_vendor_change(editor: InvoiceEditor, field: str, key: str) -> None:
    editor.set_vendor_field(field, st.session_state[key])


def _on_invoice_change(editor: InvoiceEditor, field: str, key: str) -> None:
    editor.set_invoice_field(field, st.session_state[key])


def _on_line_item_change(editor: InvoiceEditor, index: int, field: str, key: str) -> None:
    editor.update_line_item(index, field, st.session_state[key])


def _text(label: str, editor: InvoiceEditor, section: str, field: str, **kwargs: Any) -> None:
    source = editor.vendor if section == "vendor" else editor.details
    callback = _on_vendor_change if section == "vendor" else _on_invoice_change
    key = f"{section}-{field}-{editor.revision}"
    st.text_input(
        label,
        value=source.get(field) or "",
        key=key,
        on_change=callback,
        args=(editor, field, key),
        **kwargs,
    )


def _amount(label: str, editor: InvoiceEditor, field: str, **kwargs: Any) -> None:
    key = f"invoice-{field}-{editor.revision}"
    value = editor.details.get(field)
    st.number_input(
        label,
        value=float(value) if value is not None else None,
        key=key,
        on_change=_on_invoice_change,
        args=(editor, field, key),
        **kwargs,
    )


# =============================================================================
# Form Sections
# =============================================================================


def _vendor_section(editor: InvoiceEditor) -> None:
    st.subheader("Vendor Information")
    _text("Vendor Name", editor, "vendor", "name")
    key = f"vendor-address-{editor.revision}"
    st.text_area(
        "Address",
        value=editor.vendor.get("address") or "",
        key=key,
        on_change=_on_vendor_change,
        args=(editor, "address", key),
    )
    _text("Tax ID", editor, "vendor", "taxId")


def _invoice_section(editor: InvoiceEditor) -> None:
    st.subheader("Invoice Details")
    left, right = st.columns(2)
    with left:
        _text("Invoice Number", editor, "invoice", "number")
        _text("Currency", editor, "invoice", "currency", placeholder="USD")
        _amount("Subtotal", editor, "subtotal", step=0.01, format="%.2f")
        _text("PO Number", editor, "invoice", "poNumber")
    with right:
        _text("Invoice Date", editor, "invoice", "date", placeholder="YYYY-MM-DD")
        _amount("Tax %", editor, "taxPercent", step=0.1, format="%.2f")
        _amount("Total", editor, "total", step=0.01, format="%.2f")
        _text("PO Date", editor, "invoice", "poDate", placeholder="YYYY-MM-DD")


def _line_items_section(editor: InvoiceEditor) -> None:
    header_col, add_col = st.columns([4, 1])
    header_col.subheader("Line Items")
    if add_col.button("Add Item", key=f"add-item-{editor.revision}"):
        editor.add_line_item()
        st.rerun()

    if not editor.line_items:
        st.caption("No line items. Click \"Add Item\" to add one.")
        return

    for index, item in enumerate(editor.line_items):
        prefix = f"item-{index}-{editor.revision}"
        with st.container(border=True):
            description_key = f"{prefix}-description"
            st.text_input(
                "Description",
                value=item.get("description", ""),
                key=description_key,
                on_change=_on_line_item_change,
                args=(editor, index, "description", description_key),
            )
            price_col, qty_col, total_col, remove_col = st.columns([2, 2, 2, 1])
            price_key = f"{prefix}-unitPrice"
            price_col.number_input(
                "Unit Price",
                value=float(item.get("unitPrice") or 0),
                step=0.01,
                format="%.2f",
                key=price_key,
                on_change=_on_line_item_change,
                args=(editor, index, "unitPrice", price_key),
            )
            quantity_key = f"{prefix}-quantity"
            qty_col.number_input(
                "Quantity",
                value=float(item.get("quantity") or 0),
                step=1.0,
                key=quantity_key,
                on_change=_on_line_item_change,
                args=(editor, index, "quantity", quantity_key),
            )
            total_col.metric("Total", f"{float(item.get('total') or 0):,.2f}")
            if remove_col.button("Remove", key=f"{prefix}-remove"):
                editor.remove_line_item(index)
                st.rerun()


# =============================================================================
# Actions
# =============================================================================


def _on_provider_select(api: ApiClient, editor: InvoiceEditor, key: str) -> None:
    """Run one extraction per selection, then clear the selection."""
    provider = st.session_state[key]
    st.session_state[key] = None
    if not provider:
        return
    try:
        extracted = api.extract_invoice_data(editor.file_id, provider)
    except ApiClientError as e:
        logger.error("AI extraction with %s failed: %s", provider, e)
        st.session_state.extract_notice = ("error", f"AI extraction failed: {e}")
        return
    editor.apply_extraction(extracted)
    st.session_state.extract_notice = ("success", "AI extraction completed successfully!")


def _show_extract_notice() -> None:
    notice = st.session_state.pop("extract_notice", None)
    if notice is None:
        return
    kind, message = notice
    if kind == "error":
        st.error(message)
    else:
        st.success(message)


def _save(api: ApiClient, editor: InvoiceEditor) -> None:
    try:
        saved = api.update_invoice(editor.invoice_id, editor.to_update_payload())
    except ApiClientError as e:
        logger.error("Saving invoice %s failed: %s", editor.invoice_id, e)
        st.error("Failed to save invoice")
        return
    editor.mark_saved(saved)
    st.success("Invoice saved successfully")


def _delete(api: ApiClient, editor: InvoiceEditor) -> None:
    try:
        api.delete_invoice(editor.invoice_id)
    except ApiClientError as e:
        logger.error("Deleting invoice %s failed: %s", editor.invoice_id, e)
        st.error("Failed to delete invoice")
        return
    go_to(INVOICES)


def _load_editor(api: ApiClient, invoice_id: str) -> InvoiceEditor | None:
    editor = st.session_state.get("editor")
    if editor is not None and editor.invoice_id == invoice_id:
        return editor
    try:
        editor = InvoiceEditor(api.get_invoice(invoice_id))
    except ApiClientError as e:
        logger.error("Loading invoice %s failed: %s", invoice_id, e)
        st.error("Invoice not found" if e.status_code == 404 else "Failed to load invoice")
        return None
    st.session_state.editor = editor
    return editor


def render(api: ApiClient) -> None:
    invoice_id = current_invoice_id()
    editor = _load_editor(api, invoice_id) if invoice_id else None
    if editor is None:
        if not invoice_id:
            st.error("Invoice not found")
        if st.button("Back to Invoices"):
            go_to(INVOICES)
        return

    title_col, provider_col, save_col, delete_col = st.columns([4, 2, 1, 1])
    with title_col:
        st.title(editor.vendor.get("name") or "Unknown Vendor")
        number = editor.details.get("number") or "N/A"
        st.caption(f"Invoice #{number}" + (" · unsaved changes" if editor.dirty else ""))

    provider_key = f"provider-{editor.revision}"
    provider_col.selectbox(
        "Extract with AI",
        options=list(PROVIDERS),
        format_func=PROVIDERS.get,
        index=None,
        placeholder="Extract with AI",
        key=provider_key,
        on_change=_on_provider_select,
        args=(api, editor, provider_key),
        label_visibility="collapsed",
    )
    _show_extract_notice()

    if save_col.button("Save", type="primary", key="save-invoice", use_container_width=True):
        _save(api, editor)

    # Holds the id of the invoice awaiting confirmation
    if delete_col.button("Delete", key="delete-invoice", use_container_width=True):
        st.session_state.confirm_invoice_delete = editor.invoice_id
    if st.session_state.get("confirm_invoice_delete") == editor.invoice_id:
        st.warning(
            "Are you sure you want to delete this invoice? "
            "This will also delete the PDF file."
        )
        confirm_col, cancel_col, _ = st.columns([1, 1, 4])
        if confirm_col.button("Yes, delete", type="primary", key="confirm-invoice-delete"):
            st.session_state.confirm_invoice_delete = None
            _delete(api, editor)
        if cancel_col.button("Cancel", key="cancel-invoice-delete"):
            st.session_state.confirm_invoice_delete = None
            st.rerun()

    pdf_col, form_col = st.columns(2)
    with pdf_col:
        file_url = api.file_url(editor.file_id)
        st.caption(editor.data.get("fileName", ""))
        components.iframe(file_url, height=PDF_PREVIEW_HEIGHT, scrolling=True)
        st.link_button("Open PDF in new tab", file_url)
    with form_col:
        _vendor_section(editor)
        _invoice_section(editor)
        _line_items_section(editor)
