"""
Invoice list page: search, pagination and delete.
"""

import logging

import streamlit as st

from ..api_client import ApiClient, ApiClientError
from ..config import get_client_settings
from ..formatting import format_currency, format_date
from ..navigation import INVOICE, UPLOAD, go_to

logger = logging.getLogger(__name__)


def _on_search() -> None:
    st.session_state.search_query = st.session_state.search_input
    st.session_state.invoice_page = 1


def _confirm_delete(api: ApiClient) -> None:
    invoice_id = st.session_state.get("pending_delete")
    if not invoice_id:
        return

    st.warning("Are you sure you want to delete this invoice? This will also delete the PDF file.")
    confirm_col, cancel_col, _ = st.columns([1, 1, 4])
    if confirm_col.button("Delete", type="primary", key="confirm-delete"):
        st.session_state.pending_delete = None
        try:
            api.delete_invoice(invoice_id)
        except ApiClientError as e:
            logger.error("Delete of invoice %s failed: %s", invoice_id, e)
            st.error("Failed to delete invoice")
            return
        st.rerun()
    if cancel_col.button("Cancel", key="cancel-delete"):
        st.session_state.pending_delete = None
        st.rerun()


def render(api: ApiClient) -> None:
    settings = get_client_settings()
    st.session_state.setdefault("search_query", "")
    st.session_state.setdefault("invoice_page", 1)

    title_col, action_col = st.columns([4, 1])
    with title_col:
        st.title("Invoices")
        st.caption("Manage your invoice collection")
    with action_col:
        if st.button("Upload Invoice", type="primary", use_container_width=True):
            go_to(UPLOAD)

    st.text_input(
        "Search",
        value=st.session_state.search_query,
        key="search_input",
        placeholder="Search by vendor, invoice number, or filename...",
        on_change=_on_search,
    )

    _confirm_delete(api)

    try:
        result = api.get_invoices(
            q=st.session_state.search_query or None,
            page=st.session_state.invoice_page,
            limit=settings.page_size,
        )
    except ApiClientError as e:
        logger.error("Loading invoices failed: %s", e)
        st.error("Failed to load invoices")
        return

    invoices = result["invoices"]
    pagination = result["pagination"]

    if not invoices:
        if st.session_state.search_query:
            st.info("No invoices match your search.")
        else:
            st.info("No invoices yet. Upload your first PDF invoice to get started.")
    else:
        header = st.columns([3, 2, 2, 2, 1, 1])
        for col, label in zip(header, ("Vendor", "Invoice #", "Date", "Total", "", "")):
            col.markdown(f"**{label}**")

        for invoice in invoices:
            vendor = invoice.get("vendor", {})
            details = invoice.get("invoice", {})
            cols = st.columns([3, 2, 2, 2, 1, 1])
            cols[0].markdown(f"{vendor.get('name', '')}  \n:gray[{invoice.get('fileName', '')}]")
            cols[1].write(details.get("number") or "N/A")
            cols[2].write(format_date(details.get("date")))
            cols[3].write(format_currency(details.get("total"), details.get("currency")))
            if cols[4].button("View", key=f"view-{invoice['_id']}"):
                go_to(INVOICE, invoice["_id"])
            if cols[5].button("Delete", key=f"delete-{invoice['_id']}"):
                st.session_state.pending_delete = invoice["_id"]
                st.rerun()

    pages = max(pagination["pages"], 1)
    if pages > 1:
        prev_col, info_col, next_col = st.columns([1, 2, 1])
        if prev_col.button("Previous", key="prev-page", disabled=pagination["page"] <= 1):
            st.session_state.invoice_page = pagination["page"] - 1
            st.rerun()
        info_col.markdown(
            f"Page {pagination['page']} of {pages} ({pagination['total']} invoices)"
        )
        if next_col.button("Next", key="next-page", disabled=pagination["page"] >= pages):
            st.session_state.invoice_page = pagination["page"] + 1
            st.rerun()
