"""
Page routing through URL query parameters.

The current page and invoice id live in the URL (``?view=invoice&id=...``),
so pages can be bookmarked and a browser reload lands on the same page.
"""

import streamlit as st

HOME = "home"
INVOICES = "invoices"
UPLOAD = "upload"
INVOICE = "invoice"

# Per-page state dropped when leaving a page
PAGE_STATE_KEYS = ("editor", "confirm_invoice_delete", "pending_delete", "extract_notice")


def current_view() -> str:
    return st.query_params.get("view", HOME)


def current_invoice_id() -> str | None:
    return st.query_params.get("id")


def go_to(view: str, invoice_id: str | None = None) -> None:
    """Switch page. Data shown by the new page is reloaded from the API."""
    for key in PAGE_STATE_KEYS:
        st.session_state.pop(key, None)
    st.query_params.clear()
    st.query_params["view"] = view
    if invoice_id:
        st.query_params["id"] = invoice_id
    st.rerun()
