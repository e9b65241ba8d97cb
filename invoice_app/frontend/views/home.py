"""Landing page."""

import streamlit as st

from ..api_client import ApiClient
from ..navigation import INVOICES, UPLOAD, go_to


def render(api: ApiClient) -> None:
    st.title("Invoice Manager")
    st.write(
        "Upload PDF invoices, extract their data with AI and keep the "
        "structured records up to date."
    )

    upload_col, list_col = st.columns(2)
    with upload_col:
        st.subheader("Upload Invoice")
        st.caption("Add a new PDF invoice (max 25MB).")
        if st.button("Upload a PDF", type="primary", use_container_width=True):
            go_to(UPLOAD)
    with list_col:
        st.subheader("Browse Invoices")
        st.caption("Search, review and edit stored invoices.")
        if st.button("View all invoices", use_container_width=True):
            go_to(INVOICES)
