"""
Upload page: pick a PDF, store it and create its invoice record.
"""

import logging

import streamlit as st

from ..api_client import ApiClient, ApiClientError
from ..config import get_client_settings
from ..navigation import INVOICE, INVOICES, go_to
from ..uploads import check_pdf_upload, format_size, new_invoice_record

logger = logging.getLogger(__name__)


def render(api: ApiClient) -> None:
    settings = get_client_settings()
    max_mb = settings.max_upload_bytes // (1024 * 1024)

    st.title("Upload Invoice")
    st.write("Upload a PDF invoice to get started with AI-powered data extraction")

    uploaded = st.file_uploader(
        f"Choose a PDF invoice file (max {max_mb}MB)",
        type=["pdf"],
        help="Drag and drop a file here or click to browse",
    )

    if st.button("Back to Invoices"):
        go_to(INVOICES)

    if uploaded is None:
        return

    error = check_pdf_upload(uploaded.type, uploaded.size, settings.max_upload_bytes)
    if error:
        st.error(error)
        return

    st.success(f"{uploaded.name} ({format_size(uploaded.size)})")

    if not st.button("Upload and Process", type="primary"):
        return

    try:
        with st.spinner("Uploading PDF..."):
            file_data = api.upload_file(uploaded.name, uploaded.getvalue())
        with st.spinner("Creating invoice record..."):
            invoice = api.create_invoice(new_invoice_record(file_data))
    except ApiClientError as e:
        logger.error("Upload of %s failed: %s", uploaded.name, e)
        st.error("Upload failed. Please try again.")
        return

    go_to(INVOICE, invoice["_id"])
