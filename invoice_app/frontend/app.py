"""
Streamlit entry point of the web client.
"""

import logging

import streamlit as st

from invoice_app.frontend.api_client import ApiClient
from invoice_app.frontend.config import get_client_settings
from invoice_app.frontend.navigation import (
    HOME,
    INVOICE,
    INVOICES,
    UPLOAD,
    current_view,
    go_to,
)
from invoice_app.frontend.views import home, invoice_detail, invoice_list, upload

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

VIEWS = {
    HOME: home.render,
    INVOICES: invoice_list.render,
    UPLOAD: upload.render,
    INVOICE: invoice_detail.render,
}


@st.cache_resource
def get_api_client() -> ApiClient:
    settings = get_client_settings()
    return ApiClient(settings.api_url, settings.public_api_url)


def main() -> None:
    st.set_page_config(page_title="Invoice Manager", page_icon="🧾", layout="wide")

    with st.sidebar:
        st.header("Invoice Manager")
        if st.button("Home", use_container_width=True):
            go_to(HOME)
        if st.button("Invoices", use_container_width=True):
            go_to(INVOICES)
        if st.button("Upload", use_container_width=True):
            go_to(UPLOAD)

    render = VIEWS.get(current_view(), home.render)
    render(get_api_client())


if __name__ == "__main__":
    main()
