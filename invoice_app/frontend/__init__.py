"""
Invoice Manager Web Client.

A Streamlit application for listing, uploading and editing invoices through
the invoice API. Run with ``streamlit run invoice_app/frontend/app.py``.
"""
