"""
Pages of the web client.

- home: landing page
- invoice_list: search, pagination and delete
- upload: PDF upload and invoice record creation
- invoice_detail: PDF preview and invoice editor
"""

from . import home, invoice_detail, invoice_list, upload

__all__ = ["home", "invoice_detail", "invoice_list", "upload"]
