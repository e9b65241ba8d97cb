"""
Routers package for FastAPI endpoints.

Organized by domain:
- files: PDF upload, streaming and deletion
- invoices: Invoice search, CRUD and AI extraction
"""

from . import files, invoices

__all__ = ["files", "invoices"]
