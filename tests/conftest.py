"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from fakes import FakeBlobStore, FakeInvoiceStore, make_settings
from invoice_app.backend.main import create_app
from invoice_app.backend.services.extraction import build_extraction_gateway


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def invoice_store() -> FakeInvoiceStore:
    return FakeInvoiceStore()


@pytest.fixture
def make_client(
    blob_store: FakeBlobStore, invoice_store: FakeInvoiceStore
) -> Generator[Callable[..., TestClient], None, None]:
    """Factory building a test client over the fake stores."""
    clients: list[TestClient] = []

    def factory(**setting_overrides: Any) -> TestClient:
        settings = make_settings(**setting_overrides)
        app = create_app(
            settings=settings,
            blob_store=blob_store,
            invoice_store=invoice_store,
            extraction_gateway=build_extraction_gateway(settings),
        )
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client: Callable[..., TestClient]) -> TestClient:
    """Create a test client for the FastAPI application."""
    return make_client()


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """
    Create a minimal valid PDF for testing.

    This is a minimal PDF structure that should be recognized as a valid PDF.
    """
    pdf_content = b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT
/F1 12 Tf
100 700 Td
(Test) Tj
ET
endstream
endobj
xref
0 5
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000214 00000 n
trailer
<< /Size 5 /Root 1 0 R >>
startxref
306
%%EOF"""
    return pdf_content


@pytest.fixture
def invoice_payload() -> dict[str, Any]:
    """A complete invoice creation body."""
    return {
        "fileId": "65a1b2c3d4e5f6a7b8c9d0e1",
        "fileName": "acme-january.pdf",
        "vendor": {
            "name": "ACME Corporation",
            "address": "123 Business St, City, State 12345",
            "taxId": "12-3456789",
        },
        "invoice": {
            "number": "INV-2024-001",
            "date": "2024-01-15",
            "currency": "USD",
            "subtotal": 1000.0,
            "taxPercent": 8.5,
            "total": 1085.0,
            "poNumber": "PO-2024-001",
            "poDate": "2024-01-10",
            "lineItems": [
                {
                    "description": "Professional Services",
                    "unitPrice": 100.0,
                    "quantity": 10.0,
                    "total": 1000.0,
                }
            ],
        },
    }
