"""
Canned extraction results.

Returned instead of a real provider reply when the provider has no API key,
when running in development mode, or when the provider call fails.
"""

import copy
from typing import Any

DEFAULT_PROVIDER = "gemini"

CANNED_EXTRACTIONS: dict[str, dict[str, Any]] = {
    "gemini": {
        "vendor": {
            "name": "ACME Corporation",
            "address": "123 Business St, City, State 12345",
            "taxId": "12-3456789",
        },
        "invoice": {
            "number": "INV-2024-001",
            "date": "2024-01-15",
            "currency": "USD",
            "subtotal": 1000.00,
            "taxPercent": 8.5,
            "total": 1085.00,
            "poNumber": "PO-2024-001",
            "poDate": "2024-01-10",
            "lineItems": [
                {
                    "description": "Professional Services",
                    "unitPrice": 100.00,
                    "quantity": 10,
                    "total": 1000.00,
                },
            ],
        },
    },
    "groq": {
        "vendor": {
            "name": "TechCorp Industries",
            "address": "456 Tech Ave, Silicon Valley, CA 94000",
            "taxId": "98-7654321",
        },
        "invoice": {
            "number": "TC-2024-005",
            "date": "2024-01-20",
            "currency": "USD",
            "subtotal": 2500.00,
            "taxPercent": 10.0,
            "total": 2750.00,
            "poNumber": "PO-2024-005",
            "poDate": "2024-01-18",
            "lineItems": [
                {
                    "description": "Software License",
                    "unitPrice": 500.00,
                    "quantity": 5,
                    "total": 2500.00,
                },
            ],
        },
    },
}


def canned_extraction(provider_name: str) -> dict[str, Any]:
    """Return a fresh copy of the canned result for ``provider_name``."""
    data = CANNED_EXTRACTIONS.get(provider_name, CANNED_EXTRACTIONS[DEFAULT_PROVIDER])
    return copy.deepcopy(data)
