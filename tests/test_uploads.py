"""Tests for web client upload checks and display formatting."""

from datetime import date

import pytest

from invoice_app.frontend.formatting import format_currency, format_date
from invoice_app.frontend.uploads import check_pdf_upload, format_size, new_invoice_record


class TestCheckPdfUpload:
    """Tests for the pre-upload check."""

    def test_accepts_pdf(self):
        assert check_pdf_upload("application/pdf", 1024) is None

    def test_rejects_other_types(self):
        assert check_pdf_upload("image/png", 1024) == "Please select a PDF file"
        assert check_pdf_upload(None, 1024) == "Please select a PDF file"

    def test_rejects_empty(self):
        assert check_pdf_upload("application/pdf", 0) == "The selected file is empty"

    def test_size_limit(self):
        limit = 25 * 1024 * 1024
        assert check_pdf_upload("application/pdf", limit) is None
        assert check_pdf_upload("application/pdf", limit + 1) == "File size must be less than 25MB"


def test_new_invoice_record():
    record = new_invoice_record(
        {"fileId": "f1", "fileName": "scan.pdf", "size": 10}, today=date(2024, 3, 5)
    )
    assert record == {
        "fileId": "f1",
        "fileName": "scan.pdf",
        "vendor": {"name": "Unknown Vendor"},
        "invoice": {"number": "", "date": "2024-03-05", "lineItems": []},
    }


@pytest.mark.parametrize(
    "size, expected",
    [(512, "512 B"), (2048, "2.0 KB"), (3 * 1024 * 1024, "3.00 MB")],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


class TestFormatting:
    """Tests for amount and date display."""

    def test_currency_symbols(self):
        assert format_currency(1085.0, "USD") == "$1,085.00"
        assert format_currency(2500.0, "eur") == "€2,500.00"

    def test_currency_default_and_unknown(self):
        assert format_currency(10.0) == "$10.00"
        assert format_currency(10.0, "CHF") == "10.00 CHF"

    def test_currency_missing_amount(self):
        assert format_currency(None, "USD") == "N/A"

    def test_dates(self):
        assert format_date("2024-01-15") == "Jan 15, 2024"
        assert format_date("2024-01-15T10:30:00.000Z") == "Jan 15, 2024"

    def test_missing_or_unparseable_date(self):
        assert format_date(None) == "N/A"
        assert format_date("sometime in May") == "sometime in May"
