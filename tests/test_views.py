"""Tests for the web client pages, run through Streamlit's AppTest."""

import copy

import pytest
from streamlit.testing.v1 import AppTest

from invoice_app.backend.services.extraction import canned_extraction
from invoice_app.frontend.api_client import ApiClientError

INVOICE_ID = "65b000000000000000000001"


def detail_page():
    import streamlit as st

    from invoice_app.frontend.views import invoice_detail

    invoice_detail.render(st.session_state.api)


def list_page():
    import streamlit as st

    from invoice_app.frontend.views import invoice_list

    invoice_list.render(st.session_state.api)


def leave_page():
    import streamlit as st

    from invoice_app.frontend.navigation import INVOICES, go_to

    if st.button("Leave", key="leave"):
        go_to(INVOICES)


class StubApi:
    """Records the calls the pages make to the invoice API."""

    def __init__(self, invoice=None, extract_error=None, pages=3):
        self.invoice = invoice
        self.extract_error = extract_error
        self.pages = pages
        self.extract_calls = []
        self.updates = []
        self.deletes = []
        self.list_calls = []

    def get_invoice(self, invoice_id):
        return copy.deepcopy(self.invoice)

    def file_url(self, file_id):
        return f"http://localhost:3001/api/files/{file_id}"

    def extract_invoice_data(self, file_id, model):
        self.extract_calls.append((file_id, model))
        if self.extract_error is not None:
            raise self.extract_error
        return canned_extraction(model)

    def update_invoice(self, invoice_id, payload):
        self.updates.append((invoice_id, payload))
        return {"_id": invoice_id, **payload, "updatedAt": "2024-01-16T10:00:00.000Z"}

    def delete_invoice(self, invoice_id):
        self.deletes.append(invoice_id)
        return "Invoice deleted successfully"

    def get_invoices(self, q=None, page=None, limit=None):
        self.list_calls.append({"q": q, "page": page, "limit": limit})
        invoices = [
            {
                "_id": f"65b00000000000000000000{i}",
                "fileName": f"invoice-{i}.pdf",
                "vendor": {"name": f"Vendor {i}"},
                "invoice": {"number": f"N-{i}", "date": "2024-01-15", "total": 10.0 * i},
            }
            for i in range(1, 3)
        ]
        return {
            "invoices": invoices,
            "pagination": {"page": page, "limit": limit, "total": 25, "pages": self.pages},
        }


def open_detail(api: StubApi) -> AppTest:
    at = AppTest.from_function(detail_page, default_timeout=30)
    at.session_state["api"] = api
    at.query_params["view"] = "invoice"
    at.query_params["id"] = INVOICE_ID
    return at.run()


@pytest.fixture
def stored_invoice(invoice_payload):
    return {"_id": INVOICE_ID, "createdAt": "2024-01-15T10:00:00.000Z", **invoice_payload}


class TestInvoiceDetailPage:
    """Tests for the invoice editor page."""

    def test_renders_invoice(self, stored_invoice):
        at = open_detail(StubApi(stored_invoice))
        assert not at.exception
        assert at.title[0].value == "ACME Corporation"
        assert at.text_input(key="invoice-number-0").value == "INV-2024-001"

    def test_extraction_runs_once_per_selection(self, stored_invoice):
        api = StubApi(stored_invoice)
        at = open_detail(api)

        at.selectbox(key="provider-0").select("groq").run()

        assert api.extract_calls == [(stored_invoice["fileId"], "groq")]
        assert at.title[0].value == "TechCorp Industries"
        assert at.success[0].value == "AI extraction completed successfully!"

        at.text_input(key="vendor-name-1").input("TechCorp").run()
        assert len(api.extract_calls) == 1

    def test_failed_extraction_is_not_repeated(self, stored_invoice):
        api = StubApi(stored_invoice, extract_error=ApiClientError("HTTP error! status: 500", 500))
        at = open_detail(api)

        at.selectbox(key="provider-0").select("groq").run()
        assert len(api.extract_calls) == 1
        assert "AI extraction failed" in at.error[0].value
        assert at.selectbox(key="provider-0").value is None

        at.text_input(key="vendor-name-0").input("ACME Corp").run()
        at.text_input(key="invoice-number-0").input("INV-9").run()

        assert len(api.extract_calls) == 1
        assert not at.error

        at.selectbox(key="provider-0").select("gemini").run()
        assert [model for _, model in api.extract_calls] == ["groq", "gemini"]

    def test_save_sends_edit_buffer(self, stored_invoice):
        api = StubApi(stored_invoice)
        at = open_detail(api)

        at.text_input(key="vendor-name-0").input("ACME Corp").run()
        at.button(key="save-invoice").click().run()

        invoice_id, payload = api.updates[0]
        assert invoice_id == INVOICE_ID
        assert set(payload) == {"fileId", "fileName", "vendor", "invoice"}
        assert payload["vendor"]["name"] == "ACME Corp"
        assert payload["invoice"] == stored_invoice["invoice"]
        assert at.success[0].value == "Invoice saved successfully"

    def test_delete_requires_confirmation(self, stored_invoice):
        api = StubApi(stored_invoice)
        at = open_detail(api)

        at.button(key="delete-invoice").click().run()
        assert api.deletes == []
        assert "Are you sure" in at.warning[0].value

        at.button(key="cancel-invoice-delete").click().run()
        assert api.deletes == []
        assert not at.warning

        at.button(key="delete-invoice").click().run()
        at.button(key="confirm-invoice-delete").click().run()
        assert api.deletes == [INVOICE_ID]

    def test_confirmation_for_other_invoice_not_shown(self, stored_invoice):
        at = AppTest.from_function(detail_page, default_timeout=30)
        at.session_state["api"] = StubApi(stored_invoice)
        at.session_state["confirm_invoice_delete"] = "65b0000000000000000000ff"
        at.query_params["id"] = INVOICE_ID
        at.run()

        assert not at.warning


class TestNavigation:
    """Tests for leaving a page."""

    def test_page_state_is_dropped(self):
        at = AppTest.from_function(leave_page, default_timeout=30)
        at.session_state["confirm_invoice_delete"] = INVOICE_ID
        at.session_state["pending_delete"] = INVOICE_ID
        at.run()

        at.button(key="leave").click().run()

        assert "confirm_invoice_delete" not in at.session_state
        assert "pending_delete" not in at.session_state


class TestInvoiceListPage:
    """Tests for the invoice list page."""

    def open_list(self, api: StubApi) -> AppTest:
        at = AppTest.from_function(list_page, default_timeout=30)
        at.session_state["api"] = api
        return at.run()

    def test_first_page_loaded(self):
        api = StubApi()
        at = self.open_list(api)

        assert not at.exception
        assert api.list_calls[-1] == {"q": None, "page": 1, "limit": 10}

    def test_next_and_previous(self):
        api = StubApi()
        at = self.open_list(api)

        at.button(key="next-page").click().run()
        assert api.list_calls[-1]["page"] == 2

        at.button(key="next-page").click().run()
        assert api.list_calls[-1]["page"] == 3
        assert at.button(key="next-page").disabled

        at.button(key="prev-page").click().run()
        assert api.list_calls[-1]["page"] == 2

    def test_search_resets_page(self):
        api = StubApi()
        at = self.open_list(api)
        at.button(key="next-page").click().run()

        at.text_input(key="search_input").input("ACME").run()

        assert api.list_calls[-1] == {"q": "ACME", "page": 1, "limit": 10}

    def test_single_page_has_no_pager(self):
        at = self.open_list(StubApi(pages=1))
        with pytest.raises(KeyError):
            at.button(key="next-page")
