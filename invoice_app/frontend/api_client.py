"""
HTTP client for the invoice API.

Every method returns the ``data`` part of the API's response envelope and
raises ``ApiClientError`` for transport failures, non-2xx replies and
replies with ``success: false``.
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Raised when an API call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    """Thin wrapper over the REST endpoints of the invoice API."""

    def __init__(
        self,
        base_url: str,
        public_url: str | None = None,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ):
        """
        Args:
            base_url: API address used for requests.
            public_url: API address as seen by the browser, used for links
                such as the PDF preview. Defaults to ``base_url``.
            client: Preconfigured httpx client (its base_url is used as-is).
            timeout: Request timeout in seconds for the default client.
        """
        self.base_url = base_url.rstrip("/")
        self.public_url = (public_url or base_url).rstrip("/")
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("API request %s %s failed: %s", method, path, e)
            raise ApiClientError(f"Request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error:
            raise ApiClientError(
                body.get("error") or f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )
        if body.get("success") is False:
            raise ApiClientError(
                body.get("error") or "Request was not successful",
                status_code=response.status_code,
            )
        return body

    # =========================================================================
    # Files
    # =========================================================================

    def upload_file(self, filename: str, content: bytes) -> dict[str, Any]:
        """Upload a PDF; returns ``{fileId, fileName, size}``."""
        body = self._request(
            "POST",
            "/api/files/upload",
            files={"pdf": (filename, content, "application/pdf")},
        )
        return body["data"]

    def file_url(self, file_id: str) -> str:
        return f"{self.public_url}/api/files/{file_id}"

    def delete_file(self, file_id: str) -> str:
        return self._request("DELETE", f"/api/files/{file_id}").get("message", "")

    # =========================================================================
    # Invoices
    # =========================================================================

    def get_invoices(
        self,
        q: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Search invoices; returns ``{invoices, pagination}``."""
        params: dict[str, Any] = {}
        if q:
            params["q"] = q
        if page:
            params["page"] = page
        if limit:
            params["limit"] = limit
        return self._request("GET", "/api/invoices", params=params)["data"]

    def get_invoice(self, invoice_id: str) -> dict[str, Any]:
        return self._request("GET", f"/api/invoices/{invoice_id}")["data"]

    def create_invoice(self, invoice: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/invoices", json=invoice)["data"]

    def update_invoice(self, invoice_id: str, invoice: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/api/invoices/{invoice_id}", json=invoice)["data"]

    def delete_invoice(self, invoice_id: str) -> str:
        return self._request("DELETE", f"/api/invoices/{invoice_id}").get("message", "")

    def extract_invoice_data(self, file_id: str, model: str) -> dict[str, Any]:
        """Run AI extraction; returns ``{vendor, invoice}``."""
        body = self._request(
            "POST",
            "/api/invoices/extract",
            json={"fileId": file_id, "model": model},
        )
        if not body.get("data"):
            raise ApiClientError(body.get("error") or "Unknown error")
        return body["data"]
