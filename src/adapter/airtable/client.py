"""Thin Airtable REST client.

Every call is bounded by a timeout and never retried. Transport errors,
timeouts and unexpected responses surface as StoreUnavailableError so the
API layer can answer with a generic 500.

API Documentation: https://airtable.com/developers/web/api/introduction
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from domain.model.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

AIRTABLE_API_BASE_URL = "https://api.airtable.com/v0"
DEFAULT_TIMEOUT_SECONDS = 10.0


def escape_formula_value(value: str) -> str:
    """Escape a value for use inside a double-quoted formula string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


class AirtableClient:
    """Record-level access to one Airtable base."""

    def __init__(
        self,
        api_key: str,
        base_id: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        self._http = httpx.Client(
            base_url=f"{AIRTABLE_API_BASE_URL}/{base_id}/",
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("Airtable request timed out", extra={"method": method, "path": path})
            raise StoreUnavailableError("Record store timed out") from e
        except httpx.HTTPError as e:
            logger.error("Airtable request failed", extra={"method": method, "path": path, "error": str(e)})
            raise StoreUnavailableError("Record store request failed") from e
        return response

    def _json(self, response: httpx.Response, method: str, path: str) -> dict[str, Any]:
        if response.is_error:
            logger.error(
                "Airtable returned an error",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "body": response.text[:500],
                },
            )
            raise StoreUnavailableError(f"Record store returned {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise StoreUnavailableError("Record store returned invalid JSON") from e
        if not isinstance(data, dict):
            raise StoreUnavailableError("Record store returned unexpected payload")
        return data

    # ── read operations ──────────────────────────────────────

    def list_records(self, table: str, formula: str | None = None) -> list[dict[str, Any]]:
        """All records of a table, following the pagination cursor."""
        path = quote(table, safe="")
        params: dict[str, str] = {}
        if formula:
            params["filterByFormula"] = formula

        records: list[dict[str, Any]] = []
        while True:
            data = self._json(self._request("GET", path, params=params), "GET", path)
            records.extend(data.get("records", []))
            offset = data.get("offset")
            if not offset:
                return records
            params["offset"] = offset

    def get_record(self, table: str, record_id: str) -> dict[str, Any] | None:
        """Single record by ID, or None if it does not exist."""
        path = f"{quote(table, safe='')}/{quote(record_id, safe='')}"
        response = self._request("GET", path)
        if response.status_code == 404:
            return None
        return self._json(response, "GET", path)

    # ── write operations ─────────────────────────────────────

    def create_record(self, table: str, fields: dict[str, Any]) -> dict[str, Any]:
        path = quote(table, safe="")
        data = self._json(
            self._request("POST", path, json={"records": [{"fields": fields}]}),
            "POST", path,
        )
        records = data.get("records") or []
        if not records:
            raise StoreUnavailableError("Record store created no record")
        return records[0]

    def update_record(self, table: str, record_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        """Patch fields of one record. None if the record does not exist."""
        path = quote(table, safe="")
        response = self._request(
            "PATCH", path, json={"records": [{"id": record_id, "fields": fields}]},
        )
        if response.status_code == 404:
            return None
        records = self._json(response, "PATCH", path).get("records") or []
        return records[0] if records else None

    def delete_record(self, table: str, record_id: str) -> bool:
        path = f"{quote(table, safe='')}/{quote(record_id, safe='')}"
        response = self._request("DELETE", path)
        if response.status_code == 404:
            return False
        return bool(self._json(response, "DELETE", path).get("deleted"))
