"""HTTP gateway to the Spendo ledger service."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Callable, TypeVar

import requests

from spendo import schema
from spendo.exceptions import NetworkError, NotFoundError, ValidationError
from spendo.models import EntryDTO, EntryRecord, ExpenditureRecord, ReferenceCode
from spendo.persistence import LedgerBackend

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5
REJECTED_HTTP_STATUSES = {400, 422}
BODY_EXCERPT_LENGTH = 200

T = TypeVar("T")


class HttpLedgerGateway(LedgerBackend):
    """Ledger backend speaking JSON over HTTP via ``requests``."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session
        self._owns_session = session is None

    def connect(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            self.session.headers.update({"Content-Type": "application/json"})
            self._owns_session = True

    def close(self) -> None:
        if self.session is not None and self._owns_session:
            self.session.close()
            self.session = None

    def _request(
        self,
        operation: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the unwrapped ``data`` member.

        Raises:
            NotFoundError: HTTP 404 or a NOT_FOUND envelope status
            ValidationError: HTTP 400/422 or a rejected envelope status
            NetworkError: transport failures and any other error response
        """
        self.connect()
        method, path = schema.ENDPOINTS[operation]
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=body,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise NetworkError(f"{operation} request failed: {exc}") from exc

        if response.status_code >= 400:
            excerpt = (response.text or "")[:BODY_EXCERPT_LENGTH]
            logger.warning(
                "%s %s returned %s: %s", method, path, response.status_code, excerpt
            )
            if response.status_code == 404:
                raise NotFoundError(f"{operation}: record not found")
            if response.status_code in REJECTED_HTTP_STATUSES:
                raise ValidationError(f"{operation} rejected by server: {excerpt}")
            raise NetworkError(
                f"{operation} failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"{operation} returned a non-JSON response",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise NetworkError(
                f"{operation} returned an unexpected response",
                status_code=response.status_code,
            )
        return self._unwrap(operation, payload, response.status_code)

    def _unwrap(self, operation: str, payload: dict[str, Any], status_code: int) -> Any:
        status = str(payload.get("status") or "").upper()
        message = payload.get("message") or payload.get("msg") or status
        if status in schema.NOT_FOUND_STATUSES:
            raise NotFoundError(f"{operation}: {message}")
        if status in schema.REJECTED_STATUSES:
            raise ValidationError(f"{operation} rejected by server: {message}")
        if status in schema.FAILURE_STATUSES:
            logger.warning("%s reported failure status %s: %s", operation, status, message)
            raise NetworkError(f"{operation} failed: {message}", status_code=status_code)
        return payload.get("data")

    def _decode(self, operation: str, decoder: Callable[[Any], T], data: Any) -> T:
        """Decode ``data``, reporting a malformed reply as a backend failure."""
        try:
            return decoder(data)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("%s returned malformed data: %r", operation, exc)
            raise NetworkError(f"{operation} returned malformed data") from exc

    def _decode_rows(self, operation: str, decoder: Callable[[Any], T], data: Any) -> list[T]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise NetworkError(f"{operation} returned malformed data")
        return [self._decode(operation, decoder, row) for row in data]

    def fetch_by_query(self, params: dict[str, str]) -> list[EntryRecord]:
        data = self._request("list", params=params)
        return self._decode_rows("list", schema.entry_from_payload, data)

    def fetch_by_id(self, key: int) -> EntryRecord:
        data = self._request("detail", params={"spendoNo": key})
        if not data:
            raise NotFoundError(f"Entry {key} not found")
        return self._decode("detail", schema.entry_from_payload, data)

    def create(self, entry: EntryDTO) -> int | None:
        data = self._request("create", body=schema.entry_to_payload(entry))
        key = self._decode("create", schema.created_key, data)
        logger.info("Created entry %s", key)
        return key

    def update(self, key: int, entry: EntryDTO) -> None:
        self._request("update", body=schema.entry_to_payload(entry, key=key))
        logger.info("Updated entry %s", key)

    def delete(self, key: int) -> None:
        self._request("delete", params={"spendoNo": key})
        logger.info("Deleted entry %s", key)

    def get_type_codes(self) -> list[ReferenceCode]:
        data = self._request("type_codes")
        return self._decode_rows("type_codes", schema.code_from_payload, data)

    def get_payment_codes(self) -> list[ReferenceCode]:
        data = self._request("payment_codes")
        return self._decode_rows("payment_codes", schema.code_from_payload, data)

    def fetch_expenditure(self, start_date: dt.date, end_date: dt.date) -> list[ExpenditureRecord]:
        data = self._request(
            "expenditure",
            params={
                "startDt": schema.format_date(start_date),
                "endDt": schema.format_date(end_date),
            },
        )
        return self._decode_rows("expenditure", schema.expenditure_from_payload, data)
