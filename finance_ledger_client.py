"""Finance ledger API client.

This module defines a small client wrapper around the Finance Ledger
REST API.  The client uses the ``requests`` library internally and
keeps the bearer token returned by :meth:`register` or :meth:`login`
for subsequent calls.

The client exposes high‑level methods for every API operation:

* :meth:`register` – create an account and store its token.
* :meth:`login` – obtain a fresh token.
* :meth:`create_transaction` – add an income or expense.
* :meth:`list_transactions` – fetch the caller's transactions.
* :meth:`update_transaction` – replace a transaction's fields.
* :meth:`delete_transaction` – remove a transaction.
* :meth:`get_balance` – income minus expenses as a ``Decimal``.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or empty) and ``error``
is a dictionary with ``status_code``, ``error`` and ``message`` keys
taken from the API's error body.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class FinanceLedgerAPI:
    """Client for the finance ledger API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            token: Optional bearer token from an earlier login.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path below the API prefix (e.g. ``/transactions``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{API_PREFIX}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "error": None, "message": str(exc)}
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            message = body.get("message") or body.get("detail") or response.text
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {
                "status_code": response.status_code,
                "error": body.get("error"),
                "message": message,
            }
        if response.content:
            return response.json(), None
        return None, None

    @staticmethod
    def _transaction_payload(
        amount: Decimal | str,
        category: str,
        on: date | str,
        description: Optional[str],
    ) -> Dict[str, Any]:
        # Amounts go over the wire as strings so no float rounding happens.
        return {
            "amount": str(amount),
            "description": description,
            "category": category,
            "date": on.isoformat() if isinstance(on, date) else on,
        }

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        """Register an account; the returned token is kept for later calls."""
        data, error = self._request(
            "POST", "/auth/register", json_body={"name": name, "email": email, "password": password}
        )
        if error:
            return None, error
        self.token = data["token"]
        return self.token, None

    def login(self, email: str, password: str) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        data, error = self._request(
            "POST", "/auth/login", json_body={"email": email, "password": password}
        )
        if error:
            return None, error
        self.token = data["token"]
        return self.token, None

    # ------------------------------------------------------------------
    # Transaction operations
    # ------------------------------------------------------------------
    def create_transaction(
        self,
        amount: Decimal | str,
        category: str,
        on: date | str,
        description: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._request(
            "POST", "/transactions", json_body=self._transaction_payload(amount, category, on, description)
        )

    def list_transactions(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/transactions")
        if error:
            return [], error
        return data or [], None

    def update_transaction(
        self,
        transaction_id: int,
        amount: Decimal | str,
        category: str,
        on: date | str,
        description: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Replace all mutable fields of a transaction.

        A ``description`` left as ``None`` clears the stored one.
        """
        return self._request(
            "PUT",
            f"/transactions/{transaction_id}",
            json_body=self._transaction_payload(amount, category, on, description),
        )

    def delete_transaction(self, transaction_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Delete a transaction.

        Returns:
            A tuple ``(transaction, error)`` where ``transaction`` is the
            snapshot of the removed record.
        """
        data, error = self._request("DELETE", f"/transactions/{transaction_id}")
        if error:
            return None, error
        return data.get("transaction"), None

    def get_balance(self) -> Tuple[Optional[Decimal], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/transactions/balance")
        if error:
            return None, error
        return Decimal(str(data["balance"])), None
