"""Customer Service API client.

A thin wrapper around the HTTP surface of the Customer Service API,
built on the ``requests`` library.  It is meant for scripts, bots and
other services that manage customer records remotely:

* :meth:`create_customer` - register a new customer.
* :meth:`fetch_customer` - fetch one customer by mobile number.
* :meth:`update_customer` - overwrite a customer's details.
* :meth:`delete_customer` - remove a customer by mobile number.
* :meth:`list_customers` - page through all customers.
* :meth:`search_customers` - substring search over name and mobile number.

No method raises on HTTP or network failures.  Each returns a tuple
``(data, error)`` where ``error`` is ``None`` on success, or a dict
with ``status_code`` and ``message`` describing what went wrong.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class CustomerServiceClient:
    """Client for the customer endpoints mounted under ``/api/v1``."""

    API_PREFIX = "/api/v1"

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8000``.
            session: Optional requests session.  A new one is created
                when omitted.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request and decode the JSON response.

        Returns ``(data, None)`` on success and ``(None, error)`` on
        failure.  For error responses the message is taken from the
        body's ``errorMessage`` or ``statusMessage``; validation errors
        are a field-to-message mapping and are passed through as text.
        """
        url = f"{self.base_url}{self.API_PREFIX}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("errorMessage") or err_json.get("statusMessage") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Customer operations
    # ------------------------------------------------------------------
    def create_customer(self, customer: Dict[str, Any]) -> Tuple[bool, Optional[Error]]:
        """Register a new customer.

        Args:
            customer: ``name``, ``email``, ``mobileNumber`` and ``branchAddress``.
        Returns:
            A tuple ``(created, error)``.
        """
        data, error = self._request("POST", "/create", json_body=customer)
        if error:
            return False, error
        return True, None

    def fetch_customer(self, mobile_number: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Fetch a customer by mobile number.

        Returns:
            A tuple ``(customer, error)``.
        """
        return self._request("GET", "/fetch", params={"mobileNumber": mobile_number})

    def update_customer(self, customer: Dict[str, Any]) -> Tuple[bool, Optional[Error]]:
        """Overwrite the details of the customer identified by ``customer["mobileNumber"]``."""
        data, error = self._request("PUT", "/update", json_body=customer)
        if error:
            return False, error
        return True, None

    def delete_customer(self, mobile_number: str) -> Tuple[bool, Optional[Error]]:
        """Delete a customer by mobile number."""
        data, error = self._request("DELETE", "/delete", params={"mobileNumber": mobile_number})
        if error:
            return False, error
        return True, None

    def list_customers(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "customerId",
        sort_dir: str = "asc",
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve one page of customers.

        Returns:
            A tuple ``(page, error)``.  ``page`` holds ``content`` plus
            ``totalElements``, ``totalPages`` and the other page fields.
        """
        params = {"page": page, "size": size, "sortBy": sort_by, "sortDir": sort_dir}
        return self._request("GET", "/customers", params=params)

    def search_customers(self, search_term: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Search customers by name or mobile number.

        Returns:
            A tuple ``(customers, error)``; ``customers`` is empty on failure.
        """
        data, error = self._request("GET", "/search", params={"searchTerm": search_term})
        if error:
            return [], error
        return data if isinstance(data, list) else [], None
