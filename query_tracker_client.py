"""Query Tracker API client.

This module defines a small client wrapper around the Query Tracker
REST API, mirroring the calls the review web front‑end makes:

* :meth:`QueryTrackerAPI.list_form_data` – records with their queries.
* :meth:`QueryTrackerAPI.create_query` – raise a query on a record.
* :meth:`QueryTrackerAPI.create_query_for_form_data` – raise a query
  titled with the record's question.
* :meth:`QueryTrackerAPI.update_query` / :meth:`QueryTrackerAPI.resolve_query`.
* :meth:`QueryTrackerAPI.delete_query`.

Success responses are wrapped in an envelope
``{"statusCode", "data", "message"}``; the client unwraps ``data``.
Every method returns a tuple ``(result, error)`` where ``error`` is
``None`` on success or a dictionary with keys ``status_code`` and
``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class QueryTrackerAPI:
    """Client for interacting with the Query Tracker API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success (``None`` for empty bodies) and
            ``error`` is ``None``. On failure, ``data`` is ``None`` and
            ``error`` describes the issue.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers={"Content-Type": "application/json"},
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
                    message = exc.response.json().get("message", "")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request %s %s failed (%s): %s", method, path, status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request %s %s failed: %s", method, path, exc)
            return None, {"status_code": None, "message": str(exc)}

    def _request_data(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Like :meth:`_request` but unwraps the response envelope."""
        body, error = self._request(method, path, json_body=json_body)
        if error:
            return None, error
        if isinstance(body, dict) and "data" in body:
            return body["data"], None
        return body, None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/health")

    def list_form_data(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all FormData records with their queries."""
        data, error = self._request_data("GET", "/form-data")
        if error or not isinstance(data, dict):
            return [], error
        return data.get("formData", []), None

    def get_query(self, query_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request_data("GET", f"/queries/{query_id}")

    def create_query(
        self, form_data_id: str, title: str, description: Optional[str] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a query for a FormData record."""
        payload: Dict[str, Any] = {"title": title, "formDataId": form_data_id}
        if description is not None:
            payload["description"] = description
        return self._request_data("POST", "/queries", json_body=payload)

    def create_query_for_form_data(
        self, form_data: Dict[str, Any], description: Optional[str] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a query titled with the record's question.

        Args:
            form_data: A record as returned by :meth:`list_form_data`.
            description: What needs to be reviewed.
        """
        return self.create_query(form_data["id"], form_data["question"], description)

    def update_query(
        self,
        query_id: str,
        *,
        status: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Apply a partial update; at least one field must be given."""
        payload: Dict[str, Any] = {}
        if status is not None:
            payload["status"] = status
        if description is not None:
            payload["description"] = description
        if not payload:
            return None, {"status_code": None, "message": "Nothing to update"}
        return self._request_data("PUT", f"/queries/{query_id}", json_body=payload)

    def resolve_query(
        self, query_id: str, description: Optional[str] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Mark a query as resolved, optionally recording resolution notes."""
        return self.update_query(query_id, status="RESOLVED", description=description)

    def delete_query(self, query_id: str) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/queries/{query_id}")
        if error:
            return False, error
        return True, None
