"""Brightidy API client.

This module defines a thin client wrapper around the Brightidy REST
API.  It uses the ``requests`` library internally and exposes one
method per endpoint:

* :meth:`register` and :meth:`login` / :meth:`logout` – account access.
* :meth:`list_cleaners` – public list of cleaners.
* :meth:`create_booking`, :meth:`list_bookings`, :meth:`update_booking`.
* :meth:`send_message`, :meth:`list_messages`.
* :meth:`rate_booking`.

After a successful :meth:`login` the client remembers the session
token and sends it as ``Authorization: Bearer <token>`` on every
following request.  Any non-2xx answer raises
:class:`BrightidyAPIError` carrying the status code and the server's
``error`` message.

Example::

    api = BrightidyAPI(base_url="http://localhost:3000")
    api.login("alice", "pw1")
    booking = api.create_booking("1 Main St", "apartment", "2024-01-01", "09:00", 2)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests


logger = logging.getLogger(__name__)


class BrightidyAPIError(Exception):
    """Raised when the API answers with an error or cannot be reached.

    Attributes:
        status_code: HTTP status of the answer, ``None`` for transport
            failures.
        message: The ``error`` field of the answer body, or a
            description of the failure.
    """

    def __init__(self, status_code: Optional[int], message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}" if status_code else message)


class BrightidyAPI:
    """Client for interacting with the Brightidy API."""

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
            base_url: Base URL for the API, e.g. ``http://localhost:3000``.
            token: Optional session token from an earlier login.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each answer.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout
        self.user: Optional[Dict[str, Any]] = None

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Dict[str, Any]:
        """Perform an HTTP request and return the decoded JSON body.

        Raises:
            BrightidyAPIError: on any non-2xx status or transport error.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        logger.debug("Sending %s request to %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            raise BrightidyAPIError(None, str(exc)) from exc
        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {"error": response.text}
        if not 200 <= response.status_code < 300:
            message = data.get("error") if isinstance(data, dict) else None
            message = message or f"HTTP {response.status_code}"
            logger.error("API request failed (%s): %s", response.status_code, message)
            raise BrightidyAPIError(response.status_code, message)
        return data

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def register(self, username: str, password: str, role: str) -> str:
        """Create an account and return the server's confirmation."""
        data = self._request(
            "POST", "/register", json_body={"username": username, "password": password, "role": role}
        )
        return data.get("message", "")

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """Log in, remember the session token and return the public user."""
        data = self._request("POST", "/login", json_body={"username": username, "password": password})
        self.token = data["token"]
        self.user = data["user"]
        return self.user

    def logout(self) -> None:
        """Revoke the current session token on the server and forget it."""
        self._request("POST", "/logout")
        self.token = None
        self.user = None

    def list_cleaners(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/cleaners").get("cleaners", [])

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------
    def create_booking(
        self,
        property_address: str,
        property_type: str,
        date: str,
        time: str,
        duration: float,
    ) -> Dict[str, Any]:
        payload = {
            "propertyAddress": property_address,
            "propertyType": property_type,
            "date": date,
            "time": time,
            "duration": duration,
        }
        return self._request("POST", "/bookings", json_body=payload)["booking"]

    def list_bookings(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/bookings").get("bookings", [])

    def update_booking(self, booking_id: int, status: Optional[str] = None) -> Dict[str, Any]:
        """Claim a booking (no status) or move it to ``status``."""
        payload: Dict[str, Any] = {"bookingId": booking_id}
        if status:
            payload["status"] = status
        return self._request("PUT", "/bookings", json_body=payload)["booking"]

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def send_message(self, booking_id: int, content: str) -> Dict[str, Any]:
        payload = {"bookingId": booking_id, "content": content}
        return self._request("POST", "/messages", json_body=payload)["message"]

    def list_messages(self, booking_id: int) -> List[Dict[str, Any]]:
        return self._request("GET", "/messages", params={"bookingId": booking_id}).get("messages", [])

    # ------------------------------------------------------------------
    # Ratings
    # ------------------------------------------------------------------
    def rate_booking(self, booking_id: int, rating: int, tip: Optional[float] = None) -> Dict[str, Any]:
        """Rate a completed booking, optionally with a tip."""
        payload: Dict[str, Any] = {"bookingId": booking_id, "rating": rating}
        if tip is not None:
            payload["tip"] = tip
        return self._request("POST", "/rate", json_body=payload)["booking"]
