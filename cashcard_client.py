"""CashCard API client.

A thin wrapper around the card endpoints of the CashCard API using
the ``requests`` library.  Credentials are sent with HTTP Basic
authentication on every call.

The client exposes one method per operation:

* :meth:`get_card` – fetch a single card by its identifier.
* :meth:`list_cards` – fetch a page of the caller's cards.
* :meth:`create_card` – create a card and return its new identifier.
* :meth:`update_card` – replace the amount of a card.
* :meth:`delete_card` – delete a card.

Methods never raise for HTTP or network failures.  Each returns a
tuple ``(result, error)`` where ``error`` is ``None`` on success and
otherwise a dictionary with the keys ``status_code`` and ``message``.
A card owned by another user is reported with status code 404, just
like a card that does not exist.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class CashCardClient:
    """Client for the ``/cards`` endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        username: str,
        password: str,
        prefix: str = "/cards",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            username: Account name used for HTTP Basic authentication.
            password: Password of that account.
            prefix: Path the card routes are mounted under.
            session: Optional requests session.  If not supplied a
                session will be created automatically.  Any object
                offering the same ``request`` method can be used.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.prefix = "/" + prefix.strip("/")
        self.auth = (username, password)
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request and return ``(response, error)``."""
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_body,
                auth=self.auth,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        if response.status_code >= 400:
            try:
                body = response.json()
                message = body.get("detail") if isinstance(body, dict) else str(body)
            except ValueError:
                message = response.text
            message = str(message or response.status_code)
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message}
        return response, None

    def _card_path(self, card_id: Optional[int] = None) -> str:
        if card_id is None:
            return self.prefix
        return f"{self.prefix}/{card_id}"

    # ------------------------------------------------------------------
    # Card operations
    # ------------------------------------------------------------------
    def get_card(self, card_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single card.

        Returns:
            A tuple ``(card, error)``.
        """
        response, error = self._request("GET", self._card_path(card_id))
        if error:
            return None, error
        return response.json(), None

    def list_cards(
        self,
        page: Optional[int] = None,
        size: Optional[int] = None,
        sort: Optional[str] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve a page of cards.

        Args:
            page: Zero-based page number; server default when omitted.
            size: Page size; server default when omitted.
            sort: ``field`` or ``field,direction``, e.g. ``amount,desc``.
        Returns:
            A tuple ``(cards, error)``; ``cards`` is empty on failure.
        """
        params = {k: v for k, v in (("page", page), ("size", size), ("sort", sort)) if v is not None}
        response, error = self._request("GET", self._card_path(), params=params or None)
        if error:
            return [], error
        return response.json(), None

    def create_card(self, amount: float) -> Tuple[Optional[int], Optional[Error]]:
        """Create a card owned by the authenticated user.

        Returns:
            A tuple ``(card_id, error)``.  The id is read from the
            ``Location`` header of the response.
        """
        response, error = self._request("POST", self._card_path(), json_body={"amount": amount})
        if error:
            return None, error
        location = response.headers.get("Location", "")
        try:
            return int(location.rstrip("/").rsplit("/", 1)[-1]), None
        except ValueError:
            logger.error("Unexpected Location header %r", location)
            return None, {"status_code": response.status_code, "message": "Missing card location"}

    def update_card(self, card_id: int, amount: float) -> Tuple[bool, Optional[Error]]:
        """Replace the amount of a card.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("PUT", self._card_path(card_id), json_body={"amount": amount})
        return error is None, error

    def delete_card(self, card_id: int) -> Tuple[bool, Optional[Error]]:
        """Delete a card.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", self._card_path(card_id))
        return error is None, error
