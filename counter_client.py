"""Counter API client.

This module defines a small client wrapper around the Counter API
HTTP endpoints.  The service answers every call with an HTML fragment
and signals the outcome through the status code, so the client does
not treat 4xx/5xx answers as errors: each method returns a
:class:`CounterResponse` carrying the status code and the HTML body.
Only transport failures (connection refused, timeouts and so on) are
raised, as :class:`CounterClientError`.

The client exposes one method per endpoint:

* :meth:`create` – ``POST /create?name=...``
* :meth:`read` – ``GET /read?name=...``
* :meth:`update` – ``PUT /update?name=...``
* :meth:`delete` – ``DELETE /delete?name=...``
* :meth:`list_all` – ``GET /all``

Example::

    client = CounterClient(base_url="http://localhost:3260")
    client.create("visits")
    client.update("visits")
    print(client.read("visits").html)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests


logger = logging.getLogger(__name__)


class CounterClientError(Exception):
    """Raised when the Counter API could not be reached."""


@dataclass
class CounterResponse:
    """Outcome of a Counter API call.

    Attributes:
        status_code: HTTP status returned by the service.
        html: Response body (an HTML fragment, or plain text for
            unknown paths and wrong methods).
    """

    status_code: int
    html: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class CounterClient:
    """Client for the Counter API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3260``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None
    ) -> CounterResponse:
        """Perform an HTTP request to the API and wrap the answer."""
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Counter API request failed: %s", exc)
            raise CounterClientError(f"{method} {url} failed: {exc}") from exc
        if response.status_code != 200:
            logger.info("%s %s answered %s", method, path, response.status_code)
        return CounterResponse(status_code=response.status_code, html=response.text)

    def create(self, name: str) -> CounterResponse:
        """Create a counter starting at zero."""
        return self._request("POST", "/create", params={"name": name})

    def read(self, name: str) -> CounterResponse:
        """Read the current value of a counter."""
        return self._request("GET", "/read", params={"name": name})

    def update(self, name: str) -> CounterResponse:
        """Increment a counter by one."""
        return self._request("PUT", "/update", params={"name": name})

    def delete(self, name: str) -> CounterResponse:
        """Delete a counter."""
        return self._request("DELETE", "/delete", params={"name": name})

    def list_all(self) -> CounterResponse:
        """List every counter."""
        return self._request("GET", "/all")
