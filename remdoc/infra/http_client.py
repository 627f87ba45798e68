# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# PORTAINER TRANSPORT
# -----------------------------------------------------------------------------
# Responsibility: The authenticated HTTP session to the control plane.
#
# - Holds the immutable (base URL, bearer token) pair
# - Sends exactly one request per call, bounded by a timeout
# - Maps transport failures (DNS, refused, timeout) to BackendConnectionError
#
# A Deadline spreads one operation budget across the several requests that
# operation makes; each request gets whatever time is left.
#
# Status codes are NOT interpreted here; that is the classifier's job.
# Silent by default: request traces are printed only when verbose.
# -----------------------------------------------------------------------------

import time

import requests
from rich.console import Console
from rich.markup import escape

from remdoc.core.errors import BackendConnectionError

console = Console(stderr=True)

# Per-operation budget when a caller sets none
DEFAULT_TIMEOUT_SECONDS = 10.0


class Deadline:
    """Wall-clock budget shared by every request of one operation."""

    def __init__(self, seconds: float) -> None:
        self._seconds = seconds
        self._expires_at = time.monotonic() + seconds

    @property
    def seconds(self) -> float:
        return self._seconds

    def remaining(self) -> float:
        """
        Seconds left for the next request.

        Raises:
            BackendConnectionError: If the budget is already spent.
        """
        left = self._expires_at - time.monotonic()
        if left <= 0:
            raise BackendConnectionError(f"operation timed out after {self._seconds:g}s")
        return left


class PortainerTransport:
    """
    Thin wrapper around a requests.Session bound to one Portainer instance.

    The session is reused for connection pooling; close() releases it.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
        verbose: bool = False,
    ) -> None:
        """
        Args:
            base_url: Portainer root URL, e.g. 'https://portainer.example.com'.
            token: Bearer token (JWT). Empty for unauthenticated calls only.
            timeout: Default seconds to wait when a call passes no timeout.
            session: Pre-built session (tests inject a mock here).
            verbose: Print one trace line per request.
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._session = session or requests.Session()
        self._verbose = verbose

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def token(self) -> str:
        return self._token

    @property
    def timeout(self) -> float:
        return self._timeout

    def url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        payload: dict | None = None,
        timeout: float | None = None,
        authenticated: bool = True,
    ) -> requests.Response:
        """
        Issue one HTTP request.

        Args:
            method: HTTP verb.
            path: Path below the base URL, starting with '/'.
            params: Query parameters (URL-encoded by requests).
            payload: JSON body for writes.
            timeout: Seconds before giving up; None uses the transport default.
            authenticated: Attach the bearer token.

        Returns:
            The raw response, whatever its status.

        Raises:
            BackendConnectionError: If no response was received.
        """
        url = self.url(path)
        headers = {}
        if authenticated:
            headers["Authorization"] = f"Bearer {self._token}"
        if payload is not None:
            headers["Content-Type"] = "application/json"

        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=headers,
                timeout=timeout if timeout is not None else self._timeout,
            )
        except requests.Timeout as e:
            self._trace(f"[red][PORTAINER] {method} {path} timed out[/red]")
            raise BackendConnectionError(f"request to Portainer timed out: {e}") from e
        except requests.RequestException as e:
            self._trace(f"[red][PORTAINER] {method} {path} failed: {escape(str(e))}[/red]")
            raise BackendConnectionError(f"failed to connect to Portainer: {e}") from e

        self._trace(f"[dim][PORTAINER] {method} {path} -> {response.status_code}[/dim]")
        return response

    def close(self) -> None:
        self._session.close()

    def _trace(self, line: str) -> None:
        if self._verbose:
            console.print(line, highlight=False)
