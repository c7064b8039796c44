# transport.py
import threading
from typing import Protocol

import httpx

from gitkit.credential import Credential
from gitkit.utils.logger import logger

USER_AGENT = "gitkit-go-client/0.1"


class AssertionSigner(Protocol):
    """Anything that can trade a service account assertion for a credential."""

    def fetch_token(self, client: httpx.Client) -> Credential:
        ...


class ServiceAccountTransport(httpx.BaseTransport):
    """
    httpx transport that injects Authorization: Bearer <token> into every
    request and fetches a new token through the assertion when the cached
    one is missing or expired.
    Thread-safe; one instance is meant to be shared by a cached httpx.Client.

    Usage:
        transport = ServiceAccountTransport(assertion)
        client = httpx.Client(base_url=..., transport=transport)
    """

    def __init__(
        self,
        assertion: AssertionSigner,
        transport: httpx.BaseTransport | None = None,
        credential: Credential | None = None,
        refresh_skew_seconds: float = 0,
        timeout: float | httpx.Timeout = 5.0,
    ):
        self.assertion = assertion
        # Underlying transport; a private HTTPTransport when none is given
        self.transport = transport if transport is not None else httpx.HTTPTransport()
        self.refresh_skew_seconds = refresh_skew_seconds
        # Applies to the token exchange only; API calls use their own client's timeout
        self.timeout = timeout

        self._lock = threading.Lock()
        self._credential = credential

    @property
    def token(self) -> Credential | None:
        with self._lock:
            return self._credential

    def _is_valid(self, credential: Credential | None) -> bool:
        return credential is not None and not credential.expired(self.refresh_skew_seconds)

    def _refresh_token(self) -> Credential:
        """
        Return a usable credential, fetching one if there is none or it is expired.
        A failed fetch leaves the cached credential as it was.
        """
        credential = self._credential
        if self._is_valid(credential):
            return credential  # type: ignore[return-value]

        with self._lock:
            credential = self._credential
            if self._is_valid(credential):
                return credential  # type: ignore[return-value]

            if credential is None:
                logger.debug("No access token cached, fetching one")
            else:
                logger.debug(f"Access token expired at {credential.expiry}, fetching a new one")

            # Not closed: closing the client would close the shared transport
            client = httpx.Client(transport=self.transport, timeout=self.timeout)
            credential = self.assertion.fetch_token(client)
            self._credential = credential
            logger.info(f"Fetched new access token (expires at {credential.expiry})")
            return credential

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        credential = self._refresh_token()

        # Copy the request so the caller's headers are never modified
        headers = httpx.Headers(request.headers)
        headers["Authorization"] = f"Bearer {credential.access_token}"
        headers["User-Agent"] = USER_AGENT
        headers["Content-Type"] = "application/json"

        new_request = httpx.Request(
            method=request.method,
            url=request.url,
            headers=headers,
            stream=request.stream,
            extensions=dict(request.extensions),
        )
        return self.transport.handle_request(new_request)

    def close(self) -> None:
        self.transport.close()
