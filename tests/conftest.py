"""Pytest configuration and fixtures."""

import os
import threading
import time

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

# Set test environment variables before importing application modules
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("GITKIT_SERVICE_ACCOUNT_FILE", None)
os.environ.pop("GITKIT_SERVICE_ACCOUNT_EMAIL", None)
os.environ.pop("GITKIT_PRIVATE_KEY_FILE", None)

from gitkit.credential import Credential  # noqa: E402


class FakeSigner:
    """Assertion signer that hands out numbered tokens and counts fetches."""

    def __init__(self, error: Exception | None = None, delay: float = 0.0, expires_in: int = 3600):
        self.error = error
        self.delay = delay
        self.expires_in = expires_in
        self.calls = 0
        self.clients: list[httpx.Client] = []
        self._lock = threading.Lock()

    def fetch_token(self, client: httpx.Client) -> Credential:
        if self.delay:
            time.sleep(self.delay)
        with self._lock:
            self.calls += 1
            self.clients.append(client)
            number = self.calls
        if self.error is not None:
            raise self.error
        return Credential.from_token_response(
            {"access_token": f"token-{number}", "expires_in": self.expires_in})


class RecordingHandler:
    """httpx.MockTransport handler that records every request it is sent."""

    def __init__(self, status_code: int = 200, json: object | None = None):
        self.status_code = status_code
        self.json = json if json is not None else {"kind": "identitytoolkit#ok"}
        self.requests: list[httpx.Request] = []
        self._lock = threading.Lock()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        with self._lock:
            self.requests.append(request)
        return httpx.Response(self.status_code, json=self.json)


@pytest.fixture
def signer():
    return FakeSigner()


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def base_transport(handler):
    return httpx.MockTransport(handler)


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_pem(rsa_private_key):
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def public_pem(rsa_private_key):
    return rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


@pytest.fixture
def signer_factory():
    return FakeSigner
