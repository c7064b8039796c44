'''
Google Identity Toolkit client: service account authentication for httpx.
'''
from gitkit.assertion import ServiceAccountAssertion
from gitkit.credential import Credential
from gitkit.exceptions import ConfigurationError, GitkitError, TokenExchangeError
from gitkit.transport import USER_AGENT, AssertionSigner, ServiceAccountTransport

__version__ = "0.1.0"

__all__ = [
    "AssertionSigner",
    "ConfigurationError",
    "Credential",
    "GitkitError",
    "ServiceAccountAssertion",
    "ServiceAccountTransport",
    "TokenExchangeError",
    "USER_AGENT",
]
