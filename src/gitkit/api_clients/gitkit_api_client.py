"""
Provides a reusable, cached HTTP client configured for the Identity Toolkit API.

- Loads the service account from the centralized `config.py` Settings
- Reuses the same httpx.Client instance (and cached access token) everywhere
"""

import json
from functools import lru_cache
from pathlib import Path
import httpx
from gitkit.assertion import ServiceAccountAssertion
from gitkit.config import config as settings, masked_settings_dump
from gitkit.exceptions import ConfigurationError
from gitkit.transport import ServiceAccountTransport
from gitkit.utils.logger import logger


@lru_cache()
def get_assertion() -> ServiceAccountAssertion:
    '''
    Build the service account assertion from settings.

    GITKIT_SERVICE_ACCOUNT_FILE (JSON key) wins over
    GITKIT_SERVICE_ACCOUNT_EMAIL + GITKIT_PRIVATE_KEY_FILE (PEM).
    GITKIT_TOKEN_URI is used even when the key file names its own token_uri.

    :return: ServiceAccountAssertion instance
    :rtype: ServiceAccountAssertion
    '''
    scopes = settings.GITKIT_SCOPE.split()

    if settings.GITKIT_SERVICE_ACCOUNT_FILE:
        return ServiceAccountAssertion.from_service_account_file(
            settings.GITKIT_SERVICE_ACCOUNT_FILE, scopes, token_uri=settings.GITKIT_TOKEN_URI)

    if settings.GITKIT_SERVICE_ACCOUNT_EMAIL and settings.GITKIT_PRIVATE_KEY_FILE:
        return ServiceAccountAssertion(
            issuer=settings.GITKIT_SERVICE_ACCOUNT_EMAIL,
            private_key=Path(settings.GITKIT_PRIVATE_KEY_FILE).read_text(encoding="utf-8"),
            scopes=scopes,
            token_uri=settings.GITKIT_TOKEN_URI,
        )

    raise ConfigurationError(
        "Service account not configured: set GITKIT_SERVICE_ACCOUNT_FILE, "
        "or GITKIT_SERVICE_ACCOUNT_EMAIL and GITKIT_PRIVATE_KEY_FILE")


@lru_cache()
def get_gitkit_client() -> httpx.Client:
    """
    Cached httpx.Client for Identity Toolkit calls.
    Every request goes through ServiceAccountTransport, which adds
    Authorization: Bearer <token> and refreshes the token when it expires.

    Returns:
        httpx.Client: Configured and cached HTTP client.
    """
    assertion = get_assertion()
    logger.info("Creating cached Identity Toolkit client with ServiceAccountTransport")
    logger.debug(f"Client configuration: {json.dumps(masked_settings_dump(settings), indent=2)}")
    return httpx.Client(
        base_url=settings.GITKIT_API_URL,
        timeout=settings.HTTP_TIMEOUT,
        transport=ServiceAccountTransport(
            assertion,
            refresh_skew_seconds=settings.TOKEN_REFRESH_SKEW_SECONDS,
            timeout=settings.HTTP_TIMEOUT,
        ),
    )
