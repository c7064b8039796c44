# assertion.py
'''
Service account assertions: a signed JWT identifying the service account,
exchanged at the OAuth2 token endpoint for an access token.
'''
import json
import time
from pathlib import Path

import httpx
import jwt

from gitkit.credential import Credential
from gitkit.exceptions import TokenExchangeError
from gitkit.utils.logger import logger

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
JWT_BEARER_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"


class ServiceAccountAssertion:
    """
    Builds RS256 assertions for a service account and exchanges them
    for access tokens (RFC 7523 jwt-bearer grant).
    """

    def __init__(
        self,
        issuer: str,
        private_key: str,
        scopes: list[str],
        subject: str | None = None,
        token_uri: str = DEFAULT_TOKEN_URI,
        key_id: str | None = None,
        lifetime_seconds: int = 3600,
    ):
        self.issuer = issuer
        self.private_key = private_key
        self.scopes = list(scopes)
        self.subject = subject
        self.token_uri = token_uri
        self.key_id = key_id
        self.lifetime_seconds = lifetime_seconds

    @classmethod
    def from_service_account_info(
        cls,
        info: dict,
        scopes: list[str],
        subject: str | None = None,
        token_uri: str | None = None,
    ) -> "ServiceAccountAssertion":
        '''
        Build an assertion from a parsed Google service account JSON key.

        :param info: dict with client_email, private_key and optionally
            private_key_id and token_uri
        :rtype: ServiceAccountAssertion
        '''
        missing = [k for k in ("client_email", "private_key") if not info.get(k)]
        if missing:
            raise ValueError(f"Service account info missing fields: {', '.join(missing)}")
        return cls(
            issuer=info["client_email"],
            private_key=info["private_key"],
            scopes=scopes,
            subject=subject,
            token_uri=token_uri or info.get("token_uri") or DEFAULT_TOKEN_URI,
            key_id=info.get("private_key_id"),
        )

    @classmethod
    def from_service_account_file(
        cls,
        path: str | Path,
        scopes: list[str],
        subject: str | None = None,
        token_uri: str | None = None,
    ) -> "ServiceAccountAssertion":
        info = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.from_service_account_info(info, scopes, subject=subject, token_uri=token_uri)

    def build_assertion(self, now: float | None = None) -> str:
        issued_at = int(now if now is not None else time.time())
        claims = {
            "iss": self.issuer,
            "scope": " ".join(self.scopes),
            "aud": self.token_uri,
            "iat": issued_at,
            "exp": issued_at + self.lifetime_seconds,
        }
        if self.subject:
            claims["sub"] = self.subject

        headers = {"kid": self.key_id} if self.key_id else None
        return jwt.encode(claims, self.private_key, algorithm="RS256", headers=headers)

    def fetch_token(self, client: httpx.Client) -> Credential:
        """
        Exchange a freshly signed assertion for an access token.

        Raises TokenExchangeError when the token endpoint does not answer 200
        with an access_token. httpx errors reaching the endpoint propagate.
        """
        data = {
            "grant_type": JWT_BEARER_GRANT_TYPE,
            "assertion": self.build_assertion(),
        }
        headers = {"Content-Type": "application/x-www-form-urlencoded"}

        logger.debug(f"Requesting access token for {self.issuer} from {self.token_uri}")
        resp = client.post(self.token_uri, data=data, headers=headers)

        if resp.status_code != 200:
            # the body carries the OAuth error code; the assertion is never echoed
            raise TokenExchangeError(
                f"Token request failed ({resp.status_code}): {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            payload = resp.json()
        except ValueError as ex:
            raise TokenExchangeError(
                f"Token response is not JSON: {resp.text[:200]}",
                status_code=resp.status_code,
                body=resp.text,
            ) from ex

        if not isinstance(payload, dict):
            raise TokenExchangeError(
                f"Token response has unexpected shape: {resp.text[:200]}",
                status_code=resp.status_code,
                body=resp.text,
            )

        return Credential.from_token_response(payload)
