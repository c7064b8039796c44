# credential.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from gitkit.exceptions import TokenExchangeError


@dataclass(frozen=True)
class Credential:
    """
    An OAuth2 access token and the moment it stops being valid.
    A credential without an expiry never expires; a naive expiry is read as UTC.
    token_type is informational only, requests are always sent with Bearer.
    """

    access_token: str
    token_type: str = "Bearer"
    expiry: datetime | None = None

    def __post_init__(self):
        if self.expiry is not None and self.expiry.tzinfo is None:
            object.__setattr__(self, "expiry", self.expiry.replace(tzinfo=timezone.utc))

    def expired(self, skew_seconds: float = 0) -> bool:
        if self.expiry is None:
            return False
        now = datetime.now(timezone.utc)
        return now + timedelta(seconds=skew_seconds) >= self.expiry

    @classmethod
    def from_token_response(cls, payload: dict[str, Any], now: datetime | None = None) -> "Credential":
        """
        Build a credential from a token endpoint JSON body
        ({"access_token", "token_type", "expires_in"}).
        """
        token = payload.get("access_token")
        if not token:
            raise TokenExchangeError(f"Token response missing access_token: {payload}")

        expiry = None
        expires_in = payload.get("expires_in")
        if expires_in is not None:
            now = now or datetime.now(timezone.utc)
            try:
                expiry = now + timedelta(seconds=float(expires_in))
            except (TypeError, ValueError, OverflowError) as ex:
                raise TokenExchangeError(
                    f"Token response has invalid expires_in: {expires_in!r}",
                    body=str(payload),
                ) from ex

        return cls(
            access_token=token,
            token_type=payload.get("token_type") or "Bearer",
            expiry=expiry,
        )
