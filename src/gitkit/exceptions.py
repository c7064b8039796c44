'''
Exceptions raised by the gitkit client.
'''


class GitkitError(Exception):
    """Base class for gitkit client errors."""


class TokenExchangeError(GitkitError):
    """The token endpoint refused the assertion or returned an unusable body."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ConfigurationError(GitkitError):
    """The service account is not configured."""
