from gitkit.api_clients.gitkit_api_client import get_assertion, get_gitkit_client

__all__ = ["get_assertion", "get_gitkit_client"]
