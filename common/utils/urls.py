"""
URL helpers for building remote endpoints from configured base URLs.
"""

from typing import Optional


def url_checker(url: str, path: Optional[str] = None) -> str:
    """
    Join a base URL and a relative path with exactly one slash between them.

    Examples:
        >>> url_checker("https://consent.example.com/v1", "consents/me")
        'https://consent.example.com/v1/consents/me'
        >>> url_checker("https://consent.example.com/v1/", "/consents/me")
        'https://consent.example.com/v1/consents/me'
        >>> url_checker("https://connector.example.com")
        'https://connector.example.com/'
    """
    base = url if url.endswith("/") else f"{url}/"

    if not path:
        return base

    return f"{base}{path.lstrip('/')}"
