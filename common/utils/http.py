"""
Helpers shared by the httpx service clients.
"""

from typing import Any

import httpx


def decode_body(response: httpx.Response) -> Any:
    """JSON body when there is one, raw text otherwise."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
