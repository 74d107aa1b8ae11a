"""
LUMINA Encoding - Image payload helpers.
Converts remote images and data URIs into the raw base64 text the curator expects.
"""

import base64
from typing import Optional

import httpx

DATA_URI_PREFIX = 'data:'


def is_data_uri(url: str) -> bool:
    """Return True when the artwork URL embeds its bytes directly."""
    return url.startswith(DATA_URI_PREFIX)


def payload_from_data_uri(uri: str) -> str:
    """Strip the ``data:<mime>;base64,`` prefix and return the payload."""
    if ',' not in uri:
        raise ValueError(f"Malformed data URI: {uri[:40]}")
    return uri.split(',', 1)[1]


def to_data_uri(payload: str, mime_type: str = 'image/png') -> str:
    """Wrap a base64 payload into a data URI."""
    return f"data:{mime_type};base64,{payload}"


def decode_data_uri(uri: str) -> bytes:
    """Return the raw bytes carried by a base64 data URI."""
    return base64.b64decode(payload_from_data_uri(uri))


async def url_to_base64(url: str, client: Optional[httpx.AsyncClient] = None) -> str:
    """
    Fetch a remote image and return its content as base64 text.

    Args:
        url: Fully-qualified http(s) URL of the image
        client: Optional shared client; a short-lived one is used otherwise

    Returns:
        Base64 payload with no ``data:`` prefix

    Raises:
        httpx.HTTPError: when the request fails or the status is not 2xx
    """
    if client is None:
        async with httpx.AsyncClient(follow_redirects=True) as owned_client:
            return await url_to_base64(url, owned_client)

    response = await client.get(url)
    response.raise_for_status()
    return base64.b64encode(response.content).decode('utf-8')
