"""Request execution core for streamfeeds.

Provides :class:`AsyncClient`, the executor every endpoint method calls,
and the pure helpers it is built from: :func:`build_url`,
:func:`build_body`, :func:`decode_response`.

Example::

    from streamfeeds.client import AsyncClient

    async with AsyncClient(config) as client:
        resp = await client.request("GET", "/api/v2/feeds/feed_groups", dict)
"""

from streamfeeds.client.async_client import AsyncClient
from streamfeeds.client.request import MultipartBody, RequestDescriptor, build_body, build_url
from streamfeeds.client.response import decode_response, error_for_response

__all__ = [
    "AsyncClient",
    "MultipartBody",
    "RequestDescriptor",
    "build_body",
    "build_url",
    "decode_response",
    "error_for_response",
]
