"""Shared plumbing for endpoint groups."""

from __future__ import annotations

from typing import Any, Mapping, Optional, TypeVar

from streamfeeds.client.async_client import AsyncClient
from streamfeeds.models import QueryParams, StreamResponse

T = TypeVar("T")


class BaseEndpoints:
    """Base class for a group of endpoint methods bound to one executor.

    Args:
        client: The request executor every method funnels through.
    """

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    async def _request(
        self,
        method: str,
        path: str,
        response_type: type[T],
        path_params: Optional[Mapping[str, str]] = None,
        query: Optional[QueryParams] = None,
        body: Any = None,
    ) -> StreamResponse[T]:
        query_params = query.to_query_params() if query is not None else None
        return await self._client.request(
            method,
            path,
            response_type,
            path_params=path_params,
            query_params=query_params,
            body=body,
        )
