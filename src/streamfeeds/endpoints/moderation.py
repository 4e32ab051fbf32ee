"""Moderation endpoints."""

from __future__ import annotations

from typing import Optional

from streamfeeds.endpoints.base import BaseEndpoints
from streamfeeds.models import (
    BanRequest,
    BanResponse,
    FlagRequest,
    FlagResponse,
    QueryReviewQueueRequest,
    QueryReviewQueueResponse,
    StreamResponse,
)


class ModerationClient(BaseEndpoints):
    async def flag(self, request: FlagRequest) -> StreamResponse[FlagResponse]:
        """Flag an entity (activity, comment, user) for review."""
        return await self._request("POST", "/api/v2/moderation/flag", FlagResponse, body=request)

    async def ban(self, request: BanRequest) -> StreamResponse[BanResponse]:
        return await self._request("POST", "/api/v2/moderation/ban", BanResponse, body=request)

    async def query_review_queue(
        self, request: Optional[QueryReviewQueueRequest] = None
    ) -> StreamResponse[QueryReviewQueueResponse]:
        return await self._request(
            "POST",
            "/api/v2/moderation/review_queue",
            QueryReviewQueueResponse,
            body=request or QueryReviewQueueRequest(),
        )
