"""Product-independent endpoints -- users, polls, devices, uploads."""

from __future__ import annotations

from typing import Optional

from streamfeeds.endpoints.base import BaseEndpoints
from streamfeeds.models import (
    CreateDeviceRequest,
    CreatePollRequest,
    DeleteDeviceParams,
    FileUploadRequest,
    FileUploadResponse,
    ImageUploadRequest,
    ImageUploadResponse,
    PollResponse,
    Response,
    StreamResponse,
    UpdateUsersRequest,
    UpdateUsersResponse,
)


class CommonClient(BaseEndpoints):
    """Endpoint methods shared by every Stream product."""

    async def update_users(
        self, request: UpdateUsersRequest
    ) -> StreamResponse[UpdateUsersResponse]:
        """Create or fully replace the given users."""
        return await self._request("POST", "/api/v2/users", UpdateUsersResponse, body=request)

    async def create_poll(self, request: CreatePollRequest) -> StreamResponse[PollResponse]:
        return await self._request("POST", "/api/v2/polls", PollResponse, body=request)

    async def create_device(self, request: CreateDeviceRequest) -> StreamResponse[Response]:
        return await self._request("POST", "/api/v2/devices", Response, body=request)

    async def delete_device(
        self, device_id: str, user_id: Optional[str] = None
    ) -> StreamResponse[Response]:
        return await self._request(
            "DELETE",
            "/api/v2/devices",
            Response,
            query=DeleteDeviceParams(id=device_id, user_id=user_id),
        )

    async def upload_file(self, request: FileUploadRequest) -> StreamResponse[FileUploadResponse]:
        """Upload a local file as ``multipart/form-data``.

        Raises:
            FileNotFoundError: If ``request.file`` does not exist.
        """
        return await self._request(
            "POST", "/api/v2/uploads/file", FileUploadResponse, body=request
        )

    async def upload_image(
        self, request: ImageUploadRequest
    ) -> StreamResponse[ImageUploadResponse]:
        """Upload a local image, optionally asking for resized variants."""
        return await self._request(
            "POST", "/api/v2/uploads/image", ImageUploadResponse, body=request
        )
