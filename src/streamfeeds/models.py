"""Canonical Pydantic models shared across all streamfeeds modules.

The models fall into four groups:

**Configuration** -- :class:`ClientConfig`, the immutable credentials and
transport settings captured once per client.

**Envelope and bases** -- :class:`StreamResponse` (the generic result
wrapper returned by every endpoint method), :class:`StreamModel` (the base
for every wire model), :class:`Response` and :class:`QueryParams`.

**Request models** -- bodies and query-string parameter sets for the
endpoint methods in :mod:`streamfeeds.endpoints`.

**Response models** -- the decoded payloads.

Wire naming: every :class:`StreamModel` serialises its fields with
lower-camel-case keys (``user_id`` -> ``userId``). On read, keys are
matched case-insensitively and with or without underscores, so both
``userId`` and ``user_id`` populate the same field. Unknown keys are kept in
``model_extra`` rather than rejected.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any, BinaryIO, ClassVar, Generic, Optional, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

DEFAULT_BASE_URL = "https://chat.stream-io-api.com"

T = TypeVar("T")


# --- Configuration ---


class ClientConfig(BaseModel):
    """Credentials and transport settings for one client.

    Frozen after construction so a single instance can be shared by any
    number of concurrent requests. The secret is only ever used to sign
    tokens and is never sent over the wire.

    Example::

        ClientConfig(api_key="key", api_secret="secret")
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(description="Public API key, sent as the api_key query parameter")
    api_secret: SecretStr = Field(description="Shared secret used to sign server tokens")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="API origin")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


# --- Envelope ---


class StreamResponse(BaseModel, Generic[T]):
    """Generic result wrapper returned by every endpoint method.

    ``data`` may be ``None`` even when no exception was raised: 2xx bodies
    that cannot be decoded produce an empty envelope instead of an error.
    Always null-check ``data``.
    """

    model_config = ConfigDict(extra="ignore")

    data: Optional[T] = None
    duration: Optional[str] = None
    error: Optional[str] = None


# --- Bases ---


def _coerce_timestamp(value: Any) -> Any:
    """Accept nanosecond epoch integers alongside what pydantic already parses."""
    if isinstance(value, (int, float)) and not isinstance(value, bool) and abs(value) > 1e17:
        return datetime.fromtimestamp(value / 1e9, tz=timezone.utc)
    return value


Timestamp = Annotated[datetime, BeforeValidator(_coerce_timestamp)]


class StreamModel(BaseModel):
    """Base for every wire model: camelCase on write, lenient key matching on read."""

    model_config = ConfigDict(alias_generator=to_camel, extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _match_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        lookup: dict[str, str] = {}
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            for variant in (name, alias, name.replace("_", "")):
                lookup[variant.lower()] = alias
        matched: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(key, str):
                target = lookup.get(key.lower()) or lookup.get(key.replace("_", "").lower())
                matched[target or key] = value
            else:
                matched[key] = value
        return matched

    def to_wire(self) -> dict[str, Any]:
        """Serialise to a JSON-ready dict with camelCase keys and ``None`` fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Response(StreamModel):
    """Base for response payloads; every API reply reports its server-side duration."""

    duration: Optional[str] = None


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


class QueryParams(StreamModel):
    """Base for parameter sets that travel in the query string.

    Subclasses declare ``query_map`` (field name -> query parameter name);
    only the declared fields are ever sent.
    """

    query_map: ClassVar[dict[str, str]] = {}

    def to_query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        for field_name, param_name in self.query_map.items():
            value = getattr(self, field_name)
            if value is not None:
                params[param_name] = _query_value(value)
        return params


class SortParam(StreamModel):
    field: str
    direction: int = -1


class PagedRequest(StreamModel):
    """Shared filter / sort / pagination fields of the ``*/query`` endpoints.

    ``next`` and ``prev`` are opaque tokens copied from a previous
    response; they are never inspected.
    """

    filter: Optional[dict[str, Any]] = None
    sort: Optional[list[SortParam]] = None
    limit: Optional[int] = None
    next: Optional[str] = None
    prev: Optional[str] = None


class PagedResponse(Response):
    next: Optional[str] = None
    prev: Optional[str] = None


# --- Users ---


class OnlyUserID(StreamModel):
    id: str


class UserRequest(StreamModel):
    id: str
    name: Optional[str] = None
    role: Optional[str] = None
    image: Optional[str] = None
    custom: Optional[dict[str, Any]] = None


class UserResponse(StreamModel):
    id: str
    name: Optional[str] = None
    role: Optional[str] = None
    image: Optional[str] = None
    custom: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None


class UpdateUsersRequest(StreamModel):
    users: dict[str, UserRequest]


class UpdateUsersResponse(Response):
    users: dict[str, UserResponse] = Field(default_factory=dict)


# --- Polls ---


class PollOptionInput(StreamModel):
    text: str
    custom: Optional[dict[str, Any]] = None


class PollOptionResponse(StreamModel):
    id: str
    text: Optional[str] = None
    custom: dict[str, Any] = Field(default_factory=dict)


class PollResponseData(StreamModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    options: list[PollOptionResponse] = Field(default_factory=list)
    vote_count: int = 0
    enforce_unique_vote: Optional[bool] = None
    is_closed: Optional[bool] = None
    created_by_id: Optional[str] = None
    custom: dict[str, Any] = Field(default_factory=dict)


class CreatePollRequest(StreamModel):
    name: str
    user_id: Optional[str] = None
    description: Optional[str] = None
    options: Optional[list[PollOptionInput]] = None
    enforce_unique_vote: Optional[bool] = None
    max_votes_allowed: Optional[int] = None
    allow_answers: Optional[bool] = None
    voting_visibility: Optional[str] = None
    is_closed: Optional[bool] = None
    custom: Optional[dict[str, Any]] = None


class PollResponse(Response):
    poll: Optional[PollResponseData] = None


class VoteData(StreamModel):
    option_id: Optional[str] = None
    answer_text: Optional[str] = None


class CastPollVoteRequest(StreamModel):
    user_id: Optional[str] = None
    vote: Optional[VoteData] = None


class PollVoteResponse(Response):
    poll: Optional[PollResponseData] = None
    vote: Optional[dict[str, Any]] = None


# --- Activities ---


class ActivityRequest(StreamModel):
    type: str
    feeds: list[str]
    text: Optional[str] = None
    user_id: Optional[str] = None
    id: Optional[str] = None
    parent_id: Optional[str] = None
    poll_id: Optional[str] = None
    visibility: Optional[str] = None
    attachments: Optional[list[dict[str, Any]]] = None
    mentioned_user_ids: Optional[list[str]] = None
    filter_tags: Optional[list[str]] = None
    interest_tags: Optional[list[str]] = None
    custom: Optional[dict[str, Any]] = None


class AddActivityRequest(ActivityRequest):
    """Body of ``POST /api/v2/feeds/activities``."""


class FeedsReactionResponse(StreamModel):
    activity_id: Optional[str] = None
    type: str
    user: Optional[UserResponse] = None
    custom: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None


class ActivityResponse(StreamModel):
    id: str
    type: Optional[str] = None
    text: Optional[str] = None
    user: Optional[UserResponse] = None
    feeds: list[str] = Field(default_factory=list)
    visibility: Optional[str] = None
    parent_id: Optional[str] = None
    attachments: list[dict[str, Any]] = Field(default_factory=list)
    custom: dict[str, Any] = Field(default_factory=dict)
    reaction_count: int = 0
    comment_count: int = 0
    bookmark_count: int = 0
    latest_reactions: list[FeedsReactionResponse] = Field(default_factory=list)
    poll: Optional[PollResponseData] = None
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None
    deleted_at: Optional[Timestamp] = None


class AddActivityResponse(Response):
    activity: Optional[ActivityResponse] = None


class UpsertActivitiesRequest(StreamModel):
    activities: list[ActivityRequest]


class UpsertActivitiesResponse(Response):
    activities: list[ActivityResponse] = Field(default_factory=list)


class QueryActivitiesRequest(PagedRequest):
    user_id: Optional[str] = None


class QueryActivitiesResponse(PagedResponse):
    activities: list[ActivityResponse] = Field(default_factory=list)


class GetActivityResponse(Response):
    activity: Optional[ActivityResponse] = None


class UpdateActivityRequest(StreamModel):
    text: Optional[str] = None
    user_id: Optional[str] = None
    visibility: Optional[str] = None
    poll_id: Optional[str] = None
    attachments: Optional[list[dict[str, Any]]] = None
    custom: Optional[dict[str, Any]] = None


class UpdateActivityResponse(Response):
    activity: Optional[ActivityResponse] = None


class HardDeleteParams(QueryParams):
    query_map: ClassVar[dict[str, str]] = {"hard_delete": "hard_delete"}

    hard_delete: Optional[bool] = None


class DeleteActivityResponse(Response):
    pass


class PinActivityRequest(StreamModel):
    user_id: Optional[str] = None


class UnpinActivityParams(QueryParams):
    query_map: ClassVar[dict[str, str]] = {"user_id": "user_id"}

    user_id: Optional[str] = None


class PinActivityResponse(Response):
    activity: Optional[ActivityResponse] = None
    feed: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[Timestamp] = None


# --- Reactions ---


class AddReactionRequest(StreamModel):
    type: str
    user_id: Optional[str] = None
    create_notification_activity: Optional[bool] = None
    custom: Optional[dict[str, Any]] = None


class AddReactionResponse(Response):
    activity: Optional[ActivityResponse] = None
    reaction: Optional[FeedsReactionResponse] = None


class QueryActivityReactionsRequest(PagedRequest):
    pass


class QueryActivityReactionsResponse(PagedResponse):
    reactions: list[FeedsReactionResponse] = Field(default_factory=list)


class DeleteReactionParams(QueryParams):
    query_map: ClassVar[dict[str, str]] = {"user_id": "user_id"}

    user_id: Optional[str] = None


class DeleteActivityReactionResponse(Response):
    activity: Optional[ActivityResponse] = None
    reaction: Optional[FeedsReactionResponse] = None


# --- Bookmarks ---


class AddFolderRequest(StreamModel):
    name: str
    custom: Optional[dict[str, Any]] = None


class BookmarkFolderResponse(StreamModel):
    id: str
    name: Optional[str] = None
    custom: dict[str, Any] = Field(default_factory=dict)


class BookmarkResponse(StreamModel):
    activity: Optional[ActivityResponse] = None
    user: Optional[UserResponse] = None
    folder: Optional[BookmarkFolderResponse] = None
    custom: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None


class AddBookmarkRequest(StreamModel):
    user_id: Optional[str] = None
    folder_id: Optional[str] = None
    new_folder: Optional[AddFolderRequest] = None
    custom: Optional[dict[str, Any]] = None


class UpdateBookmarkRequest(StreamModel):
    user_id: Optional[str] = None
    folder_id: Optional[str] = None
    new_folder_id: Optional[str] = None
    new_folder: Optional[AddFolderRequest] = None
    custom: Optional[dict[str, Any]] = None


class DeleteBookmarkParams(QueryParams):
    query_map: ClassVar[dict[str, str]] = {"folder_id": "folder_id", "user_id": "user_id"}

    folder_id: Optional[str] = None
    user_id: Optional[str] = None


class BookmarkResult(Response):
    bookmark: Optional[BookmarkResponse] = None


class QueryBookmarksRequest(PagedRequest):
    pass


class QueryBookmarksResponse(PagedResponse):
    bookmarks: list[BookmarkResponse] = Field(default_factory=list)


# --- Comments ---


class CommentResponse(StreamModel):
    id: str
    comment: Optional[str] = None
    object_id: Optional[str] = None
    object_type: Optional[str] = None
    parent_id: Optional[str] = None
    user: Optional[UserResponse] = None
    reply_count: int = 0
    reaction_count: int = 0
    attachments: list[dict[str, Any]] = Field(default_factory=list)
    custom: dict[str, Any] = Field(default_factory=dict)
    replies: list[CommentResponse] = Field(default_factory=list)
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None


class AddCommentRequest(StreamModel):
    comment: str
    object_id: str
    object_type: str = "activity"
    parent_id: Optional[str] = None
    user_id: Optional[str] = None
    attachments: Optional[list[dict[str, Any]]] = None
    mentioned_user_ids: Optional[list[str]] = None
    custom: Optional[dict[str, Any]] = None


class AddCommentResponse(Response):
    comment: Optional[CommentResponse] = None


class GetCommentsParams(QueryParams):
    query_map: ClassVar[dict[str, str]] = {
        "object_id": "object_id",
        "object_type": "object_type",
        "depth": "depth",
        "sort": "sort",
        "replies_limit": "replies_limit",
        "limit": "limit",
        "next": "next",
        "prev": "prev",
    }

    object_id: str
    object_type: str = "activity"
    depth: Optional[int] = None
    sort: Optional[str] = None
    replies_limit: Optional[int] = None
    limit: Optional[int] = None
    next: Optional[str] = None
    prev: Optional[str] = None


class CommentsPage(PagedResponse):
    comments: list[CommentResponse] = Field(default_factory=list)
    sort: Optional[str] = None


class QueryCommentsRequest(StreamModel):
    filter: dict[str, Any]
    sort: Optional[str] = None
    limit: Optional[int] = None
    next: Optional[str] = None
    prev: Optional[str] = None


class UpdateCommentRequest(StreamModel):
    comment: Optional[str] = None
    custom: Optional[dict[str, Any]] = None


class UpdateCommentResponse(Response):
    comment: Optional[CommentResponse] = None


class DeleteCommentResponse(Response):
    activity: Optional[ActivityResponse] = None
    comment: Optional[CommentResponse] = None


# --- Feeds ---


class FeedInput(StreamModel):
    name: Optional[str] = None
    description: Optional[str] = None
    visibility: Optional[str] = None
    members: Optional[list[dict[str, Any]]] = None
    custom: Optional[dict[str, Any]] = None


class FeedResponse(StreamModel):
    id: str
    feed: Optional[str] = None
    group_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    visibility: Optional[str] = None
    created_by: Optional[UserResponse] = None
    follower_count: int = 0
    following_count: int = 0
    member_count: int = 0
    custom: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None


class GetOrCreateFeedRequest(StreamModel):
    user_id: Optional[str] = None
    data: Optional[FeedInput] = None
    filter: Optional[dict[str, Any]] = None
    view: Optional[str] = None
    watch: Optional[bool] = None
    limit: Optional[int] = None
    next: Optional[str] = None
    prev: Optional[str] = None


class FollowResponse(StreamModel):
    source_feed: Optional[FeedResponse] = None
    target_feed: Optional[FeedResponse] = None
    status: Optional[str] = None
    push_preference: Optional[str] = None
    custom: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None


class GetOrCreateFeedResponse(PagedResponse):
    feed: Optional[FeedResponse] = None
    created: bool = False
    activities: list[ActivityResponse] = Field(default_factory=list)
    followers: list[FollowResponse] = Field(default_factory=list)
    following: list[FollowResponse] = Field(default_factory=list)
    members: list[dict[str, Any]] = Field(default_factory=list)


class DeleteFeedResponse(Response):
    pass


# --- Follows ---


class FollowRequest(StreamModel):
    source: str
    target: str
    create_notification_activity: Optional[bool] = None
    push_preference: Optional[str] = None
    custom: Optional[dict[str, Any]] = None


class SingleFollowResponse(Response):
    follow: Optional[FollowResponse] = None


class QueryFollowsRequest(PagedRequest):
    pass


class QueryFollowsResponse(PagedResponse):
    follows: list[FollowResponse] = Field(default_factory=list)


# --- Feed groups ---


class FeedGroupResponse(StreamModel):
    id: str
    default_visibility: Optional[str] = None
    ranking: Optional[dict[str, Any]] = None
    notification: Optional[dict[str, Any]] = None
    activity_processors: list[dict[str, Any]] = Field(default_factory=list)
    custom: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None


class ListFeedGroupsResponse(Response):
    groups: dict[str, FeedGroupResponse] = Field(default_factory=dict)


class CreateFeedGroupRequest(StreamModel):
    id: str
    default_visibility: Optional[str] = None
    ranking: Optional[dict[str, Any]] = None
    notification: Optional[dict[str, Any]] = None
    activity_processors: Optional[list[dict[str, Any]]] = None
    custom: Optional[dict[str, Any]] = None


class UpdateFeedGroupRequest(StreamModel):
    default_visibility: Optional[str] = None
    ranking: Optional[dict[str, Any]] = None
    notification: Optional[dict[str, Any]] = None
    activity_processors: Optional[list[dict[str, Any]]] = None
    custom: Optional[dict[str, Any]] = None


class FeedGroupResult(Response):
    feed_group: Optional[FeedGroupResponse] = None


class DeleteFeedGroupResponse(Response):
    pass


# --- Devices ---


class CreateDeviceRequest(StreamModel):
    id: str
    push_provider: str
    push_provider_name: Optional[str] = None
    user_id: Optional[str] = None
    voip_token: Optional[bool] = None


class DeleteDeviceParams(QueryParams):
    query_map: ClassVar[dict[str, str]] = {"id": "id", "user_id": "user_id"}

    id: str
    user_id: Optional[str] = None


# --- Uploads ---


def _open_upload(path: str) -> tuple[str, BinaryIO]:
    if not path:
        raise FileNotFoundError("File path must be provided")
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    return file_path.name, file_path.open("rb")


class ImageSize(StreamModel):
    width: Optional[int] = None
    height: Optional[int] = None
    resize: Optional[str] = None
    crop: Optional[str] = None


class FileUploadRequest(StreamModel):
    """Upload of a local file, sent as ``multipart/form-data``.

    ``file`` is a path on the local filesystem; only its base name travels
    to the server. The content is streamed from an open handle, which the
    caller of :meth:`multipart_fields` must close.
    """

    file: str
    user: Optional[OnlyUserID] = None

    def form_fields(self) -> dict[str, str]:
        data: dict[str, str] = {}
        if self.user is not None:
            data["user"] = json.dumps(self.user.to_wire())
        return data

    def multipart_fields(self) -> tuple[dict[str, Any], dict[str, str]]:
        data = self.form_fields()
        name, handle = _open_upload(self.file)
        return {"file": (name, handle)}, data


class ImageUploadRequest(FileUploadRequest):
    """Upload of a local image, with optional resized variants."""

    upload_sizes: Optional[list[ImageSize]] = None

    def form_fields(self) -> dict[str, str]:
        data = super().form_fields()
        if self.upload_sizes:
            data["upload_sizes"] = json.dumps([size.to_wire() for size in self.upload_sizes])
        return data


class FileUploadResponse(Response):
    file: Optional[str] = None
    thumb_url: Optional[str] = None


class ImageUploadResponse(FileUploadResponse):
    upload_sizes: list[ImageSize] = Field(default_factory=list)


# --- Moderation ---


class FlagRequest(StreamModel):
    entity_id: str
    entity_type: str
    entity_creator_id: Optional[str] = None
    reason: Optional[str] = None
    user_id: Optional[str] = None
    moderation_payload: Optional[dict[str, Any]] = None
    custom: Optional[dict[str, Any]] = None


class FlagResponse(Response):
    item_id: Optional[str] = None


class BanRequest(StreamModel):
    target_user_id: str
    banned_by_id: Optional[str] = None
    channel_cid: Optional[str] = None
    reason: Optional[str] = None
    timeout: Optional[int] = None
    shadow: Optional[bool] = None
    ip_ban: Optional[bool] = None
    delete_messages: Optional[str] = None


class BanResponse(Response):
    pass


class QueryReviewQueueRequest(PagedRequest):
    lock_items: Optional[bool] = None
    user_id: Optional[str] = None


class QueryReviewQueueResponse(PagedResponse):
    items: list[dict[str, Any]] = Field(default_factory=list)
    action_config: dict[str, Any] = Field(default_factory=dict)
    stats: dict[str, Any] = Field(default_factory=dict)
