"""Feeds endpoints -- activities, reactions, bookmarks, comments, feeds, follows.

Each method is a thin wrapper: it names the HTTP verb and path template,
passes path values and the body through, and returns the
:class:`~streamfeeds.models.StreamResponse` from the executor unchanged.
Pagination tokens (``next`` / ``prev``) travel inside the request models
and are never interpreted here.
"""

from __future__ import annotations

from typing import Optional

from streamfeeds.endpoints.base import BaseEndpoints
from streamfeeds.models import (
    AddActivityRequest,
    AddActivityResponse,
    AddBookmarkRequest,
    AddCommentRequest,
    AddCommentResponse,
    AddReactionRequest,
    AddReactionResponse,
    BookmarkResult,
    CastPollVoteRequest,
    CommentsPage,
    CreateFeedGroupRequest,
    DeleteActivityReactionResponse,
    DeleteActivityResponse,
    DeleteBookmarkParams,
    DeleteCommentResponse,
    DeleteFeedGroupResponse,
    DeleteFeedResponse,
    DeleteReactionParams,
    FeedGroupResult,
    FollowRequest,
    GetActivityResponse,
    GetCommentsParams,
    GetOrCreateFeedRequest,
    GetOrCreateFeedResponse,
    HardDeleteParams,
    ListFeedGroupsResponse,
    PinActivityRequest,
    PinActivityResponse,
    PollVoteResponse,
    QueryActivitiesRequest,
    QueryActivitiesResponse,
    QueryActivityReactionsRequest,
    QueryActivityReactionsResponse,
    QueryBookmarksRequest,
    QueryBookmarksResponse,
    QueryCommentsRequest,
    QueryFollowsRequest,
    QueryFollowsResponse,
    SingleFollowResponse,
    StreamResponse,
    UnpinActivityParams,
    UpdateActivityRequest,
    UpdateActivityResponse,
    UpdateBookmarkRequest,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateFeedGroupRequest,
    UpsertActivitiesRequest,
    UpsertActivitiesResponse,
)

_FEED_PATH = "/api/v2/feeds/feed_groups/{feed_group_id}/feeds/{feed_id}"


class FeedsClient(BaseEndpoints):
    """Endpoint methods of the feeds product."""

    def feed(self, feed_group_id: str, feed_id: str) -> Feed:
        """Return a :class:`Feed` bound to ``<feed_group_id>:<feed_id>``."""
        return Feed(self, feed_group_id, feed_id)

    # --- Activities ---

    async def add_activity(
        self, request: AddActivityRequest
    ) -> StreamResponse[AddActivityResponse]:
        return await self._request(
            "POST", "/api/v2/feeds/activities", AddActivityResponse, body=request
        )

    async def upsert_activities(
        self, request: UpsertActivitiesRequest
    ) -> StreamResponse[UpsertActivitiesResponse]:
        return await self._request(
            "POST", "/api/v2/feeds/activities/batch", UpsertActivitiesResponse, body=request
        )

    async def query_activities(
        self, request: QueryActivitiesRequest
    ) -> StreamResponse[QueryActivitiesResponse]:
        return await self._request(
            "POST", "/api/v2/feeds/activities/query", QueryActivitiesResponse, body=request
        )

    async def get_activity(self, activity_id: str) -> StreamResponse[GetActivityResponse]:
        return await self._request(
            "GET",
            "/api/v2/feeds/activities/{id}",
            GetActivityResponse,
            path_params={"id": activity_id},
        )

    async def update_activity(
        self, activity_id: str, request: UpdateActivityRequest
    ) -> StreamResponse[UpdateActivityResponse]:
        return await self._request(
            "PUT",
            "/api/v2/feeds/activities/{id}",
            UpdateActivityResponse,
            path_params={"id": activity_id},
            body=request,
        )

    async def delete_activity(
        self, activity_id: str, hard_delete: Optional[bool] = None
    ) -> StreamResponse[DeleteActivityResponse]:
        return await self._request(
            "DELETE",
            "/api/v2/feeds/activities/{id}",
            DeleteActivityResponse,
            path_params={"id": activity_id},
            query=HardDeleteParams(hard_delete=hard_delete),
        )

    async def pin_activity(
        self,
        feed_group_id: str,
        feed_id: str,
        activity_id: str,
        request: Optional[PinActivityRequest] = None,
    ) -> StreamResponse[PinActivityResponse]:
        return await self._request(
            "POST",
            _FEED_PATH + "/activities/{activity_id}/pin",
            PinActivityResponse,
            path_params={
                "feed_group_id": feed_group_id,
                "feed_id": feed_id,
                "activity_id": activity_id,
            },
            body=request or PinActivityRequest(),
        )

    async def unpin_activity(
        self,
        feed_group_id: str,
        feed_id: str,
        activity_id: str,
        user_id: Optional[str] = None,
    ) -> StreamResponse[PinActivityResponse]:
        return await self._request(
            "DELETE",
            _FEED_PATH + "/activities/{activity_id}/pin",
            PinActivityResponse,
            path_params={
                "feed_group_id": feed_group_id,
                "feed_id": feed_id,
                "activity_id": activity_id,
            },
            query=UnpinActivityParams(user_id=user_id),
        )

    # --- Reactions ---

    async def add_reaction(
        self, activity_id: str, request: AddReactionRequest
    ) -> StreamResponse[AddReactionResponse]:
        return await self._request(
            "POST",
            "/api/v2/feeds/activities/{activity_id}/reactions",
            AddReactionResponse,
            path_params={"activity_id": activity_id},
            body=request,
        )

    async def query_activity_reactions(
        self, activity_id: str, request: Optional[QueryActivityReactionsRequest] = None
    ) -> StreamResponse[QueryActivityReactionsResponse]:
        return await self._request(
            "POST",
            "/api/v2/feeds/activities/{activity_id}/reactions/query",
            QueryActivityReactionsResponse,
            path_params={"activity_id": activity_id},
            body=request or QueryActivityReactionsRequest(),
        )

    async def delete_activity_reaction(
        self, activity_id: str, reaction_type: str, user_id: Optional[str] = None
    ) -> StreamResponse[DeleteActivityReactionResponse]:
        return await self._request(
            "DELETE",
            "/api/v2/feeds/activities/{activity_id}/reactions/{type}",
            DeleteActivityReactionResponse,
            path_params={"activity_id": activity_id, "type": reaction_type},
            query=DeleteReactionParams(user_id=user_id),
        )

    # --- Bookmarks ---

    async def add_bookmark(
        self, activity_id: str, request: Optional[AddBookmarkRequest] = None
    ) -> StreamResponse[BookmarkResult]:
        return await self._request(
            "POST",
            "/api/v2/feeds/activities/{activity_id}/bookmarks",
            BookmarkResult,
            path_params={"activity_id": activity_id},
            body=request or AddBookmarkRequest(),
        )

    async def update_bookmark(
        self, activity_id: str, request: UpdateBookmarkRequest
    ) -> StreamResponse[BookmarkResult]:
        return await self._request(
            "PATCH",
            "/api/v2/feeds/activities/{activity_id}/bookmarks",
            BookmarkResult,
            path_params={"activity_id": activity_id},
            body=request,
        )

    async def delete_bookmark(
        self,
        activity_id: str,
        folder_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> StreamResponse[BookmarkResult]:
        return await self._request(
            "DELETE",
            "/api/v2/feeds/activities/{activity_id}/bookmarks",
            BookmarkResult,
            path_params={"activity_id": activity_id},
            query=DeleteBookmarkParams(folder_id=folder_id, user_id=user_id),
        )

    async def query_bookmarks(
        self, request: Optional[QueryBookmarksRequest] = None
    ) -> StreamResponse[QueryBookmarksResponse]:
        return await self._request(
            "POST",
            "/api/v2/feeds/bookmarks/query",
            QueryBookmarksResponse,
            body=request or QueryBookmarksRequest(),
        )

    # --- Polls ---

    async def cast_poll_vote(
        self, activity_id: str, poll_id: str, request: CastPollVoteRequest
    ) -> StreamResponse[PollVoteResponse]:
        return await self._request(
            "POST",
            "/api/v2/feeds/activities/{activity_id}/polls/{poll_id}/vote",
            PollVoteResponse,
            path_params={"activity_id": activity_id, "poll_id": poll_id},
            body=request,
        )

    # --- Comments ---

    async def add_comment(self, request: AddCommentRequest) -> StreamResponse[AddCommentResponse]:
        return await self._request(
            "POST", "/api/v2/feeds/comments", AddCommentResponse, body=request
        )

    async def get_comments(self, params: GetCommentsParams) -> StreamResponse[CommentsPage]:
        """List threaded comments of one object; paging tokens go in *params*."""
        return await self._request("GET", "/api/v2/feeds/comments", CommentsPage, query=params)

    async def query_comments(self, request: QueryCommentsRequest) -> StreamResponse[CommentsPage]:
        return await self._request(
            "POST", "/api/v2/feeds/comments/query", CommentsPage, body=request
        )

    async def update_comment(
        self, comment_id: str, request: UpdateCommentRequest
    ) -> StreamResponse[UpdateCommentResponse]:
        return await self._request(
            "PATCH",
            "/api/v2/feeds/comments/{id}",
            UpdateCommentResponse,
            path_params={"id": comment_id},
            body=request,
        )

    async def delete_comment(
        self, comment_id: str, hard_delete: Optional[bool] = None
    ) -> StreamResponse[DeleteCommentResponse]:
        return await self._request(
            "DELETE",
            "/api/v2/feeds/comments/{id}",
            DeleteCommentResponse,
            path_params={"id": comment_id},
            query=HardDeleteParams(hard_delete=hard_delete),
        )

    # --- Feeds ---

    async def get_or_create_feed(
        self,
        feed_group_id: str,
        feed_id: str,
        request: Optional[GetOrCreateFeedRequest] = None,
    ) -> StreamResponse[GetOrCreateFeedResponse]:
        return await self._request(
            "POST",
            _FEED_PATH,
            GetOrCreateFeedResponse,
            path_params={"feed_group_id": feed_group_id, "feed_id": feed_id},
            body=request or GetOrCreateFeedRequest(),
        )

    async def delete_feed(
        self, feed_group_id: str, feed_id: str, hard_delete: Optional[bool] = None
    ) -> StreamResponse[DeleteFeedResponse]:
        return await self._request(
            "DELETE",
            _FEED_PATH,
            DeleteFeedResponse,
            path_params={"feed_group_id": feed_group_id, "feed_id": feed_id},
            query=HardDeleteParams(hard_delete=hard_delete),
        )

    # --- Follows ---

    async def follow(self, request: FollowRequest) -> StreamResponse[SingleFollowResponse]:
        return await self._request(
            "POST", "/api/v2/feeds/follows", SingleFollowResponse, body=request
        )

    async def unfollow(self, source: str, target: str) -> StreamResponse[SingleFollowResponse]:
        """Remove the follow from feed id *source* to feed id *target* (``group:id``)."""
        return await self._request(
            "DELETE",
            "/api/v2/feeds/follows/{source}/{target}",
            SingleFollowResponse,
            path_params={"source": source, "target": target},
        )

    async def query_follows(
        self, request: Optional[QueryFollowsRequest] = None
    ) -> StreamResponse[QueryFollowsResponse]:
        return await self._request(
            "POST",
            "/api/v2/feeds/follows/query",
            QueryFollowsResponse,
            body=request or QueryFollowsRequest(),
        )

    # --- Feed groups ---

    async def list_feed_groups(self) -> StreamResponse[ListFeedGroupsResponse]:
        return await self._request("GET", "/api/v2/feeds/feed_groups", ListFeedGroupsResponse)

    async def create_feed_group(
        self, request: CreateFeedGroupRequest
    ) -> StreamResponse[FeedGroupResult]:
        return await self._request(
            "POST", "/api/v2/feeds/feed_groups", FeedGroupResult, body=request
        )

    async def get_feed_group(self, feed_group_id: str) -> StreamResponse[FeedGroupResult]:
        return await self._request(
            "GET",
            "/api/v2/feeds/feed_groups/{id}",
            FeedGroupResult,
            path_params={"id": feed_group_id},
        )

    async def update_feed_group(
        self, feed_group_id: str, request: UpdateFeedGroupRequest
    ) -> StreamResponse[FeedGroupResult]:
        return await self._request(
            "PUT",
            "/api/v2/feeds/feed_groups/{id}",
            FeedGroupResult,
            path_params={"id": feed_group_id},
            body=request,
        )

    async def delete_feed_group(
        self, feed_group_id: str, hard_delete: Optional[bool] = None
    ) -> StreamResponse[DeleteFeedGroupResponse]:
        return await self._request(
            "DELETE",
            "/api/v2/feeds/feed_groups/{id}",
            DeleteFeedGroupResponse,
            path_params={"id": feed_group_id},
            query=HardDeleteParams(hard_delete=hard_delete),
        )


class Feed:
    """One feed, addressed as ``<group>:<id>``.

    Convenience wrapper that fills in the feed's group and id on the
    :class:`FeedsClient` methods that take them.

    Example::

        feed = client.feeds.feed("user", "john")
        await feed.get_or_create(GetOrCreateFeedRequest(user_id="john"))
        await feed.add_activity(type="post", text="hello", user_id="john")
    """

    def __init__(self, feeds: FeedsClient, feed_group_id: str, feed_id: str) -> None:
        self._feeds = feeds
        self.group = feed_group_id
        self.id = feed_id

    @property
    def fid(self) -> str:
        return f"{self.group}:{self.id}"

    def __repr__(self) -> str:
        return f"Feed({self.fid!r})"

    async def get_or_create(
        self, request: Optional[GetOrCreateFeedRequest] = None
    ) -> StreamResponse[GetOrCreateFeedResponse]:
        return await self._feeds.get_or_create_feed(self.group, self.id, request)

    async def delete(self, hard_delete: Optional[bool] = None) -> StreamResponse[DeleteFeedResponse]:
        return await self._feeds.delete_feed(self.group, self.id, hard_delete)

    async def add_activity(
        self, type: str, text: Optional[str] = None, user_id: Optional[str] = None, **fields: object
    ) -> StreamResponse[AddActivityResponse]:
        """Post an activity to this feed only."""
        request = AddActivityRequest.model_validate(
            {"type": type, "text": text, "user_id": user_id, "feeds": [self.fid], **fields}
        )
        return await self._feeds.add_activity(request)

    async def pin_activity(
        self, activity_id: str, user_id: Optional[str] = None
    ) -> StreamResponse[PinActivityResponse]:
        return await self._feeds.pin_activity(
            self.group, self.id, activity_id, PinActivityRequest(user_id=user_id)
        )

    async def unpin_activity(
        self, activity_id: str, user_id: Optional[str] = None
    ) -> StreamResponse[PinActivityResponse]:
        return await self._feeds.unpin_activity(self.group, self.id, activity_id, user_id)

    async def follow(self, target: str, **fields: object) -> StreamResponse[SingleFollowResponse]:
        """Make this feed follow the feed id *target*."""
        request = FollowRequest.model_validate({"source": self.fid, "target": target, **fields})
        return await self._feeds.follow(request)

    async def unfollow(self, target: str) -> StreamResponse[SingleFollowResponse]:
        return await self._feeds.unfollow(self.fid, target)
