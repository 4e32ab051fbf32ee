"""Tests for the feeds endpoint methods and the Feed helper."""

from __future__ import annotations

import json
from urllib.parse import parse_qsl

import httpx
import pytest

from streamfeeds.endpoints.feeds import Feed
from streamfeeds.models import (
    ActivityRequest,
    AddActivityRequest,
    AddBookmarkRequest,
    AddCommentRequest,
    AddReactionRequest,
    CastPollVoteRequest,
    CreateFeedGroupRequest,
    FollowRequest,
    GetCommentsParams,
    GetOrCreateFeedRequest,
    QueryActivitiesRequest,
    QueryCommentsRequest,
    SortParam,
    UpdateActivityRequest,
    UpdateBookmarkRequest,
    UpdateCommentRequest,
    UpdateFeedGroupRequest,
    UpsertActivitiesRequest,
    VoteData,
)


class Recorder:
    """MockTransport handler that records calls and replies with a canned body."""

    def __init__(self, reply: dict | None = None) -> None:
        self.reply = reply if reply is not None else {"duration": "1ms"}
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return httpx.Response(200, content=json.dumps(self.reply).encode())

    @property
    def last(self) -> httpx.Request:
        return self.calls[-1]

    def query(self) -> dict[str, str]:
        return dict(parse_qsl(self.last.url.query.decode()))

    def body(self) -> dict:
        return json.loads(self.last.content)


FEED = "/api/v2/feeds/feed_groups/user/feeds/john"


# ---------------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------------


class TestActivities:
    @pytest.mark.asyncio
    async def test_add_activity(self, make_client) -> None:
        rec = Recorder({"activity": {"id": "a1", "type": "post"}, "duration": "1ms"})
        async with make_client(rec) as client:
            resp = await client.feeds.add_activity(
                AddActivityRequest(type="post", text="hi", user_id="john", feeds=["user:john"])
            )
        assert rec.last.method == "POST"
        assert rec.last.url.path == "/api/v2/feeds/activities"
        assert rec.body()["userId"] == "john"
        assert resp.data.activity.id == "a1"

    @pytest.mark.asyncio
    async def test_upsert_activities(self, make_client) -> None:
        rec = Recorder({"activities": [{"id": "a1"}, {"id": "a2"}]})
        request = UpsertActivitiesRequest(
            activities=[
                ActivityRequest(type="post", feeds=["user:john"], id="a1"),
                ActivityRequest(type="post", feeds=["user:john"], id="a2"),
            ]
        )
        async with make_client(rec) as client:
            resp = await client.feeds.upsert_activities(request)
        assert rec.last.url.path == "/api/v2/feeds/activities/batch"
        assert [a["id"] for a in rec.body()["activities"]] == ["a1", "a2"]
        assert [a.id for a in resp.data.activities] == ["a1", "a2"]

    @pytest.mark.asyncio
    async def test_query_activities_carries_paging_tokens(self, make_client) -> None:
        rec = Recorder({"activities": [], "next": "page-2"})
        request = QueryActivitiesRequest(
            filter={"user_id": "john"},
            sort=[SortParam(field="created_at", direction=-1)],
            limit=10,
            next="page-1",
        )
        async with make_client(rec) as client:
            resp = await client.feeds.query_activities(request)
        assert rec.last.url.path == "/api/v2/feeds/activities/query"
        body = rec.body()
        assert body["next"] == "page-1"
        assert body["sort"] == [{"field": "created_at", "direction": -1}]
        assert body["filter"] == {"user_id": "john"}
        assert resp.data.next == "page-2"

    @pytest.mark.asyncio
    async def test_get_activity(self, make_client) -> None:
        rec = Recorder({"activity": {"id": "a1"}})
        async with make_client(rec) as client:
            await client.feeds.get_activity("a1")
        assert rec.last.method == "GET"
        assert rec.last.url.path == "/api/v2/feeds/activities/a1"
        assert rec.last.content == b""

    @pytest.mark.asyncio
    async def test_update_activity(self, make_client) -> None:
        rec = Recorder()
        async with make_client(rec) as client:
            await client.feeds.update_activity("a1", UpdateActivityRequest(text="edited"))
        assert rec.last.method == "PUT"
        assert rec.last.url.path == "/api/v2/feeds/activities/a1"
        assert rec.body() == {"text": "edited"}

    @pytest.mark.asyncio
    async def test_delete_activity_hard(self, make_client) -> None:
        rec = Recorder()
        async with make_client(rec) as client:
            await client.feeds.delete_activity("a1", hard_delete=True)
        assert rec.last.method == "DELETE"
        assert rec.query() == {"hard_delete": "true", "api_key": "test-key"}

    @pytest.mark.asyncio
    async def test_delete_activity_soft_sends_no_flag(self, make_client) -> None:
        rec = Recorder()
        async with make_client(rec) as client:
            await client.feeds.delete_activity("a1")
        assert rec.query() == {"api_key": "test-key"}

    @pytest.mark.asyncio
    async def test_pin_and_unpin(self, make_client) -> None:
        rec = Recorder()
        async with make_client(rec) as client:
            await client.feeds.pin_activity("user", "john", "a1")
            await client.feeds.unpin_activity("user", "john", "a1", user_id="john")
        pin, unpin = rec.calls
        assert pin.method == "POST"
        assert pin.url.path == FEED + "/activities/a1/pin"
        assert unpin.method == "DELETE"
        assert unpin.url.path == FEED + "/activities/a1/pin"
        assert rec.query()["user_id"] == "john"


# ---------------------------------------------------------------------------
# Reactions, bookmarks, polls
# ---------------------------------------------------------------------------


class TestReactionsAndBookmarks:
    @pytest.mark.asyncio
    async def test_add_reaction(self, make_client) -> None:
        rec = Recorder({"reaction": {"type": "like", "activity_id": "a1"}})
        async with make_client(rec) as client:
            resp = await client.feeds.add_reaction(
                "a1", AddReactionRequest(type="like", user_id="john")
            )
        assert rec.last.url.path == "/api/v2/feeds/activities/a1/reactions"
        assert rec.body() == {"type": "like", "userId": "john"}
        assert resp.data.reaction.activity_id == "a1"

    @pytest.mark.asyncio
    async def test_query_and_delete_reaction(self, make_client) -> None:
        rec = Recorder()
        async with make_client(rec) as client:
            await client.feeds.query_activity_reactions("a1")
            await client.feeds.delete_activity_reaction("a1", "like", user_id="john")
        query, delete = rec.calls
        assert query.url.path == "/api/v2/feeds/activities/a1/reactions/query"
        assert json.loads(query.content) == {}
        assert delete.method == "DELETE"
        assert delete.url.path == "/api/v2/feeds/activities/a1/reactions/like"
        assert rec.query()["user_id"] == "john"

    @pytest.mark.asyncio
    async def test_bookmark_lifecycle(self, make_client) -> None:
        rec = Recorder({"bookmark": {"folder": {"id": "f1", "name": "later"}}})
        async with make_client(rec) as client:
            added = await client.feeds.add_bookmark("a1", AddBookmarkRequest(user_id="john"))
            await client.feeds.update_bookmark(
                "a1", UpdateBookmarkRequest(user_id="john", new_folder_id="f2")
            )
            await client.feeds.delete_bookmark("a1", folder_id="f2", user_id="john")
            await client.feeds.query_bookmarks()
        methods = [(r.method, r.url.path) for r in rec.calls]
        assert methods == [
            ("POST", "/api/v2/feeds/activities/a1/bookmarks"),
            ("PATCH", "/api/v2/feeds/activities/a1/bookmarks"),
            ("DELETE", "/api/v2/feeds/activities/a1/bookmarks"),
            ("POST", "/api/v2/feeds/bookmarks/query"),
        ]
        assert json.loads(rec.calls[1].content) == {"userId": "john", "newFolderId": "f2"}
        assert dict(parse_qsl(rec.calls[2].url.query.decode()))["folder_id"] == "f2"
        assert added.data.bookmark.folder.name == "later"

    @pytest.mark.asyncio
    async def test_cast_poll_vote(self, make_client) -> None:
        rec = Recorder()
        async with make_client(rec) as client:
            await client.feeds.cast_poll_vote(
                "a1", "p1", CastPollVoteRequest(user_id="john", vote=VoteData(option_id="o1"))
            )
        assert rec.last.url.path == "/api/v2/feeds/activities/a1/polls/p1/vote"
        assert rec.body() == {"userId": "john", "vote": {"optionId": "o1"}}


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


class TestComments:
    @pytest.mark.asyncio
    async def test_add_comment_defaults_to_activity(self, make_client) -> None:
        rec = Recorder({"comment": {"id": "c1", "comment": "nice"}})
        async with make_client(rec) as client:
            resp = await client.feeds.add_comment(
                AddCommentRequest(comment="nice", object_id="a1", user_id="john")
            )
        assert rec.last.url.path == "/api/v2/feeds/comments"
        assert rec.body()["objectType"] == "activity"
        assert resp.data.comment.id == "c1"

    @pytest.mark.asyncio
    async def test_get_comments_query_string(self, make_client) -> None:
        rec = Recorder(
            {"comments": [{"id": "c1", "replies": [{"id": "c2"}]}], "next": "n2"}
        )
        params = GetCommentsParams(object_id="a1", depth=2, limit=5, next="n1")
        async with make_client(rec) as client:
            resp = await client.feeds.get_comments(params)
        assert rec.last.method == "GET"
        assert rec.query() == {
            "object_id": "a1",
            "object_type": "activity",
            "depth": "2",
            "limit": "5",
            "next": "n1",
            "api_key": "test-key",
        }
        assert resp.data.comments[0].replies[0].id == "c2"
        assert resp.data.next == "n2"

    @pytest.mark.asyncio
    async def test_query_update_delete(self, make_client) -> None:
        rec = Recorder()
        async with make_client(rec) as client:
            await client.feeds.query_comments(QueryCommentsRequest(filter={"object_id": "a1"}))
            await client.feeds.update_comment("c1", UpdateCommentRequest(comment="edited"))
            await client.feeds.delete_comment("c1", hard_delete=False)
        assert [(r.method, r.url.path) for r in rec.calls] == [
            ("POST", "/api/v2/feeds/comments/query"),
            ("PATCH", "/api/v2/feeds/comments/c1"),
            ("DELETE", "/api/v2/feeds/comments/c1"),
        ]
        assert rec.query()["hard_delete"] == "false"


# ---------------------------------------------------------------------------
# Feeds, follows, feed groups
# ---------------------------------------------------------------------------


class TestFeedsAndFollows:
    @pytest.mark.asyncio
    async def test_get_or_create_feed(self, make_client) -> None:
        rec = Recorder({"feed": {"id": "john", "feed": "user:john"}, "created": True})
        async with make_client(rec) as client:
            resp = await client.feeds.get_or_create_feed(
                "user", "john", GetOrCreateFeedRequest(user_id="john")
            )
        assert rec.last.method == "POST"
        assert rec.last.url.path == FEED
        assert rec.body() == {"userId": "john"}
        assert resp.data.created is True
        assert resp.data.feed.feed == "user:john"

    @pytest.mark.asyncio
    async def test_delete_feed(self, make_client) -> None:
        rec = Recorder()
        async with make_client(rec) as client:
            await client.feeds.delete_feed("user", "john")
        assert rec.last.method == "DELETE"
        assert rec.last.url.path == FEED

    @pytest.mark.asyncio
    async def test_follow_unfollow_query(self, make_client) -> None:
        rec = Recorder()
        async with make_client(rec) as client:
            await client.feeds.follow(FollowRequest(source="timeline:john", target="user:jane"))
            await client.feeds.unfollow("timeline:john", "user:jane")
            await client.feeds.query_follows()
        follow, unfollow, query = rec.calls
        assert follow.url.path == "/api/v2/feeds/follows"
        assert json.loads(follow.content) == {"source": "timeline:john", "target": "user:jane"}
        assert unfollow.method == "DELETE"
        assert unfollow.url.path == "/api/v2/feeds/follows/timeline:john/user:jane"
        assert query.url.path == "/api/v2/feeds/follows/query"

    @pytest.mark.asyncio
    async def test_feed_groups(self, make_client) -> None:
        rec = Recorder({"groups": {"user": {"id": "user"}}})
        async with make_client(rec) as client:
            listed = await client.feeds.list_feed_groups()
            await client.feeds.create_feed_group(CreateFeedGroupRequest(id="stories"))
            await client.feeds.get_feed_group("stories")
            await client.feeds.update_feed_group(
                "stories", UpdateFeedGroupRequest(default_visibility="public")
            )
            await client.feeds.delete_feed_group("stories", hard_delete=True)
        assert [(r.method, r.url.path) for r in rec.calls] == [
            ("GET", "/api/v2/feeds/feed_groups"),
            ("POST", "/api/v2/feeds/feed_groups"),
            ("GET", "/api/v2/feeds/feed_groups/stories"),
            ("PUT", "/api/v2/feeds/feed_groups/stories"),
            ("DELETE", "/api/v2/feeds/feed_groups/stories"),
        ]
        assert json.loads(rec.calls[3].content) == {"defaultVisibility": "public"}
        assert listed.data.groups["user"].id == "user"


# ---------------------------------------------------------------------------
# Feed helper
# ---------------------------------------------------------------------------


class TestFeed:
    def test_fid_and_repr(self, make_client) -> None:
        feed = make_client(Recorder()).feed("user", "john")
        assert isinstance(feed, Feed)
        assert feed.fid == "user:john"
        assert repr(feed) == "Feed('user:john')"

    @pytest.mark.asyncio
    async def test_add_activity_targets_own_feed(self, make_client) -> None:
        rec = Recorder({"activity": {"id": "a1"}})
        client = make_client(rec)
        async with client:
            await client.feed("user", "john").add_activity(
                "post", text="hello", user_id="john", custom={"mood": "ok"}
            )
        assert rec.body() == {
            "type": "post",
            "feeds": ["user:john"],
            "text": "hello",
            "userId": "john",
            "custom": {"mood": "ok"},
        }

    @pytest.mark.asyncio
    async def test_follow_and_unfollow(self, make_client) -> None:
        rec = Recorder()
        client = make_client(rec)
        async with client:
            feed = client.feed("timeline", "john")
            await feed.follow("user:jane", push_preference="none")
            await feed.unfollow("user:jane")
        assert json.loads(rec.calls[0].content) == {
            "source": "timeline:john",
            "target": "user:jane",
            "pushPreference": "none",
        }
        assert rec.calls[1].url.path == "/api/v2/feeds/follows/timeline:john/user:jane"

    @pytest.mark.asyncio
    async def test_get_or_create_pin_delete(self, make_client) -> None:
        rec = Recorder()
        client = make_client(rec)
        async with client:
            feed = client.feed("user", "john")
            await feed.get_or_create()
            await feed.pin_activity("a1", user_id="john")
            await feed.unpin_activity("a1")
            await feed.delete(hard_delete=True)
        assert [(r.method, r.url.path) for r in rec.calls] == [
            ("POST", FEED),
            ("POST", FEED + "/activities/a1/pin"),
            ("DELETE", FEED + "/activities/a1/pin"),
            ("DELETE", FEED),
        ]
        assert json.loads(rec.calls[1].content) == {"userId": "john"}
