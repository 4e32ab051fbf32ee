"""Endpoint groups built on the request executor.

Classes:
    :class:`FeedsClient` -- activities, reactions, comments, bookmarks,
        polls, feeds, follows, feed groups.
    :class:`Feed` -- one feed with its group and id pre-filled.
    :class:`CommonClient` -- users, polls, devices, uploads.
    :class:`ModerationClient` -- flags, bans, review queue.
"""

from streamfeeds.endpoints.common import CommonClient
from streamfeeds.endpoints.feeds import Feed, FeedsClient
from streamfeeds.endpoints.moderation import ModerationClient

__all__ = ["CommonClient", "Feed", "FeedsClient", "ModerationClient"]
