"""streamfeeds -- Python client for the Stream activity feeds REST API.

Every endpoint method funnels through one request executor that builds the
URL (path placeholders, ``api_key`` query parameter), signs a short-lived
server token, encodes the body as JSON or multipart, and maps the response
into a typed :class:`~streamfeeds.models.StreamResponse` or a typed
:class:`~streamfeeds.exceptions.ApiError`.

Typical usage::

    from streamfeeds import StreamClient
    from streamfeeds.models import AddActivityRequest

    async with StreamClient.from_env() as client:
        resp = await client.feeds.add_activity(
            AddActivityRequest(type="post", text="hi", user_id="u1", feeds=["user:u1"])
        )
        if resp.data is not None:
            print(resp.data.activity.id)

Modules:
    stream: :class:`StreamClient` facade.
    client: the request executor (:class:`~streamfeeds.client.AsyncClient`).
    auth: server token signing and header injection.
    endpoints: per-product endpoint methods (feeds, common, moderation).
    models: Pydantic request/response models and the response envelope.
    config: credential and settings resolution.
    exceptions: exception hierarchy with exit-code mapping.
"""

__version__ = "0.1.0"

from streamfeeds.exceptions import (  # noqa: E402
    ApiError,
    AuthError,
    ConfigurationError,
    NotFoundError,
    RateLimitError,
    ServerError,
    StreamError,
    TransportError,
)
from streamfeeds.models import StreamResponse  # noqa: E402
from streamfeeds.stream import StreamClient  # noqa: E402

__all__ = [
    "__version__",
    "ApiError",
    "AuthError",
    "ConfigurationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "StreamClient",
    "StreamError",
    "StreamResponse",
    "TransportError",
]
