"""Request construction -- descriptor, URL building, and body encoding.

Everything here is synchronous and free of I/O apart from opening upload
files. :class:`~streamfeeds.client.async_client.AsyncClient` calls
:func:`build_url` and :func:`build_body` before handing the request to
:mod:`httpx`, and :func:`close_files` once the call is over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, runtime_checkable
from urllib.parse import quote

from pydantic import BaseModel

from streamfeeds.models import StreamModel

logger = logging.getLogger(__name__)


@runtime_checkable
class MultipartBody(Protocol):
    """Capability of request bodies that must be sent as ``multipart/form-data``.

    ``multipart_fields`` returns ``(files, data)`` in the shape :mod:`httpx`
    accepts: ``files`` maps part names to ``(filename, file_object)`` tuples and
    ``data`` maps part names to already-encoded strings. The file objects are
    open binary handles; :func:`close_files` releases them.
    """

    def multipart_fields(self) -> tuple[dict[str, Any], dict[str, str]]: ...


@dataclass(frozen=True)
class RequestDescriptor:
    """One API call, as described by an endpoint method.

    Attributes:
        method: HTTP method (``GET``, ``POST``, ...).
        path: Path template with ``{name}`` placeholders, e.g.
            ``/api/v2/feeds/activities/{id}``.
        path_params: Values substituted into the placeholders.
        query_params: Query-string parameters (``None`` values are dropped).
        body: Optional request body -- a pydantic model, a dict or list, or
            any :class:`MultipartBody`.
    """

    method: str
    path: str
    path_params: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_path(path: str, path_params: Optional[Mapping[str, str]] = None) -> str:
    """Substitute every ``{key}`` placeholder in *path* with its value, verbatim."""
    for key, value in (path_params or {}).items():
        path = path.replace("{" + key + "}", str(value))
    return path


def build_url(
    base_url: str,
    path: str,
    path_params: Optional[Mapping[str, str]] = None,
    query_params: Optional[Mapping[str, Any]] = None,
    auth_params: Optional[Mapping[str, str]] = None,
) -> str:
    """Build the absolute request URL.

    Query values are percent-encoded. *auth_params* (the ``api_key``) are
    appended last and override caller-supplied parameters of the same name,
    so each appears exactly once.

    Example::

        build_url("https://api", "/a/{id}", {"id": "x"}, {"limit": 5}, {"api_key": "k"})
        # 'https://api/a/x?limit=5&api_key=k'
    """
    url = base_url.rstrip("/") + build_path(path, path_params)

    merged: dict[str, str] = {}
    for key, value in (query_params or {}).items():
        if value is None:
            continue
        merged[key] = _param_value(value)
    for key, value in (auth_params or {}).items():
        if key in merged and merged[key] != value:
            logger.warning("Ignoring caller-supplied '%s' query parameter", key)
        merged.pop(key, None)
        merged[key] = value

    if merged:
        query = "&".join(
            f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in merged.items()
        )
        url = f"{url}?{query}"
    return url


def build_body(body: Any) -> dict[str, Any]:
    """Encode *body* into keyword arguments for :meth:`httpx.AsyncClient.request`.

    Returns:
        ``{}`` for no body, ``{"files": ..., "data": ...}`` for
        :class:`MultipartBody` instances, else ``{"json": ...}``.

    Raises:
        FileNotFoundError: If an upload body points at a missing file.
    """
    if body is None:
        return {}
    if isinstance(body, MultipartBody):
        files, data = body.multipart_fields()
        kwargs: dict[str, Any] = {"files": files}
        if data:
            kwargs["data"] = data
        return kwargs
    if isinstance(body, StreamModel):
        return {"json": body.to_wire()}
    if isinstance(body, BaseModel):
        return {"json": body.model_dump(mode="json", by_alias=True, exclude_none=True)}
    return {"json": body}


def close_files(body_kwargs: Mapping[str, Any]) -> None:
    """Close every file object in the ``files`` part of *body_kwargs*."""
    for part in (body_kwargs.get("files") or {}).values():
        if isinstance(part, tuple) and len(part) > 1 and hasattr(part[1], "close"):
            part[1].close()
