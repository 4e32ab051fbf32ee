"""Response mapping -- status-code errors and lenient envelope decoding.

Non-2xx responses become :class:`~streamfeeds.exceptions.ApiError`
subclasses. 2xx bodies are decoded into a
:class:`~streamfeeds.models.StreamResponse` and never raise.

The API returns most payloads bare (``{"activity": {...}, "duration": ...}``)
but some come wrapped (``{"data": {...}, "duration": ...}``). The body is
treated as a tagged variant:

1. If it is a JSON object with a top-level ``data`` key and the result type
   declares no ``data`` field, decode it as an envelope first; otherwise
   decode it as the bare result type first.
2. If the first variant fails validation, try the other one.
3. If both fail -- or the body is empty, not JSON, or ``null`` -- return an
   empty envelope.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter

from streamfeeds.exceptions import (
    ApiError,
    AuthError,
    NotFoundError,
    RateLimitError,
    ServerError,
)
from streamfeeds.models import StreamResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


def error_for_response(status_code: int, raw_body: str) -> ApiError:
    """Build the typed error for a non-2xx response.

    The message comes from the body's ``message``, ``detail`` or ``error``
    field when the body is a JSON object, else from the first 200
    characters of the raw text.
    """
    msg = ""
    code: Optional[int] = None
    try:
        detail = json.loads(raw_body) if raw_body else None
    except (ValueError, RecursionError):
        detail = None
    if isinstance(detail, dict):
        msg = str(detail.get("message") or detail.get("detail") or detail.get("error") or "")
        if isinstance(detail.get("code"), int):
            code = detail["code"]
    elif raw_body:
        msg = raw_body[:200]

    prefix = f"HTTP {status_code}"
    full_msg = f"{prefix}: {msg}" if msg else prefix

    exc_type: type[ApiError] = ApiError
    if status_code in (401, 403):
        exc_type = AuthError
    elif status_code == 404:
        exc_type = NotFoundError
    elif status_code == 429:
        exc_type = RateLimitError
    elif status_code >= 500:
        exc_type = ServerError
    return exc_type(full_msg, status_code=status_code, raw_body=raw_body, code=code)


def raise_for_status(response: httpx.Response) -> None:
    """Raise the typed :class:`ApiError` if *response* is not a 2xx."""
    if 200 <= response.status_code < 300:
        return
    raise error_for_response(response.status_code, response.text)


def _declares_data_field(response_type: Any) -> bool:
    if isinstance(response_type, type) and issubclass(response_type, BaseModel):
        return any(
            name == "data" or field.alias == "data"
            for name, field in response_type.model_fields.items()
        )
    return False


def _decode_bare(response_type: Any, payload: Any) -> StreamResponse[Any]:
    if isinstance(payload, dict) and not payload:
        raise ValueError("empty object")
    data = TypeAdapter(response_type).validate_python(payload)
    duration = getattr(data, "duration", None)
    return StreamResponse[response_type](data=data, duration=duration)  # type: ignore[valid-type]


def _decode_enveloped(response_type: Any, payload: Any) -> StreamResponse[Any]:
    envelope = StreamResponse[response_type].model_validate(payload)  # type: ignore[valid-type]
    if envelope.data is None:
        raise ValueError("envelope carries no data")
    return envelope


def decode_response(response_type: type[T], text: str) -> StreamResponse[T]:
    """Decode a 2xx body into ``StreamResponse[response_type]``; never raises."""
    empty: StreamResponse[T] = StreamResponse[response_type]()  # type: ignore[valid-type]
    if not text or not text.strip():
        return empty
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError):
        logger.debug("Response body is not JSON; returning empty envelope")
        return empty
    if payload is None:
        return empty

    enveloped_first = (
        isinstance(payload, dict)
        and "data" in payload
        and not _declares_data_field(response_type)
    )
    decoders = (
        (_decode_enveloped, _decode_bare) if enveloped_first else (_decode_bare, _decode_enveloped)
    )
    for decoder in decoders:
        try:
            return decoder(response_type, payload)
        except (ValueError, RecursionError) as exc:
            logger.debug("%s failed for %s: %s", decoder.__name__, response_type, exc)
    return empty
