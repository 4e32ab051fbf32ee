"""Server-side token signing.

The API trusts a request when its ``Authorization`` header carries a JWT
signed with the application's shared secret. :class:`TokenSigner` mints
those tokens: HS256 over the UTF-8 bytes of the secret, with an ``exp``
claim one hour out. The secret itself never leaves the process.

:class:`CachingTokenSigner` reuses a token until it is close to expiry.
Tokens are a pure function of secret and clock, so caching only saves
signing work; it never changes what the server accepts.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import jwt

from streamfeeds.exceptions import ConfigurationError

DEFAULT_TTL_SECONDS = 3600
DEFAULT_REFRESH_MARGIN_SECONDS = 300
ALGORITHM = "HS256"


def _key_bytes(secret: Any) -> bytes:
    if not isinstance(secret, str) or not secret:
        raise ConfigurationError("API secret must be a non-empty string")
    try:
        return secret.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ConfigurationError(f"API secret cannot be used as a signing key: {exc}") from exc


class TokenSigner:
    """Mint compact HS256 tokens asserting backend trust.

    Args:
        ttl: Token lifetime in seconds.
        clock: Callable returning the current UNIX time; injectable for tests.

    Example::

        token = TokenSigner().sign("my-secret")
        assert token.count(".") == 2
    """

    def __init__(
        self,
        ttl: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl = ttl
        self.clock = clock

    def sign(self, secret: str, claims: Optional[dict[str, Any]] = None) -> str:
        """Return a signed token for *secret*, valid for :attr:`ttl` seconds.

        Args:
            secret: The application's API secret.
            claims: Optional extra claims (e.g. ``user_id``) merged into the
                payload. ``iat`` and ``exp`` are always set by the signer.

        Raises:
            ConfigurationError: If *secret* is empty or cannot be encoded.
        """
        key = _key_bytes(secret)
        now = int(self.clock())
        payload: dict[str, Any] = dict(claims or {})
        payload["iat"] = now
        payload["exp"] = now + self.ttl
        return jwt.encode(payload, key, algorithm=ALGORITHM)

    def expires_at(self, issued_at: float) -> float:
        return int(issued_at) + self.ttl


class CachingTokenSigner:
    """Reuse the last token until it is within *refresh_margin* seconds of expiry.

    Only claim-less server tokens are cached; calls with extra claims are
    signed fresh every time. Concurrent callers may occasionally both sign
    when the cached token rolls over, which is harmless.

    Args:
        signer: The signer that produces new tokens.
        refresh_margin: Seconds before expiry at which a new token is minted.
    """

    def __init__(
        self,
        signer: Optional[TokenSigner] = None,
        refresh_margin: int = DEFAULT_REFRESH_MARGIN_SECONDS,
    ) -> None:
        self._signer = signer or TokenSigner()
        self._refresh_margin = refresh_margin
        self._token: Optional[str] = None
        self._secret: Optional[str] = None
        self._expires_at = 0.0

    @property
    def ttl(self) -> int:
        return self._signer.ttl

    def sign(self, secret: str, claims: Optional[dict[str, Any]] = None) -> str:
        if claims:
            return self._signer.sign(secret, claims)
        now = self._signer.clock()
        if (
            self._token is not None
            and self._secret == secret
            and now < self._expires_at - self._refresh_margin
        ):
            return self._token
        token = self._signer.sign(secret)
        self._token = token
        self._secret = secret
        self._expires_at = self._signer.expires_at(now)
        return token
