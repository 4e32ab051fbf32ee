"""Authentication subsystem for streamfeeds.

Exports:
    :class:`TokenSigner` -- mints HS256 server tokens from the API secret.
    :class:`CachingTokenSigner` -- reuses a token until shortly before expiry.
    :class:`AuthResult` -- headers and query parameters to inject.
    :class:`ServerSideAuth` -- builds an :class:`AuthResult` per request.
"""

from streamfeeds.auth.base import AuthResult, ServerSideAuth
from streamfeeds.auth.signer import CachingTokenSigner, TokenSigner

__all__ = ["AuthResult", "CachingTokenSigner", "ServerSideAuth", "TokenSigner"]
