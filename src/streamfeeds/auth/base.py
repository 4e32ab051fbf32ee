"""Authentication artifacts injected into every request.

This module defines:

- :class:`AuthResult` -- a plain container for the headers and query
  parameters a request must carry.
- :class:`ServerSideAuth` -- produces a fresh :class:`AuthResult` per call
  from a :class:`~streamfeeds.models.ClientConfig`: a signed token in
  ``Authorization``, the ``stream-auth-type: jwt`` marker, the
  ``X-Stream-Client`` identification header, and the ``api_key`` query
  parameter.

See Also:
    :mod:`streamfeeds.auth.signer` for how the token is minted.
"""

from __future__ import annotations

from typing import Optional, Union

from streamfeeds import __version__
from streamfeeds.auth.signer import CachingTokenSigner, TokenSigner
from streamfeeds.models import ClientConfig

AUTH_TYPE_HEADER = "stream-auth-type"
CLIENT_HEADER = "X-Stream-Client"
API_KEY_PARAM = "api_key"
CLIENT_NAME = f"streamfeeds-python-{__version__}"


class AuthResult:
    """Container for authentication artifacts to inject into HTTP requests.

    Args:
        headers: HTTP headers to add.
        params: Query-string parameters to add. These take precedence over
            caller-supplied parameters of the same name.

    Example::

        result = AuthResult(headers={"Authorization": "tok"}, params={"api_key": "k"})
        assert result.params["api_key"] == "k"
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ):
        self.headers = headers or {}
        self.params = params or {}


class ServerSideAuth:
    """Build the per-request credentials for trusted backend calls.

    Args:
        config: The client's immutable credentials.
        signer: Token signer to use. Defaults to a plain
            :class:`~streamfeeds.auth.signer.TokenSigner`, which signs a new
            token on every call.
    """

    def __init__(
        self,
        config: ClientConfig,
        signer: Optional[Union[TokenSigner, CachingTokenSigner]] = None,
    ) -> None:
        self._config = config
        self._signer = signer or TokenSigner()

    def authenticate(self) -> AuthResult:
        """Return headers and query parameters for one request.

        Raises:
            ConfigurationError: If the configured secret cannot sign a token.
        """
        token = self._signer.sign(self._config.api_secret.get_secret_value())
        return AuthResult(
            headers={
                "Authorization": token,
                AUTH_TYPE_HEADER: "jwt",
                CLIENT_HEADER: CLIENT_NAME,
            },
            params={API_KEY_PARAM: self._config.api_key},
        )
