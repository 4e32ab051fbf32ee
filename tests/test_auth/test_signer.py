"""Tests for server token signing."""

from __future__ import annotations

import base64
import json
import time

import jwt
import pytest

from streamfeeds.auth.signer import (
    DEFAULT_TTL_SECONDS,
    CachingTokenSigner,
    TokenSigner,
)
from streamfeeds.exceptions import ConfigurationError

SECRET = "a-secret-long-enough-for-hmac-sha256"


def _segment(token: str, index: int) -> dict:
    part = token.split(".")[index]
    padded = part + "=" * (-len(part) % 4)
    return json.loads(base64.urlsafe_b64decode(padded))


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


# ---------------------------------------------------------------------------
# TokenSigner
# ---------------------------------------------------------------------------


class TestTokenSigner:
    def test_token_has_three_parts(self) -> None:
        token = TokenSigner().sign(SECRET)
        parts = token.split(".")
        assert len(parts) == 3
        assert all(parts)

    def test_header_is_hs256_jwt(self) -> None:
        header = _segment(TokenSigner().sign(SECRET), 0)
        assert header["alg"] == "HS256"
        assert header["typ"] == "JWT"

    def test_exp_is_about_one_hour_out(self) -> None:
        now = time.time()
        payload = _segment(TokenSigner().sign(SECRET), 1)
        assert now + 59 * 60 <= payload["exp"] <= now + 61 * 60

    def test_default_ttl(self) -> None:
        assert DEFAULT_TTL_SECONDS == 3600

    def test_signature_verifies_with_secret(self) -> None:
        token = TokenSigner().sign(SECRET)
        decoded = jwt.decode(token, SECRET.encode("utf-8"), algorithms=["HS256"])
        assert "exp" in decoded
        assert "iat" in decoded

    def test_signature_rejects_other_secret(self) -> None:
        token = TokenSigner().sign(SECRET)
        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(token, "another-secret-of-sufficient-length!", algorithms=["HS256"])

    def test_injected_clock(self) -> None:
        clock = FakeClock(1_000_000.0)
        payload = _segment(TokenSigner(ttl=60, clock=clock).sign(SECRET), 1)
        assert payload["iat"] == 1_000_000
        assert payload["exp"] == 1_000_060

    def test_extra_claims_are_merged(self) -> None:
        payload = _segment(TokenSigner().sign(SECRET, {"user_id": "john"}), 1)
        assert payload["user_id"] == "john"

    def test_extra_claims_cannot_override_exp(self) -> None:
        clock = FakeClock(1_000.0)
        payload = _segment(TokenSigner(ttl=10, clock=clock).sign(SECRET, {"exp": 1}), 1)
        assert payload["exp"] == 1_010

    def test_unicode_secret(self) -> None:
        secret = "sécret-ünïcode-key-with-enough-length"
        token = TokenSigner().sign(secret)
        jwt.decode(token, secret.encode("utf-8"), algorithms=["HS256"])

    @pytest.mark.parametrize("secret", ["", None, 123])
    def test_invalid_secret_raises(self, secret) -> None:
        with pytest.raises(ConfigurationError):
            TokenSigner().sign(secret)

    def test_unencodable_secret_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="signing key"):
            TokenSigner().sign("bad-\ud800-surrogate")


# ---------------------------------------------------------------------------
# CachingTokenSigner
# ---------------------------------------------------------------------------


class TestCachingTokenSigner:
    def test_reuses_token_before_refresh_margin(self) -> None:
        clock = FakeClock()
        signer = CachingTokenSigner(TokenSigner(ttl=3600, clock=clock), refresh_margin=300)
        first = signer.sign(SECRET)
        clock.now += 3000
        assert signer.sign(SECRET) == first

    def test_refreshes_inside_margin(self) -> None:
        clock = FakeClock()
        signer = CachingTokenSigner(TokenSigner(ttl=3600, clock=clock), refresh_margin=300)
        first = signer.sign(SECRET)
        clock.now += 3301
        second = signer.sign(SECRET)
        assert second != first
        assert _segment(second, 1)["exp"] == int(clock.now) + 3600

    def test_new_secret_is_signed_fresh(self) -> None:
        clock = FakeClock()
        signer = CachingTokenSigner(TokenSigner(clock=clock))
        first = signer.sign(SECRET)
        other = signer.sign("different-secret-long-enough-for-hmac")
        assert other != first

    def test_claims_bypass_cache(self) -> None:
        clock = FakeClock()
        signer = CachingTokenSigner(TokenSigner(clock=clock))
        plain = signer.sign(SECRET)
        with_claims = signer.sign(SECRET, {"user_id": "john"})
        assert with_claims != plain
        assert signer.sign(SECRET) == plain

    def test_ttl_reflects_wrapped_signer(self) -> None:
        assert CachingTokenSigner(TokenSigner(ttl=120)).ttl == 120

    def test_empty_secret_still_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            CachingTokenSigner().sign("")
