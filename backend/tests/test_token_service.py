"""
CarLookup Backend: Token Service Unit Tests
============================================

What we test:
    ✅ Issued tokens validate and carry username and every role
    ✅ Wrong key, issuer, audience and expired tokens are rejected
    ✅ Garbage input is rejected without raising
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from carlookup.services.token_service import ALGORITHM, TokenService

KEY = "unit-test-signing-key-0123456789abcdef"


def make_service(**overrides) -> TokenService:
    options = dict(key=KEY, issuer="CarLookup.Api", audience="CarLookup.Clients", expiration_minutes=60)
    options.update(overrides)
    return TokenService(**options)


class TestTokenService:
    def setup_method(self):
        self.service = make_service()

    def test_round_trip_claims(self):
        token = self.service.generate_token("editor", ["editor", "reader"])
        claims = self.service.read_claims(token)

        assert claims is not None
        assert claims.username == "editor"
        assert claims.roles == ["editor", "reader"]
        assert claims.token_id
        assert claims.expires_at > datetime.now(timezone.utc)

    def test_token_ids_are_unique(self):
        first = self.service.read_claims(self.service.generate_token("a", []))
        second = self.service.read_claims(self.service.generate_token("a", []))
        assert first.token_id != second.token_id

    def test_validate_token(self):
        assert self.service.validate_token(self.service.generate_token("reader", ["reader"]))

    def test_expiration_seconds(self):
        assert make_service(expiration_minutes=15).get_expiration_seconds() == 900

    def test_wrong_key_rejected(self):
        token = make_service(key="another-signing-key-0123456789abcdefgh").generate_token("x", [])
        assert self.service.read_claims(token) is None

    def test_wrong_issuer_rejected(self):
        token = make_service(issuer="Someone.Else").generate_token("x", [])
        assert self.service.validate_token(token) is False

    def test_wrong_audience_rejected(self):
        token = make_service(audience="Other.Clients").generate_token("x", [])
        assert self.service.validate_token(token) is False

    def test_expired_token_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "reader",
                "iat": now - timedelta(minutes=10),
                "exp": now - timedelta(seconds=1),
                "iss": "CarLookup.Api",
                "aud": "CarLookup.Clients",
                "role": ["reader"],
            },
            KEY,
            algorithm=ALGORITHM,
        )
        assert self.service.read_claims(token) is None

    def test_single_role_string_is_accepted(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "reader",
                "exp": now + timedelta(minutes=5),
                "iss": "CarLookup.Api",
                "aud": "CarLookup.Clients",
                "role": "reader",
            },
            KEY,
            algorithm=ALGORITHM,
        )
        assert self.service.read_claims(token).roles == ["reader"]

    @pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
    def test_garbage_rejected(self, token):
        assert self.service.read_claims(token) is None

    def test_key_required(self):
        with pytest.raises(ValueError):
            TokenService(key="", issuer="i", audience="a")
