from datetime import timezone

import jwt
import pytest

from chatgateway.tokens import InvalidTokenError, JwtToken, decode_token

CLAIMS = {"sub": "alice", "iat": 1700000000, "exp": 1700003600, "authorities": ["USER"]}


def make_token(**overrides):
    claims = {**CLAIMS, **overrides}
    claims = {key: value for key, value in claims.items() if value is not None}
    return jwt.encode(claims, None, algorithm="none")


def test_decode_reads_username_and_times():
    token = decode_token(make_token())
    assert token.username == "alice"
    assert token.created_at.timestamp() == 1700000000
    assert token.expires_at.timestamp() == 1700003600
    assert token.created_at.tzinfo == timezone.utc


def test_authorities_are_not_collected():
    token = decode_token(make_token())
    assert token.authorities == ()


def test_signed_token_is_accepted_without_verification():
    signed = jwt.encode(dict(CLAIMS), "secret", algorithm="HS256")
    assert decode_token(signed).username == "alice"


def test_expired_token_is_still_accepted():
    token = decode_token(make_token(iat=10, exp=20))
    assert token.expires_at.timestamp() == 20


def test_garbage_is_rejected():
    with pytest.raises(InvalidTokenError):
        decode_token("not a token")


@pytest.mark.parametrize("claim", ["sub", "iat", "exp", "authorities"])
def test_missing_claim_is_rejected(claim):
    with pytest.raises(InvalidTokenError, match=claim):
        decode_token(make_token(**{claim: None}))


def test_non_integer_time_is_rejected():
    with pytest.raises(InvalidTokenError):
        JwtToken.from_claims({**CLAIMS, "iat": "yesterday"})


def test_boolean_time_is_rejected():
    with pytest.raises(InvalidTokenError):
        JwtToken.from_claims({**CLAIMS, "exp": True})


def test_non_string_subject_is_rejected():
    with pytest.raises(InvalidTokenError):
        JwtToken.from_claims({**CLAIMS, "sub": 42})


def test_non_array_authorities_are_rejected():
    with pytest.raises(InvalidTokenError):
        JwtToken.from_claims({**CLAIMS, "authorities": "USER"})


def test_from_claims_matches_decode():
    assert JwtToken.from_claims(CLAIMS) == decode_token(make_token())