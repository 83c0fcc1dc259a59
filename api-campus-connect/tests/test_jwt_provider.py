import base64
import json
from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest

from campus_connect.core.exceptions import InvalidTokenError, TokenExpiredError
from campus_connect.infrastructure.security.jwt_provider import ACCESS, REFRESH, JwtProvider


@pytest.fixture
def provider():
    return JwtProvider()


def test_access_token_carries_identity_claims(provider):
    token = provider.issue_access_token(subject="42", payload={"email": "a@rishihood.edu.in"})

    claims = provider.decode(token, token_type=ACCESS)

    assert claims["sub"] == "42"
    assert claims["email"] == "a@rishihood.edu.in"
    assert claims["typ"] == ACCESS
    assert claims["exp"] - claims["iat"] == 15 * 60


def test_refresh_token_lives_seven_days(provider):
    token = provider.issue_refresh_token(subject="42", payload={})

    claims = provider.decode(token, token_type=REFRESH)

    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60


def test_every_token_gets_a_fresh_jti(provider):
    a = provider.decode(provider.issue_access_token(subject="1", payload={}))
    b = provider.decode(provider.issue_access_token(subject="1", payload={}))

    assert a["jti"] != b["jti"]


def test_expired_token_raises_token_expired(provider):
    issued = datetime.now(tz=timezone.utc) - timedelta(minutes=16)
    token = provider.issue_access_token(subject="1", payload={}, now=issued)

    with pytest.raises(TokenExpiredError):
        provider.decode(token)


def test_tampered_token_is_invalid(provider):
    token = provider.issue_access_token(subject="1", payload={"email": "a@rishihood.edu.in"})
    header, _payload, signature = token.split(".")

    claims = provider.decode(token)
    claims["sub"] = "2"
    forged_payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()

    with pytest.raises(InvalidTokenError):
        provider.decode(".".join([header, forged_payload, signature]))


def test_token_signed_with_another_secret_is_invalid(provider):
    forged = pyjwt.encode(
        {"sub": "1", "typ": ACCESS, "jti": "x", "iat": 0, "exp": 9999999999,
         "iss": "campus-connect-api", "aud": "campus-connect-front"},
        "not-the-secret-but-long-enough-for-hs256",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        provider.decode(forged)


def test_refresh_token_is_not_accepted_as_access(provider):
    refresh = provider.issue_refresh_token(subject="1", payload={})

    # segredo diferente: falha já na assinatura
    with pytest.raises(InvalidTokenError):
        provider.decode(refresh, token_type=ACCESS)


def test_type_claim_is_enforced_even_with_shared_secret():
    provider = JwtProvider(access_secret="same-secret-for-both-kinds-000000", refresh_secret="same-secret-for-both-kinds-000000")
    refresh = provider.issue_refresh_token(subject="1", payload={})

    with pytest.raises(InvalidTokenError):
        provider.decode(refresh, token_type=ACCESS)


def test_garbage_is_invalid(provider):
    with pytest.raises(InvalidTokenError):
        provider.decode("not-a-jwt")
