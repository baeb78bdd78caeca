"""Token issue/verify tests.

Learn: Each rejection path raises its own TokenError subclass. The HTTP
layer flattens them all to one 401, so these tests are the only place
the distinction is visible.
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tasklist.auth.jwt import (
    MalformedTokenError,
    TokenExpiredError,
    TokenService,
    TokenSignatureError,
)

SECRET = "unit-test-secret-0123456789abcdef0123456789abcdef"
OTHER_SECRET = "another-secret-0123456789abcdef0123456789abcdef"


@pytest.fixture()
def tokens():
    return TokenService(SECRET, ttl=timedelta(hours=24))


def test_issued_token_verifies_to_same_user(tokens):
    user_id = uuid.uuid4()
    assert tokens.verify(tokens.issue(user_id)) == user_id


def test_token_carries_subject_and_times(tokens):
    user_id = uuid.uuid4()
    payload = jwt.decode(tokens.issue(user_id), SECRET, algorithms=["HS256"])
    assert payload["sub"] == str(user_id)
    assert payload["exp"] - payload["iat"] == 24 * 3600


def test_expired_token_is_rejected_even_with_valid_signature():
    issued_at = datetime.now(timezone.utc) - timedelta(hours=2)
    old = TokenService(SECRET, ttl=timedelta(hours=1), clock=lambda: issued_at)
    token = old.issue(uuid.uuid4())

    with pytest.raises(TokenExpiredError):
        TokenService(SECRET, ttl=timedelta(hours=1)).verify(token)


def test_token_from_other_secret_is_rejected(tokens):
    foreign = TokenService(OTHER_SECRET, ttl=timedelta(hours=1))
    with pytest.raises(TokenSignatureError):
        tokens.verify(foreign.issue(uuid.uuid4()))


def test_tampered_payload_is_rejected(tokens):
    header, _, signature = tokens.issue(uuid.uuid4()).split(".")
    forged_payload = jwt.encode(
        {"sub": str(uuid.uuid4()), "iat": 0, "exp": 9999999999},
        SECRET,
        algorithm="HS256",
    ).split(".")[1]
    with pytest.raises(TokenSignatureError):
        tokens.verify(f"{header}.{forged_payload}.{signature}")


def test_unsigned_token_is_rejected(tokens):
    now = datetime.now(timezone.utc)
    unsigned = jwt.encode(
        {"sub": str(uuid.uuid4()), "iat": now, "exp": now + timedelta(hours=1)},
        None,
        algorithm="none",
    )
    with pytest.raises(TokenSignatureError):
        tokens.verify(unsigned)


def test_other_hmac_algorithm_is_rejected(tokens):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "iat": now, "exp": now + timedelta(hours=1)},
        SECRET,
        algorithm="HS512",
    )
    with pytest.raises(TokenSignatureError):
        tokens.verify(token)


@pytest.mark.parametrize("garbage", ["invalid_token_here", "a.b.c", "", "...."])
def test_garbage_is_malformed(tokens, garbage):
    with pytest.raises(MalformedTokenError):
        tokens.verify(garbage)


def test_missing_expiry_is_malformed(tokens):
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "iat": datetime.now(timezone.utc)},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(MalformedTokenError):
        tokens.verify(token)


def test_subject_must_be_a_user_id(tokens):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "a@x.com", "iat": now, "exp": now + timedelta(hours=1)},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(MalformedTokenError):
        tokens.verify(token)


def test_secret_is_required():
    with pytest.raises(ValueError):
        TokenService("", ttl=timedelta(hours=1))


def test_repr_does_not_leak_secret(tokens):
    assert SECRET not in repr(tokens)


def test_verify_uses_the_same_clock_as_issue():
    now = [datetime.now(timezone.utc)]
    tokens = TokenService(SECRET, ttl=timedelta(minutes=30), clock=lambda: now[0])
    user_id = uuid.uuid4()
    token = tokens.issue(user_id)

    now[0] += timedelta(minutes=29)
    assert tokens.verify(token) == user_id

    now[0] += timedelta(minutes=2)
    with pytest.raises(TokenExpiredError):
        tokens.verify(token)


def test_expiry_must_be_a_timestamp(tokens):
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "iat": 0, "exp": "tomorrow"},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(MalformedTokenError):
        tokens.verify(token)
